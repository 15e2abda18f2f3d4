"""Subcommand modules for locus.

``register_commands()`` imports each module only when the root group is
built, keeping ``locus --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every command and group on the root CLI group."""
    # --- Task commands ---
    from locus.commands.add import add
    from locus.commands.edit import edit
    from locus.commands.list_cmd import list_cmd
    from locus.commands.path import path
    from locus.commands.read import read
    from locus.commands.rm import rm
    from locus.commands.search import search

    cli.add_command(add)
    cli.add_command(read)
    cli.add_command(edit)
    cli.add_command(list_cmd)
    cli.add_command(search)
    cli.add_command(rm)
    cli.add_command(path)

    # --- Property commands ---
    from locus.commands.get import get
    from locus.commands.set_cmd import set_cmd
    from locus.commands.tags import tags

    cli.add_command(get)
    cli.add_command(set_cmd)
    cli.add_command(tags)

    # --- Groups ---
    from locus.commands.config_cmd import config_cmd

    cli.add_command(config_cmd)
