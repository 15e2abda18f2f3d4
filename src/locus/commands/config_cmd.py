"""Command group: config — show, locate and initialize settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from locus.commands._base import LocusGroup

if TYPE_CHECKING:
    from locus.commands._context import AppContext


@click.group(
    "config",
    cls=LocusGroup,
    examples="""\
  locus config show
  locus config path
  locus config init
  locus config init --force""",
)
def config_cmd() -> None:
    """Inspect or create the settings file."""


@config_cmd.command("show")
@click.pass_obj
def show(app: AppContext) -> None:
    """Print the effective configuration."""
    app.emit(app.container.config.show())


@config_cmd.command("path")
@click.pass_obj
def path(app: AppContext) -> None:
    """Print where the settings file lives."""
    app.emit(app.container.config.path())


@config_cmd.command("init")
@click.option("-f", "--force", is_flag=True, help="Overwrite an existing settings file.")
@click.pass_obj
def init(app: AppContext, force: bool) -> None:
    """Write a commented default settings file."""
    app.emit(app.container.config.init(force=force))
