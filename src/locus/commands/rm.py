"""Command: rm — delete a task file."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from locus.commands._base import LocusCommand, no_git_option

if TYPE_CHECKING:
    from locus.commands._context import AppContext


@click.command(
    cls=LocusCommand,
    examples="""\
  locus rm fix-login
  locus rm 2024-01-15-fix-login-bug-a1b2c3d4.md --no-git""",
)
@click.argument("file_name")
@no_git_option
@click.pass_obj
def rm(app: AppContext, file_name: str, no_git: bool) -> None:
    """Delete a task by full or partial file name."""
    app.emit(app.container.tasks.delete_task(file_name, app.repo_info(no_git)))
