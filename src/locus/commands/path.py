"""Command: path — print the absolute path of a task file."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from locus.commands._base import LocusCommand, no_git_option

if TYPE_CHECKING:
    from locus.commands._context import AppContext


@click.command(
    cls=LocusCommand,
    examples="""\
  locus path fix-login
  $EDITOR "$(locus path fix-login)"
  locus path login --all""",
)
@click.argument("file_name")
@click.option("-a", "--all", "all_repos", is_flag=True, help="Print every match in every repository.")
@no_git_option
@click.pass_obj
def path(app: AppContext, file_name: str, all_repos: bool, no_git: bool) -> None:
    """Print the path of a task (for editors and scripts)."""
    repo_info = None if all_repos else app.repo_info(no_git)
    app.emit(app.container.tasks.locate_task(file_name, all_repos=all_repos, repo_info=repo_info))
