"""Command: list — tasks in the current repository, or all of them."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from locus.commands._base import LocusCommand, no_git_option, split_csv
from locus.services.task import SORT_KEYS

if TYPE_CHECKING:
    from locus.commands._context import AppContext


@click.command(
    "list",
    cls=LocusCommand,
    examples="""\
  locus list
  locus list --status todo --priority high
  locus list --tags bug,auth --sort priority
  locus list --all --json""",
)
@click.option("-s", "--status", default=None, help="Only tasks with this status.")
@click.option("-p", "--priority", default=None, help="Only tasks with this priority.")
@click.option("-t", "--tags", multiple=True, help="Only tasks with ANY of these tags.")
@click.option(
    "--sort",
    type=click.Choice(SORT_KEYS),
    default=None,
    help="Sort key (default: newest created first).",
)
@click.option("-a", "--all", "all_repos", is_flag=True, help="Include every repository.")
@no_git_option
@click.pass_obj
def list_cmd(
    app: AppContext,
    status: str | None,
    priority: str | None,
    tags: tuple[str, ...],
    sort: str | None,
    all_repos: bool,
    no_git: bool,
) -> None:
    """List tasks."""
    result = app.container.tasks.list_tasks(
        status=status,
        priority=priority,
        tags=split_csv(tags) or None,
        all_repos=all_repos,
        repo_info=app.repo_info(no_git),
        sort=sort,
    )
    app.emit(result)
