"""Command: add — create a new task in the current repository's directory."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from locus.commands._base import LocusCommand, no_git_option, split_csv

if TYPE_CHECKING:
    from locus.commands._context import AppContext


@click.command(
    cls=LocusCommand,
    examples="""\
  locus add "Fix login bug"
  locus add "Fix login bug" --priority high --tags bug,auth
  locus add "Write release notes" --body "# Release notes" --no-git""",
)
@click.argument("title")
@click.option("-b", "--body", default=None, help="Task body (defaults to a heading of the title).")
@click.option("-t", "--tags", multiple=True, help="Tags, comma-separated or repeated.")
@click.option("-p", "--priority", default=None, help="Priority (default from config).")
@click.option("-s", "--status", default=None, help="Status (default from config).")
@no_git_option
@click.pass_obj
def add(
    app: AppContext,
    title: str,
    body: str | None,
    tags: tuple[str, ...],
    priority: str | None,
    status: str | None,
    no_git: bool,
) -> None:
    """Add a new task."""
    result = app.container.tasks.create_task(
        title,
        body=body,
        tags=split_csv(tags) or None,
        priority=priority,
        status=status,
        repo_info=app.repo_info(no_git),
    )
    app.emit(result)
