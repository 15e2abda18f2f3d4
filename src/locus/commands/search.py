"""Command: search — find tasks by text."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from locus.commands._base import LocusCommand, no_git_option, split_csv
from locus.services.search import SearchOptions

if TYPE_CHECKING:
    from locus.commands._context import AppContext


@click.command(
    cls=LocusCommand,
    examples="""\
  locus search login
  locus search login --status todo --all
  locus search "session" --files
  locus search Bug --case-sensitive""",
)
@click.argument("query")
@click.option("-s", "--status", default=None, help="Only tasks with this status.")
@click.option("-p", "--priority", default=None, help="Only tasks with this priority.")
@click.option("-t", "--tags", multiple=True, help="Only tasks with ANY of these tags.")
@click.option("-a", "--all", "all_repos", is_flag=True, help="Search every repository.")
@click.option("--files", "files_only", is_flag=True, help="Match file names and titles; print paths.")
@click.option("--case-sensitive", is_flag=True, help="Match case exactly.")
@no_git_option
@click.pass_obj
def search(
    app: AppContext,
    query: str,
    status: str | None,
    priority: str | None,
    tags: tuple[str, ...],
    all_repos: bool,
    files_only: bool,
    case_sensitive: bool,
    no_git: bool,
) -> None:
    """Search task names, titles, bodies and tags."""
    options = SearchOptions(
        all=all_repos,
        status=status,
        priority=priority,
        tags=split_csv(tags) or None,
        ignore_case=not case_sensitive,
    )
    repo_info = None if all_repos else app.repo_info(no_git)
    svc = app.container.search
    if files_only:
        app.emit(svc.search_markdown_files(query, repo_info, options))
    else:
        app.emit(svc.search_tasks(query, repo_info, options))
