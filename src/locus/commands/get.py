"""Command: get — print one frontmatter property, or all of them."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from locus.commands._base import LocusCommand, no_git_option

if TYPE_CHECKING:
    from locus.commands._context import AppContext


@click.command(
    cls=LocusCommand,
    examples="""\
  locus get fix-login status
  locus get fix-login
  locus get fix-login tags --json""",
)
@click.argument("file_name")
@click.argument("key", required=False)
@no_git_option
@click.pass_obj
def get(app: AppContext, file_name: str, key: str | None, no_git: bool) -> None:
    """Show frontmatter of a task."""
    tags = app.container.tags
    repo_info = app.repo_info(no_git)
    if key is None:
        app.emit(tags.list_tags(file_name, repo_info=repo_info))
    else:
        app.emit(tags.get_tag(file_name, key, repo_info=repo_info))
