"""Command group: tags — single-property frontmatter editing."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from locus.commands._base import LocusGroup, no_git_option

if TYPE_CHECKING:
    from locus.commands._context import AppContext


def _parse_value(raw: str) -> Any:
    """JSON when it parses (numbers, booleans, arrays, objects), else the raw string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


_TAGS_EXAMPLES = """\
  locus tags list
  locus tags list fix-login
  locus tags get fix-login status
  locus tags set fix-login tags '["bug", "auth"]'
  locus tags rm fix-login due
  locus tags clear fix-login"""


@click.group(cls=LocusGroup, examples=_TAGS_EXAMPLES)
def tags() -> None:
    """Read and edit frontmatter properties."""


@tags.command("list")
@click.argument("file_name", required=False)
@no_git_option
@click.pass_obj
def list_tags(app: AppContext, file_name: str | None, no_git: bool) -> None:
    """List every task file, or the properties of one."""
    repo_info = app.repo_info(no_git) if file_name else None
    app.emit(app.container.tags.list_tags(file_name, repo_info=repo_info))


@tags.command("get")
@click.argument("file_name")
@click.argument("key")
@no_git_option
@click.pass_obj
def get_tag(app: AppContext, file_name: str, key: str, no_git: bool) -> None:
    """Print one property."""
    app.emit(app.container.tags.get_tag(file_name, key, repo_info=app.repo_info(no_git)))


@tags.command("set")
@click.argument("file_name")
@click.argument("key")
@click.argument("value")
@no_git_option
@click.pass_obj
def set_tag(app: AppContext, file_name: str, key: str, value: str, no_git: bool) -> None:
    """Set one property, creating the file if needed."""
    app.emit(
        app.container.tags.set_tag(
            file_name, key, _parse_value(value), repo_info=app.repo_info(no_git)
        )
    )


@tags.command("rm")
@click.argument("file_name")
@click.argument("key")
@no_git_option
@click.pass_obj
def remove_tag(app: AppContext, file_name: str, key: str, no_git: bool) -> None:
    """Remove one property."""
    app.emit(app.container.tags.remove_tag(file_name, key, repo_info=app.repo_info(no_git)))


@tags.command("clear")
@click.argument("file_name")
@no_git_option
@click.pass_obj
def clear_tags(app: AppContext, file_name: str, no_git: bool) -> None:
    """Remove the whole frontmatter block."""
    app.emit(app.container.tags.clear_tags(file_name, repo_info=app.repo_info(no_git)))
