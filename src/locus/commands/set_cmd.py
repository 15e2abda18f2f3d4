"""Command: set — update frontmatter from ``key=value`` pairs."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from locus.commands._base import LocusCommand, no_git_option
from locus.domain.properties import parse_key_value_pairs

if TYPE_CHECKING:
    from locus.commands._context import AppContext


def _validate_pairs(
    _ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]
) -> tuple[str, ...]:
    for value in values:
        key, sep, _raw = value.partition("=")
        if not sep:
            raise click.BadParameter(f"{value!r} is not in key=value form")
        if not key:
            raise click.BadParameter(f"{value!r} has an empty key")
    return values


@click.command(
    "set",
    cls=LocusCommand,
    examples="""\
  locus set fix-login status=done
  locus set fix-login priority=high tags=bug,auth
  locus set fix-login due=tomorrow estimate=3 blocked=false""",
)
@click.argument("file_name")
@click.argument("pairs", nargs=-1, required=True, callback=_validate_pairs)
@no_git_option
@click.pass_obj
def set_cmd(app: AppContext, file_name: str, pairs: tuple[str, ...], no_git: bool) -> None:
    """Set properties; values are typed (booleans, numbers, lists, dates)."""
    updates = parse_key_value_pairs(list(pairs))
    app.emit(app.container.tags.set_tags(file_name, updates, repo_info=app.repo_info(no_git)))
