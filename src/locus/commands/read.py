"""Command: read — show a task."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from locus.commands._base import LocusCommand, no_git_option
from locus.domain.errors import LocusError
from locus.services.result import ServiceResult

if TYPE_CHECKING:
    from locus.commands._context import AppContext


@click.command(
    cls=LocusCommand,
    examples="""\
  locus read fix-login
  locus read 2024-01-15-fix-login-bug-a1b2c3d4.md --raw
  locus read fix-login --json""",
)
@click.argument("file_name")
@click.option("-r", "--raw", is_flag=True, help="Print the file exactly as stored.")
@no_git_option
@click.pass_obj
def read(app: AppContext, file_name: str, raw: bool, no_git: bool) -> None:
    """Show a task by full or partial file name."""
    result = app.container.tasks.get_task(file_name, app.repo_info(no_git))
    if raw and result.ok and not app.settings.json_output:
        try:
            content = app.container.fs.read_text(Path(result.data["abs_path"]))
        except LocusError as exc:
            app.emit(ServiceResult.from_exception("read_task", exc))
            return
        click.echo(content, nl=False)
        return
    app.emit(result)
