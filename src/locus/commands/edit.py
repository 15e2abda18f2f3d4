"""Command: edit — append to, overwrite, or create a task from text."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from locus.commands._base import LocusCommand, no_git_option
from locus.domain.errors import ErrorKind
from locus.services._helpers import strip_md

if TYPE_CHECKING:
    from locus.commands._context import AppContext


def _read_stdin() -> str | None:
    """Piped stdin content, or None when stdin is a terminal."""
    stream = click.get_text_stream("stdin")
    if stream.isatty():
        return None
    return stream.read()


@click.command(
    cls=LocusCommand,
    examples="""\
  locus edit fix-login --body "Found the cause in session.py"
  echo "- [ ] add regression test" | locus edit fix-login
  locus edit fix-login --overwrite --body "# Fix login bug"
  locus edit "new-idea" --body "# New idea"   # creates the task""",
)
@click.argument("file_name")
@click.option("-b", "--body", default=None, help="Text to add (read from stdin when omitted).")
@click.option("--overwrite", is_flag=True, help="Replace the body instead of appending.")
@no_git_option
@click.pass_obj
def edit(app: AppContext, file_name: str, body: str | None, overwrite: bool, no_git: bool) -> None:
    """Append text to a task; creates the task when it does not exist."""
    text = body if body is not None else _read_stdin()
    if not text:
        raise click.UsageError("Provide --body or pipe content on stdin.")

    tasks = app.container.tasks
    repo_info = app.repo_info(no_git)
    located = tasks.locate_task(file_name, repo_info=repo_info)

    if not located.ok and located.code == ErrorKind.TASK_NOT_FOUND:
        title = app.container.markdown.extract_title(text) or strip_md(file_name)
        app.emit(tasks.create_task(title, body=text, repo_info=repo_info))
    elif not located.ok:
        app.emit(located)
    elif overwrite:
        app.emit(tasks.update_task(file_name, body=text, repo_info=repo_info))
    else:
        app.emit(tasks.append_body(file_name, text, repo_info=repo_info))
