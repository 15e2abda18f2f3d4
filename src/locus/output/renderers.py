"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Renderers are
dispatched by ``result.op`` in :func:`render_result`; unknown ops fall
through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from locus.output.console import (
    create_console,
    get_output,
    style_for_priority,
    style_for_status,
)

if TYPE_CHECKING:
    from rich.console import Console

    from locus.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _dump(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, ensure_ascii=False, default=str, separators=(",", ":"))
    return str(value)


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="locus.ok")
    op = Text(f"  {result.op}", style="locus.op")
    console.print(label, op, sep="", soft_wrap=True)


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="locus.key")
    if key == "path":
        v = Text(str(value), style="locus.path")
    elif key == "title":
        v = Text(str(value), style="locus.title")
    else:
        v = Text(_dump(value))
    console.print(k, v, sep="", soft_wrap=True)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="locus.error")
    op = Text(f"  {result.op}", style="locus.op")
    console.print(label, op, Text(" — "), Text(msg), sep="", soft_wrap=True)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {_dump(v)}"), soft_wrap=True)


# ── Mutations ─────────────────────────────────────────────────────────


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """create/update/delete and property edits."""
    _status_line(console, result)
    for key in ("path", "title", "repository", "property", "value", "fields_changed"):
        value = result.data.get(key)
        if value is not None and value != []:
            _field(console, key, value)
    if verbose and result.data.get("created"):
        _field(console, "created", True)


# ── Tasks ─────────────────────────────────────────────────────────────


def _render_task(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """get_task as a panel: metadata lines, then the body."""
    task = result.data.get("task", {})
    lines: list[str] = []
    for key in ("status", "priority", "created", "repository"):
        value = task.get(key)
        if value:
            lines.append(f"{key}: {value}")
    tags = task.get("tags") or []
    if tags:
        lines.append(f"tags: {', '.join(tags)}")
    if verbose:
        lines.append(f"path: {task.get('path', '')}")

    content = Text("\n".join(lines))
    body = (task.get("body") or "").strip()
    if body:
        content.append(f"\n\n{body}")
    console.print(Panel(content, title=Text(task.get("title", "")), border_style="dim", expand=False))


def _task_table(tasks: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    show_repo = verbose or any(t.get("repository") != "default" for t in tasks)

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("File", style="locus.path", overflow="fold")
    table.add_column("Title", style="locus.title")
    table.add_column("Status")
    table.add_column("Priority")
    table.add_column("Tags", style="locus.tag")
    if show_repo:
        table.add_column("Repository", style="locus.repo")
    if verbose:
        table.add_column("Created", style="dim")

    for task in tasks:
        status = str(task.get("status", ""))
        priority = str(task.get("priority", ""))
        row: list[Any] = [
            Text(task.get("file_name", "")),
            Text(task.get("title", "")),
            Text(status, style=style_for_status(status)),
            Text(priority, style=style_for_priority(priority)),
            Text(", ".join(task.get("tags") or [])),
        ]
        if show_repo:
            row.append(Text(task.get("repository", "")))
        if verbose:
            row.append(Text(task.get("created", "")))
        table.add_row(*row)
    return table


def _render_task_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """list_tasks / search_tasks as a table with a count footer."""
    tasks = result.data.get("tasks", [])
    if not tasks:
        console.print("No tasks found")
        return
    console.print(_task_table(tasks, verbose=verbose))
    count = result.data.get("count", len(tasks))
    console.print(f"\n{count} task{'s' if count != 1 else ''}")


def _render_paths(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Bare paths, one per line, for piping into other tools."""
    for path in result.data.get("paths", []):
        console.print(Text(path), soft_wrap=True)


# ── Properties ────────────────────────────────────────────────────────


def _render_value(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    value = result.data.get("value")
    if isinstance(value, (dict, list)):
        console.print(Text(_json.dumps(value, ensure_ascii=False, default=str, indent=2)), soft_wrap=True)
    else:
        console.print(Text(str(value)), soft_wrap=True)


def _render_tag_files(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """list_tags: every task file, or one file's frontmatter."""
    files = result.data.get("files", [])
    if len(files) == 1 and files[0].get("frontmatter"):
        for key, value in files[0]["frontmatter"].items():
            _field(console, key, value)
        return
    for entry in files:
        console.print(Text(entry.get("path", "")), soft_wrap=True)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Mutations
    "create_task": _render_mutation,
    "update_task": _render_mutation,
    "delete_task": _render_mutation,
    "set_tag": _render_mutation,
    "set_tags": _render_mutation,
    "remove_tag": _render_mutation,
    "clear_tags": _render_mutation,
    # Queries
    "get_task": _render_task,
    "list_tasks": _render_task_table,
    "search_tasks": _render_task_table,
    "locate_task": _render_paths,
    "search_markdown_files": _render_paths,
    # Properties
    "get_tag": _render_value,
    "list_tags": _render_tag_files,
}
