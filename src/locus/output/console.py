"""Rich Console factory and theme for locus output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract. Rich drops color codes on its own when the real
stdout is not a terminal (pipes, CliRunner).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

LOCUS_THEME = Theme(
    {
        "locus.ok": "bold green",
        "locus.error": "bold red",
        "locus.warning": "bold yellow",
        "locus.op": "bold cyan",
        "locus.key": "dim",
        "locus.path": "dim",
        "locus.title": "bold",
        "locus.repo": "blue",
        "locus.tag": "magenta",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "todo": "yellow",
    "in-progress": "cyan",
    "done": "green",
    "cancelled": "dim",
}

_PRIORITY_STYLES: dict[str, str] = {
    "high": "bold red",
    "normal": "",
    "medium": "",
    "low": "dim",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=LOCUS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    return _STATUS_STYLES.get(status, "")


def style_for_priority(priority: str) -> str:
    return _PRIORITY_STYLES.get(priority, "")
