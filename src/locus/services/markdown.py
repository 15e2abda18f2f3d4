"""MarkdownService — frontmatter + body parsing and rendering.

File format::

    ---
    <YAML mapping, block style>
    ---
    <body>

Line 0 must be exactly ``---`` and the block closes at the next line that
is exactly ``---``. Everything after the closing line is the body, byte for
byte. Malformed frontmatter is never an error: the whole file becomes the
body so a rewrite cannot destroy it.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from datetime import datetime
from io import StringIO
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from locus.domain.models import ParsedMarkdown
from locus.services._helpers import now_iso

logger = logging.getLogger(__name__)

_FRONTMATTER_DELIMITER = "---"


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML instance.

    A new instance per call keeps a failed dump from leaving shared
    emitter state broken. Aliases are disabled and lines never wrap.
    """
    y = YAML()
    y.default_flow_style = False
    y.width = sys.maxsize
    y.representer.ignore_aliases = lambda _data: True
    return y


def _to_plain(node: Any) -> Any:
    """Strip ruamel's round-trip container types down to dict/list."""
    if isinstance(node, Mapping):
        return {str(key): _to_plain(value) for key, value in node.items()}
    if isinstance(node, list):
        return [_to_plain(item) for item in node]
    return node


def parse_markdown(content: str) -> ParsedMarkdown:
    """Split *content* into frontmatter and body.

    Returns ``ParsedMarkdown(None, content)`` when line 0 is not ``---``,
    when no closing ``---`` exists, when the YAML does not parse, or when
    it parses to something other than a mapping. An empty block parses to
    an empty mapping.
    """
    lines = content.split("\n")
    if lines[0] != _FRONTMATTER_DELIMITER:
        return ParsedMarkdown(frontmatter=None, body=content)

    end_idx: int | None = None
    for i in range(1, len(lines)):
        if lines[i] == _FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        return ParsedMarkdown(frontmatter=None, body=content)

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])

    try:
        loaded = _new_yaml().load(yaml_block)
    except YAMLError as exc:
        logger.debug("Frontmatter is not valid YAML, treating file as body: %s", exc)
        return ParsedMarkdown(frontmatter=None, body=content)

    if loaded is None:
        return ParsedMarkdown(frontmatter={}, body=body)
    if not isinstance(loaded, Mapping):
        logger.debug("Frontmatter is a %s, not a mapping", type(loaded).__name__)
        return ParsedMarkdown(frontmatter=None, body=content)
    return ParsedMarkdown(frontmatter=_to_plain(loaded), body=body)


def generate_markdown(frontmatter: Mapping[str, Any] | None, body: str) -> str:
    """Render *frontmatter* and *body*; no frontmatter means body verbatim."""
    if not frontmatter:
        return body
    buf = StringIO()
    _new_yaml().dump(dict(frontmatter), buf)
    yaml_text = buf.getvalue().strip()
    return f"{_FRONTMATTER_DELIMITER}\n{yaml_text}\n{_FRONTMATTER_DELIMITER}\n{body}"


def merge_frontmatter(
    existing: Mapping[str, Any] | None,
    updates: Mapping[str, Any],
) -> dict[str, Any]:
    """Shallow merge; keys in *updates* win, arrays are replaced not unioned."""
    merged = dict(existing or {})
    merged.update(updates)
    return merged


def extract_title(body: str) -> str | None:
    """Text of the first ``# `` heading, or None."""
    for line in body.strip().split("\n"):
        stripped = line.strip()
        if stripped.startswith("# "):
            return stripped[2:].strip()
    return None


def ensure_markdown_extension(file_name: str) -> str:
    return file_name if file_name.endswith(".md") else f"{file_name}.md"


def create_task_markdown(
    title: str,
    body: str | None = None,
    frontmatter: Mapping[str, Any] | None = None,
    *,
    now: datetime | None = None,
) -> str:
    """Render a new task document.

    ``date`` (YYYY-MM-DD) and ``created`` (ISO 8601) are filled in first so
    caller frontmatter can override them; the body defaults to an H1 of
    *title*.
    """
    created = now_iso() if now is None else now.isoformat()
    defaults: dict[str, Any] = {"date": created.split("T")[0], "created": created}
    merged = merge_frontmatter(defaults, frontmatter or {})
    return generate_markdown(merged, body or f"# {title}\n\n")


class MarkdownService:
    """Object facade over the module functions, for constructor injection."""

    parse_markdown = staticmethod(parse_markdown)
    generate_markdown = staticmethod(generate_markdown)
    merge_frontmatter = staticmethod(merge_frontmatter)
    extract_title = staticmethod(extract_title)
    ensure_markdown_extension = staticmethod(ensure_markdown_extension)
    create_task_markdown = staticmethod(create_task_markdown)
