"""Coercion of ``key=value`` strings typed on the command line.

Supported value forms, checked in order: empty string, booleans, numbers,
comma-separated lists, relative dates (``today``, ``tomorrow``,
``yesterday``, ``+Nd``, ``-Nd``), ISO dates, then plain strings.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta
from typing import Any

_NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")
_RELATIVE_DAYS_RE = re.compile(r"^([+-])(\d+)d$")
_ISO_DATE_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")


def parse_property_value(value: str, *, now: datetime | None = None) -> Any:
    """Coerce a raw string into the most specific frontmatter value.

    Examples:
        >>> parse_property_value("true")
        True
        >>> parse_property_value("3")
        3
        >>> parse_property_value("a, b,")
        ['a', 'b']
    """
    if value == "":
        return ""

    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False

    if _NUMBER_RE.match(value):
        return float(value) if "." in value else int(value)

    if "," in value:
        return [item.strip() for item in value.split(",") if item.strip()]

    parsed = _parse_date_pattern(value, now=now)
    if parsed is not None:
        return parsed.isoformat()

    return value


def _parse_date_pattern(value: str, *, now: datetime | None = None) -> datetime | None:
    current = now or datetime.now(UTC)
    lowered = value.lower()

    if lowered == "today":
        return current
    if lowered == "tomorrow":
        return current + timedelta(days=1)
    if lowered == "yesterday":
        return current - timedelta(days=1)

    match = _RELATIVE_DAYS_RE.match(value)
    if match:
        sign = 1 if match.group(1) == "+" else -1
        return current + timedelta(days=sign * int(match.group(2)))

    if _ISO_DATE_PREFIX_RE.match(value):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed

    return None


def parse_key_value_pairs(properties: list[str]) -> dict[str, Any]:
    """Parse ``key=value`` strings; entries without ``=`` or a key are skipped."""
    result: dict[str, Any] = {}
    for prop in properties:
        key, sep, raw = prop.partition("=")
        if not sep or not key:
            continue
        result[key] = parse_property_value(raw)
    return result
