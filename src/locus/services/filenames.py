"""FileNameService — slug, hash and date generation for new task files.

Names are synthesized from ``file_naming.pattern`` by substituting the
``{date}``, ``{slug}`` and ``{hash}`` tokens. Hashes are random and never
checked for collisions; ``TaskService.create_task`` refuses to overwrite
instead.
"""

from __future__ import annotations

import re
import secrets
from collections.abc import Callable
from datetime import date, datetime

from locus.config.models import FileNamingConfig
from locus.domain.errors import ErrorKind, LocusError
from locus.domain.models import FileNameComponents

# Anything that is not a Unicode letter, number, whitespace or hyphen.
_SLUG_STRIP_RE = re.compile(r"[^\w\s-]|_")
_WHITESPACE_RE = re.compile(r"\s+")
_HYPHENS_RE = re.compile(r"-+")

_DATE_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_HASH_RE = re.compile(r"^[a-z0-9]+$", re.IGNORECASE)
_INVALID_CHARS_RE = re.compile(r'[<>:"|?*\x00-\x1f]')

MAX_FILENAME_LENGTH = 255


def generate_slug(title: str) -> str:
    """Lowercase, hyphenated rendering of *title* that keeps non-Latin letters.

    Examples:
        >>> generate_slug("Fix the Login Bug!")
        'fix-the-login-bug'
        >>> generate_slug("日本語 タスク")
        '日本語-タスク'
    """
    slug = _SLUG_STRIP_RE.sub("", title.lower()).strip()
    slug = _WHITESPACE_RE.sub("-", slug)
    slug = _HYPHENS_RE.sub("-", slug)
    return slug.strip("-")


def generate_hash(length: int = 8) -> str:
    """Random lowercase hex identifier of *length* characters."""
    return secrets.token_hex((length + 1) // 2)[:length]


def format_date(value: date, pattern: str) -> str:
    """Substitute ``YYYY``, ``MM`` and ``DD`` in *pattern*."""
    return (
        pattern.replace("YYYY", f"{value.year:04d}")
        .replace("MM", f"{value.month:02d}")
        .replace("DD", f"{value.day:02d}")
    )


def parse_file_name(file_name: str) -> dict[str, str]:
    """Best-effort recovery of ``date``, ``slug`` and ``hash`` from a name.

    Heuristic only: a slug whose last word is short and alphanumeric is
    indistinguishable from a hash.
    """
    stem = file_name[:-3] if file_name.endswith(".md") else file_name
    parts = stem.split("-")
    components: dict[str, str] = {}

    if len(parts) >= 3:
        candidate = "-".join(parts[:3])
        if _DATE_PREFIX_RE.match(candidate):
            components["date"] = candidate
            parts = parts[3:]

    if parts and _HASH_RE.match(parts[-1]) and len(parts[-1]) <= 16:
        components["hash"] = parts.pop()

    if parts:
        components["slug"] = "-".join(parts)
    return components


def validate_file_name(file_name: str) -> None:
    """Reject names that could escape the task directory or break on disk.

    Raises:
        LocusError: ``INVALID_TASK_NAME`` with the reason.
    """
    reason: str | None = None
    if not file_name:
        reason = "File name must not be empty"
    elif "/" in file_name or "\\" in file_name:
        reason = "File name must not contain path separators"
    elif ".." in file_name:
        reason = "File name must not contain relative path components"
    elif len(file_name) > MAX_FILENAME_LENGTH:
        reason = f"File name must be at most {MAX_FILENAME_LENGTH} characters"
    elif _INVALID_CHARS_RE.search(file_name):
        reason = "File name contains invalid characters"
    if reason:
        raise LocusError(ErrorKind.INVALID_TASK_NAME, reason, file_name=file_name)


class FileNameService:
    """Builds task file names from the configured pattern."""

    def __init__(
        self,
        config: FileNamingConfig,
        *,
        clock: Callable[[], datetime] | None = None,
        hash_factory: Callable[[int], str] | None = None,
    ) -> None:
        self._config = config
        self._clock = clock or datetime.now
        self._hash_factory = hash_factory or generate_hash

    generate_slug = staticmethod(generate_slug)
    format_date = staticmethod(format_date)
    parse_file_name = staticmethod(parse_file_name)
    validate_file_name = staticmethod(validate_file_name)

    def generate_hash(self, length: int | None = None) -> str:
        return self._hash_factory(length or self._config.hash_length)

    def generate_file_name_components(self, title: str) -> FileNameComponents:
        return FileNameComponents(
            date=format_date(self._clock(), self._config.date_format),
            slug=generate_slug(title),
            hash=self.generate_hash(),
        )

    def generate_file_name(self, title: str) -> str:
        """Render the pattern for *title*, with ``.md`` present exactly once."""
        components = self.generate_file_name_components(title)
        file_name = (
            self._config.pattern.replace("{date}", components.date)
            .replace("{slug}", components.slug)
            .replace("{hash}", components.hash)
        )
        if not file_name.endswith(".md"):
            file_name += ".md"
        return file_name
