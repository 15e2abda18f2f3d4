"""Task document models.

``RepoInfo``, ``TaskInfo`` and ``FileNameComponents`` are frozen Pydantic
models. ``TaskFrontmatter`` is the typed view over a frontmatter mapping:
reserved keys are declared fields, anything else rides along as extra
keys so custom metadata round-trips verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_REPOSITORY = "default"


class RepoInfo(BaseModel):
    """``{host, owner, repo}`` parsed from a Git remote URL."""

    model_config = {"frozen": True}

    host: str = ""
    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


class FileNameComponents(BaseModel):
    """Values substituted into the ``{date}``, ``{slug}``, ``{hash}`` tokens."""

    model_config = {"frozen": True}

    date: str
    slug: str
    hash: str


@dataclass(frozen=True)
class ParsedMarkdown:
    """A task file split into frontmatter (or ``None``) and body."""

    frontmatter: dict[str, Any] | None
    body: str


def _stringify_temporal(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(UTC).isoformat().replace("+00:00", "Z")
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


class TaskFrontmatter(BaseModel):
    """Typed view of the reserved frontmatter keys.

    YAML may hand back ``date``/``datetime`` objects or plain numbers for
    unquoted timestamps, and hand-edited files sometimes carry a bare
    string for ``tags``; both are normalized here. Offset-aware
    timestamps are rendered in UTC with a ``Z`` suffix.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    status: str | None = None
    priority: str | None = None
    tags: list[str] = Field(default_factory=list)
    created: str | None = None
    date: str | None = None

    @field_validator("created", "date", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value: Any) -> Any:
        return _stringify_temporal(value)

    @field_validator("status", "priority", mode="before")
    @classmethod
    def _coerce_scalar(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (list, tuple, set)):
            return [str(tag) for tag in value]
        return [str(value)]


class TaskInfo(BaseModel):
    """Materialized view of one task file."""

    model_config = {"frozen": True}

    file_name: str
    title: str
    status: str = "todo"
    priority: str = "normal"
    tags: list[str] = Field(default_factory=list)
    created: str = ""
    path: str
    repository: str = DEFAULT_REPOSITORY
    frontmatter: dict[str, Any] = Field(default_factory=dict)
    body: str = ""
