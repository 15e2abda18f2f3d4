"""Pydantic configuration models with code-baked defaults.

Sparse YAML contract: defaults baked here, settings.yml only contains
overrides. An absent settings.yml is a fully working configuration.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator

_PATTERN_TOKEN_RE = re.compile(r"\{date\}|\{slug\}|\{hash\}")


class GitConfig(BaseModel):
    """[git] section — both flags must be on for per-repo directories."""

    model_config = {"frozen": True}

    extract_username: bool = True
    username_from_remote: bool = True


class FileNamingConfig(BaseModel):
    """[file_naming] section."""

    model_config = {"frozen": True}

    pattern: str = "{date}-{slug}-{hash}.md"
    date_format: str = "YYYY-MM-DD"
    hash_length: int = Field(default=8, ge=4, le=32)

    @field_validator("pattern")
    @classmethod
    def _pattern_has_token(cls, value: str) -> str:
        if not _PATTERN_TOKEN_RE.search(value):
            msg = "pattern must contain at least one of {date}, {slug}, {hash}"
            raise ValueError(msg)
        return value


class DefaultsConfig(BaseModel):
    """[defaults] section — frontmatter values for new tasks."""

    model_config = {"frozen": True}

    status: str = "todo"
    priority: str = "normal"
    tags: list[str] = Field(default_factory=list)


class LanguageConfig(BaseModel):
    """[language] section."""

    model_config = {"frozen": True}

    default: str = "en"
