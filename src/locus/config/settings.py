"""Unified settings — CLI flags, env vars, and YAML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — the fixed ``LOCUS_*`` names in :data:`ENV_VARS`
  3. YAML file    — ``settings.yml`` discovered under the XDG config dirs
  4. Code defaults — baked into the section models

Sections are deep-merged, so ``LOCUS_GIT_EXTRACT_USERNAME=false`` only
overrides that one key of the file's ``git`` section.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from locus.config.discovery import find_config, get_config_dir, get_config_file_path
from locus.config.models import DefaultsConfig, FileNamingConfig, GitConfig, LanguageConfig
from locus.domain.errors import ErrorKind, LocusError

logger = logging.getLogger(__name__)


def _env_bool(raw: str) -> bool:
    return raw.strip().lower() != "false"


def _env_int(raw: str) -> int | None:
    try:
        return int(raw.strip(), 10)
    except ValueError:
        return None


def _env_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",")]


def _env_str(raw: str) -> str | None:
    return raw or None


# env var name -> (nested key path, converter). A converter returning None
# means "ignore this variable".
ENV_VARS: dict[str, tuple[tuple[str, ...], Callable[[str], Any]]] = {
    "LOCUS_TASK_DIRECTORY": (("task_directory",), _env_str),
    "LOCUS_GIT_EXTRACT_USERNAME": (("git", "extract_username"), _env_bool),
    "LOCUS_GIT_USERNAME_FROM_REMOTE": (("git", "username_from_remote"), _env_bool),
    "LOCUS_FILE_NAMING_PATTERN": (("file_naming", "pattern"), _env_str),
    "LOCUS_FILE_NAMING_DATE_FORMAT": (("file_naming", "date_format"), _env_str),
    "LOCUS_FILE_NAMING_HASH_LENGTH": (("file_naming", "hash_length"), _env_int),
    "LOCUS_DEFAULT_STATUS": (("defaults", "status"), _env_str),
    "LOCUS_DEFAULT_PRIORITY": (("defaults", "priority"), _env_str),
    "LOCUS_DEFAULT_TAGS": (("defaults", "tags"), _env_list),
    "LOCUS_LANGUAGE_DEFAULT": (("language", "default"), _env_str),
}


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``settings.yml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if yaml_path and yaml_path.is_file():
            raw = yaml_path.read_text(encoding="utf-8")
            try:
                loaded = YAML(typ="safe").load(raw)
            except YAMLError as exc:
                msg = f"Invalid YAML in {yaml_path}: {exc}"
                raise LocusError(ErrorKind.CONFIG_PARSE, msg, path=str(yaml_path)) from exc
            if loaded is None:
                loaded = {}
            if not isinstance(loaded, dict):
                msg = f"Config file {yaml_path} must contain a mapping"
                raise LocusError(ErrorKind.CONFIG_PARSE, msg, path=str(yaml_path))
            self._data = loaded
            logger.debug("Loaded config file %s", yaml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


class LocusEnvSource(PydanticBaseSettingsSource):
    """Map the fixed ``LOCUS_*`` environment variables onto nested settings."""

    def __init__(self, settings_cls: type[BaseSettings], environ: dict[str, str]) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        for name, (key_path, convert) in ENV_VARS.items():
            if name not in environ:
                continue
            value = convert(environ[name])
            if value is None:
                continue
            target = self._data
            for key in key_path[:-1]:
                target = target.setdefault(key, {})
            target[key_path[-1]] = value

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for the YAML path during construction.
_tls = threading.local()


class LocusSettings(BaseSettings):
    """Every setting the core and the CLI read, frozen after construction.

    Attributes:
        task_directory: Root of the task tree; a leading ``~`` is expanded
            by the path resolver, not here.
        config_path: The settings file that was loaded, if any.
    """

    model_config = {"frozen": True}

    task_directory: str = "~/locus"
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- YAML sections ---
    git: GitConfig = Field(default_factory=GitConfig)
    file_naming: FileNamingConfig = Field(default_factory=FileNamingConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    language: LanguageConfig = Field(default_factory=LanguageConfig)

    @property
    def repo_aware(self) -> bool:
        """Whether tasks go under ``<owner>/<repo>`` subdirectories."""
        return self.git.extract_username and self.git.username_from_remote

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Replace the generic env source with the fixed LOCUS_* mapping."""
        yaml_path = getattr(_tls, "yaml_path", None)
        return (
            init_settings,
            LocusEnvSource(settings_cls, dict(os.environ)),
            YamlSettingsSource(settings_cls, yaml_path),
        )

    @classmethod
    def load(cls, *, config_path: str | Path | None = None, **overrides: Any) -> LocusSettings:
        """Construct settings from the discovered (or explicit) YAML file.

        Raises:
            LocusError: ``CONFIG_PARSE`` for unreadable YAML,
                ``CONFIG_VALIDATION`` when the merged values are invalid.
        """
        yaml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                yaml_path = p
        else:
            yaml_path = find_config()

        _tls.yaml_path = yaml_path
        try:
            return cls(config_path=yaml_path, **overrides)
        except ValidationError as exc:
            msg = f"Invalid configuration: {exc.error_count()} error(s)"
            errors = [
                {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
                for err in exc.errors()
            ]
            raise LocusError(ErrorKind.CONFIG_VALIDATION, msg, errors=errors) from exc
        finally:
            _tls.yaml_path = None


_cache: dict[tuple[Any, ...], LocusSettings] = {}


def get_settings(
    *,
    config_path: str | Path | None = None,
    force_reload: bool = False,
    **overrides: Any,
) -> LocusSettings:
    """Load settings once per process for each argument set.

    ``force_reload`` re-reads the YAML file and environment.
    """
    key = (str(config_path) if config_path else None, tuple(sorted(overrides.items())))
    if force_reload or key not in _cache:
        _cache[key] = LocusSettings.load(config_path=config_path, **overrides)
    return _cache[key]


def reset_settings_cache() -> None:
    _cache.clear()


DEFAULT_CONFIG_TEMPLATE = """\
# Locus configuration file

# Directory where task files are stored
task_directory: ~/locus

# Git integration settings
git:
  # Extract username from git remote URL
  extract_username: true
  # Use username from remote URL in task directory structure
  username_from_remote: true

# File naming settings
file_naming:
  # Tokens: {date}, {slug}, {hash}
  pattern: "{date}-{slug}-{hash}.md"
  date_format: YYYY-MM-DD
  hash_length: 8

# Frontmatter values for new tasks
defaults:
  status: todo
  priority: normal
  tags: []

language:
  default: en
"""


def init_config_file(*, force: bool = False) -> tuple[Path, bool]:
    """Write the default ``settings.yml``.

    Returns ``(path, written)``; an existing file is left alone unless
    *force* is set.
    """
    path = get_config_file_path()
    if path.exists() and not force:
        return path, False
    get_config_dir().mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")
    return path, True
