"""ConfigService — inspect and initialize the settings file."""

from __future__ import annotations

from locus.config.discovery import get_config_file_path
from locus.config.settings import LocusSettings, init_config_file
from locus.domain.errors import ErrorKind, LocusError
from locus.services.result import ServiceResult

# Per-invocation CLI flags, not persisted configuration.
_RUNTIME_FIELDS = {"json_output", "verbose", "log_json", "config_path"}


class ConfigService:
    def __init__(self, settings: LocusSettings) -> None:
        self._settings = settings

    def show(self) -> ServiceResult:
        """The effective configuration after every source is merged."""
        data = self._settings.model_dump(mode="json", exclude=_RUNTIME_FIELDS)
        loaded = self._settings.config_path
        return ServiceResult.success(
            "config_show",
            {"config": data, "loaded_from": str(loaded) if loaded else None},
        )

    def path(self) -> ServiceResult:
        op = "config_path"
        try:
            path = get_config_file_path()
        except LocusError as exc:
            return ServiceResult.from_exception(op, exc)
        return ServiceResult.success(op, {"path": str(path), "exists": path.is_file()})

    def init(self, *, force: bool = False) -> ServiceResult:
        """Write the commented default settings file unless one exists."""
        op = "config_init"
        try:
            path, written = init_config_file(force=force)
        except LocusError as exc:
            return ServiceResult.from_exception(op, exc)
        except OSError as exc:
            return ServiceResult.failure(
                op, ErrorKind.FS_ERROR, f"Cannot write config file: {exc}", errno=exc.errno
            )
        if not written:
            return ServiceResult.failure(
                op,
                ErrorKind.FILE_EXISTS,
                f"Config file already exists: {path} (use --force to overwrite)",
                path=str(path),
            )
        return ServiceResult.success(op, {"path": str(path), "written": True})
