"""Error kinds and the single exception type raised below the service layer.

INVARIANT: The set of error kinds is closed. Callers branch on
``ServiceError.code`` (an :class:`ErrorKind`), never on exception
subclasses.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """Every failure the core can report."""

    # Git
    GIT_NOT_REPO = "GIT_NOT_REPO"
    GIT_NO_REMOTE = "GIT_NO_REMOTE"
    GIT_COMMAND_FAILED = "GIT_COMMAND_FAILED"
    # Config
    CONFIG_ERROR = "CONFIG_ERROR"
    CONFIG_VALIDATION = "CONFIG_VALIDATION"
    CONFIG_PARSE = "CONFIG_PARSE"
    # FileSystem
    FS_ERROR = "FS_ERROR"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    FILE_EXISTS = "FILE_EXISTS"
    # Task
    TASK_NOT_FOUND = "TASK_NOT_FOUND"
    INVALID_TASK_NAME = "INVALID_TASK_NAME"
    PROPERTY_NOT_FOUND = "PROPERTY_NOT_FOUND"


class LocusError(Exception):
    """A failure tagged with its :class:`ErrorKind`.

    Raised by primitives (path resolution, file I/O, config loading) and
    converted into a failed ``ServiceResult`` at the service boundary.
    """

    def __init__(self, kind: ErrorKind, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.detail = detail

    def __repr__(self) -> str:
        return f"LocusError({self.kind.value}, {self.message!r})"
