"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: Public service operations return ServiceResult and never raise
for domain failures. The CLI and any other caller consume this type and
branch on ``error.code``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from locus.domain.errors import ErrorKind, LocusError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: ErrorKind
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: LocusError) -> ServiceError:
        return cls(code=exc.kind, message=exc.message, detail=exc.detail)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"create_task"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def success(cls, op: str, data: dict[str, Any] | None = None, **kwargs: Any) -> ServiceResult:
        return cls(ok=True, op=op, data=data or {}, **kwargs)

    @classmethod
    def failure(cls, op: str, kind: ErrorKind, message: str, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=kind, message=message, detail=detail))

    @classmethod
    def from_exception(cls, op: str, exc: LocusError) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))

    @property
    def code(self) -> ErrorKind | None:
        """Error kind of a failed result, ``None`` on success."""
        return self.error.code if self.error else None
