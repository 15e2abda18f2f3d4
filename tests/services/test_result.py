"""Tests for ServiceResult and ServiceError."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from locus.domain.errors import ErrorKind, LocusError
from locus.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success(self) -> None:
        result = ServiceResult.success("create_task", {"path": "/t/a.md"})
        assert result.ok is True
        assert result.op == "create_task"
        assert result.data == {"path": "/t/a.md"}
        assert result.warnings == []
        assert result.error is None
        assert result.code is None

    def test_failure(self) -> None:
        result = ServiceResult.failure(
            "get_task", ErrorKind.TASK_NOT_FOUND, "Task not found: x", file_name="x"
        )
        assert result.ok is False
        assert result.code == ErrorKind.TASK_NOT_FOUND
        assert result.error is not None
        assert result.error.detail == {"file_name": "x"}

    def test_from_exception(self) -> None:
        exc = LocusError(ErrorKind.FS_ERROR, "disk full", path="/t")
        result = ServiceResult.from_exception("update_task", exc)
        assert result.code == ErrorKind.FS_ERROR
        assert result.error is not None
        assert result.error.message == "disk full"
        assert result.error.detail == {"path": "/t"}

    def test_json_serialization(self) -> None:
        result = ServiceResult.failure("get_tag", ErrorKind.PROPERTY_NOT_FOUND, "nope")
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is False
        assert parsed["error"]["code"] == "PROPERTY_NOT_FOUND"

    def test_frozen(self) -> None:
        result = ServiceResult.success("x")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_detail_defaults_empty(self) -> None:
        error = ServiceError(code=ErrorKind.CONFIG_ERROR, message="bad")
        assert error.detail == {}

    def test_unknown_code_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ServiceError(code="NOT_A_KIND", message="x")  # type: ignore[arg-type]
