"""Tests for ServiceResult and ServiceError."""

from __future__ import annotations

import json

from todoctl.domain.errors import NotFoundError, ValidationError, wrap
from todoctl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success(self) -> None:
        result = ServiceResult.success("create_todo", {"id": "a"})
        assert result.ok
        assert result.data == {"id": "a"}
        assert result.error is None

    def test_success_without_data(self) -> None:
        assert ServiceResult.success("delete_todo").data == {}

    def test_failure(self) -> None:
        result = ServiceResult.failure("read_todo", NotFoundError("todo not found: a", todo_id="a"))
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert result.error.message == "todo not found: a"
        assert result.error.detail == {"category": "not_found", "id": "a"}

    def test_failure_keeps_wrapped_category(self) -> None:
        exc = wrap(ValidationError("task cannot be empty"), "failed to create todo")
        result = ServiceResult.failure("create_todo", exc)
        assert result.error is not None
        assert result.error.code == "VALIDATION"

    def test_json_shape(self) -> None:
        payload = json.loads(ServiceResult.success("x", {"n": 1}).model_dump_json())
        assert payload == {"ok": True, "op": "x", "data": {"n": 1}, "warnings": [], "error": None}


class TestServiceError:
    def test_from_plain_exception(self) -> None:
        err = ServiceError.from_exception(RuntimeError("boom"))
        assert err.code == "UNKNOWN"
        assert err.detail == {}
