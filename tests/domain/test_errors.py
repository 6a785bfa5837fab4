"""Tests for the error taxonomy and category propagation."""

from __future__ import annotations

import pytest

from todoctl.domain.errors import (
    ConflictError,
    ErrorCategory,
    InternalError,
    MultiError,
    NotFoundError,
    OperationCancelled,
    OperationError,
    PermissionDeniedError,
    TodoError,
    ValidationError,
    get_category,
    is_conflict,
    is_internal,
    is_not_found,
    is_operation,
    is_permission,
    is_validation,
    wrap,
)


class TestCategories:
    @pytest.mark.parametrize(
        ("exc", "category"),
        [
            (NotFoundError("x"), ErrorCategory.NOT_FOUND),
            (ValidationError("x"), ErrorCategory.VALIDATION),
            (OperationError("x"), ErrorCategory.OPERATION),
            (OperationCancelled("x"), ErrorCategory.OPERATION),
            (PermissionDeniedError("x"), ErrorCategory.PERMISSION),
            (ConflictError("x"), ErrorCategory.CONFLICT),
            (InternalError("x"), ErrorCategory.INTERNAL),
            (TodoError("x"), ErrorCategory.UNKNOWN),
            (FileNotFoundError("x"), ErrorCategory.NOT_FOUND),
            (PermissionError("x"), ErrorCategory.PERMISSION),
            (OSError("x"), ErrorCategory.OPERATION),
            (RuntimeError("x"), ErrorCategory.UNKNOWN),
        ],
    )
    def test_get_category(self, exc: BaseException, category: ErrorCategory) -> None:
        assert get_category(exc) is category

    def test_none_is_unknown(self) -> None:
        assert get_category(None) is ErrorCategory.UNKNOWN

    def test_explicit_category_override(self) -> None:
        assert is_conflict(TodoError("x", category=ErrorCategory.CONFLICT))

    def test_predicates(self) -> None:
        assert is_not_found(NotFoundError("x"))
        assert is_validation(ValidationError("x"))
        assert is_operation(OperationError("x"))
        assert is_permission(PermissionDeniedError("x"))
        assert is_internal(InternalError("x"))
        assert not is_not_found(ValidationError("x"))


class TestWrap:
    def test_message_and_category(self) -> None:
        inner = ValidationError("task cannot be empty")
        wrapped = wrap(inner, "failed to create todo")
        assert str(wrapped) == "failed to create todo: task cannot be empty"
        assert is_validation(wrapped)
        assert wrapped.__cause__ is inner

    def test_double_wrap_keeps_category(self) -> None:
        inner = NotFoundError("todo not found: a", todo_id="a")
        outer = wrap(wrap(inner, "one"), "two")
        assert str(outer) == "two: one: todo not found: a"
        assert is_not_found(outer)
        assert outer.todo_id == "a"

    def test_wrap_os_error(self) -> None:
        wrapped = wrap(PermissionError("denied"), "failed to write file")
        assert is_permission(wrapped)

    def test_chain_walk_through_plain_exception(self) -> None:
        try:
            try:
                raise FileNotFoundError("gone")
            except FileNotFoundError as exc:
                raise RuntimeError("outer") from exc
        except RuntimeError as outer:
            assert is_not_found(outer)


class TestTodoError:
    def test_str_is_message(self) -> None:
        err = NotFoundError("todo not found: a", todo_id="a", operation="read")
        assert str(err) == "todo not found: a"

    def test_to_dict(self) -> None:
        err = NotFoundError("m", todo_id="a", operation="read")
        assert err.to_dict() == {"category": "not_found", "id": "a", "operation": "read"}

    def test_to_dict_minimal(self) -> None:
        assert ValidationError("m").to_dict() == {"category": "validation"}


class TestMultiError:
    def test_empty(self) -> None:
        multi = MultiError()
        assert not multi.has_errors()
        assert str(multi) == "no errors"
        assert multi.category is ErrorCategory.UNKNOWN

    def test_single(self) -> None:
        multi = MultiError([NotFoundError("gone")])
        assert str(multi) == "gone"
        assert is_not_found(multi)

    def test_add_and_render(self) -> None:
        multi = MultiError()
        multi.add(ValidationError("a"))
        multi.add(None)
        multi.add(OperationError("b"))
        assert multi.has_errors()
        assert len(multi.errors) == 2
        assert str(multi) == "multiple errors: [a; b]"
        assert is_validation(multi)
