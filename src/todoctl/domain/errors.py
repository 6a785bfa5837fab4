"""Error taxonomy for the todo store.

Every failure raised by the repository and service layers is a
:class:`TodoError` carrying an :class:`ErrorCategory`.  Wrapping keeps the
category: :func:`get_category` walks the ``__cause__`` chain, so a
``"failed to save todo: ..."`` error raised from a validation failure still
classifies as ``validation``.

The :class:`ErrorCategory` members double as sentinels::

    if get_category(exc) is ErrorCategory.NOT_FOUND:
        ...
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCategory(StrEnum):
    """Kinds of failure a consumer can branch on."""

    UNKNOWN = "unknown"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    OPERATION = "operation"
    PERMISSION = "permission"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class TodoError(Exception):
    """Base class for all todo store errors.

    ``str(err)`` is exactly *message*; the id and operation are kept as
    attributes for structured output.
    """

    category: ErrorCategory = ErrorCategory.UNKNOWN

    def __init__(
        self,
        message: str,
        *,
        todo_id: str | None = None,
        operation: str | None = None,
        category: ErrorCategory | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.todo_id = todo_id
        self.operation = operation
        if category is not None:
            self.category = category

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, str]:
        detail = {"category": str(self.category)}
        if self.todo_id:
            detail["id"] = self.todo_id
        if self.operation:
            detail["operation"] = self.operation
        return detail


class NotFoundError(TodoError):
    category = ErrorCategory.NOT_FOUND


class ValidationError(TodoError):
    category = ErrorCategory.VALIDATION


class OperationError(TodoError):
    category = ErrorCategory.OPERATION


class OperationCancelled(OperationError):
    """Raised when a :class:`~todoctl.domain.cancel.CancelToken` fires."""


class PermissionDeniedError(TodoError):
    category = ErrorCategory.PERMISSION


class ConflictError(TodoError):
    """Reserved: nothing in the store raises it today."""

    category = ErrorCategory.CONFLICT


class InternalError(TodoError):
    category = ErrorCategory.INTERNAL


class MultiError(TodoError):
    """Several independent failures collected by a bulk operation."""

    def __init__(self, errors: list[BaseException] | None = None) -> None:
        self.errors: list[BaseException] = list(errors or [])
        super().__init__(self._render())

    def _render(self) -> str:
        if not self.errors:
            return "no errors"
        if len(self.errors) == 1:
            return str(self.errors[0])
        return "multiple errors: [" + "; ".join(str(e) for e in self.errors) + "]"

    def add(self, error: BaseException | None) -> None:
        if error is None:
            return
        self.errors.append(error)
        self.message = self._render()

    def has_errors(self) -> bool:
        return bool(self.errors)

    @property  # type: ignore[override]
    def category(self) -> ErrorCategory:
        if not self.errors:
            return ErrorCategory.UNKNOWN
        return get_category(self.errors[0])


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def get_category(exc: BaseException | None) -> ErrorCategory:
    """Classify *exc*, following the ``__cause__`` / ``__context__`` chain."""
    seen: set[int] = set()
    current = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, TodoError):
            if current.category is not ErrorCategory.UNKNOWN:
                return current.category
        elif isinstance(current, FileNotFoundError):
            return ErrorCategory.NOT_FOUND
        elif isinstance(current, PermissionError):
            return ErrorCategory.PERMISSION
        elif isinstance(current, OSError):
            return ErrorCategory.OPERATION
        current = current.__cause__ or current.__context__
    return ErrorCategory.UNKNOWN


def is_not_found(exc: BaseException | None) -> bool:
    return get_category(exc) is ErrorCategory.NOT_FOUND


def is_validation(exc: BaseException | None) -> bool:
    return get_category(exc) is ErrorCategory.VALIDATION


def is_operation(exc: BaseException | None) -> bool:
    return get_category(exc) is ErrorCategory.OPERATION


def is_permission(exc: BaseException | None) -> bool:
    return get_category(exc) is ErrorCategory.PERMISSION


def is_conflict(exc: BaseException | None) -> bool:
    return get_category(exc) is ErrorCategory.CONFLICT


def is_internal(exc: BaseException | None) -> bool:
    return get_category(exc) is ErrorCategory.INTERNAL


def wrap(exc: BaseException, message: str) -> TodoError:
    """Return a new error ``"<message>: <exc>"`` that keeps *exc*'s category.

    Raise the result ``from exc`` so the cause chain stays intact.
    """
    todo_id = exc.todo_id if isinstance(exc, TodoError) else None
    wrapped = TodoError(
        f"{message}: {exc}",
        todo_id=todo_id,
        operation=message,
        category=get_category(exc),
    )
    wrapped.__cause__ = exc
    return wrapped
