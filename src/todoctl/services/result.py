"""ServiceResult and ServiceError: what outer surfaces emit.

The core raises :class:`~todoctl.domain.errors.TodoError`.  The CLI (and any
future transport) converts each call into a ServiceResult so that human and
JSON output share one shape.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, Field

from todoctl.domain.errors import TodoError, get_category


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: BaseException) -> Self:
        """Build an error whose ``code`` is the upper-cased error category."""
        detail = exc.to_dict() if isinstance(exc, TodoError) else {}
        return cls(code=get_category(exc).upper(), message=str(exc), detail=detail)


class ServiceResult(BaseModel):
    """Outcome of one operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"create_todo"``).
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
    def success(cls, op: str, data: dict[str, Any] | None = None, **kwargs: Any) -> Self:
        return cls(ok=True, op=op, data=data or {}, **kwargs)

    @classmethod
    def failure(cls, op: str, exc: BaseException) -> Self:
        return cls(ok=False, op=op, error=ServiceError.from_exception(exc))
