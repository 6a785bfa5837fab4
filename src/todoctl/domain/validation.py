"""Accepted values for enumerated todo fields and command options.

These tables are advisory.  :func:`todoctl.domain.todo.new_todo` never
consults them, so forward-compatible values (and the ``task`` default
type) are stored as given.  Outer surfaces use them to reject typos.
"""

from __future__ import annotations

from enum import StrEnum


class Priority(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TodoType(StrEnum):
    FEATURE = "feature"
    BUG = "bug"
    REFACTOR = "refactor"
    RESEARCH = "research"
    PRD = "prd"
    MULTI_PHASE = "multi-phase"
    PHASE = "phase"
    SUBTASK = "subtask"


class OutputFormat(StrEnum):
    FULL = "full"
    SUMMARY = "summary"
    LIST = "list"


class SectionOperation(StrEnum):
    """How new content is combined with a section's existing content."""

    APPEND = "append"
    REPLACE = "replace"
    PREPEND = "prepend"
    TOGGLE = "toggle"


def valid_priorities() -> tuple[str, ...]:
    return tuple(p.value for p in Priority)


def valid_todo_types() -> tuple[str, ...]:
    return tuple(t.value for t in TodoType)


def valid_formats() -> tuple[str, ...]:
    return tuple(f.value for f in OutputFormat)


def valid_operations() -> tuple[str, ...]:
    return tuple(o.value for o in SectionOperation)


def is_valid_priority(value: str) -> bool:
    return value in valid_priorities()


def is_valid_todo_type(value: str) -> bool:
    return value in valid_todo_types()


def is_valid_format(value: str) -> bool:
    return value in valid_formats()


def is_valid_operation(value: str) -> bool:
    return value in valid_operations()


class StatsPeriod(StrEnum):
    """Window of ``started`` dates that statistics cover."""

    ALL = "all"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"


def valid_periods() -> tuple[str, ...]:
    return tuple(p.value for p in StatsPeriod)
