"""Todo aggregate: the in-memory model and its lifecycle rules.

A :class:`Todo` is mutable so callers can read-modify-write it, but every
save re-runs :meth:`Todo.validate`.  Status, priority and type are plain
strings: unknown values are stored as given.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from todoctl.domain.errors import ValidationError

DEFAULT_PRIORITY = "medium"
DEFAULT_TYPE = "task"


class TodoStatus(StrEnum):
    """Known todo statuses."""

    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    COMPLETED = "completed"


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class SectionDefinition:
    """A named ``## Title`` region of the todo body.

    Title, order and metadata live in the header; content lives in the body.
    """

    title: str
    content: str = ""
    order: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class Todo:
    """One unit of tracked work, persisted as one markdown file."""

    task: str
    id: str = ""
    started: datetime = field(default_factory=utc_now)
    completed: datetime | None = None
    status: str = TodoStatus.IN_PROGRESS.value
    priority: str = DEFAULT_PRIORITY
    type: str = DEFAULT_TYPE
    parent_id: str = ""
    tags: list[str] = field(default_factory=list)
    sections: dict[str, SectionDefinition] = field(default_factory=dict)

    def validate(self) -> None:
        """Raise :class:`ValidationError` if a required field is empty."""
        for name in ("task", "status", "priority", "type"):
            if not str(getattr(self, name)).strip():
                raise ValidationError(f"todo {name} cannot be empty", todo_id=self.id or None)

    def complete(self) -> None:
        self.status = TodoStatus.COMPLETED.value
        self.completed = utc_now()

    def is_completed(self) -> bool:
        return self.status == TodoStatus.COMPLETED

    def is_blocked(self) -> bool:
        return self.status == TodoStatus.BLOCKED

    def is_in_progress(self) -> bool:
        return self.status == TodoStatus.IN_PROGRESS

    def sorted_sections(self) -> list[tuple[str, SectionDefinition]]:
        """Sections in serialization order: ascending ``order``, then key."""
        return sorted(self.sections.items(), key=lambda item: (item[1].order, item[0]))


def new_todo(task: str, priority: str = "", todo_type: str = "") -> Todo:
    """Build a fresh in-progress todo, filling in defaults.

    The id is left empty; the service assigns it.

    Raises:
        ValidationError: If *task* is empty after trimming.
    """
    if not task.strip():
        raise ValidationError("task cannot be empty")
    return Todo(
        task=task,
        started=utc_now(),
        status=TodoStatus.IN_PROGRESS.value,
        priority=priority or DEFAULT_PRIORITY,
        type=todo_type or DEFAULT_TYPE,
    )
