"""Aggregate counts and completion rates over a set of todos."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING

from todoctl.domain.todo import DEFAULT_PRIORITY, TodoStatus, utc_now
from todoctl.domain.validation import StatsPeriod

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from todoctl.domain.todo import Todo

UNKNOWN_TYPE = "unknown"

PERIOD_DAYS: dict[str, int] = {
    StatsPeriod.WEEK: 7,
    StatsPeriod.MONTH: 30,
    StatsPeriod.QUARTER: 90,
}


@dataclass(frozen=True)
class TodoStats:
    """Snapshot of store statistics.

    ``completion_rates`` maps each type to the percentage of its todos that
    are completed, rounded to one decimal place.
    """

    total: int = 0
    completed: int = 0
    in_progress: int = 0
    blocked: int = 0
    by_type: dict[str, int] = field(default_factory=dict)
    by_priority: dict[str, int] = field(default_factory=dict)
    completion_rates: dict[str, float] = field(default_factory=dict)
    average_completion_seconds: float = 0.0


def period_cutoff(period: str, now: datetime | None = None) -> datetime | None:
    """Earliest ``started`` included by *period*; ``None`` means no bound.

    Unknown and empty periods cover everything.
    """
    days = PERIOD_DAYS.get(period)
    if days is None:
        return None
    return (now or utc_now()) - timedelta(days=days)


def compute_stats(todos: Iterable[Todo]) -> TodoStats:
    total = completed = in_progress = blocked = 0
    by_type: dict[str, int] = {}
    by_priority: dict[str, int] = {}
    completed_by_type: dict[str, int] = {}
    durations: list[float] = []

    for todo in todos:
        total += 1
        todo_type = todo.type or UNKNOWN_TYPE
        by_type[todo_type] = by_type.get(todo_type, 0) + 1
        priority = todo.priority or DEFAULT_PRIORITY
        by_priority[priority] = by_priority.get(priority, 0) + 1

        if todo.status == TodoStatus.COMPLETED:
            completed += 1
            completed_by_type[todo_type] = completed_by_type.get(todo_type, 0) + 1
            if todo.completed is not None:
                seconds = (todo.completed - todo.started).total_seconds()
                # Only positive durations count.
                if seconds > 0:
                    durations.append(seconds)
        elif todo.status == TodoStatus.IN_PROGRESS:
            in_progress += 1
        elif todo.status == TodoStatus.BLOCKED:
            blocked += 1

    rates = {
        key: round(completed_by_type.get(key, 0) / count * 100, 1)
        for key, count in by_type.items()
    }
    return TodoStats(
        total=total,
        completed=completed,
        in_progress=in_progress,
        blocked=blocked,
        by_type=by_type,
        by_priority=by_priority,
        completion_rates=rates,
        average_completion_seconds=sum(durations) / len(durations) if durations else 0.0,
    )
