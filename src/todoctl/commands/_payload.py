"""Record -> JSON-ready dict conversions shared by commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from todoctl.adapters.record import TodoRecord


def record_payload(record: TodoRecord) -> dict[str, Any]:
    """Full record, sections included, with ``schema`` spelled by alias."""
    return record.model_dump(mode="json", by_alias=True)


def summary_row(record: TodoRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "status": record.status,
        "priority": record.priority,
        "type": record.type,
        "task": record.task,
    }
