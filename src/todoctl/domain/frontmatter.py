"""Header (YAML frontmatter) schema for todo files.

Canonical key ordering:
  todo_id, started, completed, status, priority, type, parent_id, tags,
  sections

``completed``, ``parent_id``, ``tags`` and ``sections`` are omitted when
empty.  Section entries carry title, order and metadata only; section
content is stored in the markdown body.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from todoctl.domain.todo import DEFAULT_PRIORITY, DEFAULT_TYPE

CANONICAL_KEY_ORDER: list[str] = [
    "todo_id",
    "started",
    "completed",
    "status",
    "priority",
    "type",
    "parent_id",
    "tags",
    "sections",
]


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class SectionHeader(BaseModel):
    """Header entry for one body section."""

    model_config = {"frozen": True}

    title: str = ""
    order: int = 0
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("title", mode="before")
    @classmethod
    def _title_none(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("order", mode="before")
    @classmethod
    def _order_none(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("metadata", mode="before")
    @classmethod
    def _metadata_none(cls, value: Any) -> Any:
        return {} if value is None else value


class TodoFrontmatter(BaseModel):
    """Validated header of a todo file."""

    model_config = {"frozen": True, "extra": "ignore"}

    todo_id: str
    started: datetime
    completed: datetime | None = None
    status: str
    priority: str = DEFAULT_PRIORITY
    type: str = DEFAULT_TYPE
    parent_id: str = ""
    tags: list[str] = Field(default_factory=list)
    sections: dict[str, SectionHeader] = Field(default_factory=dict)

    @field_validator("started", mode="after")
    @classmethod
    def _started_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @field_validator("completed", mode="before")
    @classmethod
    def _completed_empty(cls, value: Any) -> Any:
        # Older writers emitted a zero instant instead of omitting the key.
        if value in (None, ""):
            return None
        if isinstance(value, datetime) and value.year == 1:
            return None
        if isinstance(value, str) and value.startswith("0001-01-01"):
            return None
        return value

    @field_validator("completed", mode="after")
    @classmethod
    def _completed_utc(cls, value: datetime | None) -> datetime | None:
        return None if value is None else _as_utc(value)

    @field_validator("todo_id", "status", "priority", "type", "parent_id", mode="before")
    @classmethod
    def _scalar_to_str(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_none(cls, value: Any) -> Any:
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            raise ValueError("tags must be a list")
        return [str(tag) for tag in value]

    @field_validator("sections", mode="before")
    @classmethod
    def _sections_none(cls, value: Any) -> Any:
        return {} if value is None else value


def format_timestamp(value: datetime) -> str:
    """RFC 3339 rendering used in headers."""
    return _as_utc(value).isoformat()


def build_header(
    *,
    todo_id: str,
    started: datetime,
    completed: datetime | None,
    status: str,
    priority: str,
    todo_type: str,
    parent_id: str,
    tags: list[str],
    sections: list[tuple[str, str, int, dict[str, Any]]],
) -> dict[str, Any]:
    """Assemble the header mapping in :data:`CANONICAL_KEY_ORDER`.

    *sections* is a list of ``(key, title, order, metadata)`` already in
    serialization order.
    """
    header: dict[str, Any] = {
        "todo_id": todo_id,
        "started": format_timestamp(started),
    }
    if completed is not None:
        header["completed"] = format_timestamp(completed)
    header["status"] = status
    header["priority"] = priority
    header["type"] = todo_type
    if parent_id:
        header["parent_id"] = parent_id
    if tags:
        header["tags"] = list(tags)
    if sections:
        rendered: dict[str, Any] = {}
        for key, title, order, metadata in sections:
            entry: dict[str, Any] = {"title": title, "order": order}
            if metadata:
                entry["metadata"] = dict(metadata)
            rendered[key] = entry
        header["sections"] = rendered
    return header
