"""Outer record shape and the translation to and from the domain model.

:class:`TodoRecord` is what transports serialize.  It differs from the
domain :class:`~todoctl.domain.todo.Todo` only in how section attributes
are spelled: the record lifts ``schema``, ``required`` and ``custom`` out
of the section metadata into typed fields.  Both translations are total,
and ``to_domain(to_record(t)) == t`` whenever the section metadata does not
spell out a default (``schema: freeform``, ``required: false``).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from todoctl.domain.sections import SCHEMA_KEY, SectionSchema
from todoctl.domain.todo import SectionDefinition, Todo

_REQUIRED_KEY = "required"
_CUSTOM_KEY = "custom"
_LIFTED_KEYS = frozenset({SCHEMA_KEY, _REQUIRED_KEY, _CUSTOM_KEY})


class SectionRecord(BaseModel):
    """One section as seen by outer surfaces."""

    model_config = {"populate_by_name": True}

    title: str
    order: int = 0
    section_schema: str = Field(default=SectionSchema.FREEFORM.value, alias="schema")
    required: bool = False
    custom: bool = False
    content: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)


class TodoRecord(BaseModel):
    """One todo as seen by outer surfaces."""

    id: str
    task: str
    started: datetime
    completed: datetime | None = None
    status: str
    priority: str
    type: str
    parent_id: str = ""
    tags: list[str] = Field(default_factory=list)
    sections: dict[str, SectionRecord] = Field(default_factory=dict)


def section_to_record(section: SectionDefinition) -> SectionRecord:
    meta = section.metadata
    return SectionRecord(
        title=section.title,
        order=section.order,
        section_schema=str(meta.get(SCHEMA_KEY) or SectionSchema.FREEFORM.value),
        required=bool(meta.get(_REQUIRED_KEY, False)),
        custom=bool(meta.get(_CUSTOM_KEY, False)),
        content=section.content,
        metadata={k: v for k, v in meta.items() if k not in _LIFTED_KEYS},
    )


def section_to_domain(record: SectionRecord) -> SectionDefinition:
    metadata = dict(record.metadata)
    if record.section_schema != SectionSchema.FREEFORM:
        metadata[SCHEMA_KEY] = record.section_schema
    if record.required:
        metadata[_REQUIRED_KEY] = True
    if record.custom:
        metadata[_CUSTOM_KEY] = True
    return SectionDefinition(
        title=record.title,
        content=record.content,
        order=record.order,
        metadata=metadata,
    )


def to_record(todo: Todo | None) -> TodoRecord | None:
    """Domain -> record.  ``None`` maps to ``None``."""
    if todo is None:
        return None
    return TodoRecord(
        id=todo.id,
        task=todo.task,
        started=todo.started,
        completed=todo.completed,
        status=todo.status,
        priority=todo.priority,
        type=todo.type,
        parent_id=todo.parent_id,
        tags=list(todo.tags),
        sections={k: section_to_record(s) for k, s in todo.sections.items()},
    )


def to_domain(record: TodoRecord | None) -> Todo | None:
    """Record -> domain.  ``None`` maps to ``None``."""
    if record is None:
        return None
    return Todo(
        id=record.id,
        task=record.task,
        started=record.started,
        completed=record.completed,
        status=record.status,
        priority=record.priority,
        type=record.type,
        parent_id=record.parent_id,
        tags=list(record.tags),
        sections={k: section_to_domain(s) for k, s in record.sections.items()},
    )
