"""TodoService: id synthesis and lifecycle transitions over a repository.

Pipeline for create: VALIDATE -> ASSIGN ID -> PERSIST

The only state is the per-instance ``base_id -> count`` table used to make
ids unique.  It is guarded by a mutex that is released before the
repository write, so concurrent creates serialize only for id assignment.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from todoctl.domain.errors import (
    NotFoundError,
    TodoError,
    ValidationError,
    wrap,
)
from todoctl.domain.ids import disambiguate, generate_base_id
from todoctl.domain.repository import ListFilters
from todoctl.domain.sections import default_sections
from todoctl.domain.todo import SectionDefinition, Todo, TodoStatus, new_todo, utc_now
from todoctl.domain.validation import SectionOperation, StatsPeriod
from todoctl.services._helpers import apply_section_operation, archive_path_for, normalize_task
from todoctl.services.stats import TodoStats, compute_stats, period_cutoff

if TYPE_CHECKING:
    from pathlib import Path

    from todoctl.domain.cancel import CancelToken
    from todoctl.domain.repository import TodoRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BulkResult:
    """Per-id outcome of a bulk operation."""

    id: str
    success: bool
    error: TodoError | None = None


class TodoService:
    """Coordinates todo creation, status changes and archival.

    Args:
        repo: Storage backend.
        probe_existing: When True (default), id assignment skips suffixes
            whose active file already exists, so a fresh process does not
            overwrite todos created by an earlier one.
    """

    def __init__(self, repo: TodoRepository, *, probe_existing: bool = True) -> None:
        self._repo = repo
        self._probe_existing = probe_existing
        self._mu = threading.Lock()
        self._id_counts: dict[str, int] = {}

    @property
    def repository(self) -> TodoRepository:
        return self._repo

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create_todo(
        self,
        task: str,
        priority: str = "",
        todo_type: str = "",
        *,
        parent_id: str = "",
        tags: list[str] | None = None,
        with_default_sections: bool = False,
        ctx: CancelToken | None = None,
    ) -> Todo:
        """Create and persist a new in-progress todo with a unique id.

        A failed save does not release the id: a retry gets the next suffix.
        """
        try:
            todo = new_todo(task, priority, todo_type)
        except ValidationError as exc:
            raise wrap(exc, "failed to create todo") from exc

        todo.parent_id = parent_id
        todo.tags = list(tags or [])
        if with_default_sections:
            todo.sections = default_sections()

        with self._mu:
            todo.id = self._generate_unique_id(task)

        try:
            self._repo.save(todo, ctx=ctx)
        except TodoError as exc:
            raise wrap(exc, "failed to save todo") from exc
        logger.debug("Created todo %s", todo.id)
        return todo

    def _generate_unique_id(self, task: str) -> str:
        # Caller holds self._mu.
        base_id = generate_base_id(task)
        count = self._id_counts.get(base_id, 0) + 1
        candidate = disambiguate(base_id, count)
        if self._probe_existing:
            while self._repo.exists(candidate):
                count += 1
                candidate = disambiguate(base_id, count)
        self._id_counts[base_id] = count
        return candidate

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_todo(self, todo_id: str, *, ctx: CancelToken | None = None) -> Todo:
        return self._repo.find_by_id(todo_id, ctx=ctx)

    def get_todo_with_content(
        self, todo_id: str, *, ctx: CancelToken | None = None
    ) -> tuple[Todo, str]:
        return self._repo.find_by_id_with_content(todo_id, ctx=ctx)

    def get_content(self, todo_id: str, *, ctx: CancelToken | None = None) -> str:
        return self._repo.get_content(todo_id, ctx=ctx)

    def get_archived_todo(
        self, todo_id: str, *, ctx: CancelToken | None = None
    ) -> tuple[Todo, Path]:
        return self._repo.find_archived(todo_id, ctx=ctx)

    def list_todos(
        self,
        status: str = "",
        priority: str = "",
        days: int = 0,
        *,
        parent_id: str = "",
        ctx: CancelToken | None = None,
    ) -> list[Todo]:
        filters = ListFilters(status=status, priority=priority, days=days, parent_id=parent_id)
        return self._repo.list(filters, ctx=ctx)

    def list_children(self, parent_id: str, *, ctx: CancelToken | None = None) -> list[Todo]:
        """Todos whose ``parent_id`` is *parent_id*."""
        if not parent_id:
            raise ValidationError("parent id cannot be empty")
        return self.list_todos(parent_id=parent_id, ctx=ctx)

    def find_duplicate_todos(self, *, ctx: CancelToken | None = None) -> list[list[str]]:
        """Groups of active todo ids whose tasks match after normalization."""
        groups: dict[str, list[str]] = {}
        for todo in self._repo.list(ListFilters(), ctx=ctx):
            groups.setdefault(normalize_task(todo.task), []).append(todo.id)
        return sorted(sorted(ids) for ids in groups.values() if len(ids) > 1)

    def todo_stats(
        self, period: str = StatsPeriod.ALL.value, *, ctx: CancelToken | None = None
    ) -> TodoStats:
        """Statistics over active todos started within *period*.

        ``week``, ``month`` and ``quarter`` cover the last 7, 30 and 90 days.
        Any other value covers every active todo.
        """
        cutoff = period_cutoff(period)
        todos = self._repo.list(ListFilters(), ctx=ctx)
        if cutoff is not None:
            todos = [t for t in todos if t.started >= cutoff]
        return compute_stats(todos)

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update_todo_status(
        self, todo_id: str, status: str, *, ctx: CancelToken | None = None
    ) -> Todo:
        """Set *status*; moving to ``completed`` also stamps ``completed``."""
        todo = self._repo.find_by_id(todo_id, ctx=ctx)
        todo.status = status
        if status == TodoStatus.COMPLETED:
            todo.complete()
        self._repo.save(todo, ctx=ctx)
        logger.debug("Todo %s status -> %s", todo_id, status)
        return todo

    def update_section(
        self,
        todo_id: str,
        section: str,
        content: str,
        operation: str = SectionOperation.APPEND.value,
        *,
        ctx: CancelToken | None = None,
    ) -> Todo:
        """Read-modify-write one section, leaving every other field intact.

        Unknown sections are created at the end for append, prepend and
        replace; toggling a checklist item in an unknown section fails.
        """
        todo = self._repo.find_by_id(todo_id, ctx=ctx)
        existing = todo.sections.get(section)
        if existing is None:
            if operation == SectionOperation.TOGGLE:
                raise NotFoundError(f"section not found: {section}", todo_id=todo_id)
            existing = SectionDefinition(
                title=section.replace("_", " ").title(),
                order=_next_order(todo),
            )
            todo.sections[section] = existing
        existing.content = apply_section_operation(existing.content, content, operation)
        self._repo.save(todo, ctx=ctx)
        return todo

    def add_section(
        self,
        todo_id: str,
        key: str,
        title: str,
        *,
        order: int | None = None,
        metadata: dict[str, Any] | None = None,
        ctx: CancelToken | None = None,
    ) -> Todo:
        """Add an empty section; *order* defaults to after the last one."""
        if not key or not title:
            raise ValidationError("section key and title cannot be empty", todo_id=todo_id)
        todo = self._repo.find_by_id(todo_id, ctx=ctx)
        if key in todo.sections:
            raise ValidationError(f"section already exists: {key}", todo_id=todo_id)
        todo.sections[key] = SectionDefinition(
            title=title,
            order=_next_order(todo) if order is None else order,
            metadata=dict(metadata or {}),
        )
        self._repo.save(todo, ctx=ctx)
        return todo

    def reorder_sections(
        self,
        todo_id: str,
        orders: dict[str, int],
        *,
        ctx: CancelToken | None = None,
    ) -> Todo:
        """Set the ``order`` of each named section.

        Every key must name an existing section; nothing is saved otherwise.
        """
        if not orders:
            raise ValidationError("no section orders given", todo_id=todo_id)
        todo = self._repo.find_by_id(todo_id, ctx=ctx)
        if not todo.sections:
            raise ValidationError("todo has no sections defined", todo_id=todo_id)
        missing = sorted(key for key in orders if key not in todo.sections)
        if missing:
            raise ValidationError(f"unknown section: {', '.join(missing)}", todo_id=todo_id)
        for key, order in orders.items():
            todo.sections[key].order = order
        self._repo.save(todo, ctx=ctx)
        return todo

    def delete_todo(self, todo_id: str, *, ctx: CancelToken | None = None) -> None:
        self._repo.delete(todo_id, ctx=ctx)

    # ------------------------------------------------------------------
    # Archive
    # ------------------------------------------------------------------

    def archive_todo(self, todo_id: str, *, ctx: CancelToken | None = None) -> str:
        """Move a completed todo under ``archive/YYYY/MM/DD`` of its start date.

        Returns the archive partition used.
        """
        todo = self._repo.find_by_id(todo_id, ctx=ctx)
        if not todo.is_completed():
            raise ValidationError(
                "cannot archive incomplete todo", todo_id=todo_id, operation="archive"
            )
        archive_path = archive_path_for(todo.started)
        self._repo.archive(todo_id, archive_path, ctx=ctx)
        return archive_path

    def archive_with_children(self, todo_id: str, *, ctx: CancelToken | None = None) -> list[str]:
        """Archive completed children of *todo_id*, then *todo_id* itself.

        Returns the archived ids, children first.
        """
        archived: list[str] = []
        for child in self.list_children(todo_id, ctx=ctx):
            if child.is_completed():
                try:
                    self.archive_todo(child.id, ctx=ctx)
                except TodoError as exc:
                    raise wrap(exc, f"failed to archive child {child.id}") from exc
                archived.append(child.id)
        self.archive_todo(todo_id, ctx=ctx)
        archived.append(todo_id)
        return archived

    def bulk_archive(
        self, todo_ids: list[str], *, ctx: CancelToken | None = None
    ) -> list[BulkResult]:
        """Archive each id independently; one failure does not stop the rest."""
        results: list[BulkResult] = []
        for todo_id in todo_ids:
            try:
                self.archive_todo(todo_id, ctx=ctx)
            except TodoError as exc:
                results.append(BulkResult(id=todo_id, success=False, error=exc))
            else:
                results.append(BulkResult(id=todo_id, success=True))
        return results

    def archive_old_todos(self, days: int, *, ctx: CancelToken | None = None) -> int:
        """Archive completed todos whose completion is more than *days* old.

        Returns the number archived.  Individual failures are logged and
        skipped.
        """
        cutoff = utc_now() - timedelta(days=days)
        count = 0
        for todo in self.list_todos(status=TodoStatus.COMPLETED.value, ctx=ctx):
            if todo.completed is None or todo.completed >= cutoff:
                continue
            try:
                self.archive_todo(todo.id, ctx=ctx)
            except TodoError as exc:
                logger.warning("Failed to archive old todo %s: %s", todo.id, exc)
                continue
            count += 1
        return count


def _next_order(todo: Todo) -> int:
    return max((s.order for s in todo.sections.values()), default=0) + 1
