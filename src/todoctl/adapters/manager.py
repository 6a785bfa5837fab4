"""TodoManager: the facade outer surfaces talk to.

Wraps a :class:`~todoctl.services.todo.TodoService` and its repository,
speaks :class:`~todoctl.adapters.record.TodoRecord`, and reports missing
todos as ``"todo not found: <id>"``.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from todoctl.adapters.record import TodoRecord, to_domain, to_record
from todoctl.domain.errors import NotFoundError, TodoError, ValidationError, is_not_found
from todoctl.infrastructure.repository import FileTodoRepository
from todoctl.services.todo import TodoService

if TYPE_CHECKING:
    from todoctl.domain.repository import TodoRepository
    from todoctl.domain.todo import Todo
    from todoctl.services.stats import TodoStats


@contextmanager
def _not_found_as(todo_id: str) -> Iterator[None]:
    try:
        yield
    except TodoError as exc:
        if is_not_found(exc):
            raise NotFoundError(f"todo not found: {todo_id}", todo_id=todo_id) from exc
        raise


def _record(todo: Todo) -> TodoRecord:
    record = to_record(todo)
    assert record is not None
    return record


class TodoManager:
    """Record-level operations over one todo store."""

    def __init__(self, service: TodoService, repo: TodoRepository, base_path: Path) -> None:
        self._service = service
        self._repo = repo
        self._base_path = base_path

    @property
    def base_path(self) -> Path:
        return self._base_path

    @property
    def service(self) -> TodoService:
        return self._service

    def create_todo(
        self,
        task: str,
        priority: str = "",
        todo_type: str = "",
        *,
        parent_id: str = "",
        tags: list[str] | None = None,
        with_default_sections: bool = False,
    ) -> TodoRecord:
        todo = self._service.create_todo(
            task,
            priority,
            todo_type,
            parent_id=parent_id,
            tags=tags,
            with_default_sections=with_default_sections,
        )
        return _record(todo)

    def read_todo(self, todo_id: str) -> TodoRecord:
        with _not_found_as(todo_id):
            return _record(self._service.get_todo(todo_id))

    def read_todo_with_content(self, todo_id: str) -> tuple[TodoRecord, str]:
        with _not_found_as(todo_id):
            todo, content = self._service.get_todo_with_content(todo_id)
        return _record(todo), content

    def read_todo_content(self, todo_id: str) -> str:
        with _not_found_as(todo_id):
            return self._service.get_content(todo_id)

    def read_archived_todo(self, todo_id: str) -> tuple[TodoRecord, Path]:
        todo, path = self._service.get_archived_todo(todo_id)
        return _record(todo), path

    def update_todo(
        self,
        todo_id: str,
        *,
        section: str = "",
        operation: str = "append",
        content: str = "",
        metadata: dict[str, str] | None = None,
    ) -> TodoRecord:
        """Apply a status change (``metadata["status"]``) or a section edit."""
        with _not_found_as(todo_id):
            if metadata and metadata.get("status"):
                return _record(self._service.update_todo_status(todo_id, metadata["status"]))
            if section:
                todo = self._service.update_section(todo_id, section, content, operation)
                return _record(todo)
        raise ValidationError("nothing to update: pass a status or a section", todo_id=todo_id)

    def add_section(self, todo_id: str, key: str, title: str) -> TodoRecord:
        with _not_found_as(todo_id):
            return _record(self._service.add_section(todo_id, key, title))

    def reorder_sections(self, todo_id: str, orders: dict[str, int]) -> TodoRecord:
        with _not_found_as(todo_id):
            return _record(self._service.reorder_sections(todo_id, orders))

    def save_todo(self, record: TodoRecord) -> None:
        todo = to_domain(record)
        assert todo is not None
        self._repo.save(todo)

    def list_todos(
        self, status: str = "", priority: str = "", days: int = 0, *, parent_id: str = ""
    ) -> list[TodoRecord]:
        todos = self._service.list_todos(status, priority, days, parent_id=parent_id)
        return [_record(t) for t in todos]

    def list_children(self, parent_id: str) -> list[TodoRecord]:
        return [_record(t) for t in self._service.list_children(parent_id)]

    def archive_todo(self, todo_id: str) -> str:
        with _not_found_as(todo_id):
            return self._service.archive_todo(todo_id)

    def archive_with_children(self, todo_id: str) -> list[str]:
        with _not_found_as(todo_id):
            return self._service.archive_with_children(todo_id)

    def archive_old_todos(self, days: int) -> int:
        return self._service.archive_old_todos(days)

    def find_duplicate_todos(self) -> list[list[str]]:
        return self._service.find_duplicate_todos()

    def todo_stats(self, period: str = "all") -> TodoStats:
        return self._service.todo_stats(period)

    def delete_todo(self, todo_id: str) -> None:
        with _not_found_as(todo_id):
            self._service.delete_todo(todo_id)


def create_todo_manager(base_path: Path | str) -> TodoManager:
    """Wire repository -> service -> manager for *base_path*."""
    path = Path(base_path)
    repo = FileTodoRepository(path)
    service = TodoService(repo)
    return TodoManager(service, repo, path)
