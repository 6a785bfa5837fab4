"""FileTodoRepository: one markdown file per todo under a base directory.

Concurrency: one :class:`ReadWriteLock` per repository instance.
``save``, ``delete`` and ``archive`` take the write side; every read takes
the read side.  Instances pointed at the same directory share no lock.

Writes go to a sibling temp file that is renamed into place, so a reader
never observes a half-written todo.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from pathlib import Path
from typing import TYPE_CHECKING

from todoctl.domain.cancel import CancelToken, check
from todoctl.domain.content import parse_todo, render_todo
from todoctl.domain.errors import (
    NotFoundError,
    OperationError,
    TodoError,
    ValidationError,
    wrap,
)
from todoctl.domain.ids import is_valid_id
from todoctl.domain.repository import ListFilters
from todoctl.domain.todo import utc_now
from todoctl.infrastructure.filesystem import (
    archive_file_path,
    find_archived_files,
    iter_active_files,
    move_file,
    read_text,
    todo_path,
    write_text_atomic,
)
from todoctl.infrastructure.locking import ReadWriteLock

if TYPE_CHECKING:
    from todoctl.domain.todo import Todo

logger = logging.getLogger(__name__)


def _operation_error(exc: OSError, message: str, todo_id: str, operation: str) -> OperationError:
    err = OperationError(f"{message}: {exc}", todo_id=todo_id, operation=operation)
    err.__cause__ = exc
    return err


def _decode_error(exc: UnicodeDecodeError, todo_id: str, operation: str) -> ValidationError:
    err = ValidationError(f"file is not valid UTF-8: {exc}", todo_id=todo_id, operation=operation)
    err.__cause__ = exc
    return err


def matches(todo: Todo, filters: ListFilters) -> bool:
    """Return True if *todo* passes every enabled criterion in *filters*."""
    if filters.status and todo.status != filters.status:
        return False
    if filters.priority and todo.priority != filters.priority:
        return False
    if filters.days > 0 and todo.started < utc_now() - timedelta(days=filters.days):
        return False
    return not (filters.parent_id and todo.parent_id != filters.parent_id)


class FileTodoRepository:
    """Filesystem implementation of :class:`~todoctl.domain.repository.TodoRepository`."""

    def __init__(self, base_path: Path | str) -> None:
        self._base = Path(base_path)
        self._lock = ReadWriteLock()

    @property
    def base_path(self) -> Path:
        return self._base

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save(self, todo: Todo, *, ctx: CancelToken | None = None) -> None:
        """Validate, render and overwrite the active file of *todo*."""
        check(ctx, "save")
        try:
            todo.validate()
        except ValidationError as exc:
            raise wrap(exc, "validation failed") from exc
        path = self._active_path(todo.id)
        content = render_todo(todo)

        with self._lock.write():
            try:
                write_text_atomic(path, content)
            except OSError as exc:
                raise _operation_error(exc, "failed to write file", todo.id, "save") from exc
        logger.debug("Saved todo %s", todo.id)

    def delete(self, todo_id: str, *, ctx: CancelToken | None = None) -> None:
        """Unlink the active file.  Archived copies are left alone."""
        check(ctx, "delete")
        path = self._active_path(todo_id)
        with self._lock.write():
            try:
                path.unlink()
            except FileNotFoundError as exc:
                raise self._not_found(todo_id) from exc
            except OSError as exc:
                raise _operation_error(exc, "failed to delete file", todo_id, "delete") from exc
        logger.debug("Deleted todo %s", todo_id)

    def archive(self, todo_id: str, archive_path: str, *, ctx: CancelToken | None = None) -> None:
        """Move the active file to ``archive/<archive_path>/<id>.md``."""
        check(ctx, "archive")
        src = self._active_path(todo_id)
        try:
            dst = archive_file_path(self._base, archive_path, todo_id)
        except ValueError as exc:
            raise ValidationError(str(exc), todo_id=todo_id, operation="archive") from exc

        with self._lock.write():
            if not src.is_file():
                raise self._not_found(todo_id)
            try:
                move_file(src, dst)
            except OSError as exc:
                raise _operation_error(
                    exc, "failed to move file to archive", todo_id, "archive"
                ) from exc
        logger.debug("Archived todo %s to %s", todo_id, dst)

    def update_content(
        self,
        todo_id: str,
        section: str,
        content: str,
        *,
        ctx: CancelToken | None = None,
    ) -> None:
        """In-place section editing is not offered at the storage level.

        Use :meth:`todoctl.services.todo.TodoService.update_section`, which
        does a read-modify-write through the domain model.
        """
        raise OperationError("not implemented", todo_id=todo_id, operation="update_content")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def find_by_id(self, todo_id: str, *, ctx: CancelToken | None = None) -> Todo:
        todo, _content = self.find_by_id_with_content(todo_id, ctx=ctx)
        return todo

    def find_by_id_with_content(
        self, todo_id: str, *, ctx: CancelToken | None = None
    ) -> tuple[Todo, str]:
        """Return the parsed todo and the raw file text, unchanged."""
        check(ctx, "find_by_id")
        with self._lock.read():
            content = self._read(todo_id)
        try:
            todo = parse_todo(content)
        except TodoError as exc:
            exc.todo_id = todo_id
            raise
        return todo, content

    def get_content(self, todo_id: str, *, ctx: CancelToken | None = None) -> str:
        check(ctx, "get_content")
        with self._lock.read():
            return self._read(todo_id)

    def exists(self, todo_id: str) -> bool:
        """Whether an active file exists for *todo_id*."""
        if not is_valid_id(todo_id):
            return False
        with self._lock.read():
            return todo_path(self._base, todo_id).is_file()

    def list(self, filters: ListFilters | None = None, *, ctx: CancelToken | None = None) -> list[Todo]:
        """Parse every active todo and keep those matching *filters*.

        Files under any ``archive`` directory are ignored.  Files that fail
        to read or parse are skipped with a warning.  A missing store yields ``[]``.
        """
        filters = filters or ListFilters()
        check(ctx, "list")
        todos: list[Todo] = []
        with self._lock.read():
            for path in iter_active_files(self._base):
                check(ctx, "list")
                try:
                    content = read_text(path)
                except FileNotFoundError:
                    continue
                except (OSError, UnicodeDecodeError) as exc:
                    logger.warning("Skipping unreadable todo file %s: %s", path, exc)
                    continue
                try:
                    todo = parse_todo(content)
                except TodoError as exc:
                    logger.warning("Skipping unparsable todo file %s: %s", path, exc)
                    continue
                if matches(todo, filters):
                    todos.append(todo)
        return todos

    def find_archived(self, todo_id: str, *, ctx: CancelToken | None = None) -> tuple[Todo, Path]:
        """Load the most recently partitioned archived copy of *todo_id*."""
        check(ctx, "find_archived")
        if not is_valid_id(todo_id):
            raise ValidationError(f"invalid todo id: {todo_id!r}", todo_id=todo_id)
        with self._lock.read():
            candidates = find_archived_files(self._base, todo_id)
            if not candidates:
                raise NotFoundError(f"archived todo not found: {todo_id}", todo_id=todo_id)
            path = candidates[0]
            try:
                content = read_text(path)
            except UnicodeDecodeError as exc:
                raise _decode_error(exc, todo_id, "find_archived") from exc
            except OSError as exc:
                raise _operation_error(
                    exc, "failed to read file", todo_id, "find_archived"
                ) from exc
        return parse_todo(content), path

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _active_path(self, todo_id: str) -> Path:
        if not is_valid_id(todo_id):
            raise ValidationError(f"invalid todo id: {todo_id!r}", todo_id=todo_id)
        try:
            return todo_path(self._base, todo_id)
        except ValueError as exc:
            raise ValidationError(str(exc), todo_id=todo_id) from exc

    def _read(self, todo_id: str) -> str:
        path = self._active_path(todo_id)
        try:
            return read_text(path)
        except FileNotFoundError as exc:
            raise self._not_found(todo_id) from exc
        except UnicodeDecodeError as exc:
            raise _decode_error(exc, todo_id, "read") from exc
        except OSError as exc:
            raise _operation_error(exc, "failed to read file", todo_id, "read") from exc

    @staticmethod
    def _not_found(todo_id: str) -> NotFoundError:
        return NotFoundError(f"todo not found: {todo_id}", todo_id=todo_id)
