"""Repository contract between the service layer and storage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pathlib import Path

    from todoctl.domain.cancel import CancelToken
    from todoctl.domain.todo import Todo


@dataclass(frozen=True)
class ListFilters:
    """AND-combined list criteria.  Empty values disable a criterion."""

    status: str = ""
    priority: str = ""
    days: int = 0
    parent_id: str = ""


class TodoRepository(Protocol):
    """Persistence operations for todos."""

    def save(self, todo: Todo, *, ctx: CancelToken | None = None) -> None: ...

    def find_by_id(self, todo_id: str, *, ctx: CancelToken | None = None) -> Todo: ...

    def find_by_id_with_content(
        self, todo_id: str, *, ctx: CancelToken | None = None
    ) -> tuple[Todo, str]: ...

    def list(self, filters: ListFilters, *, ctx: CancelToken | None = None) -> list[Todo]: ...

    def delete(self, todo_id: str, *, ctx: CancelToken | None = None) -> None: ...

    def archive(
        self, todo_id: str, archive_path: str, *, ctx: CancelToken | None = None
    ) -> None: ...

    def update_content(
        self, todo_id: str, section: str, content: str, *, ctx: CancelToken | None = None
    ) -> None: ...

    def get_content(self, todo_id: str, *, ctx: CancelToken | None = None) -> str: ...

    def exists(self, todo_id: str) -> bool: ...

    def find_archived(
        self, todo_id: str, *, ctx: CancelToken | None = None
    ) -> tuple[Todo, Path]: ...
