"""Command: report todos with the same task."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from todoctl.commands._base import TodoCommand

if TYPE_CHECKING:
    from todoctl.commands._context import AppContext


@click.command(cls=TodoCommand, examples="  todoctl duplicates\n  todoctl --json duplicates")
@click.pass_obj
def duplicates(app: AppContext) -> None:
    """Group active todos whose tasks match ignoring case and spacing."""

    def _find() -> dict[str, Any]:
        groups = app.manager.find_duplicate_todos()
        return {"count": len(groups), "groups": groups}

    app.emit(app.run("find_duplicates", _find))
