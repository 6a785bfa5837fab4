"""Command: show one todo."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from todoctl.commands._base import TodoCommand
from todoctl.commands._payload import record_payload

if TYPE_CHECKING:
    from todoctl.commands._context import AppContext


@click.command(
    cls=TodoCommand,
    examples="""\
  todoctl read fix-login-redirect
  todoctl read fix-login-redirect --content
  todoctl read fix-login-redirect --archived""",
)
@click.argument("todo_id")
@click.option("--content", "raw", is_flag=True, help="Print the raw markdown file.")
@click.option("--archived", is_flag=True, help="Look in the archive instead.")
@click.pass_obj
def read(app: AppContext, todo_id: str, raw: bool, archived: bool) -> None:
    """Show a todo's fields, or its file text with --content."""

    def _read() -> dict[str, Any]:
        if archived:
            record, path = app.manager.read_archived_todo(todo_id)
            data = record_payload(record)
            data["path"] = str(path)
            return data
        if raw:
            return {"id": todo_id, "content": app.manager.read_todo_content(todo_id)}
        return record_payload(app.manager.read_todo(todo_id))

    app.emit(app.run("read_todo", _read))
