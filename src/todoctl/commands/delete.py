"""Command: delete an active todo."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from todoctl.commands._base import TodoCommand

if TYPE_CHECKING:
    from todoctl.commands._context import AppContext


@click.command(cls=TodoCommand, examples="  todoctl delete fix-login-redirect --yes")
@click.argument("todo_id")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_obj
def delete(app: AppContext, todo_id: str, yes: bool) -> None:
    """Delete an active todo file.  Archived copies are kept."""
    if not yes and not app.settings.json_output:
        click.confirm(f"Delete {todo_id}?", abort=True)

    def _delete() -> dict[str, Any]:
        app.manager.delete_todo(todo_id)
        return {"id": todo_id}

    app.emit(app.run("delete_todo", _delete))
