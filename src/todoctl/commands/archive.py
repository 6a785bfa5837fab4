"""Command: move completed todos into the archive."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from todoctl.commands._base import TodoCommand

if TYPE_CHECKING:
    from todoctl.commands._context import AppContext


@click.command(
    cls=TodoCommand,
    examples="""\
  todoctl archive fix-login-redirect
  todoctl archive add-export --with-children
  todoctl archive --older-than 30
  todoctl archive""",
)
@click.argument("todo_id", required=False)
@click.option(
    "--older-than",
    "days",
    type=click.IntRange(min=0),
    default=None,
    help="Archive every todo completed more than N days ago.",
)
@click.option("--with-children", is_flag=True, help="Also archive completed children.")
@click.pass_obj
def archive(app: AppContext, todo_id: str | None, days: int | None, with_children: bool) -> None:
    """Archive one completed todo, or all old completed todos.

    Without TODO_ID, archives todos completed more than --older-than days
    ago (default: [archive] default_days).
    """
    if todo_id and days is not None:
        click.echo("Pass either TODO_ID or --older-than, not both.", err=True)
        raise SystemExit(1)

    def _archive() -> dict[str, Any]:
        if todo_id:
            if with_children:
                return {"id": todo_id, "archived": app.manager.archive_with_children(todo_id)}
            return {"id": todo_id, "archive_path": app.manager.archive_todo(todo_id)}
        cutoff = app.settings.archive.default_days if days is None else days
        return {"days": cutoff, "count": app.manager.archive_old_todos(cutoff)}

    app.emit(app.run("archive_todo", _archive))
