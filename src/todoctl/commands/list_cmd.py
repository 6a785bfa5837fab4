"""Command: list active todos."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from todoctl.commands._base import TodoCommand
from todoctl.commands._payload import summary_row
from todoctl.domain.todo import TodoStatus
from todoctl.domain.validation import valid_priorities

if TYPE_CHECKING:
    from todoctl.commands._context import AppContext


@click.command(
    "list",
    cls=TodoCommand,
    examples="""\
  todoctl list
  todoctl list --status in_progress --priority high
  todoctl list --days 7
  todoctl list --parent add-export""",
)
@click.option(
    "--status",
    type=click.Choice([s.value for s in TodoStatus]),
    default="",
    help="Only todos with this status.",
)
@click.option(
    "--priority", type=click.Choice(valid_priorities()), default="", help="Only this priority."
)
@click.option(
    "--days",
    type=click.IntRange(min=0),
    default=0,
    help="Only todos started within the last N days.",
)
@click.option("--parent", "parent_id", default="", help="Only children of this todo.")
@click.pass_obj
def list_cmd(app: AppContext, status: str, priority: str, days: int, parent_id: str) -> None:
    """List active (non-archived) todos."""

    def _list() -> dict[str, Any]:
        records = app.manager.list_todos(status, priority, days, parent_id=parent_id)
        records.sort(key=lambda r: (r.started, r.id))
        return {"count": len(records), "items": [summary_row(r) for r in records]}

    app.emit(app.run("list_todos", _list))
