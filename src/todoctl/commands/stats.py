"""Command: counts and completion rates for the store."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING, Any

import click

from todoctl.commands._base import TodoCommand
from todoctl.domain.validation import valid_periods

if TYPE_CHECKING:
    from todoctl.commands._context import AppContext


@click.command(
    cls=TodoCommand,
    examples="""\
  todoctl stats
  todoctl stats --period week
  todoctl --json stats --period quarter""",
)
@click.option(
    "--period",
    type=click.Choice(valid_periods()),
    default="all",
    show_default=True,
    help="Only count todos started within the last week, month or quarter.",
)
@click.pass_obj
def stats(app: AppContext, period: str) -> None:
    """Summarize active todos by status, type and priority."""

    def _stats() -> dict[str, Any]:
        return {"period": period, **asdict(app.manager.todo_stats(period))}

    app.emit(app.run("todo_stats", _stats))
