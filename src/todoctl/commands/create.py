"""Command: create a todo."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from todoctl.commands._base import TodoCommand
from todoctl.commands._payload import record_payload
from todoctl.domain.errors import ValidationError
from todoctl.domain.validation import is_valid_todo_type, valid_priorities, valid_todo_types

if TYPE_CHECKING:
    from todoctl.commands._context import AppContext


@click.command(
    cls=TodoCommand,
    examples="""\
  todoctl create "Fix login redirect"
  todoctl create "Add export" --priority high --type feature
  todoctl create "Write parser tests" --parent add-export --tag parser
  todoctl create "Investigate cache misses" --sections""",
)
@click.argument("task")
@click.option(
    "--priority",
    type=click.Choice(valid_priorities()),
    default=None,
    help="Priority (defaults to [create] default_priority).",
)
@click.option("--type", "todo_type", default=None, help="Todo type, e.g. feature or bug.")
@click.option("--parent", "parent_id", default="", help="Parent todo id.")
@click.option("--tag", "tags", multiple=True, help="Tag (repeatable).")
@click.option(
    "--sections/--no-sections",
    "with_sections",
    default=None,
    help="Add the standard sections (findings, checklist, ...).",
)
@click.pass_obj
def create(
    app: AppContext,
    task: str,
    priority: str | None,
    todo_type: str | None,
    parent_id: str,
    tags: tuple[str, ...],
    with_sections: bool | None,
) -> None:
    """Create a todo and print its id."""
    cfg = app.settings.create
    resolved_type = cfg.default_type if todo_type is None else todo_type
    if with_sections is None:
        with_sections = cfg.default_sections

    def _create() -> dict[str, Any]:
        if cfg.strict_types and resolved_type and not is_valid_todo_type(resolved_type):
            allowed = ", ".join(valid_todo_types())
            raise ValidationError(f"invalid todo type: {resolved_type} (expected one of {allowed})")
        record = app.manager.create_todo(
            task,
            priority or cfg.default_priority,
            resolved_type,
            parent_id=parent_id,
            tags=list(tags),
            with_default_sections=with_sections,
        )
        return record_payload(record)

    app.emit(app.run("create_todo", _create))
