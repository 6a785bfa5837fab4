"""Command: change a todo's status or edit one of its sections."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from todoctl.commands._base import TodoCommand
from todoctl.commands._payload import record_payload
from todoctl.domain.todo import TodoStatus
from todoctl.domain.validation import valid_operations

if TYPE_CHECKING:
    from todoctl.commands._context import AppContext


def _parse_orders(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, int]:
    orders: dict[str, int] = {}
    for value in values:
        key, sep, order = value.partition("=")
        if not sep or not key or not order.lstrip("-").isdigit():
            raise click.BadParameter(f"expected KEY=ORDER, got {value!r}")
        orders[key] = int(order)
    return orders


@click.command(
    cls=TodoCommand,
    examples="""\
  todoctl update fix-login-redirect --status completed
  todoctl update fix-login-redirect --section findings --content "Cookie path is wrong"
  todoctl update fix-login-redirect --section checklist --operation toggle --content "Add test"
  git diff | todoctl update fix-login-redirect --section notes --content -
  todoctl update fix-login-redirect --reorder findings=1 --reorder checklist=2""",
)
@click.argument("todo_id")
@click.option(
    "--status",
    type=click.Choice([s.value for s in TodoStatus]),
    default=None,
    help="New status. completed also stamps the completion time.",
)
@click.option("--section", default="", help="Section key to edit.")
@click.option(
    "--operation",
    type=click.Choice(valid_operations()),
    default="append",
    show_default=True,
    help="How --content is combined with the section.",
)
@click.option("--content", default="", help="Section content, or - to read stdin.")
@click.option("--title", default="", help="Create --section with this title first.")
@click.option(
    "--reorder",
    multiple=True,
    callback=_parse_orders,
    metavar="KEY=ORDER",
    help="Set a section's sort order. Repeatable.",
)
@click.pass_obj
def update(
    app: AppContext,
    todo_id: str,
    status: str | None,
    section: str,
    operation: str,
    content: str,
    title: str,
    reorder: dict[str, int],
) -> None:
    """Update a todo's status or its sections."""
    if status is None and not section and not reorder:
        click.echo("No changes specified. Use --status, --section or --reorder.", err=True)
        raise SystemExit(1)
    if content == "-":
        content = click.get_text_stream("stdin").read()

    def _update() -> dict[str, Any]:
        record = None
        if status is not None:
            record = app.manager.update_todo(todo_id, metadata={"status": status})
        if section:
            if title:
                app.manager.add_section(todo_id, section, title)
            record = app.manager.update_todo(
                todo_id, section=section, operation=operation, content=content
            )
        if reorder:
            record = app.manager.reorder_sections(todo_id, reorder)
        assert record is not None
        return record_payload(record)

    app.emit(app.run("update_todo", _update))
