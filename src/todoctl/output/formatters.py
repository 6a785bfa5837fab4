"""Human and JSON rendering of ServiceResult.

JSON mode dumps the result model.  Human mode prints ``OK: <op>`` followed
by the payload; a payload with an ``items`` list of todos becomes a table
and a ``content`` payload is printed verbatim after the other fields.
"""

from __future__ import annotations

import json as _json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table

from todoctl.output.console import create_console, get_output, style_for

if TYPE_CHECKING:
    from todoctl.services.result import ServiceResult

_TABLE_COLUMNS = ("id", "status", "priority", "type", "task")


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False


def _format_data_human(data: dict[str, Any]) -> str:
    lines: list[str] = []
    for key, value in data.items():
        if isinstance(value, (dict, list)):
            lines.append(f"  {key}: {_json.dumps(value, separators=(',', ':'), default=str)}")
        else:
            lines.append(f"  {key}: {value}")
    return "\n".join(lines)


def _styled(kind: str, value: str) -> str:
    style = style_for(kind, value)
    return f"[{style}]{escape(value)}[/]" if style else escape(value)


def _format_items_table(items: list[dict[str, Any]]) -> str:
    console = create_console()
    table = Table(show_header=True, header_style="bold", box=None)
    for column in _TABLE_COLUMNS:
        table.add_column(column, style="todo.id" if column == "id" else None)
    for item in items:
        table.add_row(
            escape(str(item.get("id", ""))),
            _styled("status", str(item.get("status", ""))),
            _styled("priority", str(item.get("priority", ""))),
            escape(str(item.get("type", ""))),
            escape(str(item.get("task", ""))),
        )
    console.print(table)
    return get_output(console).rstrip("\n")


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if not result.ok:
        error_msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} - {error_msg}"
    if settings.quiet:
        return str(result.data.get("id", ""))

    data = dict(result.data)
    items = data.pop("items", None)
    content = data.pop("content", None)

    parts = [f"OK: {result.op}"]
    if data:
        parts.append(_format_data_human(data))
    if items:
        parts.append(_format_items_table(items))
    elif isinstance(items, list):
        parts.append("  (no todos)")
    if content is not None:
        parts.append(str(content).rstrip("\n"))
    return "\n".join(parts)
