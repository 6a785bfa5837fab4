"""Rich Console factory and theme for todoctl output.

Consoles render to a StringIO buffer so formatters keep a
``format_result() -> str`` contract.  Rich drops color codes when the
target is not a TTY (tests, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

TODO_THEME = Theme(
    {
        "todo.ok": "bold green",
        "todo.error": "bold red",
        "todo.warning": "bold yellow",
        "todo.op": "bold cyan",
        "todo.key": "dim",
        "todo.id": "bold blue",
        "todo.status.in_progress": "yellow",
        "todo.status.blocked": "red",
        "todo.status.completed": "green",
        "todo.priority.high": "bold red",
        "todo.priority.medium": "yellow",
        "todo.priority.low": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=TODO_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for(kind: str, value: str) -> str:
    """Theme style for a status or priority value, or ``""``."""
    name = f"todo.{kind}.{value}"
    return name if name in TODO_THEME.styles else ""
