"""Shared service-layer helper functions."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from todoctl.domain.errors import ValidationError
from todoctl.domain.validation import SectionOperation, is_valid_operation, valid_operations

if TYPE_CHECKING:
    from datetime import datetime

_CHECKBOX = re.compile(r"^- \[(?P<mark>[ xX>~-])\]\s*(?P<text>.*)$")

# pending -> in progress -> done -> pending
_NEXT_MARK: dict[str, str] = {
    " ": ">",
    ">": "x",
    "-": "x",
    "~": "x",
    "x": " ",
    "X": " ",
}


def archive_path_for(started: datetime) -> str:
    """Date partition ``YYYY/MM/DD`` for a todo started at *started*."""
    return f"{started.year:d}/{started.month:02d}/{started.day:02d}"


def normalize_task(task: str) -> str:
    """Key used to detect duplicate todos."""
    return task.strip().lower()


def toggle_checklist_item(content: str, item_text: str) -> str:
    """Advance the checkbox of the first item whose text is *item_text*.

    Indentation is preserved.  Content without a matching item is returned
    unchanged.
    """
    lines = content.split("\n")
    for i, line in enumerate(lines):
        stripped = line.strip()
        match = _CHECKBOX.match(stripped)
        if match is None or match.group("text").strip() != item_text.strip():
            continue
        indent = line[: len(line) - len(line.lstrip())]
        mark = _NEXT_MARK[match.group("mark")]
        lines[i] = f"{indent}- [{mark}] {match.group('text').strip()}"
        break
    return "\n".join(lines)


def apply_section_operation(existing: str, content: str, operation: str) -> str:
    """Combine *existing* section content with *content*.

    Raises:
        ValidationError: If *operation* is not a known section operation.
    """
    if not is_valid_operation(operation):
        msg = f"invalid operation {operation!r}; expected one of {', '.join(valid_operations())}"
        raise ValidationError(msg)
    op = SectionOperation(operation)
    if op is SectionOperation.REPLACE:
        return content
    if op is SectionOperation.TOGGLE:
        return toggle_checklist_item(existing, content)
    if not existing:
        return content
    if op is SectionOperation.APPEND:
        return f"{existing}\n{content}"
    return f"{content}\n{existing}"
