"""Todo id derivation.

Ids are kebab-case slugs derived from the task text.  Derivation is
deterministic; uniqueness is the service's job (see
:meth:`todoctl.services.todo.TodoService.create_todo`).

INVARIANT: a derived id is at most 100 characters long, never starts or
ends with ``-`` and never contains ``--``.  For input made of letters,
digits and the characters in the replacement table it only contains
``[a-z0-9-]``.
"""

from __future__ import annotations

import re

MAX_ID_LENGTH = 100
FALLBACK_ID = "todo"

_HYPHENATE = " _/\\\n\r\t"
_REMOVE = ":()[]{}\"'`~!@#$%^&*+=|;,<>?"

# Single-pass replacement table: separators become "-", punctuation is dropped.
_ID_TRANSLATION: dict[int, str | None] = {
    **{ord(ch): "-" for ch in _HYPHENATE},
    **{ord(ch): None for ch in _REMOVE},
    0: None,
}

# Rejects anything that could escape the store directory.
_SAFE_ID = re.compile(r"^[^/\\\x00]+$")


def generate_base_id(task: str) -> str:
    """Derive the base id for *task*.

    Examples:
        >>> generate_base_id("Valid task description")
        'valid-task-description'
        >>> generate_base_id("Fix: the (login) bug!")
        'fix-the-login-bug'
        >>> generate_base_id("???")
        'todo'
    """
    slug = task.replace("\x00", "").lower().translate(_ID_TRANSLATION)
    while "--" in slug:
        slug = slug.replace("--", "-")
    # Truncation can expose a separator at the cut.
    slug = slug.strip("-")[:MAX_ID_LENGTH].rstrip("-")
    # "." and ".." name directories, not files.
    if slug in ("", ".", ".."):
        return FALLBACK_ID
    return slug


def disambiguate(base_id: str, occurrence: int) -> str:
    """Return the id for the *occurrence*-th use of *base_id* (1-based)."""
    if occurrence <= 1:
        return base_id
    return f"{base_id}-{occurrence}"


def is_valid_id(todo_id: str) -> bool:
    """Check that *todo_id* names a file directly inside the store."""
    if not todo_id or todo_id in (".", ".."):
        return False
    return _SAFE_ID.match(todo_id) is not None
