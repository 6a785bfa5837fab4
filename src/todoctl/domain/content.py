"""On-disk todo format: render and parse.

A todo file is a YAML header followed by a markdown body::

    ---
    <header>
    ---

    # <task>

    ## <section title>

    <section content>

Byte grammar of the body: ``"\\n# " task "\\n"`` followed, for every
section in ascending ``order`` (ties broken by key), by
``"\\n## " title "\\n\\n" content "\\n"``.

The parser requires the text to start with ``---\\n`` and closes the
header at the next ``\\n---\\n``.  The task is the first line starting with
``# ``.  Section content is recovered from the body by locating each
known ``## <title>`` heading in serialization order; text between two
known headings belongs verbatim to the first one.
"""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as SchemaError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from todoctl.domain.errors import ValidationError
from todoctl.domain.frontmatter import TodoFrontmatter, build_header
from todoctl.domain.todo import SectionDefinition, Todo

if TYPE_CHECKING:
    from collections.abc import Iterable

_OPEN = "---\n"
_CLOSE = "\n---\n"
_TASK_PREFIX = "# "


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser.

    ruamel.yaml's YAML object is stateful; a failed dump can leave a shared
    instance broken, so every call gets its own.
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    y.width = 4096
    return y


def _plain(value: Any) -> Any:
    """Convert ruamel's round-trip containers into plain dicts and lists."""
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def render_header(todo: Todo) -> str:
    """Render the YAML header of *todo* (without delimiters)."""
    header = build_header(
        todo_id=todo.id,
        started=todo.started,
        completed=todo.completed,
        status=todo.status,
        priority=todo.priority,
        todo_type=todo.type,
        parent_id=todo.parent_id,
        tags=todo.tags,
        sections=[
            (key, section.title, section.order, section.metadata)
            for key, section in todo.sorted_sections()
        ],
    )
    buf = StringIO()
    _new_yaml().dump(header, buf)
    return buf.getvalue()


def render_body(todo: Todo) -> str:
    parts = [f"{_TASK_PREFIX}{todo.task}\n"]
    for _key, section in todo.sorted_sections():
        parts.append(f"\n## {section.title}\n\n{section.content}\n")
    return "".join(parts)


def render_todo(todo: Todo) -> str:
    """Serialize *todo* to the full file text."""
    return "".join([_OPEN, render_header(todo), _OPEN, "\n", render_body(todo)])


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def split_frontmatter(text: str) -> tuple[str, str]:
    """Split file text into ``(header_text, body)``.

    Raises:
        ValidationError: If the text has no well-formed header block.
    """
    normalized = text.replace("\r\n", "\n")
    if not normalized.startswith(_OPEN):
        raise ValidationError("no frontmatter found")
    end = normalized.find(_CLOSE, len(_OPEN))
    if end == -1:
        raise ValidationError("invalid frontmatter")
    return normalized[len(_OPEN) : end], normalized[end + len(_CLOSE) :]


def extract_task(body: str) -> str:
    """Return the text of the first ``# `` heading, or ``""``."""
    for line in body.split("\n"):
        if line.startswith(_TASK_PREFIX):
            return line[len(_TASK_PREFIX) :]
    return ""


def extract_section_contents(body: str, sections: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Recover section content from *body*.

    *sections* is ``(key, title)`` in serialization order.  Sections whose
    heading cannot be found get no entry.
    """
    found: list[tuple[str, int, int]] = []
    cursor = 0
    for key, title in sections:
        marker = f"\n## {title}\n"
        idx = body.find(marker, cursor)
        if idx == -1:
            continue
        start = idx + len(marker)
        if body.startswith("\n", start):
            start += 1
        found.append((key, idx, start))
        cursor = start

    contents: dict[str, str] = {}
    for i, (key, _idx, start) in enumerate(found):
        end = found[i + 1][1] if i + 1 < len(found) else len(body)
        chunk = body[start:end]
        if chunk.endswith("\n"):
            chunk = chunk[:-1]
        contents[key] = chunk
    return contents


def parse_header(header_text: str) -> TodoFrontmatter:
    """Parse and validate the YAML header block.

    Raises:
        ValidationError: On YAML syntax errors or schema violations.
    """
    try:
        data = _new_yaml().load(header_text)
    except (YAMLError, ValueError, TypeError) as exc:
        # ruamel's timestamp constructor raises ValueError on dates like 2025-13-45.
        raise ValidationError(f"failed to parse frontmatter: {exc}") from exc
    if not isinstance(data, dict):
        raise ValidationError("frontmatter is not a mapping")
    try:
        return TodoFrontmatter.model_validate(_plain(data))
    except SchemaError as exc:
        raise ValidationError(f"invalid frontmatter: {exc.error_count()} error(s)") from exc
    except (ValueError, TypeError) as exc:
        raise ValidationError(f"invalid frontmatter: {exc}") from exc


def parse_todo(text: str) -> Todo:
    """Parse full file text into a :class:`Todo`.

    Raises:
        ValidationError: If the header is missing or malformed.
    """
    header_text, body = split_frontmatter(text)
    fm = parse_header(header_text)

    ordered = sorted(fm.sections.items(), key=lambda item: (item[1].order, item[0]))
    contents = extract_section_contents(body, [(key, s.title) for key, s in ordered])
    sections = {
        key: SectionDefinition(
            title=s.title,
            content=contents.get(key, ""),
            order=s.order,
            metadata=dict(s.metadata),
        )
        for key, s in ordered
    }

    return Todo(
        id=fm.todo_id,
        task=extract_task(body),
        started=fm.started,
        completed=fm.completed,
        status=fm.status,
        priority=fm.priority,
        type=fm.type,
        parent_id=fm.parent_id,
        tags=list(fm.tags),
        sections=sections,
    )
