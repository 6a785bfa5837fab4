"""Tests for human and JSON result formatting."""

from __future__ import annotations

import json

from todoctl.domain.errors import NotFoundError
from todoctl.output.console import style_for
from todoctl.output.formatters import OutputSettings, format_result
from todoctl.services.result import ServiceResult


class TestFormatResult:
    def test_json(self) -> None:
        result = ServiceResult.success("create_todo", {"id": "a"})
        payload = json.loads(format_result(result, settings=OutputSettings(json_output=True)))
        assert payload["ok"] is True
        assert payload["data"]["id"] == "a"

    def test_human_success(self) -> None:
        output = format_result(ServiceResult.success("create_todo", {"id": "a", "tags": ["x"]}))
        assert output.splitlines()[0] == "OK: create_todo"
        assert "  id: a" in output
        assert '  tags: ["x"]' in output

    def test_error(self) -> None:
        result = ServiceResult.failure("read_todo", NotFoundError("todo not found: a"))
        assert format_result(result) == "ERROR: read_todo - todo not found: a"

    def test_quiet_prints_id(self) -> None:
        result = ServiceResult.success("create_todo", {"id": "a", "task": "T"})
        assert format_result(result, settings=OutputSettings(quiet=True)) == "a"

    def test_items_table(self) -> None:
        items = [
            {"id": "fix-bug", "status": "blocked", "priority": "high", "type": "bug", "task": "Fix"},
        ]
        output = format_result(ServiceResult.success("list_todos", {"count": 1, "items": items}))
        assert "  count: 1" in output
        assert "fix-bug" in output
        assert "blocked" in output

    def test_empty_items(self) -> None:
        output = format_result(ServiceResult.success("list_todos", {"count": 0, "items": []}))
        assert "(no todos)" in output

    def test_content_printed_verbatim(self) -> None:
        text = "---\ntodo_id: a\n---\n\n# A\n"
        output = format_result(ServiceResult.success("read_todo", {"id": "a", "content": text}))
        assert output.endswith("# A")
        assert "content:" not in output


class TestStyleFor:
    def test_known(self) -> None:
        assert style_for("status", "completed") == "todo.status.completed"

    def test_unknown(self) -> None:
        assert style_for("status", "weird") == ""
