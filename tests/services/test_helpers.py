"""Tests for service-layer helpers."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from todoctl.domain.errors import ValidationError
from todoctl.services._helpers import (
    apply_section_operation,
    archive_path_for,
    normalize_task,
    toggle_checklist_item,
)


class TestArchivePathFor:
    def test_zero_padded(self) -> None:
        assert archive_path_for(datetime(2025, 1, 5, tzinfo=UTC)) == "2025/01/05"


class TestNormalizeTask:
    def test_case_and_edges(self) -> None:
        assert normalize_task("  Fix The Bug ") == "fix the bug"


class TestToggleChecklistItem:
    @pytest.mark.parametrize(
        ("before", "after"),
        [(" ", ">"), (">", "x"), ("-", "x"), ("~", "x"), ("x", " "), ("X", " ")],
    )
    def test_cycle(self, before: str, after: str) -> None:
        assert toggle_checklist_item(f"- [{before}] item", "item") == f"- [{after}] item"

    def test_first_match_only(self) -> None:
        content = "- [ ] item\n- [ ] item"
        assert toggle_checklist_item(content, "item") == "- [>] item\n- [ ] item"

    def test_keeps_indent(self) -> None:
        assert toggle_checklist_item("  - [ ] nested", "nested") == "  - [>] nested"

    def test_no_match_unchanged(self) -> None:
        assert toggle_checklist_item("- [ ] other\nplain", "item") == "- [ ] other\nplain"


class TestApplySectionOperation:
    def test_append(self) -> None:
        assert apply_section_operation("a", "b", "append") == "a\nb"

    def test_prepend(self) -> None:
        assert apply_section_operation("a", "b", "prepend") == "b\na"

    def test_replace(self) -> None:
        assert apply_section_operation("a", "b", "replace") == "b"

    def test_empty_existing(self) -> None:
        assert apply_section_operation("", "b", "append") == "b"
        assert apply_section_operation("", "b", "prepend") == "b"

    def test_invalid(self) -> None:
        with pytest.raises(ValidationError, match="invalid operation"):
            apply_section_operation("a", "b", "merge")
