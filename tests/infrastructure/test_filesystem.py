"""Tests for filesystem helpers: path resolution, atomic writes, discovery."""

from __future__ import annotations

import stat
from pathlib import Path

import pytest

from todoctl.infrastructure.filesystem import (
    ARCHIVE_DIR,
    DIR_MODE,
    FILE_MODE,
    archive_file_path,
    find_archived_files,
    iter_active_files,
    move_file,
    read_text,
    todo_path,
    write_text_atomic,
)


class TestPaths:
    def test_todo_path(self, tmp_path: Path) -> None:
        assert todo_path(tmp_path, "a") == tmp_path / "a.md"

    def test_archive_file_path(self, tmp_path: Path) -> None:
        path = archive_file_path(tmp_path, "2025/01/15", "a")
        assert path == tmp_path / ARCHIVE_DIR / "2025" / "01" / "15" / "a.md"

    def test_escape_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="escapes store root"):
            archive_file_path(tmp_path, "../../elsewhere", "a")


class TestWriteTextAtomic:
    def test_writes_content(self, tmp_path: Path) -> None:
        path = tmp_path / "a.md"
        write_text_atomic(path, "hello\n")
        assert read_text(path) == "hello\n"

    def test_file_mode(self, tmp_path: Path) -> None:
        path = tmp_path / "a.md"
        write_text_atomic(path, "x")
        assert stat.S_IMODE(path.stat().st_mode) == FILE_MODE

    def test_creates_parent_dirs(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "dir" / "a.md"
        write_text_atomic(path, "x")
        assert path.is_file()
        assert stat.S_IMODE(path.parent.stat().st_mode) & ~DIR_MODE == 0

    def test_overwrite_leaves_no_temp_files(self, tmp_path: Path) -> None:
        path = tmp_path / "a.md"
        write_text_atomic(path, "one")
        write_text_atomic(path, "two")
        assert read_text(path) == "two"
        assert [p.name for p in tmp_path.iterdir()] == ["a.md"]

    def test_preserves_newlines(self, tmp_path: Path) -> None:
        path = tmp_path / "a.md"
        write_text_atomic(path, "a\r\nb\n")
        assert path.read_bytes() == b"a\r\nb\n"


class TestMoveFile:
    def test_moves_and_creates_parents(self, tmp_path: Path) -> None:
        src = tmp_path / "a.md"
        src.write_text("x")
        dst = tmp_path / "archive" / "2025" / "a.md"
        move_file(src, dst)
        assert not src.exists()
        assert dst.read_text() == "x"


class TestDiscovery:
    def test_missing_base_yields_nothing(self, tmp_path: Path) -> None:
        assert list(iter_active_files(tmp_path / "missing")) == []

    def test_skips_archive_and_non_markdown(self, tmp_path: Path) -> None:
        (tmp_path / "a.md").write_text("x")
        (tmp_path / "notes.txt").write_text("x")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "b.md").write_text("x")
        archived = tmp_path / ARCHIVE_DIR / "2025" / "01" / "15"
        archived.mkdir(parents=True)
        (archived / "c.md").write_text("x")
        names = sorted(p.name for p in iter_active_files(tmp_path))
        assert names == ["a.md", "b.md"]

    def test_find_archived_newest_first(self, tmp_path: Path) -> None:
        for partition in ("2024/12/31", "2025/01/15"):
            d = tmp_path / ARCHIVE_DIR / partition
            d.mkdir(parents=True)
            (d / "a.md").write_text("x")
        (tmp_path / ARCHIVE_DIR / "2025" / "01" / "15" / "ab.md").write_text("x")
        found = find_archived_files(tmp_path, "a")
        assert [p.parent.name for p in found] == ["15", "31"]

    def test_find_archived_no_archive(self, tmp_path: Path) -> None:
        assert find_archived_files(tmp_path, "a") == []
