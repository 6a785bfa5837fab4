"""Filesystem operations for the todo store.

INVARIANT: Files are truth.  Every todo lives at exactly one path, either
``<base>/<id>.md`` (active) or ``<base>/archive/YYYY/MM/DD/<id>.md``
(archived).

Pure parsing/rendering lives in :mod:`todoctl.domain.content`.  This module
handles actual file I/O, path resolution, and file discovery.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

DIR_MODE = 0o750
FILE_MODE = 0o600
ARCHIVE_DIR = "archive"
TODO_SUFFIX = ".md"


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------


def _guard(base_path: Path, path: Path) -> Path:
    if not path.resolve().is_relative_to(base_path.resolve()):
        msg = f"Path escapes store root: {path}"
        raise ValueError(msg)
    return path


def todo_path(base_path: Path, todo_id: str) -> Path:
    """Active path of *todo_id*: ``<base>/<id>.md``."""
    return _guard(base_path, base_path / f"{todo_id}{TODO_SUFFIX}")


def archive_file_path(base_path: Path, archive_path: str, todo_id: str) -> Path:
    """Archived path: ``<base>/archive/<archive_path>/<id>.md``."""
    return _guard(base_path, base_path / ARCHIVE_DIR / archive_path / f"{todo_id}{TODO_SUFFIX}")


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def ensure_dir(path: Path) -> None:
    path.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)


def write_text_atomic(path: Path, text: str) -> None:
    """Write *text* to *path* with mode 0600 via a sibling temp file.

    The rename is atomic on POSIX, so concurrent readers see either the old
    or the new file, never a partial one.  Parent directories are created
    with mode 0750.
    """
    ensure_dir(path.parent)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(text)
        os.chmod(tmp_name, FILE_MODE)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def move_file(src: Path, dst: Path) -> None:
    """Rename *src* to *dst*, creating *dst*'s parents with mode 0750."""
    ensure_dir(dst.parent)
    os.rename(src, dst)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def iter_active_files(base_path: Path) -> Iterator[Path]:
    """Yield every ``*.md`` file under *base_path* outside ``archive`` dirs.

    Order is filesystem-dependent.  A missing *base_path* yields nothing.
    """
    if not base_path.is_dir():
        return
    for dirpath, dirnames, filenames in os.walk(base_path):
        dirnames[:] = [d for d in dirnames if d != ARCHIVE_DIR]
        for name in filenames:
            if name.endswith(TODO_SUFFIX):
                yield Path(dirpath) / name


def find_archived_files(base_path: Path, todo_id: str) -> list[Path]:
    """All archived copies of *todo_id*, newest date partition first."""
    root = base_path / ARCHIVE_DIR
    if not root.is_dir():
        return []
    name = f"{todo_id}{TODO_SUFFIX}"
    return sorted((p for p in root.rglob(f"*{TODO_SUFFIX}") if p.name == name), reverse=True)
