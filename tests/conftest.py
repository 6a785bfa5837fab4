"""Shared pytest fixtures and test helpers for todoctl tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from todoctl.adapters.manager import TodoManager, create_todo_manager
from todoctl.infrastructure.repository import FileTodoRepository
from todoctl.services.todo import TodoService


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    """Temporary todo store directory.

    All store fixtures (repo, service, manager, _isolated_store) build on
    this one directory.
    """
    root = tmp_path / "todos"
    root.mkdir()
    return root


@pytest.fixture
def repo(store_root: Path) -> FileTodoRepository:
    return FileTodoRepository(store_root)


@pytest.fixture
def service(repo: FileTodoRepository) -> TodoService:
    return TodoService(repo)


@pytest.fixture
def manager(store_root: Path) -> TodoManager:
    return create_todo_manager(store_root)


@pytest.fixture
def _isolated_store(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from a temp directory with no config in scope.

    The default store (``.claude/todos``) then lands under ``tmp_path``.
    Use via ``@pytest.mark.usefixtures("_isolated_store")``.
    """
    for var in [v for v in os.environ if v.startswith("TODOCTL_")]:
        monkeypatch.delenv(var)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _restore_root_handlers() -> Generator[None]:
    """Undo the stderr handler each CLI invocation installs on the root logger."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    yield
    root.handlers = handlers
