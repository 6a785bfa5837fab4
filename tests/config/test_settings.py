"""Tests for settings resolution: CLI flags, env vars, TOML, defaults."""

from __future__ import annotations

from pathlib import Path

import click
import pytest

from todoctl.config.discovery import CONFIG_FILENAME, find_config
from todoctl.config.settings import TodoSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("TODOCTL_CONFIG", "TODOCTL_STORE__PATH", "TODOCTL_ARCHIVE__DEFAULT_DAYS"):
        monkeypatch.delenv(var, raising=False)


class TestDefaults:
    def test_code_defaults(self, tmp_path: Path) -> None:
        settings = TodoSettings.from_cli(store_root=tmp_path)
        assert settings.store.path == ".claude/todos"
        assert settings.archive.default_days == 7
        assert settings.create.default_priority == "medium"
        assert not settings.create.strict_types
        assert settings.config_path is None
        assert settings.base_path == tmp_path / ".claude" / "todos"

    def test_absolute_store_path(self, tmp_path: Path) -> None:
        store = tmp_path / "elsewhere"
        settings = TodoSettings.from_cli(store_root=tmp_path, store={"path": str(store)})
        assert settings.base_path == store


class TestToml:
    def test_discovered_from_parent(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text('[store]\npath = "todos"\n')
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        settings = TodoSettings.from_cli()
        assert settings.config_path == tmp_path / CONFIG_FILENAME
        assert settings.store_root == tmp_path
        assert settings.base_path == tmp_path / "todos"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        config = tmp_path / "custom.toml"
        config.write_text("[archive]\ndefault_days = 30\n")
        settings = TodoSettings.from_cli(config_path=str(config))
        assert settings.archive.default_days == 30

    def test_invalid_toml(self, tmp_path: Path) -> None:
        config = tmp_path / CONFIG_FILENAME
        config.write_text("[store\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            TodoSettings.from_cli(config_path=str(config))


class TestPriority:
    def test_env_over_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[archive]\ndefault_days = 30\n")
        monkeypatch.setenv("TODOCTL_ARCHIVE__DEFAULT_DAYS", "3")
        settings = TodoSettings.from_cli(store_root=tmp_path)
        assert settings.archive.default_days == 3

    def test_cli_over_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TODOCTL_STORE__PATH", "from-env")
        settings = TodoSettings.from_cli(store_root=tmp_path, store={"path": "from-cli"})
        assert settings.store.path == "from-cli"

    def test_cli_flags(self, tmp_path: Path) -> None:
        settings = TodoSettings.from_cli(store_root=tmp_path, json_output=True, quiet=True)
        assert settings.json_output
        assert settings.quiet


class TestDiscovery:
    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config = tmp_path / "env.toml"
        config.write_text("")
        monkeypatch.setenv("TODOCTL_CONFIG", str(config))
        assert find_config(tmp_path / "anywhere") == config

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TODOCTL_CONFIG", str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None

    def test_explicit_wins_over_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        explicit = tmp_path / "explicit.toml"
        explicit.write_text("")
        env = tmp_path / "env.toml"
        env.write_text("")
        monkeypatch.setenv("TODOCTL_CONFIG", str(env))
        assert find_config(tmp_path, explicit=str(explicit)) == explicit

    def test_explicit_missing_does_not_walk_up(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        assert find_config(tmp_path, explicit=tmp_path / "missing.toml") is None

    def test_walks_up_to_nearest(self, tmp_path: Path) -> None:
        outer = tmp_path / CONFIG_FILENAME
        outer.write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config(nested) == outer
        inner = tmp_path / "a" / CONFIG_FILENAME
        inner.write_text("")
        assert find_config(nested) == inner
