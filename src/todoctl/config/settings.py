"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  (CLI flags passed by Click)
  2. Env vars     (``TODOCTL_*`` prefix, ``__`` for nested sections)
  3. TOML file    (``todoctl.toml`` discovered via walk-up)
  4. Code defaults baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from todoctl.config.discovery import find_config
from todoctl.config.models import ArchiveConfig, CreateConfig, StoreConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``todoctl.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# The TOML path has to reach settings_customise_sources, which pydantic
# calls as a classmethod during __init__.
_tls = threading.local()


class TodoSettings(BaseSettings):
    """Settings for the todoctl CLI.

    Attributes:
        store_root: Directory the store path is resolved against (parent of
            ``todoctl.toml``, or CWD if no config was found).
        config_path: The TOML file in effect, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "TODOCTL_",
        "env_nested_delimiter": "__",
    }

    store_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    store: StoreConfig = Field(default_factory=StoreConfig)
    archive: ArchiveConfig = Field(default_factory=ArchiveConfig)
    create: CreateConfig = Field(default_factory=CreateConfig)

    @property
    def base_path(self) -> Path:
        """Absolute store directory (``store.path`` under ``store_root``)."""
        path = Path(self.store.path).expanduser()
        if not path.is_absolute():
            path = self.store_root / path
        return path

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        store_root: Path | None = None,
        **cli_flags: Any,
    ) -> TodoSettings:
        """Construct settings from a CLI invocation.

        Discovers ``todoctl.toml`` (or uses *config_path*), resolves
        *store_root* from the config file's directory, and applies CLI flags
        as highest-priority overrides.
        """
        toml_path = find_config(store_root, explicit=config_path)

        resolved_root = store_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(store_root=resolved_root, config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None
