"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, todoctl.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    path: str = ".claude/todos"


class ArchiveConfig(BaseModel):
    """[archive] section."""

    model_config = {"frozen": True}

    default_days: int = 7


class CreateConfig(BaseModel):
    """[create] section."""

    model_config = {"frozen": True}

    default_priority: str = "medium"
    default_type: str = ""
    default_sections: bool = False
    strict_types: bool = False
