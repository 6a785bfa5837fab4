"""Locate the todoctl.toml in effect for an invocation."""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "todoctl.toml"
CONFIG_ENV_VAR = "TODOCTL_CONFIG"


def find_config(start: Path | None = None, *, explicit: str | Path | None = None) -> Path | None:
    """Return the config file to load, or None to run on defaults.

    Lookup order is *explicit* (the ``--config`` flag), then
    ``TODOCTL_CONFIG``, then the nearest todoctl.toml in *start* (default:
    cwd) or one of its parents.  An explicit or env path that is not a file
    disables lookup instead of falling through.
    """
    override = explicit or os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
