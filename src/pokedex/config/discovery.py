"""Locate ``pokedex.toml``.

``POKEDEX_CONFIG`` names the file outright. Otherwise the nearest
``pokedex.toml`` in the start directory or one of its ancestors wins.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "pokedex.toml"
CONFIG_ENV_VAR = "POKEDEX_CONFIG"


def _from_env() -> Path | None:
    value = os.environ.get(CONFIG_ENV_VAR)
    return Path(value) if value else None


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: cwd), if any.

    A ``POKEDEX_CONFIG`` pointing at a missing file yields ``None``; the
    directory search is not attempted in that case.
    """
    explicit = _from_env()
    if explicit is not None:
        return explicit if explicit.is_file() else None

    origin = (start or Path.cwd()).resolve()
    candidates = (directory / CONFIG_FILENAME for directory in (origin, *origin.parents))
    return next((path for path in candidates if path.is_file()), None)
