"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, pokedex.toml only contains
overrides. A fresh install needs no config at all (SQLite in the CWD).
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, SecretStr

DEFAULT_BASE_URL = "https://api.airtable.com/v0"
DEFAULT_TABLE = "pokemons"

Backend = Literal["memory", "sqlite", "airtable"]


class StorageConfig(BaseModel):
    """[storage] section."""

    model_config = {"frozen": True}

    backend: Backend = "sqlite"


class SqliteConfig(BaseModel):
    """[sqlite] section."""

    model_config = {"frozen": True}

    path: str = "pokedex.db"  # relative paths resolve against the config root


class AirtableConfig(BaseModel):
    """[airtable] section.

    The API key is best supplied via ``POKEDEX_AIRTABLE__API_KEY`` rather
    than committed to a TOML file.
    """

    model_config = {"frozen": True}

    api_key: SecretStr | None = None
    workspace_id: str | None = None
    table: str = DEFAULT_TABLE
    base_url: str = DEFAULT_BASE_URL
    timeout: float | None = Field(default=None, gt=0)
