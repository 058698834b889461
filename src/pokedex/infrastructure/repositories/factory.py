"""Select and construct the configured storage backend."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pokedex.infrastructure.repositories.airtable import AirtableRepository
from pokedex.infrastructure.repositories.base import RepositoryUnavailableError
from pokedex.infrastructure.repositories.memory import InMemoryRepository
from pokedex.infrastructure.repositories.sqlite import SqliteRepository

if TYPE_CHECKING:
    from pokedex.config.settings import PokedexSettings
    from pokedex.infrastructure.repositories.base import PokemonRepository

logger = logging.getLogger(__name__)


def build_repository(settings: PokedexSettings) -> PokemonRepository:
    """Construct the backend named by ``settings.storage.backend``.

    Raises:
        RepositoryUnavailableError: If the backend's store cannot be
            reached or its configuration is incomplete.
    """
    backend = settings.storage.backend
    logger.debug("Building %s repository", backend)

    if backend == "memory":
        return InMemoryRepository()

    if backend == "sqlite":
        return SqliteRepository.open(settings.sqlite_path)

    if backend == "airtable":
        cfg = settings.airtable
        if cfg.api_key is None or not cfg.workspace_id:
            logger.error("Airtable backend needs both api_key and workspace_id")
            raise RepositoryUnavailableError
        return AirtableRepository.connect(
            cfg.api_key.get_secret_value(),
            cfg.workspace_id,
            base_url=cfg.base_url,
            table=cfg.table,
            timeout=cfg.timeout,
        )

    msg = f"Unknown storage backend: {backend!r}"
    raise ValueError(msg)
