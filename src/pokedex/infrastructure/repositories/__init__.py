"""Repository contract and storage backends."""

from pokedex.infrastructure.repositories.airtable import AirtableRepository
from pokedex.infrastructure.repositories.base import (
    ConflictError,
    NotFoundError,
    PokemonRepository,
    RepositoryError,
    RepositoryUnavailableError,
    UnknownError,
)
from pokedex.infrastructure.repositories.memory import InMemoryRepository
from pokedex.infrastructure.repositories.sqlite import SqliteRepository

__all__ = [
    "AirtableRepository",
    "ConflictError",
    "InMemoryRepository",
    "NotFoundError",
    "PokemonRepository",
    "RepositoryError",
    "RepositoryUnavailableError",
    "SqliteRepository",
    "UnknownError",
]
