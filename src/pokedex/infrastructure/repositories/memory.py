"""In-memory repository: reference backend and test double.

A plain list guarded by one lock. Every operation takes the lock once,
so a scan and the mutation it guards are never interleaved with another
caller.

Two failure modes exist for deterministic error-path testing:

- ``error=True`` at construction makes every call raise
  :class:`UnknownError` before the list is touched.
- An unexpected exception while the lock is held poisons the store; that
  call and every later one raise :class:`UnknownError`.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

from pokedex.domain.entities import Pokemon, PokemonName, PokemonNumber, PokemonTypes
from pokedex.infrastructure.repositories.base import (
    ConflictError,
    NotFoundError,
    RepositoryError,
    UnknownError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


class InMemoryRepository:
    """Lock-guarded list of Pokemon with optional fault injection."""

    def __init__(self, *, error: bool = False) -> None:
        self._error = error
        self._lock = threading.Lock()
        self._pokemons: list[Pokemon] = []
        self._poisoned = False

    @property
    def error(self) -> bool:
        return self._error

    @contextmanager
    def _guarded(self) -> Iterator[list[Pokemon]]:
        """Yield the collection under the lock, failing fast when unusable."""
        if self._error:
            raise UnknownError
        with self._lock:
            if self._poisoned:
                raise UnknownError
            try:
                yield self._pokemons
            except RepositoryError:
                raise
            except Exception as exc:
                self._poisoned = True
                logger.error("In-memory store poisoned by %r", exc)
                raise UnknownError from exc

    # ------------------------------------------------------------------
    # PokemonRepository
    # ------------------------------------------------------------------

    def insert(self, number: PokemonNumber, name: PokemonName, types: PokemonTypes) -> Pokemon:
        with self._guarded() as pokemons:
            if any(p.number == number for p in pokemons):
                raise ConflictError
            pokemon = Pokemon(number, name, types)
            pokemons.append(pokemon)
        return pokemon

    def fetch_all(self) -> list[Pokemon]:
        with self._guarded() as pokemons:
            snapshot = list(pokemons)
        snapshot.sort(key=lambda p: p.number)
        return snapshot

    def fetch_one(self, number: PokemonNumber) -> Pokemon:
        with self._guarded() as pokemons:
            for pokemon in pokemons:
                if pokemon.number == number:
                    return pokemon
        raise NotFoundError

    def delete(self, number: PokemonNumber) -> None:
        with self._guarded() as pokemons:
            for index, pokemon in enumerate(pokemons):
                if pokemon.number == number:
                    del pokemons[index]
                    return
        raise NotFoundError

    def close(self) -> None:
        """Nothing to release."""
