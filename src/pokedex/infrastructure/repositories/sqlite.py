"""SQLite repository over SQLAlchemy Core.

One connection is held for the repository's lifetime and guarded by a
lock; every statement runs while holding it, including the whole
multi-statement insert, so no other operation can interleave with an
in-flight transaction.

Stored rows are not trusted: everything read back goes through the
domain constructors again, and a row that fails them is reported as
:class:`UnknownError`.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from pokedex.domain.entities import (
    InvalidValueError,
    Pokemon,
    PokemonName,
    PokemonNumber,
    PokemonTypes,
)
from pokedex.infrastructure.database.engine import create_db_engine
from pokedex.infrastructure.database.schema import pokemon_types, pokemons
from pokedex.infrastructure.repositories.base import (
    ConflictError,
    NotFoundError,
    RepositoryUnavailableError,
    UnknownError,
)

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

_UNIQUE_VIOLATION = "UNIQUE constraint failed"


class SqliteRepository:
    """Pokemon storage in a two-table SQLite schema."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._lock = threading.Lock()
        try:
            self._conn: Connection = engine.connect()
        except SQLAlchemyError as exc:
            logger.error("Cannot open database: %s", exc)
            raise RepositoryUnavailableError from exc

    @classmethod
    def open(cls, db_path: Path) -> SqliteRepository:
        """Open an existing database at *db_path* (never creates it)."""
        logger.debug("Opening database %s", db_path)
        return cls(create_db_engine(db_path))

    def close(self) -> None:
        with self._lock:
            self._conn.close()
        self._engine.dispose()

    # ------------------------------------------------------------------
    # PokemonRepository
    # ------------------------------------------------------------------

    def insert(self, number: PokemonNumber, name: PokemonName, types: PokemonTypes) -> Pokemon:
        with self._lock:
            try:
                with self._conn.begin():
                    self._insert_rows(number, name, types)
            except (ConflictError, UnknownError):
                raise
            except SQLAlchemyError as exc:
                logger.error("Insert of pokemon %s failed: %s", number, exc)
                raise UnknownError from exc
        return Pokemon(number, name, types)

    def fetch_all(self) -> list[Pokemon]:
        with self._lock:
            try:
                with self._conn.begin():
                    return self._fetch_pokemons(None)
            except UnknownError:
                raise
            except SQLAlchemyError as exc:
                logger.error("Fetching all pokemons failed: %s", exc)
                raise UnknownError from exc

    def fetch_one(self, number: PokemonNumber) -> Pokemon:
        with self._lock:
            try:
                with self._conn.begin():
                    found = self._fetch_pokemons(number)
            except UnknownError:
                raise
            except SQLAlchemyError as exc:
                logger.error("Fetching pokemon %s failed: %s", number, exc)
                raise UnknownError from exc
        if not found:
            raise NotFoundError
        return found[0]

    def delete(self, number: PokemonNumber) -> None:
        with self._lock:
            try:
                with self._conn.begin():
                    deleted = self._conn.execute(
                        delete(pokemons).where(pokemons.c.number == number.value)
                    ).rowcount
            except SQLAlchemyError as exc:
                logger.error("Delete of pokemon %s failed: %s", number, exc)
                raise UnknownError from exc
        if deleted == 0:
            raise NotFoundError

    # ------------------------------------------------------------------
    # Row access (caller holds the lock and an open transaction)
    # ------------------------------------------------------------------

    def _insert_rows(self, number: PokemonNumber, name: PokemonName, types: PokemonTypes) -> None:
        """Write the header row then one row per type.

        Any exception raised here rolls back the surrounding transaction.
        """
        try:
            self._conn.execute(insert(pokemons).values(number=number.value, name=name.value))
        except IntegrityError as exc:
            if _UNIQUE_VIOLATION in str(exc.orig):
                raise ConflictError from exc
            logger.error("Header insert for pokemon %s failed: %s", number, exc)
            raise UnknownError from exc

        for position, pokemon_type in enumerate(types):
            result = self._conn.execute(
                insert(pokemon_types).values(
                    pokemon_number=number.value,
                    position=position,
                    name=str(pokemon_type),
                )
            )
            if result.rowcount != 1:
                logger.error(
                    "Type insert for pokemon %s wrote %s rows, expected 1",
                    number,
                    result.rowcount,
                )
                raise UnknownError

    def _fetch_pokemons(self, number: PokemonNumber | None) -> list[Pokemon]:
        stmt = select(pokemons.c.number, pokemons.c.name).order_by(pokemons.c.number)
        if number is not None:
            stmt = stmt.where(pokemons.c.number == number.value)

        rows = self._conn.execute(stmt).fetchall()
        return [
            self._assemble(row.number, row.name, self._fetch_type_names(row.number))
            for row in rows
        ]

    def _fetch_type_names(self, raw_number: Any) -> list[Any]:
        stmt = (
            select(pokemon_types.c.name)
            .where(pokemon_types.c.pokemon_number == raw_number)
            .order_by(pokemon_types.c.position)
        )
        return [row.name for row in self._conn.execute(stmt).fetchall()]

    @staticmethod
    def _assemble(raw_number: Any, raw_name: Any, raw_types: list[Any]) -> Pokemon:
        try:
            return Pokemon.from_raw(raw_number, raw_name, raw_types)
        except InvalidValueError as exc:
            logger.error("Stored pokemon %r failed validation: %s", raw_number, exc)
            raise UnknownError from exc
