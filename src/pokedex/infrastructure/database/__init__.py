"""SQLite engine and schema via SQLAlchemy Core."""

from pokedex.infrastructure.database.engine import create_db_engine, init_database
from pokedex.infrastructure.database.schema import metadata, pokemon_types, pokemons

__all__ = [
    "create_db_engine",
    "init_database",
    "metadata",
    "pokemons",
    "pokemon_types",
]
