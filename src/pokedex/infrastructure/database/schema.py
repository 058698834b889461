"""SQLAlchemy Core table definitions for the pokedex database.

Two normalized tables: one header row per Pokemon and one row per
(Pokemon, type) pair. Deleting a header row cascades to its type rows;
the engine turns on ``PRAGMA foreign_keys`` so SQLite enforces it.
"""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Index, Integer, MetaData, Table, Text, UniqueConstraint

metadata = MetaData()

pokemons = Table(
    "pokemons",
    metadata,
    Column("number", Integer, primary_key=True, autoincrement=False),
    Column("name", Text, nullable=False),
)

pokemon_types = Table(
    "types",
    metadata,
    Column(
        "pokemon_number",
        Integer,
        ForeignKey("pokemons.number", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("position", Integer, nullable=False),  # order within the Pokemon's types
    Column("name", Text, nullable=False),
    UniqueConstraint("pokemon_number", "name"),
)

Index("ix_types_pokemon_number", pokemon_types.c.pokemon_number)
