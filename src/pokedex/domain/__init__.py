"""Domain layer: value types and validation rules.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""

from pokedex.domain.entities import (
    InvalidValueError,
    Pokemon,
    PokemonName,
    PokemonNumber,
    PokemonTypes,
)
from pokedex.domain.types import PokemonType

__all__ = [
    "InvalidValueError",
    "Pokemon",
    "PokemonName",
    "PokemonNumber",
    "PokemonType",
    "PokemonTypes",
]
