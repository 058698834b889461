"""Classification enums.

Parsing against these enums is case-sensitive: ``"Electric"`` is a
type, ``"electric"`` is not.
"""

from __future__ import annotations

from enum import StrEnum


class PokemonType(StrEnum):
    """Closed set of elemental types a Pokemon can carry."""

    ELECTRIC = "Electric"
    FIRE = "Fire"
