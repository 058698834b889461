"""Typed payload contracts for service and adapter boundaries.

These models validate operation payload shapes before they leave the
service layer so key regressions (for example ``items`` vs ``pokemons``)
fail fast in tests and during development.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class PokemonData(BaseModel):
    """Payload contract for ``create_pokemon`` and ``fetch_one``."""

    number: int
    name: str
    types: list[str]


class PokemonListData(BaseModel):
    """Payload contract for ``fetch_all``."""

    count: int
    items: list[PokemonData]


class DeletedData(BaseModel):
    """Payload contract for ``delete_pokemon``."""

    number: int
