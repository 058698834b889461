"""Validated value types and the Pokemon entity.

Each value type validates itself at construction and raises
:class:`InvalidValueError` on any rule violation. There is no way to
build a partially-valid instance, and nothing is coerced: ``"25"`` is not
a number and ``"electric"`` is not a type.

INVARIANT: A :class:`Pokemon` only ever holds already-validated parts.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from pokedex.domain.types import PokemonType

NUMBER_MIN = 0  # exclusive
NUMBER_MAX = 899  # exclusive


class InvalidValueError(ValueError):
    """Raw input failed validation.

    Callers only learn that the input was malformed.
    The message exists for logs and is not part of any contract.
    """


@dataclass(frozen=True, order=True)
class PokemonNumber:
    """National dex number, ``0 < value < 899``."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            msg = f"pokemon number must be an int, got {type(self.value).__name__}"
            raise InvalidValueError(msg)
        if not NUMBER_MIN < self.value < NUMBER_MAX:
            msg = f"pokemon number out of range: {self.value}"
            raise InvalidValueError(msg)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class PokemonName:
    """Non-empty display name, stored as given."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            msg = f"pokemon name must be a str, got {type(self.value).__name__}"
            raise InvalidValueError(msg)
        if not self.value:
            raise InvalidValueError("pokemon name is empty")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PokemonTypes:
    """Ordered, non-empty, duplicate-free sequence of :class:`PokemonType`.

    Build from raw strings with :meth:`parse`; the parse is all-or-nothing.
    """

    values: tuple[PokemonType, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.values, tuple):
            raise InvalidValueError("pokemon types must be a tuple")
        if not self.values:
            raise InvalidValueError("pokemon types are empty")
        if not all(isinstance(v, PokemonType) for v in self.values):
            raise InvalidValueError("pokemon types contain a non-PokemonType member")
        if len(set(self.values)) != len(self.values):
            raise InvalidValueError("pokemon types contain duplicates")

    @classmethod
    def parse(cls, raw: list[Any] | tuple[Any, ...]) -> PokemonTypes:
        """Parse raw strings into types, rejecting the whole list on any bad entry.

        Examples:
            >>> PokemonTypes.parse(["Electric"]).to_list()
            ['Electric']
            >>> PokemonTypes.parse(["Electric", "Water"])
            Traceback (most recent call last):
            ...
            pokedex.domain.entities.InvalidValueError: unknown pokemon type: 'Water'
        """
        if not isinstance(raw, (list, tuple)):
            raise InvalidValueError("pokemon types must be a list of strings")
        parsed: list[PokemonType] = []
        for item in raw:
            if not isinstance(item, str):
                msg = f"pokemon type must be a str, got {type(item).__name__}"
                raise InvalidValueError(msg)
            try:
                parsed.append(PokemonType(item))
            except ValueError:
                msg = f"unknown pokemon type: {item!r}"
                raise InvalidValueError(msg) from None
        return cls(tuple(parsed))

    def __iter__(self) -> Iterator[PokemonType]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def to_list(self) -> list[str]:
        """Raw string form, in order."""
        return [str(v) for v in self.values]


@dataclass(frozen=True)
class Pokemon:
    """One catalog record."""

    number: PokemonNumber
    name: PokemonName
    types: PokemonTypes

    def __post_init__(self) -> None:
        # Raw values here are a programming error, not bad user input.
        if not isinstance(self.number, PokemonNumber):
            raise TypeError("number must be a PokemonNumber")
        if not isinstance(self.name, PokemonName):
            raise TypeError("name must be a PokemonName")
        if not isinstance(self.types, PokemonTypes):
            raise TypeError("types must be PokemonTypes")

    @classmethod
    def from_raw(cls, number: Any, name: Any, types: Any) -> Pokemon:
        """Validate all three raw parts and build a Pokemon.

        Raises:
            InvalidValueError: If any part is invalid.
        """
        return cls(PokemonNumber(number), PokemonName(name), PokemonTypes.parse(types))

    def to_dict(self) -> dict[str, Any]:
        return {
            "number": self.number.value,
            "name": self.name.value,
            "types": self.types.to_list(),
        }
