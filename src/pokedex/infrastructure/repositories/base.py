"""Repository contract and its shared error taxonomy.

Every backend implements :class:`PokemonRepository` with identical
observable semantics:

- Conflict detection is by number equality only.
- ``fetch_all`` is always ascending by number, whatever the storage order.
- A missing number is reported as :class:`NotFoundError`, never as
  :class:`UnknownError`.

INVARIANT: Only :class:`RepositoryError` subclasses escape an operation.
Backend failures (lock, SQL, transport, malformed stored data) surface as
:class:`UnknownError` with the original exception chained. Errors carry
no diagnostic detail; backends log it instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pokedex.domain.entities import Pokemon, PokemonName, PokemonNumber, PokemonTypes


class RepositoryError(Exception):
    """Base class for repository errors."""


class ConflictError(RepositoryError):
    """A Pokemon with this number already exists (insert)."""


class NotFoundError(RepositoryError):
    """No Pokemon with this number exists (fetch_one, delete)."""


class UnknownError(RepositoryError):
    """The backend failed for any other reason."""


class RepositoryUnavailableError(RepositoryError):
    """The backend could not be constructed (store missing or unreachable)."""


@runtime_checkable
class PokemonRepository(Protocol):
    """Storage boundary for Pokemon records.

    ==========  ==============================  ================================
    Operation   Returns                         Raises
    ==========  ==============================  ================================
    insert      the stored Pokemon              ConflictError, UnknownError
    fetch_all   Pokemon list, ascending number  UnknownError
    fetch_one   the Pokemon                     NotFoundError, UnknownError
    delete      None                            NotFoundError, UnknownError
    ==========  ==============================  ================================
    """

    def insert(self, number: PokemonNumber, name: PokemonName, types: PokemonTypes) -> Pokemon: ...

    def fetch_all(self) -> list[Pokemon]: ...

    def fetch_one(self, number: PokemonNumber) -> Pokemon: ...

    def delete(self, number: PokemonNumber) -> None: ...

    def close(self) -> None: ...
