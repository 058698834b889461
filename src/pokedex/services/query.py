"""QueryService: read-only access to the catalog."""

from __future__ import annotations

import logging
from typing import Any

from pokedex.domain.entities import InvalidValueError, PokemonNumber
from pokedex.infrastructure.repositories.base import RepositoryError
from pokedex.services.base import BaseService
from pokedex.services.contracts import PokemonData, PokemonListData, dump_validated
from pokedex.services.result import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)


class QueryService(BaseService):
    """Fetch one Pokemon by number, or all of them."""

    def fetch_one(self, number: Any) -> ServiceResult:
        """Error codes: ``BAD_REQUEST``, ``NOT_FOUND``, ``UNKNOWN``."""
        op = "fetch_one"
        try:
            valid_number = PokemonNumber(number)
        except InvalidValueError as exc:
            logger.debug("Rejected fetch request: %s", exc)
            return self._failure(op, ErrorCode.BAD_REQUEST)

        try:
            pokemon = self._repo.fetch_one(valid_number)
        except RepositoryError as exc:
            return self._repository_failure(op, exc)

        return self._success(op, dump_validated(PokemonData, pokemon.to_dict()))

    def fetch_all(self) -> ServiceResult:
        """All Pokemon, ascending by number. Error codes: ``UNKNOWN``."""
        op = "fetch_all"
        try:
            pokemons = self._repo.fetch_all()
        except RepositoryError as exc:
            return self._repository_failure(op, exc)

        items = [p.to_dict() for p in pokemons]
        data = dump_validated(PokemonListData, {"count": len(items), "items": items})
        return self._success(op, data)
