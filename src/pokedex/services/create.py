"""CreateService: insert a new Pokemon.

Pipeline: VALIDATE → PERSIST → RESPOND. Validation failures never
reach the repository.
"""

from __future__ import annotations

import logging
from typing import Any

from pokedex.domain.entities import InvalidValueError, PokemonName, PokemonNumber, PokemonTypes
from pokedex.infrastructure.repositories.base import RepositoryError
from pokedex.services.base import BaseService
from pokedex.services.contracts import PokemonData, dump_validated
from pokedex.services.result import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)


class CreateService(BaseService):
    """Handles Pokemon creation."""

    def create(self, number: Any, name: Any, types: Any) -> ServiceResult:
        """Validate raw input and insert the Pokemon.

        Error codes: ``BAD_REQUEST``, ``CONFLICT``, ``UNKNOWN``.
        """
        op = "create_pokemon"
        try:
            valid_number = PokemonNumber(number)
            valid_name = PokemonName(name)
            valid_types = PokemonTypes.parse(types)
        except InvalidValueError as exc:
            logger.debug("Rejected create request: %s", exc)
            return self._failure(op, ErrorCode.BAD_REQUEST)

        try:
            pokemon = self._repo.insert(valid_number, valid_name, valid_types)
        except RepositoryError as exc:
            return self._repository_failure(op, exc)

        return self._success(op, dump_validated(PokemonData, pokemon.to_dict()))
