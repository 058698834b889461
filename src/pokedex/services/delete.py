"""DeleteService: remove a Pokemon.

There is no update operation: amending a record is delete + create.
"""

from __future__ import annotations

import logging
from typing import Any

from pokedex.domain.entities import InvalidValueError, PokemonNumber
from pokedex.infrastructure.repositories.base import RepositoryError
from pokedex.services.base import BaseService
from pokedex.services.contracts import DeletedData, dump_validated
from pokedex.services.result import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)


class DeleteService(BaseService):
    """Handles Pokemon deletion."""

    def delete(self, number: Any) -> ServiceResult:
        """Error codes: ``BAD_REQUEST``, ``NOT_FOUND``, ``UNKNOWN``."""
        op = "delete_pokemon"
        try:
            valid_number = PokemonNumber(number)
        except InvalidValueError as exc:
            logger.debug("Rejected delete request: %s", exc)
            return self._failure(op, ErrorCode.BAD_REQUEST)

        try:
            self._repo.delete(valid_number)
        except RepositoryError as exc:
            return self._repository_failure(op, exc)

        return self._success(op, dump_validated(DeletedData, {"number": valid_number.value}))
