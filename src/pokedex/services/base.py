"""BaseService: shared foundation for pokedex use cases.

Every service receives a :class:`PokemonRepository` at construction
time and is oblivious to which backend it is. Services validate raw
input through the domain constructors before touching the repository,
and translate repository errors into :class:`ServiceResult` failures.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pokedex.infrastructure.repositories.base import (
    ConflictError,
    NotFoundError,
    RepositoryError,
)
from pokedex.services.result import ErrorCode, ServiceError, ServiceResult

if TYPE_CHECKING:
    from pokedex.infrastructure.repositories.base import PokemonRepository

logger = logging.getLogger(__name__)

# Fixed, detail-free messages: callers branch on the code, never the text.
MESSAGES: dict[str, str] = {
    ErrorCode.BAD_REQUEST: "The request is invalid",
    ErrorCode.CONFLICT: "The Pokemon already exists",
    ErrorCode.NOT_FOUND: "The Pokemon does not exist",
    ErrorCode.UNKNOWN: "An unknown error occurred",
    ErrorCode.UNAVAILABLE: "The storage backend is unavailable",
}


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class CreateService(BaseService):
            def create(self, number, name, types) -> ServiceResult:
                ...
                pokemon = self._repo.insert(...)
    """

    def __init__(self, repo: PokemonRepository) -> None:
        self._repo = repo

    def _success(self, op: str, data: dict[str, Any]) -> ServiceResult:
        """Successful result tagged with the repository that served it."""
        meta = {"repository": type(self._repo).__name__}
        return ServiceResult(ok=True, op=op, data=data, meta=meta)

    @staticmethod
    def _failure(op: str, code: str) -> ServiceResult:
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=MESSAGES[code]),
        )

    def _repository_failure(self, op: str, exc: RepositoryError) -> ServiceResult:
        """Map a repository error onto its service error code."""
        if isinstance(exc, ConflictError):
            return self._failure(op, ErrorCode.CONFLICT)
        if isinstance(exc, NotFoundError):
            return self._failure(op, ErrorCode.NOT_FOUND)
        logger.debug("%s failed in %s", op, type(self._repo).__name__, exc_info=exc)
        return self._failure(op, ErrorCode.UNKNOWN)
