"""Store initialization: create the SQLite schema."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from pokedex.infrastructure.database.engine import init_database
from pokedex.services.result import ErrorCode, ServiceError, ServiceResult

if TYPE_CHECKING:
    from pokedex.config.settings import PokedexSettings

logger = logging.getLogger(__name__)


def init_store(settings: PokedexSettings) -> ServiceResult:
    """Create the configured SQLite database and its tables.

    Idempotent. Only the ``sqlite`` backend has a schema to create;
    other backends report ``UNSUPPORTED_BACKEND``.
    """
    op = "init_store"
    backend = settings.storage.backend
    if backend != "sqlite":
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code=ErrorCode.UNSUPPORTED_BACKEND,
                message=f"The {backend} backend has no store to initialize",
                detail={"backend": backend},
            ),
        )

    db_path = settings.sqlite_path
    existed = db_path.exists()
    try:
        engine = init_database(db_path)
    except (SQLAlchemyError, OSError) as exc:
        logger.error("Cannot initialize %s: %s", db_path, exc)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=ErrorCode.UNKNOWN, message=f"Cannot initialize {db_path}"),
        )
    engine.dispose()

    warnings = []
    if existed:
        warnings.append(f"Store already exists at {db_path}; existing data was kept")
    return ServiceResult(
        ok=True,
        op=op,
        data={"backend": backend, "path": str(db_path)},
        warnings=warnings,
        meta={"created": not existed},
    )
