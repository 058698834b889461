"""Database engine setup for SQLite.

SQLAlchemy Core (not ORM) is used: the repository maps rows to domain
values itself and re-validates them, so an identity map buys nothing.

Opening an existing store never creates it. :func:`init_database` is the
only path that creates the file and the schema.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from pokedex.infrastructure.database.schema import metadata


def create_db_engine(db_path: Path, *, create: bool = False) -> Engine:
    """Create a SQLite engine with foreign keys enabled.

    With ``create=False`` the file is opened read-write only, so a missing
    database fails on first connect instead of being silently created.
    The connection may be shared across threads; callers serialize access.

    The path is turned into a percent-encoded ``file:`` URI, so directory
    names holding ``#``, ``?`` or ``%`` open the file they name.
    """
    mode = "rwc" if create else "rw"
    uri = f"{db_path.resolve().as_uri()}?mode={mode}"

    def _connect() -> sqlite3.Connection:
        return sqlite3.connect(uri, uri=True, check_same_thread=False)

    engine = create_engine("sqlite://", creator=_connect, poolclass=QueuePool, echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database(db_path: Path) -> Engine:
    """Create the pokedex database at *db_path* with all tables.

    Creates parent directories as needed. Idempotent: safe to call on an
    existing database.

    Returns the engine ready for use.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_path, create=True)
    metadata.create_all(engine)
    return engine
