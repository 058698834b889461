"""Shared pytest fixtures and test doubles for pokedex tests."""

from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import requests
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from pokedex.infrastructure.database.engine import init_database
from pokedex.config.models import DEFAULT_BASE_URL
from pokedex.infrastructure.repositories.airtable import AirtableRepository
from pokedex.infrastructure.repositories.base import PokemonRepository
from pokedex.infrastructure.repositories.memory import InMemoryRepository
from pokedex.infrastructure.repositories.sqlite import SqliteRepository

AIRTABLE_API_KEY = "key-test"
AIRTABLE_WORKSPACE = "appTest"
AIRTABLE_URL = f"{DEFAULT_BASE_URL}/{AIRTABLE_WORKSPACE}/pokemons"


# ---------------------------------------------------------------------------
# Airtable HTTP double
# ---------------------------------------------------------------------------


class FakeResponse:
    """Just enough of ``requests.Response`` for the Airtable repository."""

    def __init__(self, status_code: int = 200, payload: Any = None, *, raw: bool = False) -> None:
        self.status_code = status_code
        self._payload = payload
        self._raw = raw

    def json(self) -> Any:
        if self._raw:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeAirtableSession:
    """In-process stand-in for one Airtable table.

    Serves the list (with ``filterByFormula`` / ``sort``), create and
    delete endpoints from a list of records. Responses queued with
    :meth:`respond_next` or :meth:`raise_next` are used before the table is
    consulted.
    """

    def __init__(self, table_url: str = AIRTABLE_URL, api_key: str = AIRTABLE_API_KEY) -> None:
        self.table_url = table_url
        self.api_key = api_key
        self.records: list[dict[str, Any]] = []
        self.calls: list[dict[str, Any]] = []
        self.queued: list[FakeResponse | Exception] = []
        self.closed = False
        self._next_id = 1

    def respond_next(
        self, status_code: int = 200, payload: Any = None, *, raw: bool = False
    ) -> None:
        """Answer the next request with a canned response."""
        self.queued.append(FakeResponse(status_code, payload, raw=raw))

    def raise_next(self, exc: Exception) -> None:
        """Make the next request fail at the transport level."""
        self.queued.append(exc)

    def add_record(self, fields: dict[str, Any]) -> str:
        record_id = f"rec{self._next_id:05d}"
        self._next_id += 1
        self.records.append({"id": record_id, "fields": dict(fields)})
        return record_id

    def request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> FakeResponse:
        self.calls.append(
            {"method": method, "url": url, "params": params, "json": json, "timeout": timeout}
        )
        if self.queued:
            outcome = self.queued.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        if (headers or {}).get("Authorization") != f"Bearer {self.api_key}":
            return FakeResponse(401, {"error": "AUTHENTICATION_REQUIRED"})

        if url == self.table_url and method == "GET":
            return FakeResponse(200, {"records": self._select(params or {})})
        if url == self.table_url and method == "POST":
            created = []
            for record in (json or {}).get("records", []):
                record_id = self.add_record(record["fields"])
                created.append({"id": record_id, "fields": record["fields"]})
            return FakeResponse(200, {"records": created})
        if url.startswith(f"{self.table_url}/") and method == "DELETE":
            record_id = url.rsplit("/", 1)[1]
            for record in self.records:
                if record["id"] == record_id:
                    self.records.remove(record)
                    return FakeResponse(200, {"id": record_id, "deleted": True})
        return FakeResponse(404, {"error": "NOT_FOUND"})

    def _select(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        formula = params.get("filterByFormula")
        if formula is not None:
            wanted = int(formula.removeprefix("number="))
            return [r for r in self.records if r["fields"].get("number") == wanted]
        records = list(self.records)
        if params.get("sort[0][field]") == "number":
            records.sort(key=lambda r: r["fields"].get("number", 0))
        return records

    def close(self) -> None:
        self.closed = True


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "pokedex.db"


@pytest.fixture
def db_engine(db_path: Path) -> Generator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(db_path)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_repo(db_engine: Engine) -> Generator[SqliteRepository]:
    repo = SqliteRepository(db_engine)
    try:
        yield repo
    finally:
        repo.close()


@pytest.fixture
def fake_airtable() -> FakeAirtableSession:
    return FakeAirtableSession()


@pytest.fixture
def airtable_repo(fake_airtable: FakeAirtableSession) -> AirtableRepository:
    """Airtable repository wired to the in-process fake table."""
    return AirtableRepository.connect(
        AIRTABLE_API_KEY,
        AIRTABLE_WORKSPACE,
        session=fake_airtable,  # type: ignore[arg-type]
    )


@pytest.fixture(params=["memory", "sqlite", "airtable"])
def repository(request: pytest.FixtureRequest) -> PokemonRepository:
    """Each backend in turn, empty."""
    if request.param == "memory":
        return InMemoryRepository()
    if request.param == "sqlite":
        return request.getfixturevalue("sqlite_repo")
    return request.getfixturevalue("airtable_repo")


@pytest.fixture
def _isolated_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty temp CWD with no ``POKEDEX_*`` environment.

    Use via ``@pytest.mark.usefixtures("_isolated_dir")`` on command test
    classes so the CLI's SQLite file lands in ``tmp_path``.
    """
    for name in list(os.environ):
        if name.startswith("POKEDEX_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
