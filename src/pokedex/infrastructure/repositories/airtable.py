"""Airtable repository: Pokemon rows in a remote Airtable table.

Every operation is one blocking HTTP round trip, two for insert and
delete (existence is checked before acting). There is no retry and no
app-level serialization: two writers racing on the same number can both
pass the existence check. That race is accepted.

Remote payloads are untrusted. The JSON envelope is decoded with strict
pydantic models and each record is re-validated through the domain
constructors; any failure aborts the whole operation as
:class:`UnknownError` (no partial result lists).
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from pydantic import BaseModel, ConfigDict, ValidationError

from pokedex.config.models import DEFAULT_BASE_URL, DEFAULT_TABLE
from pokedex.domain.entities import (
    InvalidValueError,
    Pokemon,
    PokemonName,
    PokemonNumber,
    PokemonTypes,
)
from pokedex.infrastructure.repositories.base import (
    ConflictError,
    NotFoundError,
    RepositoryUnavailableError,
    UnknownError,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Wire format
# ---------------------------------------------------------------------------


class AirtableFields(BaseModel):
    """The three Pokemon columns of an Airtable row."""

    model_config = ConfigDict(strict=True, frozen=True)

    number: int
    name: str
    types: list[str]


class AirtableRecord(BaseModel):
    """One Airtable row: remote row id plus fields."""

    model_config = ConfigDict(strict=True, frozen=True)

    id: str
    fields: AirtableFields


class AirtableEnvelope(BaseModel):
    """Response body of a list call."""

    model_config = ConfigDict(strict=True, frozen=True)

    records: list[AirtableRecord]


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class AirtableRepository:
    """Pokemon storage backed by the Airtable REST API."""

    def __init__(
        self,
        url: str,
        api_key: str,
        *,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        """Bind to the table at *url* without contacting it.

        Parameters
        ----------
        url
            Full table URL, e.g. ``https://api.airtable.com/v0/<base>/pokemons``.
        api_key
            Airtable personal access token, sent as a bearer credential.
        session
            Optional requests session (connection reuse, test doubles).
        timeout
            Per-request timeout in seconds; None waits indefinitely.
        """
        self.url = url.rstrip("/")
        self.auth_header = f"Bearer {api_key}"
        self.timeout = timeout
        self._session = session or requests.Session()

    @classmethod
    def connect(
        cls,
        api_key: str,
        workspace_id: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        table: str = DEFAULT_TABLE,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> AirtableRepository:
        """Build the table URL and check it with one authenticated list call.

        The session is closed before the error propagates.

        Raises:
            RepositoryUnavailableError: If the endpoint is unreachable or
                rejects the credentials.
        """
        url = f"{base_url.rstrip('/')}/{workspace_id}/{table}"
        repo = cls(url, api_key, session=session, timeout=timeout)
        try:
            repo._request("GET", repo.url)
        except requests.RequestException as exc:
            logger.error("Airtable table %s is not reachable: %s", url, exc)
            repo.close()
            raise RepositoryUnavailableError from exc
        return repo

    def close(self) -> None:
        self._session.close()

    # ------------------------------------------------------------------
    # PokemonRepository
    # ------------------------------------------------------------------

    def insert(self, number: PokemonNumber, name: PokemonName, types: PokemonTypes) -> Pokemon:
        if self._fetch_records(number):
            raise ConflictError

        body = {
            "records": [
                {
                    "fields": {
                        "number": number.value,
                        "name": name.value,
                        "types": types.to_list(),
                    },
                },
            ],
        }
        try:
            self._request("POST", self.url, json=body)
        except requests.RequestException as exc:
            logger.error("Error inserting pokemon %s on Airtable: %s", number, exc)
            raise UnknownError from exc
        return Pokemon(number, name, types)

    def fetch_all(self) -> list[Pokemon]:
        pokemons = [self._to_pokemon(record) for record in self._fetch_records(None)]
        pokemons.sort(key=lambda p: p.number)
        return pokemons

    def fetch_one(self, number: PokemonNumber) -> Pokemon:
        records = self._fetch_records(number)
        if not records:
            raise NotFoundError
        return self._to_pokemon(records[0])

    def delete(self, number: PokemonNumber) -> None:
        records = self._fetch_records(number)
        if not records:
            raise NotFoundError

        record_url = f"{self.url}/{records[0].id}"
        try:
            self._request("DELETE", record_url)
        except requests.RequestException as exc:
            logger.error("Error deleting pokemon %s on Airtable: %s", number, exc)
            raise UnknownError from exc

    # ------------------------------------------------------------------
    # HTTP helpers
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> requests.Response:
        """Send one authenticated request; HTTP error statuses raise."""
        response = self._session.request(
            method,
            url,
            params=params,
            json=json,
            headers={"Authorization": self.auth_header},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response

    def _fetch_records(self, number: PokemonNumber | None) -> list[AirtableRecord]:
        """List records filtered by *number*, or all of them sorted by number."""
        if number is not None:
            params = {"filterByFormula": f"number={number.value}"}
        else:
            params = {"sort[0][field]": "number"}

        try:
            response = self._request("GET", self.url, params=params)
            payload = response.json()
        except requests.RequestException as exc:
            logger.error("Error calling Airtable: %s", exc)
            raise UnknownError from exc
        except ValueError as exc:
            logger.error("Airtable response was not JSON: %s", exc)
            raise UnknownError from exc

        try:
            return AirtableEnvelope.model_validate(payload).records
        except ValidationError as exc:
            logger.error("Unexpected Airtable payload: %s", exc)
            raise UnknownError from exc

    @staticmethod
    def _to_pokemon(record: AirtableRecord) -> Pokemon:
        fields = record.fields
        try:
            return Pokemon.from_raw(fields.number, fields.name, fields.types)
        except InvalidValueError as exc:
            logger.error(
                "Airtable record %s (pokemon %s) is invalid: %s", record.id, fields.number, exc
            )
            raise UnknownError from exc
