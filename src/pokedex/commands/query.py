"""Command group: read Pokemon from the catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pokedex.commands._base import PokedexGroup
from pokedex.services.query import QueryService

if TYPE_CHECKING:
    from pokedex.commands._context import AppContext

_QUERY_EXAMPLES = """\
  pokedex query get 25
  pokedex query list
  pokedex --quiet query list
  pokedex --json query get 6"""


@click.group(cls=PokedexGroup, examples=_QUERY_EXAMPLES)
def query() -> None:
    """Fetch one Pokemon or list them all."""


@query.command(
    examples="""\
  pokedex query get 25
  pokedex --json query get 25"""
)
@click.argument("number", type=int)
@click.pass_obj
def get(app: AppContext, number: int) -> None:
    """Show the Pokemon with NUMBER."""
    app.emit(QueryService(app.repository).fetch_one(number))


@query.command(
    name="list",
    examples="""\
  pokedex query list
  pokedex -q query list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List every Pokemon, ascending by number."""
    app.emit(QueryService(app.repository).fetch_all())
