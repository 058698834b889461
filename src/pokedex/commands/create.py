"""Command: add a Pokemon to the catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pokedex.commands._base import PokedexCommand
from pokedex.services.create import CreateService

if TYPE_CHECKING:
    from pokedex.commands._context import AppContext

_CREATE_EXAMPLES = """\
  pokedex create 25 Pikachu -t Electric
  pokedex create 6 Charizard --type Fire
  pokedex --backend memory --json create 125 Electabuzz -t Electric"""


@click.command(cls=PokedexCommand, examples=_CREATE_EXAMPLES)
@click.argument("number", type=int)
@click.argument("name")
@click.option(
    "-t",
    "--type",
    "types",
    multiple=True,
    help="Pokemon type (repeatable), e.g. Electric or Fire.",
)
@click.pass_obj
def create(app: AppContext, number: int, name: str, types: tuple[str, ...]) -> None:
    """Create a Pokemon with NUMBER (1-898) and NAME."""
    app.emit(CreateService(app.repository).create(number, name, list(types)))
