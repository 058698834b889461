"""Command: remove a Pokemon from the catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pokedex.commands._base import PokedexCommand
from pokedex.services.delete import DeleteService

if TYPE_CHECKING:
    from pokedex.commands._context import AppContext


@click.command(
    cls=PokedexCommand,
    examples="""\
  pokedex delete 25
  pokedex --backend airtable delete 6""",
)
@click.argument("number", type=int)
@click.pass_obj
def delete(app: AppContext, number: int) -> None:
    """Delete the Pokemon with NUMBER."""
    app.emit(DeleteService(app.repository).delete(number))
