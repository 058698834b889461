"""Command: store initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pokedex.commands._base import PokedexCommand

if TYPE_CHECKING:
    from pokedex.commands._context import AppContext

_INIT_EXAMPLES = """\
  pokedex init
  pokedex -c ./pokedex.toml init
  POKEDEX_SQLITE__PATH=/tmp/dex.db pokedex init"""


@click.command("init", cls=PokedexCommand, examples=_INIT_EXAMPLES)
@click.pass_obj
def init_cmd(app: AppContext) -> None:
    """Create the SQLite database and its tables."""
    from pokedex.services.init import init_store

    app.emit(init_store(app.settings))
