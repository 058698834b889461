"""Subcommand modules for pokedex.

Provides register_commands() which uses deferred imports to keep
``pokedex --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the query group and the standalone commands on the root group."""
    from pokedex.commands.query import query

    cli.add_command(query)

    from pokedex.commands.create import create
    from pokedex.commands.delete import delete
    from pokedex.commands.init_cmd import init_cmd

    cli.add_command(init_cmd)
    cli.add_command(create)
    cli.add_command(delete)
