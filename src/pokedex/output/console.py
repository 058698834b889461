"""Rich Console factory and theme for pokedex output.

Consoles render into a StringIO buffer so every formatter keeps the
``format_result() -> str`` contract. Rich drops color codes on its own
when the output is not a terminal (tests, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

from pokedex.domain.types import PokemonType

POKEDEX_THEME = Theme(
    {
        "dex.ok": "bold green",
        "dex.error": "bold red",
        "dex.op": "bold cyan",
        "dex.key": "dim",
        "dex.number": "bold blue",
        "dex.name": "bold",
        "dex.type.electric": "yellow",
        "dex.type.fire": "red",
    }
)

_TYPE_STYLES: dict[str, str] = {
    PokemonType.ELECTRIC: "dex.type.electric",
    PokemonType.FIRE: "dex.type.fire",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=POKEDEX_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 100,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_type(type_name: str) -> str:
    """Return the Rich style name for a Pokemon type, or ``""``."""
    return _TYPE_STYLES.get(type_name, "")
