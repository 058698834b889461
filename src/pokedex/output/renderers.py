"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from pokedex.output.console import create_console, get_output, style_for_type

if TYPE_CHECKING:
    from rich.console import Console

    from pokedex.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
        if verbose and result.meta:
            _render_meta(result.meta, console)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: Pokemon numbers only."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item["number"]) for item in items)
    if "number" in result.data:
        return str(result.data["number"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "dex.ok"), (f"  {result.op}", "dex.op")))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="dex.key")
    if key == "number":
        v = Text(str(value), style="dex.number")
    elif key == "name":
        v = Text(str(value), style="dex.name")
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _types_text(types: list[str]) -> Text:
    text = Text()
    for i, type_name in enumerate(types):
        if i:
            text.append(", ")
        text.append(type_name, style=style_for_type(type_name))
    return text


def _render_meta(meta: dict[str, Any], console: Console) -> None:
    for key, value in meta.items():
        console.print(Text(f"  {key}: {value}", style="dim"))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(Text.assemble(("ERROR", "dex.error"), (f"  {result.op}", "dex.op"), f": {msg}"))

    if verbose and err:
        console.print(Text(f"  code: {err.code}", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Pokemon renderers ─────────────────────────────────────────────────


def _render_pokemon(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render create_pokemon and fetch_one results."""
    _status_line(console, result)
    d = result.data
    _field(console, "number", d["number"])
    _field(console, "name", d["name"])
    console.print(Text("  types: ", style="dex.key"), _types_text(d["types"]), sep="")


def _render_pokemon_table(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render fetch_all results as a table."""
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Number", style="dex.number", justify="right", no_wrap=True)
    table.add_column("Name", style="dex.name")
    table.add_column("Types")
    for item in items:
        table.add_row(str(item["number"]), item["name"], _types_text(item["types"]))
    console.print(table)
    count = result.data.get("count", len(items))
    console.print(f"\n{count} pokemon")


def _render_deleted(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "number", result.data["number"])


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "create_pokemon": _render_pokemon,
    "fetch_one": _render_pokemon,
    "fetch_all": _render_pokemon_table,
    "delete_pokemon": _render_deleted,
    "init_store": _render_generic,
}
