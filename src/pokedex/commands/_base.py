"""Command classes whose constructors take an ``examples=`` text.

Commands built with one of these classes gain an ``--examples`` flag.
It prints the text under a header naming the full command path and ends
the invocation before any argument is validated.
"""

from __future__ import annotations

from typing import Any

import click


class ExamplesOption(click.Option):
    """Eager flag that prints a fixed block of examples and exits 0."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(
            ["--examples"],
            is_flag=True,
            is_eager=True,
            expose_value=False,
            callback=self._show,
            help="Show usage examples and exit.",
        )

    def _show(self, ctx: click.Context, _param: click.Parameter, requested: bool) -> None:
        if not requested or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':")
        click.echo()
        click.echo(self.text)
        ctx.exit(0)


class _WithExamples:
    examples: str | None

    def _attach_examples(self, examples: str | None) -> None:
        self.examples = examples
        if examples:
            self.params.append(ExamplesOption(examples))  # type: ignore[attr-defined]


class PokedexCommand(_WithExamples, click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._attach_examples(examples)


class PokedexGroup(_WithExamples, click.Group):
    """Group whose subcommands are :class:`PokedexCommand` by default."""

    command_class = PokedexCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._attach_examples(examples)
