"""AppContext: shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Builds the repository lazily and owns result
emission (stdout/stderr routing and exit codes).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NoReturn

import click

from pokedex.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from pokedex.config.settings import PokedexSettings
    from pokedex.infrastructure.repositories.base import PokemonRepository
    from pokedex.services.result import ServiceResult

logger = logging.getLogger(__name__)


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The repository is created on first use so ``--help``, ``--version``
    and ``init`` never open a store.
    """

    def __init__(self, settings: PokedexSettings) -> None:
        self.settings = settings
        self._repository: PokemonRepository | None = None

        from pokedex.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def repository(self) -> PokemonRepository:
        """The configured backend. Exits with ``UNAVAILABLE`` if it cannot be built."""
        if self._repository is None:
            from pokedex.infrastructure.repositories.base import RepositoryUnavailableError
            from pokedex.infrastructure.repositories.factory import build_repository

            try:
                self._repository = build_repository(self.settings)
            except RepositoryUnavailableError:
                self.fail(self._unavailable())
        return self._repository

    def close(self) -> None:
        """Release the repository, if one was opened."""
        if self._repository is not None:
            self._repository.close()
            self._repository = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = self._output_settings()
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            self.fail(result, output)

    def fail(self, result: ServiceResult, output: str | None = None) -> NoReturn:
        """Write a failed result to stderr and exit with code 1."""
        if output is None:
            output = format_result(result, settings=self._output_settings())
        click.echo(output, err=True)
        raise SystemExit(1)

    def _output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def _unavailable(self) -> ServiceResult:
        from pokedex.services.base import MESSAGES
        from pokedex.services.result import ErrorCode, ServiceError, ServiceResult

        backend = self.settings.storage.backend
        logger.debug("Backend %s unavailable", backend)
        return ServiceResult(
            ok=False,
            op="open_repository",
            error=ServiceError(
                code=ErrorCode.UNAVAILABLE,
                message=MESSAGES[ErrorCode.UNAVAILABLE],
                detail={"backend": backend},
            ),
        )
