"""Route pokedex log records to stderr through structlog.

Modules log with plain ``logging.getLogger(__name__)``. A single stderr
handler on the root logger renders every record with structlog's
``ProcessorFormatter``: readable console lines by default, one JSON
object per line with ``--log-json``. Stdout is left to command output.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor

# Chatty dependencies held at WARNING even under --verbose.
_QUIET_LIBRARIES = ("sqlalchemy", "urllib3", "requests")


def _enrich() -> list[Processor]:
    """Fields added to every record before rendering."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _stderr_handler(*, log_json: bool) -> logging.Handler:
    final: Processor
    if log_json:
        final = structlog.processors.JSONRenderer()
    else:
        final = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_enrich(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, final],
        )
    )
    return handler


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install the stderr handler and set logger levels.

    Safe to call repeatedly: the root logger's handlers are replaced, not
    appended to. With *verbose* the ``pokedex`` loggers emit DEBUG;
    otherwise only WARNING and above reach the terminal.
    """
    structlog.configure(
        processors=[*_enrich(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers[:] = [_stderr_handler(log_json=log_json)]
    root.setLevel(logging.WARNING)

    logging.getLogger("pokedex").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)
