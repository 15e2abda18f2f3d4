"""Logging setup — structlog rendering over the stdlib ``logging`` tree.

Modules log through ``logging.getLogger(__name__)``. One handler on the
``locus`` logger runs those records (and structlog's own) through a shared
processor chain, then renders them to stderr:

- console lines by default, colored only when stderr is a terminal
- JSON lines with ``--log-json``

The root logger is left alone, so third-party libraries keep whatever
configuration the host process gave them.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog
from structlog.types import Processor

PACKAGE_LOGGER = "locus"


def _pre_chain() -> list[Processor]:
    """Processors shared by structlog loggers and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _build_handler(*, log_json: bool, stream: TextIO) -> logging.Handler:
    final: list[Processor] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if log_json:
        final += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        final.append(structlog.dev.ConsoleRenderer(colors=stream.isatty()))

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(foreign_pre_chain=_pre_chain(), processors=final)
    )
    return handler


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route ``locus.*`` logging through structlog.

    Safe to call once per CLI invocation; the previous handler is replaced,
    not stacked.

    Args:
        verbose: DEBUG for ``locus.*`` loggers; WARNING otherwise.
        log_json: JSON lines instead of console output.
        stream: Destination for log lines (stderr when omitted).
    """
    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    package = logging.getLogger(PACKAGE_LOGGER)
    package.handlers = [_build_handler(log_json=log_json, stream=stream or sys.stderr)]
    package.propagate = False
    package.setLevel(logging.DEBUG if verbose else logging.WARNING)


def bind_command(name: str | None) -> None:
    """Tag every log line of this invocation with the running subcommand."""
    structlog.contextvars.clear_contextvars()
    if name:
        structlog.contextvars.bind_contextvars(command=name)
