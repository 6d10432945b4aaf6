"""Log output for the confspec CLI.

Library modules only ever call ``logging.getLogger(__name__)``.  The CLI
calls :func:`configure_logging` once, which sends every stdlib record
through structlog's ``ProcessorFormatter`` so that library events and CLI
events share one format: a console renderer for people, or JSON lines
(``--log-json``) for log collectors.  Output goes to stderr so it never
mixes with command results on stdout.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

LOGGER_NAME = "confspec"


def _pre_chain() -> list[structlog.types.Processor]:
    """Processors applied to stdlib records and structlog events alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool, stream: TextIO) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route log records to *stream* (stderr by default).

    Args:
        verbose: Show confspec's DEBUG events (specification sealed,
            validation finished, version selected).  Otherwise WARNING+.
        log_json: Render JSON lines instead of console output.
        stream: Destination; mainly for tests.
    """
    stream = stream or sys.stderr
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json, stream),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)
    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG if verbose else logging.WARNING)
