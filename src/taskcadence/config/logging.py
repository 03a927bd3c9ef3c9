"""structlog configuration for taskcadence.

Two output modes, both written to stderr so stdout stays pipeable:
- Human (default): console renderer, colored only on a TTY
- JSON (--log-json): one JSON object per line

Stdlib loggers under ``taskcadence`` share the same formatter, so
``logging.getLogger(__name__)`` and ``structlog.get_logger()`` render alike.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

PACKAGE_LOGGER = "taskcadence"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog processors and output routing.

    Safe to call repeatedly: the root handler is replaced, never stacked.

    Args:
        verbose: Enable DEBUG for the taskcadence loggers. Otherwise WARNING+.
        log_json: Use JSON renderer instead of console renderer.
        stream: Destination; defaults to ``sys.stderr`` at call time.
    """
    out = stream or sys.stderr
    shared = _shared_processors()

    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=out.isatty())

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(out)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
