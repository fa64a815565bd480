"""Structured logging setup using structlog.

Implements a **dual-renderer pattern**: the same shared processor chain
(context vars, log level, timestamps, stack info) feeds into either a
coloured ConsoleRenderer for local development or a JSONRenderer for
production.  The renderer is selected from the ``APP_ENV`` environment
variable (default ``"development"``), or forced via the ``json_output`` flag.

Log lines go to **stderr**.  The operator CLI prints its run summary and
search hits on stdout, and those stay pipeable while a run logs.

Standard-library ``logging`` is rewired through the same structlog
formatter, so httpx and qdrant-client lines share the format.  Their
per-request chatter is held at WARNING unless the level is DEBUG: one
ingestion run makes dozens of feed, page and embedding requests.

:func:`run_context` tags every line logged inside one ingestion run with
a short ``run_id``, so one run can be filtered out of a shared log.
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from contextlib import contextmanager
from typing import Iterator, TextIO

import structlog

# Third-party loggers that log once per HTTP request at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore", "qdrant_client", "urllib3")


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> structlog.BoundLogger:
    """Configure structlog with environment-appropriate rendering.

    Args:
        log_level: Logging level string (DEBUG, INFO, WARNING, ERROR).
        json_output: Force JSON output. When False, uses console rendering in
                     development and JSON in production (detected via APP_ENV).
        stream: Destination for log lines. Defaults to ``sys.stderr``.

    Returns:
        A configured structlog BoundLogger.
    """
    level = log_level.upper()
    stream = stream or sys.stderr

    # "production" => machine-readable JSON; anything else => console.
    app_env = os.environ.get("APP_ENV", "development")
    use_json = json_output or app_env == "production"

    # Shared processor chain.  contextvars go first so run_id (bound by
    # run_context) lands on every line.
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,                   # Auto-attach exc_info on error()
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if use_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        # Colour only when a terminal is reading.
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            renderer,
        ],
        # Drops events below the level before any processor runs.
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )

    # Bridge stdlib logging through the same pipeline.
    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *shared_processors,
            renderer,
        ],
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()   # Remove default handlers to avoid duplicates
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    chatty_level = logging.DEBUG if level == "DEBUG" else logging.WARNING
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(chatty_level)

    return structlog.get_logger()


@contextmanager
def run_context(run_id: str | None = None) -> Iterator[str]:
    """Bind ``run_id`` to every log line emitted inside the block.

    Yields the id in use (a fresh 8-hex-digit id when none is given).  The
    binding is removed on exit, even when the block raises.
    """
    run_id = run_id or uuid.uuid4().hex[:8]
    with structlog.contextvars.bound_contextvars(run_id=run_id):
        yield run_id
