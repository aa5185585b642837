"""Structured logging setup using structlog."""

from __future__ import annotations

import logging
import sys
from typing import IO

import structlog


def setup_logging(*, json: bool = False, level: str = "INFO", stream: IO[str] | None = None) -> None:
    """Configure structlog and the stdlib root logger.

    Parameters
    ----------
    json:
        If *True*, output JSON lines (suitable when the builder runs inside
        a connector).  If *False* (the default), use a human-friendly
        console renderer.
    level:
        Root log level name (e.g. ``"DEBUG"``, ``"INFO"``).
    stream:
        Where log lines go.  Defaults to ``sys.stderr``, which keeps stdout
        free for the CLI's JSON output.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())
