"""Structured logging for dockside.

Importing this module never touches global logging state: the host that
embeds dockside owns the structlog and stdlib configuration. A host with
no logging of its own can call configure_logging() once at startup.
"""

from __future__ import annotations

import logging
import os
import sys

import structlog

logger: structlog.stdlib.BoundLogger = structlog.get_logger("dockside")


def configure_logging(level: str | None = None) -> None:
    """Console logging to stderr. *level* defaults to ``LOG_LEVEL``, then INFO."""
    level_name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    numeric = getattr(logging, level_name, logging.INFO)

    # Configure stdlib root logger first so structlog's filter_by_level works
    logging.basicConfig(level=numeric, format="%(message)s", stream=sys.stderr)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
