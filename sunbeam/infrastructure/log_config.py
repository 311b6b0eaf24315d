"""Structured logging setup.

Routes structlog through the standard library so log level filtering
applies to both, and renders JSON lines (or console output when
``log_json`` is off).
"""

import logging
import sys

import structlog

from sunbeam.infrastructure.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure structlog and stdlib logging.

    Args:
        settings: Application settings (log level and renderer).
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(message)s",
        stream=sys.stderr,
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
