"""Logging helpers for the Cypher DSL."""

from __future__ import annotations

import logging
from typing import Optional

import structlog

from cypherdsl import config

__all__ = ["setup_logging"]


def setup_logging(level: Optional[str] = None) -> None:
    """Configure structlog on top of standard logging.

    Args:
        level: Root log level name. Falls back to ``settings.LOG_LEVEL``.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.render_to_log_kwargs,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel((level or config.settings.LOG_LEVEL).upper())
    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
        )
        root_logger.addHandler(handler)
