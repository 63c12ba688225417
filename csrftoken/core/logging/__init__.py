"""
Logging configuration module for structured logging.

This module configures logging using structlog. It provides structured
logging with JSON formatting for production and human-readable console
output for development.

Nothing here runs at import time. Applications call `configure_logging`
(or `configure_logging_from_settings`, which reads LOG_LEVEL and LOG_JSON)
once during startup; library modules only ask for a logger.
"""

import logging
from typing import Optional

import structlog

from csrftoken.core.config.settings import CsrfSettings, get_settings


def configure_logging(log_level: str = "INFO", json_logs: bool = False) -> None:
    """
    Configures structlog and the standard library root logger.

    Sets up:
    1. ISO format timestamps
    2. Log level inclusion
    3. JSON rendering when `json_logs` is true, console rendering otherwise
    4. Standard library logger factory and bound logger wrapper
    5. Logger caching
    """
    logging.basicConfig(format="%(message)s", level=log_level.upper())

    processors = [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_logging_from_settings(settings: Optional[CsrfSettings] = None) -> None:
    """Configure logging from LOG_LEVEL and LOG_JSON.

    Args:
        settings: Loaded settings. Defaults to the process-wide `get_settings()`.
    """
    settings = settings or get_settings()
    configure_logging(log_level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
