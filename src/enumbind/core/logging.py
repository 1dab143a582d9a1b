"""Structured logging configuration with JSON output and context injection."""

import logging
import logging.config
from typing import Optional

import structlog

from enumbind.core.config import Settings, get_settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure structlog and route stdlib logging through it.

    Libraries never call this on import; applications opt in.
    """
    settings = settings or get_settings()

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            # Model/column bound during a declaration
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.log_level)
        ),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "processor": renderer,
                },
            },
            "handlers": {
                "default": {
                    "level": settings.log_level,
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {
                "enumbind": {
                    "handlers": ["default"],
                    "level": settings.log_level,
                    "propagate": False,
                }
            },
        }
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structlog logger for a module."""
    return structlog.get_logger(name)
