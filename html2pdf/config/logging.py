"""
Logging Configuration
====================

Structured logging for the conversion service. structlog renders JSON in
production and a console layout elsewhere; the standard library handler
carries uvicorn and Playwright records through the same stream.

Values bound with ``structlog.contextvars`` (the request middleware binds
``request_id``) are merged into every log line emitted while they are bound.
"""

import logging
import logging.config
import sys
from typing import Dict, Any, List, Optional, TYPE_CHECKING
import structlog
from structlog.types import Processor

from .settings import get_settings

if TYPE_CHECKING:
    from .settings import Settings

# Third-party loggers and the level they are held at outside the testing environment.
LIBRARY_LOG_LEVELS = {
    "uvicorn": "INFO",
    "uvicorn.access": "INFO",
    "uvicorn.error": "INFO",
    "playwright": "WARNING",
    "asyncio": "WARNING",
}


def shared_processors() -> List[Processor]:
    """Processors applied to every structlog event before rendering."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(settings: "Settings") -> Processor:
    if settings.is_production:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def setup_logging(settings: Optional["Settings"] = None) -> None:
    """Configure structlog and the standard library handlers from settings."""
    settings = settings or get_settings()

    structlog.configure(
        processors=[*shared_processors(), _renderer(settings)],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(get_logging_config(settings))


def get_logging_config(settings: "Settings") -> Dict[str, Any]:
    """Get logging configuration dictionary."""
    library_loggers: Dict[str, Any] = {
        name: {"level": level, "handlers": ["console"], "propagate": False}
        for name, level in LIBRARY_LOG_LEVELS.items()
    }
    if settings.environment == "testing":
        # Access lines drown out test output.
        library_loggers["uvicorn.access"]["level"] = "WARNING"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {
                "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": settings.log_level,
                "formatter": "json" if settings.is_production else "standard",
                "stream": sys.stdout,
            },
        },
        "loggers": {
            "": {"level": settings.log_level, "handlers": ["console"], "propagate": False},
            **library_loggers,
        },
    }


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
