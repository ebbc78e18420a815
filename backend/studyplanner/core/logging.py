"""Centralized logging configuration."""
from __future__ import annotations

import logging
from logging.config import dictConfig

from studyplanner.core.context import get_request_id, get_request_path


class RequestContextFilter(logging.Filter):
    """Stamp request_id and request_path onto every log record."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - minimal logic
        record.request_id = get_request_id() or "-"
        record.request_path = get_request_path() or "-"
        return True


def configure_logging(*, log_level: str = "INFO", debug: bool = False) -> None:
    """Configure application logging once at startup."""
    if getattr(configure_logging, "_configured", False):
        return

    level = "DEBUG" if debug else log_level.upper()
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s %(request_path)s | %(message)s",
                }
            },
            "filters": {
                "request_context": {
                    "()": "studyplanner.core.logging.RequestContextFilter",
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "level": level,
                    "filters": ["request_context"],
                }
            },
            "loggers": {
                # The SDK logs every HTTP retry at INFO.
                "openai": {"level": "WARNING"},
                "httpx": {"level": "WARNING"},
            },
            "root": {
                "handlers": ["console"],
                "level": level,
            },
        }
    )

    logging.getLogger(__name__).debug("Logging configured at %s", level)
    setattr(configure_logging, "_configured", True)
