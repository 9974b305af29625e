"""
Logging setup for the console service.
"""

import logging
from logging.config import dictConfig

from tenant_console.config import get_settings


def setup_logging() -> None:
    """
    Configure the root logger with a single console handler.

    Call once at application startup, before the first log call.
    """
    settings = get_settings()
    level = settings.log_level.upper()

    dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s | %(levelname)-5s | %(name)s | %(message)s"
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "level": level,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": level,
        },
    })

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
