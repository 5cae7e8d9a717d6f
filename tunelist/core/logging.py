# ============================================================================
# FILE: tunelist/core/logging.py
# ============================================================================
import logging.config
from typing import Optional
from tunelist.config import settings


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging for the API process"""
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "root": {
            "handlers": ["console"],
            "level": (level or settings.LOG_LEVEL).upper(),
        },
    })
