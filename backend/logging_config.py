"""
logging_config.py — Process-wide logging setup.
Called once from main.py; every other module just asks for a named logger.
"""

import logging
import logging.config

from config import LOG_LEVEL

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": "ext://sys.stdout",
        },
    },
    "loggers": {
        "": {
            "handlers": ["console"],
            "level": LOG_LEVEL.upper(),
        },
        # Quiet noisy libraries
        "httpx": {"level": "WARNING"},
        "sqlalchemy.engine": {"level": "WARNING"},
    },
}


def setup_logging() -> None:
    logging.config.dictConfig(LOGGING_CONFIG)
