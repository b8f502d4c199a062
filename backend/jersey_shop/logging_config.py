"""Logging setup shared by the API process and the maintenance scripts."""

import logging
import logging.config
from typing import Any, Dict, Optional

from .config import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def build_logging_config(level: str) -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": LOG_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "jersey_shop": {"handlers": ["console"], "level": level, "propagate": False},
            "sqlalchemy.engine": {"handlers": ["console"], "level": "WARNING", "propagate": False},
        },
        "root": {"handlers": ["console"], "level": "WARNING"},
    }


def setup_logging(level: Optional[str] = None) -> None:
    level = (level or get_settings().log_level).upper()
    logging.config.dictConfig(build_logging_config(level))
    logging.getLogger(__name__).debug("Logging configured at %s", level)
