"""Logging setup for the API process."""

from __future__ import annotations

import logging.config

from carhire.core.config import settings


def configure_logging(level: str | None = None) -> None:
    """Send every ``carhire.*`` logger to stderr at the configured level."""
    level = (level or settings.log_level).upper()
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
        "loggers": {
            "carhire": {"handlers": ["console"], "level": level, "propagate": False},
        },
    })
