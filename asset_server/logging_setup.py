"""Central logging configuration for the asset server.

Applies a root stdout handler so all module loggers emit logs without
per-module setup. The uvicorn loggers share the handler and the configured
level; a root logger that already has handlers is left alone.
"""
from __future__ import annotations
import logging
from logging.config import dictConfig

_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"
_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def build_logging_config(level: str = "INFO") -> dict:
    """Return a `dictConfig` mapping with every logger set to `level`."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": _FORMAT}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {
            name: {"level": level, "handlers": ["console"], "propagate": False}
            for name in _SERVER_LOGGERS
        },
    }


def configure_logging(level: str = "INFO") -> None:
    """Configure application-wide logging once.

    If the root logger already has handlers, return to prevent duplicate output
    (important under reloaders and test runners).
    """
    root = logging.getLogger()
    if root.handlers:
        return
    dictConfig(build_logging_config(level))


__all__ = ["build_logging_config", "configure_logging"]
