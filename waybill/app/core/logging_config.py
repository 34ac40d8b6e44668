"""
Logging setup.

Configures the root logger once at startup. Modules keep using
logging.getLogger(...) and pass structured context through `extra=`.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Map config values onto logging levels; unknown values fall back to INFO
_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def resolve_level(level: str) -> int:
    return _LEVELS.get((level or "").lower(), logging.INFO)


def configure_logging(level: str) -> None:
    """
    Install a stream handler on the root logger.

    Calling it again only adjusts the level, so reloads in development do not
    stack handlers.
    """
    root = logging.getLogger()
    root.setLevel(resolve_level(level))

    if not any(getattr(h, "_waybill", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._waybill = True
        root.addHandler(handler)
