"""Logging configuration for the todo service."""
from __future__ import annotations

import logging
import sys

LOGGER_NAME = "todo_api"

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# PUBLIC_INTERFACE
def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a console handler to the package logger and set its level.

    Calling this more than once replaces the handler instead of stacking
    duplicates, so building several apps in one process (tests) stays quiet.

    Args:
        level: Logging level name, e.g. "DEBUG" or "INFO". Unknown names fall back to INFO.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    resolved = logging.getLevelName(level.upper()) if level else logging.INFO
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logger.setLevel(resolved)

    for handler in list(logger.handlers):
        if getattr(handler, "_todo_api_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT))
    handler._todo_api_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
