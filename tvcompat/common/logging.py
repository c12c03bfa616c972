# tvcompat/common/logging.py
from __future__ import annotations

import logging


def get_logger(name: str = "tvcompat", level: int | None = None) -> logging.Logger:
    """
    Return the package logger. Diagnostics go to stderr so they never mix
    with the report on stdout.
    If no handlers are set, we add a basicConfig once.
    """
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    if level is not None:
        logger.setLevel(level)
    return logger


def configure_logging(level_name: str) -> None:
    """Apply a textual level (e.g. 'debug') to the package logger."""
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    get_logger(level=level)
