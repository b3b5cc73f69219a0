"""Logging setup for monthlies."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "monthlies"


def setup_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Route the monthlies logger through rich on stderr.

    Calling this again only changes the level.

    Args:
        level: Level name (e.g. "INFO") or number.

    Returns:
        The package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logger.setLevel(level)

    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
