"""Logging setup.

Every component logs through a child of the "cmdcomplete" logger, which
holds the handlers and the level. `init_logger` can be called again to change
them, e.g. once the command line options are known.
"""

import logging
import os

from .ansi import BOLD, DIM, RED, YELLOW, colorize, should_colorize
from .constants import DEBUG_ENV_VAR

__all__ = ["PACKAGE_LOGGER", "ScreenFormatter", "get_logger", "init_logger"]

PACKAGE_LOGGER = "cmdcomplete"

LEVEL_STYLES = {
    logging.WARNING: (YELLOW, DIM),
    logging.ERROR: (RED, DIM),
    logging.CRITICAL: (RED, BOLD),
}


class ScreenFormatter(logging.Formatter):
    """Terminal output: bare messages colored by level, component names in debug mode."""

    def __init__(self, verbose: bool = False) -> None:
        super().__init__("%(name)s - %(message)s" if verbose else "%(message)s")
        self.use_colors = should_colorize()

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if self.use_colors:
            return colorize(text, *LEVEL_STYLES.get(record.levelno, ()))
        return text


def init_logger(filename: str | None = None, debug: bool = False) -> logging.Logger:
    """Configure the package logger, replacing any previous setup.

    Args:
        filename: Also write every record to this file
        debug: Log debug messages, also enabled by the CMDCOMPLETE_DEBUG environment variable

    Returns:
        The package logger
    """
    debug = debug or bool(os.environ.get(DEBUG_ENV_VAR))
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.propagate = False

    screen = logging.StreamHandler()
    screen.setFormatter(ScreenFormatter(verbose=debug))
    logger.addHandler(screen)
    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s :: %(message)s"))
        logger.addHandler(file_handler)
    return logger


def get_logger(component: str) -> logging.Logger:
    """Return the logger of a component, e.g. "completer" gives "cmdcomplete.completer"."""
    return logging.getLogger(f"{PACKAGE_LOGGER}.{component}")
