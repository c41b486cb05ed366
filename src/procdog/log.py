"""Logging setup for the command line."""

import logging
import sys

from .events import TRACE

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def verbosity_level(verbosity: int, quiet: bool = False) -> int:
    """Map -v count / -q to a logging level."""
    if quiet:
        return logging.WARNING
    if verbosity <= 0:
        return logging.INFO
    if verbosity == 1:
        return logging.DEBUG
    return TRACE


def configure_logging(verbosity: int = 0, quiet: bool = False) -> None:
    """Send procdog logs to stderr; the child keeps stdout to itself."""
    level = verbosity_level(verbosity, quiet)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(DEBUG_LOG_FORMAT if level < logging.DEBUG else LOG_FORMAT))

    logger = logging.getLogger("procdog")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
