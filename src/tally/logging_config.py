"""Logging configuration for the ``tally`` package.

Library modules only call ``logging.getLogger(__name__)``; the CLI calls
``configure_logging`` once at startup to attach a single stderr handler to
the package logger.
"""

import logging
import sys
from typing import IO

PACKAGE_LOGGER = "tally"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

# Library default: stay silent unless the host application configures logging
logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def parse_level(level: int | str) -> int:
    """Convert a level name or number to a logging level.

    Raises:
        ValueError: If the name is not a known logging level
    """
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level '{level}'")
    return numeric


def configure_logging(level: int | str = logging.WARNING, stream: IO[str] = sys.stderr) -> logging.Logger:
    """Attach one stream handler to the package logger.

    Calling it again replaces the handler instead of adding a second one.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(parse_level(level))
    return logger
