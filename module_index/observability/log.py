"""Loguru sink configuration for command-line use."""

import sys

from loguru import logger

LOG_FORMAT = "<level>{level: <8}</level> | {message}"


def configure_logging(level: str = "WARNING") -> int:
    """Replace loguru's default sink with a single stderr sink.

    Args:
        level: Minimum level to emit (e.g. "DEBUG", "INFO", "WARNING")

    Returns:
        The id of the added sink
    """
    logger.remove()
    return logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
