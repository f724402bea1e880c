"""Logging configuration for portaudit.

Console logging to stderr with ISO 8601 timestamps. The verbosity count from
the command line selects the level of the ``portaudit`` logger hierarchy;
third-party loggers stay at WARNING.
"""

import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "portaudit"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def level_for_verbosity(verbosity: int) -> int:
    """Map ``-v`` occurrences to a logging level."""
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def setup_logging(
    verbosity: int = 0,
    stream: Optional[TextIO] = None,
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
) -> logging.Logger:
    """Set up the package logger with a single console handler.

    Args:
        verbosity: Number of ``-v`` flags given on the command line
        stream: Destination stream, stderr by default
        log_format: Custom log format string
        date_format: Custom date format string (ISO 8601 by default)

    Returns:
        The configured ``portaudit`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level_for_verbosity(verbosity))

    # Replace handlers so repeated CLI invocations in one process do not stack
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    formatter = logging.Formatter(
        log_format or DEFAULT_FORMAT,
        datefmt=date_format or DEFAULT_DATE_FORMAT,
    )
    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    logger.propagate = False

    return logger
