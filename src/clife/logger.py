"""Application logging utilities."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = 'clife'


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Send clife's log records to stderr; everything with verbose, only warnings and errors without.

    Calling this again replaces the handler, so it always writes to the current ``sys.stderr``.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    ))
    logger.addHandler(handler)

    logger.debug('Logger initialised at %s', logging.getLevelName(logger.level))
    return logger
