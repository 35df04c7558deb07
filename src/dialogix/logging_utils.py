from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """
    Configure the package logger with a single stderr handler.

    Safe to call repeatedly; existing handlers on the package logger are replaced
    so repeated CLI invocations in one process do not duplicate output.
    """
    logger = logging.getLogger("dialogix")
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.handlers = []

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger
