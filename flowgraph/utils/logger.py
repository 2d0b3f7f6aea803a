"""Logging utilities."""

import logging
import sys


def get_logger(name: str | None = None, level: int | str = logging.INFO) -> logging.Logger:
    """Get a logger that writes to stdout.

    The handler is attached once per logger name, so calling this
    repeatedly (e.g. on app reload) does not duplicate output.
    """
    logger = logging.getLogger(name or "flowgraph")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
