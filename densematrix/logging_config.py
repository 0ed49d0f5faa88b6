"""Logging setup for scripts built on :mod:`densematrix`.

The library itself only emits ``DEBUG`` records on module loggers; handlers
are attached here, by the application.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Configure the ``densematrix`` namespace logger.

    Args:
        level: Logging level (e.g. ``logging.DEBUG``)
        log_file: Optional path that receives a copy of the records
    """

    logger = logging.getLogger("densematrix")
    logger.setLevel(level)

    # Avoid duplicated records when called twice
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
