"""Logging setup for the quantpricer package."""

from __future__ import annotations

import logging

LOGGER_NAME = "quantpricer"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class PackageHandler(logging.StreamHandler):
    """Stream handler installed by :func:`configure_logging`."""

    def __init__(self, stream=None):
        super().__init__(stream)
        self.setFormatter(logging.Formatter(LOG_FORMAT))


def configure_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Attach a stream handler to the package logger and set its level.

    Safe to call more than once; only one handler is ever installed.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    if not any(isinstance(h, PackageHandler) for h in logger.handlers):
        logger.addHandler(PackageHandler())

    return logger
