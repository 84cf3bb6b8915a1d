"""Console logger backed by Rich."""

from __future__ import annotations

import logging
import os

from rich.logging import RichHandler

PACKAGE_LOGGER = "spinlens"

_loggers: dict[str, logging.Logger] = {}


def _configure_package_logger() -> logging.Logger:
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    level = os.getenv("SPINLENS_LOG_LEVEL", "WARNING").upper()
    package_logger.setLevel(getattr(logging, level, logging.WARNING))

    if not any(isinstance(handler, RichHandler) for handler in package_logger.handlers):
        console = RichHandler(rich_tracebacks=True, show_path=False)
        console.setLevel(logging.DEBUG)
        package_logger.addHandler(console)
    return package_logger


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Return a cached logger; only the ``spinlens`` parent carries a handler.

    Module loggers (``spinlens.*``) inherit the level from SPINLENS_LOG_LEVEL
    and hand their records to the parent.
    """
    if name in _loggers:
        return _loggers[name]

    package_logger = _configure_package_logger()
    logger = package_logger if name == PACKAGE_LOGGER else logging.getLogger(name)

    _loggers[name] = logger
    return logger
