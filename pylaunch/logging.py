"""Logging helpers for pylaunch."""

from __future__ import annotations

import logging

_LOGGER_NAME = "pylaunch"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the pylaunch hierarchy."""
    if name and name != _LOGGER_NAME and not name.startswith(f"{_LOGGER_NAME}."):
        name = f"{_LOGGER_NAME}.{name}"
    return logging.getLogger(name or _LOGGER_NAME)


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Attach a console handler to the pylaunch logger."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Avoid duplicate output when main() runs more than once in a process.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[pylaunch] %(levelname)s %(message)s"))
    logger.addHandler(handler)
    return logger


__all__ = ["configure_logging", "get_logger"]
