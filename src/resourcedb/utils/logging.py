"""Logging helpers shared by every resourcedb module."""

import logging
from typing import Any, Dict, Optional

ROOT_LOGGER_NAME = "resourcedb"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler: Optional[logging.Handler] = None


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module (use with __name__)."""
    return logging.getLogger(name)


def configure_logging(level: str | int = "INFO", fmt: Optional[str] = None) -> logging.Logger:
    """
    Install a single stream handler on the package logger.

    Calling this more than once replaces the handler instead of stacking them.

    Args:
        level: Level name (DEBUG, INFO, ...) or numeric level
        fmt: Optional format string. Defaults to DEFAULT_FORMAT.

    Returns:
        The configured package logger
    """
    global _handler

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(level)
    return logger


def configure_logging_from_config(config: Dict[str, Any]) -> logging.Logger:
    """Configure the package logger from the `logging` section of a loaded config."""
    return configure_logging(config["logging"]["level"])
