"""Centralized logging configuration."""

import logging
from typing import Optional


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a configured logger instance.

    Args:
        name: Logger name, usually ``__name__``
        level: Log level name. Falls back to the configured AUTHSHIELD_LOG_LEVEL.
    """
    if level is None:
        from authshield.common.config.settings import get_config
        level = get_config().log_level.value

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level))

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
