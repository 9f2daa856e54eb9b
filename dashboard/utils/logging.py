"""
Logging utilities for the invoice dashboard backend.

Rules:
- NEVER log passwords, access tokens or refresh tokens
- NEVER log raw form payloads (they carry credentials on /login)
- Log identifiers (invoice_id, user_id) and outcomes, not values
"""

import logging
from typing import Optional

from dashboard.config import settings


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger for the specified module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (defaults to settings.LOG_LEVEL)

    Returns:
        Configured logger instance

    Usage:
        >>> from dashboard.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Invoice created")
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.getLevelName(settings.LOG_LEVEL.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger.setLevel(level)

    # Avoid duplicate handlers
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
