"""Minimal logging utilities for docscan.

Example:
    >>> from docscan.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("tokenizing %s", "README.md")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``docscan``.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("engine").name
        'docscan.engine'
    """
    if not (name == "docscan" or name.startswith("docscan.")):
        name = f"docscan.{name}"
    return logging.getLogger(name)
