"""Minimal logging utilities for podrender.

Example:
    >>> from podrender.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Parsing document")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "podrender." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("mymodule").name
        'podrender.mymodule'
    """
    if not (name == "podrender" or name.startswith("podrender.")):
        name = f"podrender.{name}"
    return logging.getLogger(name)
