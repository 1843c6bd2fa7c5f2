"""Minimal logging utilities for pspretty.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from pspretty.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Pretty-printing script")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "pspretty." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'pspretty.mymodule'
    """
    # Ensure pspretty prefix for consistent namespacing
    if not (name == "pspretty" or name.startswith("pspretty.")):
        name = f"pspretty.{name}"
    return logging.getLogger(name)
