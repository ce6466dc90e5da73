"""Minimal logging utilities for mdguard.

Provides a get_logger function that wraps the standard library logging.
The package installs no handlers; applications configure output.

Example:
    >>> from mdguard.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Dropping <script>")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under "mdguard.".

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("pages").name
        'mdguard.pages'
        >>> get_logger("mdguard.sanitizer").name
        'mdguard.sanitizer'
    """
    if not (name == "mdguard" or name.startswith("mdguard.")):
        name = f"mdguard.{name}"
    return logging.getLogger(name)
