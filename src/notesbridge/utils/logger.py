"""Logging helper for notesbridge.

Wraps the standard library logging so every logger lives under the
``notesbridge`` namespace. The library never installs handlers; the CLI
configures output.

Example:
    >>> from notesbridge.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Running script")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("mymodule").name
        'notesbridge.mymodule'
    """
    if not (name == "notesbridge" or name.startswith("notesbridge.")):
        name = f"notesbridge.{name}"
    return logging.getLogger(name)
