"""Logging for Tallymark.

Library modules log under the ``tallymark`` namespace and never install
handlers; the command line calls configure_logging() once.

Example:
    >>> from tallymark.utils.logger import get_logger
    >>> logger = get_logger("rewriter")
    >>> logger.name
    'tallymark.rewriter'
"""

from __future__ import annotations

import logging

ROOT_LOGGER = "tallymark"

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` inside the tallymark namespace.

    Module names (``tallymark.manager``) are used as-is; bare names are
    prefixed, so hooks and scripts land under the same parent.
    """
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(verbose: bool = False) -> None:
    """Send tallymark records to stderr; DEBUG lists every fixed anchor."""
    logging.basicConfig(format=LOG_FORMAT)
    get_logger(ROOT_LOGGER).setLevel(logging.DEBUG if verbose else logging.INFO)
