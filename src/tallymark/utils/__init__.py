"""Utility modules for Tallymark.

Provides:
- logger: get_logger and configure_logging
"""

from tallymark.utils.logger import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
