"""Logging Infrastructure"""

from .logger_setup import UTCJsonFormatter, setup_logger

__all__ = [
    'UTCJsonFormatter',
    'setup_logger',
]
