"""Utility functions for JSON Node Editor."""

from .error_handler import ErrorHandler, handle_error, format_error_message
from .logging_config import setup_logging, get_logger

__all__ = [
    "ErrorHandler",
    "handle_error",
    "format_error_message",
    "setup_logging",
    "get_logger",
]
