"""Utility modules for ironbin.

This module exports commonly used utility functions.
"""

from ironbin.utils.formatting import (
    configure_logging,
    console,
    err_console,
    format_datetime,
    format_size,
    print_error,
    print_info,
    quote_path,
)
from ironbin.utils.fs import remove_path, scandir_or_empty

__all__ = [
    "configure_logging",
    "console",
    "err_console",
    "format_datetime",
    "format_size",
    "print_error",
    "print_info",
    "quote_path",
    "remove_path",
    "scandir_or_empty",
]
