"""CLI commands for ironbin.

This package contains all subcommand implementations.
"""

from ironbin.cli.commands import empty, listing, put, restore

__all__ = ["empty", "listing", "put", "restore"]
