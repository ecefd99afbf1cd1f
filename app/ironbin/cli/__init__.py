"""CLI package for ironbin.

This package contains the Typer application and all subcommands.
"""

from ironbin.cli.main import app

__all__ = ["app"]
