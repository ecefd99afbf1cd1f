"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import logging
import shlex
import sys
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ironbin.core.theme import build_theme, load_colors


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
_theme = build_theme(load_colors())
console = Console(theme=_theme, color_system=_detect_color_system())
err_console = Console(theme=_theme, stderr=True, color_system=_detect_color_system())


def configure_logging(debug: bool = False) -> None:
    """Route log records to the stderr console.

    Args:
        debug: If True, show DEBUG records; otherwise WARNING and above.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=debug)],
        force=True,
    )


def format_size(size_bytes: int, human_readable: bool = False) -> str:
    """Format a byte count.

    Human-readable sizes use decimal units without a space, like ``ls -h``.

    Args:
        size_bytes: Size in bytes.
        human_readable: If True, scale to the largest fitting unit.

    Returns:
        Formatted size.
    """
    if not human_readable:
        return str(size_bytes)
    if size_bytes < 1000:
        return f"{size_bytes}B"
    size = float(size_bytes)
    for unit in ("kB", "MB", "GB", "TB"):
        size /= 1000
        # Compare what will be printed, so 999.96kB shows as 1.0MB
        if round(size, 1) < 1000:
            return f"{size:.1f}{unit}"
    return f"{size / 1000:.1f}PB"


def format_datetime(value: datetime) -> str:
    """Format a deletion time in the locale's representation."""
    return value.strftime("%c")


def quote_path(path: Path, quote: bool) -> str:
    """Render a path, shell-quoted if requested.

    Args:
        path: Path to render.
        quote: If True, quote the path so it can be pasted into a shell.

    Returns:
        Rendered path.
    """
    if quote:
        return shlex.quote(str(path))
    return str(path)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")
