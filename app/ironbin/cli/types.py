"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

import logging
import os
import sys
from enum import Enum
from pathlib import Path

from ironbin.trash.models import TrashEntry
from ironbin.trash.store import Trash

logger = logging.getLogger(__name__)


class SortOrder(str, Enum):
    """Sort orders for listed entries.

    Attributes:
        PATH: Original path, ascending.
        DATE: Deletion time, most recent first.
    """

    PATH = "path"
    DATE = "date"


def collect_entries(trash: Trash) -> list[TrashEntry]:
    """List the entries of a trash, discarding those in error.

    Args:
        trash: Trash to list.

    Returns:
        Entries that could be read, in directory order.
    """
    entries: list[TrashEntry] = []
    for result in trash.entries():
        if result.entry is None:
            logger.debug("Discarding %s: %s", result.trashinfo_path, result.error)
            continue
        entries.append(result.entry)
    return entries


def sort_entries(entries: list[TrashEntry], order: SortOrder) -> list[TrashEntry]:
    """Sort entries.

    Entries deleted at the same time are ordered by identifier, so the
    order does not depend on the directory listing.

    Args:
        entries: Entries to sort.
        order: Sort order.

    Returns:
        New sorted list.
    """
    if order == SortOrder.DATE:
        return sorted(entries, key=lambda e: (e.deletion_time, e.identifier), reverse=True)
    return sorted(entries, key=lambda e: (str(e.original_path), e.identifier))


def absolute_path(path: Path) -> Path:
    """Make a path absolute against the current directory, without resolving it.

    Trashed paths no longer exist, so they cannot be canonicalized.
    """
    return Path(os.path.abspath(path))


def should_prompt(requested: bool) -> bool:
    """Check if a confirmation prompt should be shown.

    Prompts are only shown on an interactive terminal.
    """
    return requested and sys.stdout.isatty()
