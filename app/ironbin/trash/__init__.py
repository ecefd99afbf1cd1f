"""Trash store engine.

This package implements a FreeDesktop.org trash: the ``.trashinfo``
record format, the directory sizes cache, identifier allocation, and
the store that lists, puts, restores and empties items.
"""

from ironbin.trash.dir_sizes import DirSize, DirSizes, load_dir_sizes
from ironbin.trash.errors import (
    MalformedTrashInfoError,
    MissingPayloadError,
    PathNotFoundError,
    RestoreConflictError,
    TrashError,
)
from ironbin.trash.info import TRASHINFO_EXTENSION, TrashInfo
from ironbin.trash.models import (
    EntryResult,
    TrashEmptyReport,
    TrashEntry,
    TrashPutReport,
    TrashRestoreReport,
)
from ironbin.trash.store import Trash

__all__ = [
    "TRASHINFO_EXTENSION",
    "DirSize",
    "DirSizes",
    "EntryResult",
    "MalformedTrashInfoError",
    "MissingPayloadError",
    "PathNotFoundError",
    "RestoreConflictError",
    "Trash",
    "TrashEmptyReport",
    "TrashEntry",
    "TrashError",
    "TrashInfo",
    "TrashPutReport",
    "TrashRestoreReport",
    "load_dir_sizes",
]
