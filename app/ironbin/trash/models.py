"""Trash domain models.

Read-only values produced by the trash store: listed entries and the
reports returned by mutating operations.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from ironbin.trash.errors import TrashError


@dataclass(frozen=True, slots=True)
class TrashEntry:
    """An item currently in the trash.

    Attributes:
        identifier: Name shared by the record and the payload.
        original_path: Absolute path the item had before it was trashed.
        deletion_time: Local time of the trashing, to the second.
        size: Size in bytes. Best-effort for directories (0 if unknown).
    """

    identifier: str
    original_path: Path
    deletion_time: datetime
    size: int


@dataclass(frozen=True, slots=True)
class EntryResult:
    """Outcome of reading one ``.trashinfo`` record while listing.

    Exactly one of ``entry`` and ``error`` is set.

    Attributes:
        trashinfo_path: Path of the record that was read.
        entry: The entry, if it could be built.
        error: The failure that prevented building it, otherwise.
    """

    trashinfo_path: Path
    entry: TrashEntry | None = None
    error: TrashError | None = None

    def __post_init__(self) -> None:
        """Validate that exactly one outcome is set."""
        if (self.entry is None) == (self.error is None):
            msg = "EntryResult needs exactly one of entry and error"
            raise ValueError(msg)

    @property
    def success(self) -> bool:
        """Check if the entry could be built."""
        return self.entry is not None


@dataclass(frozen=True, slots=True)
class TrashPutReport:
    """Result of trashing a path.

    Attributes:
        path: Canonical path that was trashed.
        deletion_time: Deletion time recorded for it.
    """

    path: Path
    deletion_time: datetime


@dataclass(frozen=True, slots=True)
class TrashRestoreReport:
    """Result of restoring an item.

    Attributes:
        path: Path the item was restored to.
        deletion_time: Deletion time the item had been recorded with.
    """

    path: Path
    deletion_time: datetime


@dataclass(frozen=True, slots=True)
class TrashEmptyReport:
    """Result of emptying the trash.

    Attributes:
        entry_count: Number of payloads removed.
        size: Bytes freed. Not computed, always 0.
    """

    entry_count: int
    size: int = 0
