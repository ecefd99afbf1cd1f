"""Trash store.

Manages a FreeDesktop.org trash directory: an ``info`` directory of
``.trashinfo`` records and a ``files`` directory of payloads, linked by
a shared identifier. A fresh trash has no on-disk footprint until the
first item is put in it.
"""

import logging
import os
import stat
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

from ironbin.core.paths import get_default_trash_dir
from ironbin.trash.dir_sizes import DirSizes, load_dir_sizes
from ironbin.trash.errors import (
    MalformedTrashInfoError,
    MissingPayloadError,
    PathNotFoundError,
    RestoreConflictError,
    TrashError,
)
from ironbin.trash.identifier import allocate
from ironbin.trash.info import TRASHINFO_EXTENSION, TrashInfo
from ironbin.trash.models import (
    EntryResult,
    TrashEmptyReport,
    TrashEntry,
    TrashPutReport,
    TrashRestoreReport,
)
from ironbin.utils.fs import remove_path, scandir_or_empty

logger = logging.getLogger(__name__)


class Trash:
    """A trash directory.

    Storage layout::

        <base_dir>/info/<identifier>.trashinfo
        <base_dir>/files/<identifier>
        <base_dir>/directorysizes

    The directory sizes cache is read at most once per instance, on the
    first listing that needs it, and is never written.

    Attributes:
        _base_dir: Root of the trash.
        _dir_sizes: Cached directory sizes, None until first loaded.
    """

    INFO_DIRNAME = "info"
    FILES_DIRNAME = "files"
    DIRECTORYSIZES_FILENAME = "directorysizes"

    def __init__(self, base_dir: Path) -> None:
        """Initialize a trash rooted at the given directory.

        Args:
            base_dir: Root of the trash. Need not exist yet.
        """
        self._base_dir = base_dir
        self._dir_sizes: DirSizes | None = None

    @classmethod
    def default(cls) -> "Trash":
        """Create the home trash ($XDG_DATA_HOME/Trash).

        Returns:
            Trash rooted at the default base directory.
        """
        return cls(get_default_trash_dir())

    @property
    def base_dir(self) -> Path:
        """Root directory of the trash."""
        return self._base_dir

    @property
    def info_dir(self) -> Path:
        """Directory holding the ``.trashinfo`` records."""
        return self._base_dir / self.INFO_DIRNAME

    @property
    def files_dir(self) -> Path:
        """Directory holding the trashed payloads."""
        return self._base_dir / self.FILES_DIRNAME

    @property
    def directorysizes_path(self) -> Path:
        """Path to the directory sizes cache."""
        return self._base_dir / self.DIRECTORYSIZES_FILENAME

    @property
    def dir_sizes(self) -> DirSizes:
        """Cached directory sizes, loaded on first access."""
        if self._dir_sizes is None:
            self._dir_sizes = load_dir_sizes(self.directorysizes_path)
        return self._dir_sizes

    def trashinfo_path(self, identifier: str) -> Path:
        """Return the path of the record for an identifier."""
        return self.info_dir / f"{identifier}{TRASHINFO_EXTENSION}"

    def entries(self) -> Iterator[EntryResult]:
        """Iterate over the items in the trash.

        A missing info directory is treated as an empty trash. Each record
        yields one EntryResult; a record that cannot be turned into an
        entry yields a failed result instead of stopping the iteration.

        Returns:
            Lazy iterator of EntryResult, in directory order.

        Raises:
            TrashError: If the info directory exists but cannot be listed.
        """
        trashinfo_paths = self._trashinfo_paths()
        return (self._load_entry(path) for path in trashinfo_paths)

    def put(self, path: Path | str) -> TrashPutReport:
        """Move a path into the trash.

        The record is fully written before the payload is moved, so an
        interruption can only leave an orphaned record behind, never a
        payload without its original path.

        Args:
            path: Path to trash. Canonicalized before use.

        Returns:
            TrashPutReport with the canonical path and the deletion time.

        Raises:
            PathNotFoundError: If the path does not exist.
            TrashError: If the path cannot be recorded or moved.
        """
        try:
            canonical = Path(path).resolve(strict=True)
        except FileNotFoundError as e:
            msg = f"cannot trash {path}: no such file or directory"
            raise PathNotFoundError(msg) from e
        except (OSError, RuntimeError) as e:
            msg = f"cannot resolve {path}: {e}"
            raise TrashError(msg) from e

        if not canonical.name:
            msg = f"cannot trash {canonical}: path has no file name"
            raise TrashError(msg)
        try:
            str(canonical).encode("utf-8")
        except UnicodeEncodeError as e:
            msg = f"cannot trash {canonical!r}: invalid UTF-8 path"
            raise TrashError(msg) from e

        deletion_time = datetime.now().replace(microsecond=0)
        trashinfo = TrashInfo(path=canonical, deletion_time=deletion_time)

        self._create_dirs()
        identifier, trashinfo_file = allocate(canonical, self.info_dir)
        trashinfo_path = self.trashinfo_path(identifier)
        try:
            with trashinfo_file:
                trashinfo_file.write(trashinfo.encode())
        except OSError as e:
            trashinfo_path.unlink(missing_ok=True)
            msg = f"cannot write trashinfo file {trashinfo_path}: {e}"
            raise TrashError(msg) from e

        file_path = self.files_dir / identifier
        try:
            os.rename(canonical, file_path)
        except OSError as e:
            trashinfo_path.unlink(missing_ok=True)
            msg = f"cannot move {canonical} to {file_path}: {e}"
            raise TrashError(msg) from e

        logger.info("Trashed %s as %s", canonical, identifier)
        return TrashPutReport(path=canonical, deletion_time=deletion_time)

    def restore(self, identifier: str) -> TrashRestoreReport:
        """Move an item back to its original path.

        Nothing is changed if the original path is occupied. The payload
        is moved before the record is removed.

        Args:
            identifier: Identifier of the item to restore.

        Returns:
            TrashRestoreReport with the original path and deletion time.

        Raises:
            PathNotFoundError: If there is no record for the identifier.
            MalformedTrashInfoError: If the record cannot be decoded.
            RestoreConflictError: If the original path already exists.
            MissingPayloadError: If the record has no payload.
            TrashError: If the item cannot be moved or the record removed.
        """
        if not identifier or "/" in identifier or identifier in (".", ".."):
            msg = f"invalid identifier: {identifier!r}"
            raise TrashError(msg)

        trashinfo_path = self.trashinfo_path(identifier)
        trashinfo = self._read_trashinfo(trashinfo_path)
        original_path = trashinfo.path

        if os.path.lexists(original_path):
            msg = f"file {original_path} already exists"
            raise RestoreConflictError(msg)

        file_path = self.files_dir / identifier
        if not os.path.lexists(file_path):
            msg = f"file {file_path} not found"
            raise MissingPayloadError(msg)

        try:
            os.rename(file_path, original_path)
        except OSError as e:
            msg = f"cannot move {file_path} to {original_path}: {e}"
            raise TrashError(msg) from e

        try:
            trashinfo_path.unlink()
        except OSError as e:
            msg = f"cannot remove trashinfo file {trashinfo_path}: {e}"
            raise TrashError(msg) from e

        logger.info("Restored %s to %s", identifier, original_path)
        return TrashRestoreReport(path=original_path, deletion_time=trashinfo.deletion_time)

    def empty(self) -> TrashEmptyReport:
        """Permanently remove everything in the trash.

        Records are removed first, then payloads, then the directory
        sizes cache. Stops at the first failure; items removed before it
        stay removed.

        Returns:
            TrashEmptyReport with the number of payloads removed.

        Raises:
            TrashError: If a record, payload or the cache cannot be removed.
        """
        for trashinfo_path in list(self._trashinfo_paths()):
            try:
                trashinfo_path.unlink()
            except OSError as e:
                msg = f"cannot remove trashinfo file {trashinfo_path}: {e}"
                raise TrashError(msg) from e

        try:
            dir_entries = list(scandir_or_empty(self.files_dir))
        except OSError as e:
            msg = f"cannot read trash files directory {self.files_dir}: {e}"
            raise TrashError(msg) from e

        entry_count = 0
        for dir_entry in dir_entries:
            file_path = Path(dir_entry.path)
            try:
                remove_path(file_path)
            except OSError as e:
                msg = f"cannot remove file {file_path}: {e}"
                raise TrashError(msg) from e
            entry_count += 1

        try:
            self.directorysizes_path.unlink(missing_ok=True)
        except OSError as e:
            msg = f"cannot remove directorysizes file {self.directorysizes_path}: {e}"
            raise TrashError(msg) from e

        logger.info("Emptied trash %s (%d removed)", self._base_dir, entry_count)
        return TrashEmptyReport(entry_count=entry_count)

    def _create_dirs(self) -> None:
        """Create the base, info and files directories if needed.

        Raises:
            TrashError: If a directory cannot be created.
        """
        for directory in (self._base_dir, self.info_dir, self.files_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                msg = f"cannot create trash directory at {directory}: {e}"
                raise TrashError(msg) from e

    def _trashinfo_paths(self) -> Iterator[Path]:
        """List the ``.trashinfo`` files of the info directory.

        Entries that cannot be examined are skipped.

        Raises:
            TrashError: If the info directory exists but cannot be listed.
        """
        try:
            dir_entries = scandir_or_empty(self.info_dir)
        except OSError as e:
            msg = f"cannot read trash info directory {self.info_dir}: {e}"
            raise TrashError(msg) from e
        return (Path(entry.path) for entry in dir_entries if _is_trashinfo_file(entry))

    def _load_entry(self, trashinfo_path: Path) -> EntryResult:
        try:
            entry = self._new_entry(trashinfo_path)
        except TrashError as e:
            logger.debug("Skipping %s: %s", trashinfo_path, e)
            return EntryResult(trashinfo_path=trashinfo_path, error=e)
        return EntryResult(trashinfo_path=trashinfo_path, entry=entry)

    def _new_entry(self, trashinfo_path: Path) -> TrashEntry:
        """Build the entry described by a record.

        Raises:
            TrashError: If the record or the payload cannot be examined.
        """
        identifier = trashinfo_path.name[: -len(TRASHINFO_EXTENSION)]
        trashinfo = self._read_trashinfo(trashinfo_path)

        file_path = self.files_dir / identifier
        try:
            file_stat = file_path.lstat()
        except FileNotFoundError as e:
            msg = f"file {file_path} not found"
            raise MissingPayloadError(msg) from e
        except OSError as e:
            msg = f"cannot get metadata of file {file_path}: {e}"
            raise TrashError(msg) from e

        if stat.S_ISDIR(file_stat.st_mode):
            size = self._cached_dir_size(identifier, trashinfo_path)
        else:
            # Regular files and symlinks are cheap to measure
            size = file_stat.st_size

        return TrashEntry(
            identifier=identifier,
            original_path=trashinfo.path,
            deletion_time=trashinfo.deletion_time,
            size=size,
        )

    def _cached_dir_size(self, identifier: str, trashinfo_path: Path) -> int:
        """Look up the size of a trashed directory in the cache.

        A cached size is used only if it was computed against the current
        modification time of the record; otherwise the size is unknown
        and reported as 0.

        Raises:
            TrashError: If the record cannot be examined.
        """
        try:
            trashinfo_mtime = trashinfo_path.stat().st_mtime_ns // 1_000_000_000
        except OSError as e:
            msg = f"cannot get metadata of trashinfo file {trashinfo_path}: {e}"
            raise TrashError(msg) from e

        dir_size = self.dir_sizes.get(identifier)
        if dir_size is not None and dir_size.mtime == trashinfo_mtime:
            return dir_size.size
        return 0

    def _read_trashinfo(self, trashinfo_path: Path) -> TrashInfo:
        """Read and decode a record.

        Raises:
            PathNotFoundError: If the record does not exist.
            MalformedTrashInfoError: If the record cannot be decoded.
            TrashError: If the record cannot be read.
        """
        try:
            data = trashinfo_path.read_bytes()
        except FileNotFoundError as e:
            msg = f"trashinfo file {trashinfo_path} not found"
            raise PathNotFoundError(msg) from e
        except OSError as e:
            msg = f"cannot read trashinfo file {trashinfo_path}: {e}"
            raise TrashError(msg) from e

        try:
            return TrashInfo.decode(data)
        except MalformedTrashInfoError as e:
            msg = f"error in trashinfo file {trashinfo_path}: {e}"
            raise MalformedTrashInfoError(msg) from e


def _is_trashinfo_file(dir_entry: os.DirEntry[str]) -> bool:
    """Check if a directory entry is a ``.trashinfo`` file."""
    name = dir_entry.name
    if not name.endswith(TRASHINFO_EXTENSION) or name == TRASHINFO_EXTENSION:
        return False
    try:
        return dir_entry.is_file()
    except OSError:
        return False
