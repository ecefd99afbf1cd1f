"""Filesystem helpers shared by the trash store."""

import os
import shutil
from collections.abc import Iterator
from pathlib import Path


def scandir_or_empty(path: Path) -> Iterator[os.DirEntry[str]]:
    """Iterate over a directory, treating a missing directory as empty.

    The directory is opened immediately, so errors other than the
    directory not existing are raised by this call rather than on
    first iteration.

    Args:
        path: Directory to list.

    Returns:
        Iterator over the directory entries.

    Raises:
        OSError: If the directory exists but cannot be listed.
    """
    try:
        scanner = os.scandir(path)
    except FileNotFoundError:
        return iter(())
    return _drain(scanner)


def _drain(scanner: "os._ScandirIterator[str]") -> Iterator[os.DirEntry[str]]:
    with scanner:
        yield from scanner


def remove_path(path: Path) -> None:
    """Remove a file, symlink or directory tree.

    Directories that are symlinks are unlinked, not traversed.

    Args:
        path: Path to remove.

    Raises:
        OSError: If the path cannot be removed.
    """
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()
