"""Identifier allocation for trashed items.

An identifier is the name shared by an item's ``.trashinfo`` record
and its payload in the files directory. It is the file name of the
original path, suffixed with ``_1``, ``_2``, ... on collision.

The record file is created exclusively, so creating it and reserving
the identifier are one atomic step: two concurrent allocations can
never obtain the same identifier.
"""

import logging
from pathlib import Path
from typing import BinaryIO

from ironbin.trash.errors import TrashError
from ironbin.trash.info import TRASHINFO_EXTENSION

logger = logging.getLogger(__name__)


def base_identifier(path: Path) -> str:
    """Return the base identifier for a path.

    Args:
        path: Canonical path of the item to trash.

    Returns:
        The file name of the path.

    Raises:
        ValueError: If the path has no file name.
    """
    if not path.name:
        msg = f"path has no file name: {path}"
        raise ValueError(msg)
    return path.name


def allocate(path: Path, info_dir: Path) -> tuple[str, BinaryIO]:
    """Reserve a free identifier by creating its ``.trashinfo`` file.

    Candidates ``name``, ``name_1``, ``name_2``, ... are tried in order
    until a record file can be created.

    Args:
        path: Canonical path of the item to trash.
        info_dir: Info directory of the trash.

    Returns:
        Tuple of (identifier, record file opened for binary writing).
        The caller owns the file and must close it.

    Raises:
        ValueError: If the path has no file name.
        TrashError: If a record file cannot be created for a reason
            other than the identifier being taken.
    """
    base = base_identifier(path)

    number = 0
    while True:
        identifier = base if number == 0 else f"{base}_{number}"
        trashinfo_path = info_dir / f"{identifier}{TRASHINFO_EXTENSION}"
        try:
            f = trashinfo_path.open("xb")
        except FileExistsError:
            number += 1
            continue
        except OSError as e:
            msg = f"cannot create trashinfo file for {path}: {e}"
            raise TrashError(msg) from e
        if number:
            logger.debug("Identifier %s taken, using %s", base, identifier)
        return identifier, f
