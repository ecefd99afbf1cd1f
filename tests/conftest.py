"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest
from ironbin.trash.info import TrashInfo
from ironbin.trash.store import Trash

MakeTrashed = Callable[..., Path]


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """Canonical directory holding files to trash."""
    path = tmp_path.resolve() / "work"
    path.mkdir()
    return path


@pytest.fixture
def trash(tmp_path: Path) -> Trash:
    """Trash rooted in a temporary directory that does not exist yet."""
    return Trash(tmp_path.resolve() / "Trash")


@pytest.fixture
def data_home(tmp_path: Path) -> Path:
    """Temporary XDG data home for CLI tests."""
    path = tmp_path.resolve() / "data"
    path.mkdir()
    return path


@pytest.fixture
def make_trashed() -> MakeTrashed:
    """Factory writing a record and payload directly into a trash.

    Returns the path of the created record.
    """

    def _make(
        trash: Trash,
        identifier: str,
        original_path: Path,
        deletion_time: datetime = datetime(2025, 2, 17, 13, 14, 15),
        content: str = "abc",
        is_dir: bool = False,
    ) -> Path:
        trash.info_dir.mkdir(parents=True, exist_ok=True)
        trash.files_dir.mkdir(parents=True, exist_ok=True)
        record = trash.trashinfo_path(identifier)
        record.write_bytes(TrashInfo(path=original_path, deletion_time=deletion_time).encode())
        payload = trash.files_dir / identifier
        if is_dir:
            payload.mkdir()
            (payload / "inner.txt").write_text(content)
        else:
            payload.write_text(content)
        return record

    return _make
