"""Unit tests for the Trash store.

Tests listing, putting, restoring and emptying against a trash in a
temporary directory.
"""

import os
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from ironbin.trash.dir_sizes import load_dir_sizes
from ironbin.trash.errors import (
    MalformedTrashInfoError,
    MissingPayloadError,
    PathNotFoundError,
    RestoreConflictError,
    TrashError,
)
from ironbin.trash.identifier import allocate
from ironbin.trash.store import Trash

MakeTrashed = Callable[..., Path]


def _successful(trash: Trash) -> list:
    return [result.entry for result in trash.entries() if result.success]


class TestTrashInit:
    """Tests for Trash layout."""

    def test_layout(self, tmp_path: Path) -> None:
        """Info, files and cache paths derive from the base directory."""
        trash = Trash(tmp_path)

        assert trash.base_dir == tmp_path
        assert trash.info_dir == tmp_path / "info"
        assert trash.files_dir == tmp_path / "files"
        assert trash.directorysizes_path == tmp_path / "directorysizes"
        assert trash.trashinfo_path("a") == tmp_path / "info" / "a.trashinfo"

    def test_default_respects_xdg_data_home(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """The default trash lives in $XDG_DATA_HOME/Trash."""
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

        assert Trash.default().base_dir == tmp_path / "Trash"


class TestEntries:
    """Tests for Trash.entries."""

    def test_absent_trash(self, trash: Trash) -> None:
        """An absent trash lists nothing and is not created."""
        assert list(trash.entries()) == []
        assert not trash.base_dir.exists()

    def test_empty_trash(self, trash: Trash) -> None:
        """An empty trash lists nothing."""
        trash.info_dir.mkdir(parents=True)
        trash.files_dir.mkdir()

        assert list(trash.entries()) == []

    def test_entry_fields(self, trash: Trash, make_trashed: MakeTrashed) -> None:
        """Entries carry identifier, original path, deletion time and size."""
        make_trashed(trash, "notes.txt", Path("/home/user/notes.txt"), content="hello")

        results = list(trash.entries())

        assert len(results) == 1
        entry = results[0].entry
        assert entry is not None
        assert entry.identifier == "notes.txt"
        assert entry.original_path == Path("/home/user/notes.txt")
        assert entry.deletion_time == datetime(2025, 2, 17, 13, 14, 15)
        assert entry.size == 5

    def test_non_trashinfo_files_ignored(self, trash: Trash, make_trashed: MakeTrashed) -> None:
        """Only *.trashinfo files in the info directory are considered."""
        make_trashed(trash, "a", Path("/a"))
        (trash.info_dir / "README").write_text("x")
        (trash.info_dir / "sub.trashinfo").mkdir()

        results = list(trash.entries())

        assert [r.entry.identifier for r in results if r.entry] == ["a"]

    def test_malformed_record_does_not_abort(
        self, trash: Trash, make_trashed: MakeTrashed
    ) -> None:
        """A bad record yields a failed result; other entries still list."""
        make_trashed(trash, "good", Path("/good"))
        (trash.info_dir / "bad.trashinfo").write_text("not a record")
        (trash.files_dir / "bad").write_text("x")

        results = list(trash.entries())

        assert len(results) == 2
        failed = [r for r in results if not r.success]
        assert len(failed) == 1
        assert isinstance(failed[0].error, MalformedTrashInfoError)
        assert failed[0].trashinfo_path == trash.info_dir / "bad.trashinfo"
        assert [e.identifier for e in _successful(trash)] == ["good"]

    def test_missing_payload(self, trash: Trash, make_trashed: MakeTrashed) -> None:
        """A record without payload yields a MissingPayloadError result."""
        make_trashed(trash, "gone", Path("/gone"))
        (trash.files_dir / "gone").unlink()

        results = list(trash.entries())

        assert len(results) == 1
        assert isinstance(results[0].error, MissingPayloadError)

    def test_symlink_payload_size(self, trash: Trash, make_trashed: MakeTrashed) -> None:
        """Symlink payloads report the size of the link itself."""
        make_trashed(trash, "link", Path("/link"))
        payload = trash.files_dir / "link"
        payload.unlink()
        payload.symlink_to("/nonexistent/target")

        (entry,) = _successful(trash)

        assert entry.size == len("/nonexistent/target")


class TestDirectorySizes:
    """Tests for directory size resolution through the cache."""

    MTIME = 1_700_000_000

    @pytest.fixture
    def dir_record(self, trash: Trash, make_trashed: MakeTrashed) -> Path:
        """A trashed directory whose record has a known mtime."""
        record = make_trashed(trash, "my dir", Path("/home/user/my dir"), is_dir=True)
        os.utime(record, (self.MTIME, self.MTIME))
        return record

    def test_no_cache(self, trash: Trash, dir_record: Path) -> None:
        """Without a cache, directory sizes are 0."""
        (entry,) = _successful(trash)

        assert entry.size == 0

    def test_matching_cache(self, trash: Trash, dir_record: Path) -> None:
        """A cached size with matching mtime is used."""
        trash.directorysizes_path.write_text(f"123456 {self.MTIME} my%20dir\n")

        (entry,) = _successful(trash)

        assert entry.size == 123456

    def test_matching_cache_in_milliseconds(self, trash: Trash, dir_record: Path) -> None:
        """A cached mtime in milliseconds still matches."""
        trash.directorysizes_path.write_text(f"42 {self.MTIME * 1000} my%20dir\n")

        (entry,) = _successful(trash)

        assert entry.size == 42

    def test_stale_cache(self, trash: Trash, dir_record: Path) -> None:
        """A cached size with a different mtime is treated as unknown."""
        trash.directorysizes_path.write_text(f"123456 {self.MTIME - 1} my%20dir\n")

        (entry,) = _successful(trash)

        assert entry.size == 0

    def test_cache_loaded_once(self, trash: Trash, dir_record: Path) -> None:
        """The cache file is read at most once per Trash instance."""
        trash.directorysizes_path.write_text(f"1 {self.MTIME} my%20dir\n")

        with patch(
            "ironbin.trash.store.load_dir_sizes", wraps=load_dir_sizes
        ) as mock_load:
            first = _successful(trash)
            trash.directorysizes_path.write_text(f"2 {self.MTIME} my%20dir\n")
            second = _successful(trash)

        assert mock_load.call_count == 1
        assert first[0].size == second[0].size == 1

    def test_files_do_not_load_cache(
        self, trash: Trash, make_trashed: MakeTrashed
    ) -> None:
        """Listing only regular files never reads the cache."""
        make_trashed(trash, "a", Path("/a"))

        with patch("ironbin.trash.store.load_dir_sizes") as mock_load:
            _successful(trash)

        mock_load.assert_not_called()


class TestPut:
    """Tests for Trash.put."""

    def test_put_file(self, trash: Trash, workdir: Path) -> None:
        """A trashed file is listed with its canonical path and size."""
        target = workdir / "test.txt"
        target.write_text("abc")

        report = trash.put(target)

        assert report.path == target
        assert not target.exists()
        (entry,) = _successful(trash)
        assert entry.original_path == target
        assert entry.size == 3
        assert entry.deletion_time == report.deletion_time
        assert (trash.files_dir / "test.txt").read_text() == "abc"

    def test_put_deletion_time_precision(self, trash: Trash, workdir: Path) -> None:
        """Deletion times are recorded to the second."""
        target = workdir / "test.txt"
        target.touch()

        report = trash.put(target)

        assert report.deletion_time.microsecond == 0

    def test_put_directory(self, trash: Trash, workdir: Path) -> None:
        """Directories are trashed as a whole."""
        target = workdir / "dir"
        target.mkdir()
        (target / "inner.txt").write_text("x")

        trash.put(target)

        assert (trash.files_dir / "dir" / "inner.txt").read_text() == "x"

    def test_put_canonicalizes(self, trash: Trash, workdir: Path) -> None:
        """Relative components and symlinked directories are resolved."""
        real = workdir / "real"
        real.mkdir()
        (real / "file.txt").write_text("x")
        (workdir / "alias").symlink_to(real)

        report = trash.put(workdir / "alias" / ".." / "real" / "file.txt")

        assert report.path == real / "file.txt"
        (entry,) = _successful(trash)
        assert entry.original_path == real / "file.txt"

    def test_put_not_found(self, trash: Trash, workdir: Path) -> None:
        """Trashing a missing path fails without creating the trash."""
        with pytest.raises(PathNotFoundError):
            trash.put(workdir / "missing.txt")

        assert not trash.base_dir.exists()

    def test_put_same_name_twice(self, trash: Trash, workdir: Path) -> None:
        """Files with the same name receive distinct identifiers."""
        for sub in ("one", "two"):
            (workdir / sub).mkdir()
            (workdir / sub / "name").write_text(sub)

        trash.put(workdir / "one" / "name")
        trash.put(workdir / "two" / "name")

        entries = {e.identifier: e for e in _successful(trash)}
        assert set(entries) == {"name", "name_1"}
        assert entries["name"].original_path == workdir / "one" / "name"
        assert entries["name_1"].original_path == workdir / "two" / "name"

    def test_put_rename_failure_leaves_no_record(self, trash: Trash, workdir: Path) -> None:
        """If the move fails, the record created for it is removed."""
        target = workdir / "test.txt"
        target.touch()

        with (
            patch("ironbin.trash.store.os.rename", side_effect=OSError(18, "cross-device")),
            pytest.raises(TrashError, match="cannot move"),
        ):
            trash.put(target)

        assert target.exists()
        assert list(trash.info_dir.iterdir()) == []

    def test_put_write_failure_leaves_no_record(self, trash: Trash, workdir: Path) -> None:
        """If the record cannot be written, it is removed and nothing is moved."""
        target = workdir / "test.txt"
        target.touch()

        def allocate_unwritable(path: Path, info_dir: Path) -> tuple[str, MagicMock]:
            identifier, f = allocate(path, info_dir)
            f.close()
            unwritable = MagicMock()
            unwritable.write.side_effect = OSError(28, "No space left on device")
            return identifier, unwritable

        with (
            patch("ironbin.trash.store.allocate", side_effect=allocate_unwritable),
            pytest.raises(TrashError, match="cannot write trashinfo file"),
        ):
            trash.put(target)

        assert target.exists()
        assert list(trash.info_dir.iterdir()) == []
        assert list(trash.files_dir.iterdir()) == []

    def test_put_root(self, trash: Trash) -> None:
        """The filesystem root cannot be trashed."""
        with pytest.raises(TrashError, match="no file name"):
            trash.put("/")


class TestRestore:
    """Tests for Trash.restore."""

    def test_restore(self, trash: Trash, workdir: Path) -> None:
        """A restored file is back in place and its record is gone."""
        target = workdir / "test.txt"
        target.write_text("abc")
        put_report = trash.put(target)

        report = trash.restore("test.txt")

        assert report.path == target
        assert report.deletion_time == put_report.deletion_time
        assert target.read_text() == "abc"
        assert not trash.trashinfo_path("test.txt").exists()
        assert not (trash.files_dir / "test.txt").exists()
        assert list(trash.entries()) == []

    def test_restore_conflict(self, trash: Trash, workdir: Path) -> None:
        """Restoring over an existing file fails and changes nothing."""
        target = workdir / "test.txt"
        target.write_text("old")
        trash.put(target)
        target.write_text("new")

        with pytest.raises(RestoreConflictError, match="already exists"):
            trash.restore("test.txt")

        assert target.read_text() == "new"
        assert trash.trashinfo_path("test.txt").exists()
        assert (trash.files_dir / "test.txt").read_text() == "old"

    def test_restore_conflict_dangling_symlink(self, trash: Trash, workdir: Path) -> None:
        """A dangling symlink at the original path also blocks the restore."""
        target = workdir / "test.txt"
        target.touch()
        trash.put(target)
        target.symlink_to(workdir / "nowhere")

        with pytest.raises(RestoreConflictError):
            trash.restore("test.txt")

        assert target.is_symlink()

    def test_restore_unknown_identifier(self, trash: Trash) -> None:
        """Restoring an identifier without record fails."""
        with pytest.raises(PathNotFoundError):
            trash.restore("missing")

    def test_restore_missing_payload(self, trash: Trash, make_trashed: MakeTrashed, workdir: Path) -> None:
        """A record without payload cannot be restored."""
        record = make_trashed(trash, "a", workdir / "a")
        (trash.files_dir / "a").unlink()

        with pytest.raises(MissingPayloadError):
            trash.restore("a")

        assert record.exists()

    def test_restore_malformed_record(self, trash: Trash) -> None:
        """A malformed record cannot be restored."""
        trash.info_dir.mkdir(parents=True)
        trash.trashinfo_path("bad").write_text("[Trash Info]\n")

        with pytest.raises(MalformedTrashInfoError):
            trash.restore("bad")

    @pytest.mark.parametrize("identifier", ["", ".", "..", "../escape"])
    def test_restore_invalid_identifier(self, trash: Trash, identifier: str) -> None:
        """Identifiers that are not plain names are rejected."""
        with pytest.raises(TrashError, match="invalid identifier"):
            trash.restore(identifier)


class TestEmpty:
    """Tests for Trash.empty."""

    def test_empty(self, trash: Trash, make_trashed: MakeTrashed) -> None:
        """Records, payloads and the size cache are all removed."""
        make_trashed(trash, "a", Path("/a"))
        make_trashed(trash, "b", Path("/b"), is_dir=True)
        trash.directorysizes_path.write_text("3 1700000000 b\n")

        report = trash.empty()

        assert report.entry_count == 2
        assert report.size == 0
        assert list(trash.info_dir.iterdir()) == []
        assert list(trash.files_dir.iterdir()) == []
        assert not trash.directorysizes_path.exists()

    def test_empty_orphaned_payload(self, trash: Trash, make_trashed: MakeTrashed) -> None:
        """Payloads without records are removed too."""
        make_trashed(trash, "a", Path("/a"))
        (trash.files_dir / "orphan").write_text("x")

        report = trash.empty()

        assert report.entry_count == 2

    def test_empty_keeps_symlink_targets(
        self, trash: Trash, make_trashed: MakeTrashed, workdir: Path
    ) -> None:
        """Symlinked payloads are unlinked, not followed."""
        kept = workdir / "kept"
        kept.mkdir()
        (kept / "file").touch()
        make_trashed(trash, "link", Path("/link"))
        (trash.files_dir / "link").unlink()
        (trash.files_dir / "link").symlink_to(kept)

        trash.empty()

        assert (kept / "file").exists()

    def test_empty_absent_trash(self, trash: Trash) -> None:
        """Emptying an absent trash succeeds and creates nothing."""
        report = trash.empty()

        assert report.entry_count == 0
        assert not trash.base_dir.exists()

    def test_empty_failure(self, trash: Trash, make_trashed: MakeTrashed) -> None:
        """A removal failure is reported as a TrashError."""
        make_trashed(trash, "a", Path("/a"))

        with (
            patch("ironbin.trash.store.remove_path", side_effect=PermissionError(13, "denied")),
            pytest.raises(TrashError, match="cannot remove file"),
        ):
            trash.empty()
