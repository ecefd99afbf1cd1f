"""Trash info records.

A ``.trashinfo`` file in the info directory of a trash records where a
trashed item came from and when it was trashed::

    [Trash Info]
    Path=%2Fhome%2Fuser%2Fnotes.txt
    DeletionDate=2025-02-17T13:14:15

The path is percent-encoded UTF-8 and the deletion date is a local
timestamp without UTC offset. When a key occurs several times, the
first occurrence is used.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from urllib.parse import quote, unquote

from ironbin.trash.errors import MalformedTrashInfoError

TRASHINFO_EXTENSION = ".trashinfo"

SECTION_TRASH_INFO = "Trash Info"
KEY_PATH = "Path"
KEY_DELETION_DATE = "DeletionDate"

DELETION_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
_DELETION_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}", re.ASCII)


@dataclass(frozen=True, slots=True)
class TrashInfo:
    """Contents of a ``.trashinfo`` file.

    Attributes:
        path: Absolute path the item had before it was trashed.
        deletion_time: Local time of the trashing, to the second.
    """

    path: Path
    deletion_time: datetime

    @classmethod
    def decode(cls, data: bytes) -> "TrashInfo":
        """Parse the raw contents of a ``.trashinfo`` file.

        Args:
            data: File contents.

        Returns:
            TrashInfo instance.

        Raises:
            MalformedTrashInfoError: If the section or a required key is
                missing, the path cannot be percent-decoded, or the
                deletion date does not match ``YYYY-MM-DDTHH:MM:SS``.
        """
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            msg = f"not valid UTF-8: {e}"
            raise MalformedTrashInfoError(msg) from e

        section = _read_section(text, SECTION_TRASH_INFO)
        if section is None:
            msg = f"missing section: {SECTION_TRASH_INFO}"
            raise MalformedTrashInfoError(msg)

        raw_path = section.get(KEY_PATH)
        if raw_path is None:
            msg = f"missing entry: {KEY_PATH}"
            raise MalformedTrashInfoError(msg)
        try:
            path = unquote(raw_path, errors="strict")
        except UnicodeDecodeError as e:
            msg = f"invalid path: {raw_path}"
            raise MalformedTrashInfoError(msg) from e

        raw_date = section.get(KEY_DELETION_DATE)
        if raw_date is None:
            msg = f"missing entry: {KEY_DELETION_DATE}"
            raise MalformedTrashInfoError(msg)
        if not _DELETION_DATE_PATTERN.fullmatch(raw_date):
            msg = f"invalid deletion date: {raw_date}"
            raise MalformedTrashInfoError(msg)
        try:
            deletion_time = datetime.strptime(raw_date, DELETION_DATE_FORMAT)
        except ValueError as e:
            msg = f"invalid deletion date: {raw_date}"
            raise MalformedTrashInfoError(msg) from e

        return cls(path=Path(path), deletion_time=deletion_time)

    def encode(self) -> bytes:
        """Serialize to the contents of a ``.trashinfo`` file.

        Returns:
            UTF-8 encoded file contents.
        """
        lines = [
            f"[{SECTION_TRASH_INFO}]",
            f"{KEY_PATH}={quote(str(self.path), safe='')}",
            f"{KEY_DELETION_DATE}={self.deletion_time.strftime(DELETION_DATE_FORMAT)}",
        ]
        return ("\n".join(lines) + "\n").encode("utf-8")


def _read_section(text: str, name: str) -> dict[str, str] | None:
    """Collect the keys of a named section, first occurrence winning.

    Args:
        text: Decoded file contents.
        name: Section name, without brackets.

    Returns:
        Mapping of key to value, or None if the section does not exist.
    """
    section: dict[str, str] | None = None
    in_section = False

    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith(("#", ";")):
            continue
        if line.startswith("[") and line.endswith("]"):
            in_section = line[1:-1].strip() == name
            if in_section and section is None:
                section = {}
            continue
        if not in_section or section is None or "=" not in line:
            continue
        key, value = line.split("=", 1)
        section.setdefault(key.strip(), value.strip())

    return section
