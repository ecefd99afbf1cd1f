"""Directory sizes cache.

The ``directorysizes`` file at the root of a trash caches the size of
trashed directories, one line per directory::

    <size> <mtime> <percent-encoded name>

``mtime`` is the modification time of the directory's ``.trashinfo``
file when the size was computed. The cache is best-effort: unreadable
files and malformed lines are ignored.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote

logger = logging.getLogger(__name__)

# Roughly 2200-01-01T00:00:00Z, in seconds since the Epoch
MILLISECONDS_THRESHOLD = 7_258_122_000


@dataclass(frozen=True, slots=True)
class DirSize:
    """One line of the ``directorysizes`` file.

    Attributes:
        name: Identifier of the trashed directory.
        size: Size of the directory in bytes.
        mtime: Modification time of the matching ``.trashinfo`` file,
            in seconds since the Epoch.
    """

    name: str
    size: int
    mtime: int

    @classmethod
    def from_line(cls, line: str) -> "DirSize":
        """Parse a line of the ``directorysizes`` file.

        Fields beyond the third are ignored.

        Args:
            line: Line to parse.

        Returns:
            DirSize instance.

        Raises:
            ValueError: If a field is missing or invalid.
        """
        fields = line.split()
        if len(fields) < 3:
            msg = f"expected 3 fields, got {len(fields)}"
            raise ValueError(msg)
        size = _parse_unsigned(fields[0], "size")
        mtime = corrected_timestamp(_parse_unsigned(fields[1], "mtime"))
        try:
            name = unquote(fields[2], errors="strict")
        except UnicodeDecodeError as e:
            msg = f"invalid name: {fields[2]}"
            raise ValueError(msg) from e
        return cls(name=name, size=size, mtime=mtime)


DirSizes = dict[str, DirSize]


def corrected_timestamp(timestamp: int) -> int:
    """Normalize a cached modification time to seconds.

    Timestamps should be seconds since the Epoch, but some writers
    (e.g. Dolphin) store milliseconds. Any timestamp after the year 2200
    is taken to be in milliseconds.

    Args:
        timestamp: Timestamp as read from the file.

    Returns:
        Timestamp in seconds since the Epoch.
    """
    if timestamp > MILLISECONDS_THRESHOLD:
        return timestamp // 1000
    return timestamp


def load_dir_sizes(path: Path) -> DirSizes:
    """Load a ``directorysizes`` file.

    Args:
        path: Path to the file.

    Returns:
        Mapping of identifier to DirSize, last line winning on duplicates.
        Empty if the file does not exist or cannot be read.
    """
    dir_sizes: DirSizes = {}

    try:
        with path.open("rb") as f:
            for line_num, raw_line in enumerate(f, start=1):
                try:
                    line = raw_line.decode("utf-8").strip()
                except UnicodeDecodeError as e:
                    logger.debug("Skipping directorysizes line %d: %s", line_num, e)
                    continue
                if not line:
                    continue
                try:
                    dir_size = DirSize.from_line(line)
                except ValueError as e:
                    logger.debug("Skipping directorysizes line %d: %s", line_num, e)
                    continue
                dir_sizes[dir_size.name] = dir_size
    except FileNotFoundError:
        logger.debug("No directorysizes file at %s", path)
        return {}
    except OSError as e:
        logger.debug("Cannot read directorysizes file %s: %s", path, e)
        return {}

    return dir_sizes


def _parse_unsigned(value: str, field: str) -> int:
    if not (value.isascii() and value.isdigit()):
        msg = f"invalid {field}: {value}"
        raise ValueError(msg)
    return int(value)
