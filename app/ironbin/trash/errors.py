"""Errors raised by the trash store.

All recoverable failures derive from TrashError so callers can report
them per item and carry on with the remaining ones.
"""


class TrashError(Exception):
    """Base class for trash store failures.

    I/O failures are wrapped in a TrashError naming the path and the
    operation that failed, with the original OSError chained as cause.
    """


class PathNotFoundError(TrashError):
    """A path to trash, or the record of an item to restore, does not exist."""


class MalformedTrashInfoError(TrashError):
    """A .trashinfo record cannot be decoded."""


class RestoreConflictError(TrashError):
    """Something already exists at the original path of an item being restored."""


class MissingPayloadError(TrashError):
    """A .trashinfo record has no payload in the files directory."""
