"""Trash staging for rollback of destructive data operations.

A directory is staged by renaming it to ``<path>.old`` next to itself.
Only one in-flight operation per package is assumed, so a stale entry
left by an earlier attempt is replaced when staging again.
"""

import errno
import logging
import os
from pathlib import Path

from snapdata.core.errors import DataDirError, TrashEntryMissingError
from snapdata.models.trash import TrashEntry
from snapdata.utils.fsops import remove_all

logger = logging.getLogger(__name__)

# rename(2) refuses to replace an occupied destination with one of these
_OCCUPIED_ERRNOS = frozenset({errno.ENOTEMPTY, errno.EEXIST, errno.ENOTDIR, errno.EISDIR})


def stage(path: Path | str) -> TrashEntry:
    """Move ``path`` aside to its trash location.

    Args:
        path: Directory to stage.

    Returns:
        The TrashEntry describing where the tree now lives.

    Raises:
        DataDirError: If the source is missing or cannot be moved, or if
            a stale entry in the way cannot be removed.
    """
    entry = TrashEntry.for_path(path)
    try:
        os.rename(entry.original, entry.location)
    except OSError as e:
        if e.errno not in _OCCUPIED_ERRNOS:
            raise DataDirError("trash", entry.original, e, target=entry.location) from e
        logger.info("Replacing stale trash entry %s", entry.location)
        try:
            remove_all(entry.location)
            os.rename(entry.original, entry.location)
        except OSError as exc:
            raise DataDirError("trash", entry.original, exc, target=entry.location) from exc

    logger.debug("Staged %s as %s", entry.original, entry.location)
    return entry


def restore(entry: TrashEntry) -> None:
    """Move a trashed tree back to its original location.

    Whatever currently lives at the original path is removed first. The
    trash entry is checked before anything is removed, so restoring an
    already restored (or discarded) entry leaves the original alone.

    Raises:
        TrashEntryMissingError: If the trash entry does not exist.
        DataDirError: If the original cannot be cleared or the rename fails.
    """
    if not entry.exists():
        missing = FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(entry.location))
        raise TrashEntryMissingError("restore", entry.location, missing, target=entry.original)

    try:
        remove_all(entry.original)
        os.rename(entry.location, entry.original)
    except OSError as e:
        raise DataDirError("restore", entry.location, e, target=entry.original) from e

    logger.debug("Restored %s from %s", entry.original, entry.location)


def discard(entry: TrashEntry) -> bool:
    """Permanently delete a trashed tree.

    Never raises: this runs once a transition is committed and the
    caller has nothing left to roll back to. Failures are logged.

    Returns:
        True if the entry is gone (or never existed), False on failure.
    """
    try:
        remove_all(entry.location)
    except OSError as e:
        logger.warning("Cannot remove %s: %s", entry.location, e)
        return False
    return True
