"""Low-level filesystem primitives.

These helpers raise plain OSError; the migrators wrap failures in
DataDirError with the step that was being attempted.
"""

import errno
import logging
import os
import shutil
import subprocess
from pathlib import Path

from snapdata.utils.shell import run_command

logger = logging.getLogger(__name__)

# Data directories can be large; allow copies to run for a while
_COPY_TIMEOUT: float = 3600.0


def atomic_rename(src: Path | str, dst: Path | str) -> None:
    """Rename ``src`` to ``dst`` and sync the destination's parent directory.

    rename(2) cannot replace a non-empty directory, so an occupied
    destination fails with ENOTEMPTY or EEXIST. Once the rename is done
    it is not reported as failed: a failing sync is only logged.
    """
    os.rename(src, dst)
    parent = Path(dst).parent
    try:
        _fsync_dir(parent)
    except OSError as e:
        logger.warning("Cannot sync %s after renaming %s: %s", parent, src, e)


def _fsync_dir(path: Path) -> None:
    fd = os.open(path, os.O_RDONLY | os.O_DIRECTORY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)


def mkdir_all_chown(path: Path | str, mode: int, uid: int, gid: int) -> None:
    """Create ``path`` and any missing parents, owned by ``uid``/``gid``.

    Only directories created by this call are chowned. An existing
    directory is left untouched.

    Raises:
        NotADirectoryError: If ``path`` exists and is not a directory.
        OSError: If a directory cannot be created or chowned.
    """
    target = Path(path)
    if target.is_dir():
        return
    if target.exists() or target.is_symlink():
        raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(target))

    if target.parent != target:
        mkdir_all_chown(target.parent, mode, uid, gid)

    try:
        target.mkdir(mode=mode)
    except FileExistsError:
        if target.is_dir():
            return
        raise
    os.chown(target, uid, gid)


def make_dirs(path: Path | str, mode: int = 0o755) -> None:
    """Create ``path`` and its parents; an existing directory is not an error."""
    Path(path).mkdir(mode=mode, parents=True, exist_ok=True)


def remove_if_empty(path: Path | str) -> None:
    """Remove directory ``path`` if it has no entries.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        OSError: If the directory cannot be listed or removed.
    """
    with os.scandir(path) as entries:
        if any(True for _ in entries):
            return
    os.rmdir(path)


def remove_all(path: Path | str) -> None:
    """Recursively remove ``path``; a missing path is not an error."""
    target = Path(path)
    if target.is_symlink() or target.is_file():
        target.unlink(missing_ok=True)
        return
    try:
        shutil.rmtree(target)
    except FileNotFoundError:
        return


def copy_tree(src: Path | str, dst: Path | str) -> None:
    """Copy directory ``src`` to ``dst`` preserving ownership and modes.

    Uses ``cp -a`` so owners, permissions, timestamps, extended
    attributes and symlinks survive the copy. ``dst`` must not exist.

    Raises:
        FileExistsError: If ``dst`` already exists.
        OSError: If the copy fails.
    """
    if os.path.lexists(dst):
        raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), str(dst))

    logger.debug("Copying %s to %s", src, dst)
    try:
        result = run_command(
            ["cp", "-a", "--", str(src), str(dst)],
            timeout=_COPY_TIMEOUT,
        )
    except subprocess.TimeoutExpired as e:
        raise OSError(errno.ETIMEDOUT, f"copy timed out after {e.timeout}s") from e

    if not result.success:
        raise OSError(errno.EIO, result.failure_message())
