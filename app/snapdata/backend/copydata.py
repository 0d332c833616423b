"""Copying package data forward across revisions.

On upgrade every existing data directory of the old revision (the
system one and each user's) is staged into trash and copied to the new
revision's path. Data already at a new revision path is staged too.
The trash entries are the only rollback mechanism: undo restores them,
and clear_trash discards them once the upgrade is committed.
"""

import logging
import os
from collections.abc import Callable
from functools import partial
from pathlib import Path

from snapdata.backend import trash
from snapdata.backend.failures import FailureCollector, FailurePolicy
from snapdata.core.errors import DataDirError, SnapDataError, TrashEntryMissingError
from snapdata.layout.dirs import DataLayout
from snapdata.layout.users import all_users
from snapdata.models.layout import EXPOSED, POST_MIGRATION, DataDirKind, DirOptions
from snapdata.models.package import PackageInfo
from snapdata.models.trash import TrashEntry
from snapdata.models.user import UserAccount
from snapdata.utils.fsops import copy_tree, make_dirs, remove_all

logger = logging.getLogger(__name__)

UserEnumerator = Callable[[DirOptions | None], list[UserAccount]]
TreeCopier = Callable[[Path, Path], None]


class RevisionDataMigrator:
    """Copies data forward on revision changes and undoes the copy.

    Callers must serialize operations per package; nothing here locks.

    Attributes:
        layout: Path builder for data directories.
    """

    def __init__(
        self,
        layout: DataLayout | None = None,
        *,
        users: UserEnumerator | None = None,
        copier: TreeCopier = copy_tree,
    ) -> None:
        """Initialize the migrator.

        Args:
            layout: Directory layout. Defaults to DataLayout().
            users: Returns the user accounts for given layout options.
                Defaults to all_users() bound to the layout's config.
            copier: Copies a directory tree preserving ownership and modes.
        """
        self.layout = layout if layout is not None else DataLayout()
        self._users = users if users is not None else partial(all_users, config=self.layout.config)
        self._copy = copier

    def copy_forward(
        self,
        old: PackageInfo | None,
        new: PackageInfo,
        opts: DirOptions | None = None,
    ) -> None:
        """Make the old revision's data available to the new revision.

        - No old revision: create the new versioned directory, copy nothing.
        - Same revision: nothing to do (reinstall in place).
        - Otherwise: stage each old data directory into trash and copy it
          to the new revision's path. Data already at the new path (when
          reverting to an earlier revision) is staged into trash as well.

        Args:
            old: Currently installed revision, None on first install.
            new: Revision being installed.
            opts: Per-user layout the user directories follow.

        Raises:
            DataDirError: On the first failure. Trash entries created so
                far are left in place for undo_copy_forward().
        """
        mode = self.layout.config.dir_mode

        # The base dir is shared between instances and may not exist yet
        if new.instance_key:
            self._mkdir(self.layout.base_data_dir(new.name), mode)

        # Common data must exist even when this is not a new install
        self._mkdir(self.layout.common_data_dir(new), mode)

        if old is None:
            self._mkdir(self.layout.data_dir(new), mode)
            return

        if new.same_revision(old):
            logger.debug("%s is already at revision %s", new.instance_name, new.revision)
            return

        collector = FailureCollector(FailurePolicy.FAIL_FAST)
        for old_dir in self.layout.data_dirs(old, self._users(opts), opts):
            new_dir = old_dir.parent / new.revision
            try:
                self._copy_data_dir(old_dir, new_dir)
            except DataDirError as e:
                collector.handle(e)

        # The old revision may have had no system data to copy
        self._mkdir(self.layout.data_dir(new), mode)

    def undo_copy_forward(
        self,
        new: PackageInfo,
        old: PackageInfo | None,
        opts: DirOptions | None = None,
    ) -> None:
        """Revert copy_forward() for ``new``.

        Removes the new revision's versioned directories and puts back
        whatever copy_forward() staged from their place. Then either
        removes the common directories (first install) or restores the
        old revision's trash entries. Every step is attempted even if an
        earlier one failed.

        Raises:
            DataDirError: The first failure encountered; later failures
                are only logged.
        """
        if new.same_revision(old):
            return

        collector = FailureCollector(FailurePolicy.BEST_EFFORT, log=logger)
        users = self._users(opts)

        for new_dir in self.layout.data_dirs(new, users, opts):
            self._remove(new_dir, collector)
            self._restore(TrashEntry.for_path(new_dir), collector)

        if old is None:
            # First install: drop the common dirs copy_forward created
            for common_dir in self.layout.common_data_dirs(new, users, opts):
                self._remove(common_dir, collector)
        else:
            for old_dir in self.layout.data_dirs(old, users, opts):
                self._restore(TrashEntry.for_path(old_dir), collector)

        if collector.first_error is not None:
            logger.info(
                "Undo of %s revision %s left %d further error(s) in the log",
                new.instance_name,
                new.revision,
                collector.suppressed_count,
            )
        collector.raise_first()

    def clear_trash(self, info: PackageInfo) -> None:
        """Discard every trash entry of ``info`` under both per-user layouts.

        A committed upgrade leaves trash next to the old revision's dirs,
        and next to the new revision's dirs if they held data before, so
        callers clear both revisions.

        Never raises; meant to run after a transition is committed.
        """
        try:
            dirs = self.layout.package_dirs(info, self._users(EXPOSED), EXPOSED, DataDirKind.TRASH)
            dirs += self.layout.package_dirs(
                info, self._users(POST_MIGRATION), POST_MIGRATION, DataDirKind.TRASH
            )
        except (OSError, SnapDataError) as e:
            logger.warning("Cannot remove previous data for %r: %s", info.instance_name, e)
            return

        for location in dict.fromkeys(dirs):
            trash.discard(TrashEntry.at(location))

    def _copy_data_dir(self, old_dir: Path, new_dir: Path) -> None:
        """Stage ``old_dir`` into trash and copy it to ``new_dir``.

        If a previous attempt already staged ``old_dir`` the existing
        trash entry is copied from instead, and ``new_dir`` holds that
        attempt's partial copy.
        """
        entry = TrashEntry.for_path(old_dir)
        resume = not old_dir.exists()
        if resume and not entry.exists():
            # e.g. a user who never ran the package
            return

        if resume:
            logger.info("Resuming copy of %s from existing trash entry", old_dir)
            try:
                remove_all(new_dir)
            except OSError as e:
                raise DataDirError("remove", new_dir, e) from e
        else:
            if os.path.lexists(new_dir):
                # e.g. reverting to a revision whose data is still around
                trash.stage(new_dir)
            entry = trash.stage(old_dir)

        try:
            self._copy(entry.location, new_dir)
        except OSError as e:
            raise DataDirError("copy", entry.location, e, target=new_dir) from e

    @staticmethod
    def _mkdir(path: Path, mode: int) -> None:
        try:
            make_dirs(path, mode)
        except OSError as e:
            raise DataDirError("create", path, e) from e

    @staticmethod
    def _remove(path: Path, collector: FailureCollector) -> None:
        try:
            remove_all(path)
        except OSError as e:
            collector.handle(DataDirError("remove", path, e))

    @staticmethod
    def _restore(entry: TrashEntry, collector: FailureCollector) -> None:
        try:
            trash.restore(entry)
        except TrashEntryMissingError:
            logger.debug("Nothing to restore for %s", entry.original)
        except DataDirError as e:
            collector.handle(e)
