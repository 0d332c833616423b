"""Migration of per-user data between the exposed and hidden layouts.

``hide`` moves ``~/snap/<pkg>`` to ``~/.snap/data/<pkg>`` for every
user; ``unhide`` moves it back. Each per-user move is a single rename,
so a user is always fully on one side or the other.
"""

import logging
from collections.abc import Callable
from functools import partial
from pathlib import Path

from snapdata.backend.failures import FailureCollector, FailurePolicy
from snapdata.core.errors import DataDirError, SnapDataError
from snapdata.layout.dirs import DataLayout
from snapdata.layout.users import all_users, resolve_ownership
from snapdata.models.layout import POST_MIGRATION, PRE_MIGRATION, DirOptions, LayoutMode
from snapdata.models.user import UserAccount
from snapdata.utils.fsops import atomic_rename, mkdir_all_chown, remove_if_empty

logger = logging.getLogger(__name__)

UserEnumerator = Callable[[DirOptions | None], list[UserAccount]]


class HiddenLayoutMigrator:
    """Moves per-user package data between ``~/snap`` and ``~/.snap/data``.

    ``hide`` fails fast: the first user that cannot be migrated stops the
    run, leaving earlier users migrated and later ones untouched.
    ``unhide`` is best-effort: every user is attempted and the first
    failure is raised at the end.

    Attributes:
        layout: Path builder for data directories.
    """

    def __init__(
        self,
        layout: DataLayout | None = None,
        *,
        users: UserEnumerator | None = None,
        remove_if_empty: Callable[[Path], None] = remove_if_empty,
        ownership: Callable[[UserAccount], tuple[int, int]] = resolve_ownership,
    ) -> None:
        """Initialize the migrator.

        Args:
            layout: Directory layout. Defaults to DataLayout().
            users: Returns the user accounts for given layout options.
                Defaults to all_users() bound to the layout's config.
            remove_if_empty: Removes a directory if it has no entries.
            ownership: Resolves a user's (uid, gid).
        """
        self.layout = layout if layout is not None else DataLayout()
        self._users = users if users is not None else partial(all_users, config=self.layout.config)
        self._remove_if_empty = remove_if_empty
        self._ownership = ownership

    def hide(self, name: str) -> None:
        """Move every user's exposed data for ``name`` to the hidden layout.

        Users without an exposed directory are skipped, so running
        ``hide`` twice is harmless.

        Raises:
            DataDirError: The first per-user filesystem failure.
            UserLookupError: If a user's uid/gid cannot be resolved.
        """
        collector = FailureCollector(FailurePolicy.FAIL_FAST)
        for user in self._users(PRE_MIGRATION):
            try:
                self._hide_user(user, name)
            except (OSError, SnapDataError) as e:
                collector.handle(e)

    def unhide(self, name: str) -> None:
        """Move every user's hidden data for ``name`` back to the exposed layout.

        Raises:
            DataDirError: The first failure; later ones are only logged.
            UserLookupError: If that was the first failure.
        """
        collector = FailureCollector(FailurePolicy.BEST_EFFORT, log=logger)
        for user in self._users(POST_MIGRATION):
            self._unhide_user(user, name, collector)
        collector.raise_first()

    def mode_for(self, user: UserAccount, name: str) -> LayoutMode | None:
        """Current layout of ``user``'s data for ``name``, None if there is none."""
        return self.layout.probe_mode(user.home, name)

    def _hide_user(self, user: UserAccount, name: str) -> None:
        uid, gid = self._ownership(user)

        exposed_dir = self.layout.user_snap_dir(user.home, name, PRE_MIGRATION)
        if not _exists(exposed_dir):
            logger.debug("Nothing to migrate for %s in %s", name, user.home)
            return

        hidden_root = self.layout.snap_dir(user.home, POST_MIGRATION)
        try:
            mkdir_all_chown(hidden_root, self.layout.config.user_dir_mode, uid, gid)
        except OSError as e:
            raise DataDirError("create", hidden_root, e) from e

        hidden_dir = self.layout.user_snap_dir(user.home, name, POST_MIGRATION)
        try:
            atomic_rename(exposed_dir, hidden_dir)
        except OSError as e:
            raise DataDirError("move", exposed_dir, e, target=hidden_dir) from e
        logger.info("Moved %s to %s", exposed_dir, hidden_dir)

        exposed_root = self.layout.snap_dir(user.home, PRE_MIGRATION)
        try:
            self._remove_if_empty(exposed_root)
        except OSError as e:
            raise DataDirError("remove", exposed_root, e) from e

    def _unhide_user(self, user: UserAccount, name: str, collector: FailureCollector) -> None:
        try:
            uid, gid = self._ownership(user)
        except SnapDataError as e:
            collector.handle(e)
            return

        hidden_dir = self.layout.user_snap_dir(user.home, name, POST_MIGRATION)
        try:
            if not _exists(hidden_dir):
                return
        except DataDirError as e:
            collector.handle(e)
            return

        exposed_root = self.layout.snap_dir(user.home, PRE_MIGRATION)
        try:
            mkdir_all_chown(exposed_root, self.layout.config.user_dir_mode, uid, gid)
        except OSError as e:
            collector.handle(DataDirError("create", exposed_root, e))
            return

        exposed_dir = self.layout.user_snap_dir(user.home, name, PRE_MIGRATION)
        try:
            atomic_rename(hidden_dir, exposed_dir)
        except OSError as e:
            collector.handle(DataDirError("move", hidden_dir, e, target=exposed_dir))
        else:
            logger.info("Moved %s to %s", hidden_dir, exposed_dir)

        hidden_root = self.layout.snap_dir(user.home, POST_MIGRATION)
        try:
            self._remove_if_empty(hidden_root)
        except OSError as e:
            collector.handle(DataDirError("remove", hidden_root, e))


def _exists(path: Path) -> bool:
    """Stat ``path``; only a missing path counts as absent.

    Raises:
        DataDirError: If the stat fails for any other reason.
    """
    try:
        path.stat()
    except FileNotFoundError:
        return False
    except OSError as e:
        raise DataDirError("stat", path, e) from e
    return True
