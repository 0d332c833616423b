"""Path builders for package data directories.

Logical layout (all roots configurable through SnapDataConfig):

- ``<base>/<pkg>/<rev>``          versioned system data
- ``<base>/<pkg>/common``         common system data
- ``<home>/snap/<pkg>[/<rev>]``   exposed per-user data
- ``<home>/.snap/data/<pkg>``     hidden per-user data (after migration)
"""

from collections.abc import Iterable
from pathlib import Path

from snapdata.core.config import SnapDataConfig
from snapdata.models.layout import POST_MIGRATION, DataDirKind, DirOptions, LayoutMode
from snapdata.models.package import PackageInfo
from snapdata.models.trash import trash_path
from snapdata.models.user import UserAccount

COMMON_DIR_NAME = "common"


class DataLayout:
    """Resolves data directory paths for packages and users.

    Attributes:
        config: The layout configuration paths are derived from.
    """

    def __init__(self, config: SnapDataConfig | None = None) -> None:
        self.config = config if config is not None else SnapDataConfig()

    # System-wide directories

    def base_data_dir(self, name: str) -> Path:
        """Directory shared by every instance of a package (``<base>/<name>``)."""
        return self.config.base_data_dir / name

    def data_home(self, info: PackageInfo) -> Path:
        """Per-instance system directory holding revisions and ``common``."""
        return self.config.base_data_dir / info.instance_name

    def data_dir(self, info: PackageInfo) -> Path:
        """Versioned system data directory for ``info``'s revision."""
        return self.data_home(info) / info.revision

    def common_data_dir(self, info: PackageInfo) -> Path:
        """Common (revision-independent) system data directory."""
        return self.data_home(info) / COMMON_DIR_NAME

    # Per-user directories

    def snap_dir(self, home: Path, opts: DirOptions | None = None) -> Path:
        """Per-user container directory (``~/snap`` or ``~/.snap/data``)."""
        if opts is not None and opts.migrated_to_hidden_dir:
            return home / self.config.hidden_dir_name
        return home / self.config.exposed_dir_name

    def user_snap_dir(self, home: Path, instance_name: str, opts: DirOptions | None = None) -> Path:
        """Per-user package directory (``~/snap/<pkg>``)."""
        return self.snap_dir(home, opts) / instance_name

    def user_data_dir(self, home: Path, info: PackageInfo, opts: DirOptions | None = None) -> Path:
        """Per-user versioned data directory (``~/snap/<pkg>/<rev>``)."""
        return self.user_snap_dir(home, info.instance_name, opts) / info.revision

    def user_common_data_dir(
        self, home: Path, info: PackageInfo, opts: DirOptions | None = None
    ) -> Path:
        """Per-user common data directory (``~/snap/<pkg>/common``)."""
        return self.user_snap_dir(home, info.instance_name, opts) / COMMON_DIR_NAME

    # Aggregates

    def package_dirs(
        self,
        info: PackageInfo,
        users: Iterable[UserAccount],
        opts: DirOptions | None = None,
        kind: DataDirKind = DataDirKind.VERSIONED,
    ) -> list[Path]:
        """All directories of one kind for ``info``: system first, then per user.

        TRASH yields the trash locations of the versioned directories.
        """
        if kind == DataDirKind.TRASH:
            return [trash_path(d) for d in self.package_dirs(info, users, opts)]
        leaf = info.revision if kind == DataDirKind.VERSIONED else COMMON_DIR_NAME
        dirs = [self.data_home(info) / leaf]
        dirs.extend(self.user_snap_dir(u.home, info.instance_name, opts) / leaf for u in users)
        return _unique(dirs)

    def data_dirs(
        self,
        info: PackageInfo,
        users: Iterable[UserAccount],
        opts: DirOptions | None = None,
    ) -> list[Path]:
        """All versioned data directories of ``info``: system first, then per user."""
        return self.package_dirs(info, users, opts, DataDirKind.VERSIONED)

    def common_data_dirs(
        self,
        info: PackageInfo,
        users: Iterable[UserAccount],
        opts: DirOptions | None = None,
    ) -> list[Path]:
        """All common data directories of ``info``: system first, then per user."""
        return self.package_dirs(info, users, opts, DataDirKind.COMMON)

    def probe_mode(self, home: Path, instance_name: str) -> LayoutMode | None:
        """Infer where a user's data for a package currently lives.

        The hidden location wins when both exist. A package that is not
        yet migrated is reported as EXPOSED since the pre-migration
        hidden mode cannot be told apart on disk.

        Returns:
            The layout mode, or None if the user has no data for the package.
        """
        if self.user_snap_dir(home, instance_name, POST_MIGRATION).is_dir():
            return LayoutMode.POST_MIGRATION_HIDDEN
        if self.user_snap_dir(home, instance_name).is_dir():
            return LayoutMode.EXPOSED
        return None


def _unique(paths: list[Path]) -> list[Path]:
    return list(dict.fromkeys(paths))
