"""Data directory layout models.

Describes which kind of data directory a path is and where a user's
per-package directories live (exposed or hidden layout).
"""

from dataclasses import dataclass
from enum import Enum


class DataDirKind(str, Enum):
    """Kind of package data directory.

    Attributes:
        VERSIONED: Per-revision storage (``<base>/<pkg>/<rev>``).
        COMMON: Revision-independent storage (``<base>/<pkg>/common``).
        TRASH: A directory moved aside to allow rollback.
    """

    VERSIONED = "versioned"
    COMMON = "common"
    TRASH = "trash"


class LayoutMode(str, Enum):
    """Where a user's per-package data directories live.

    Attributes:
        EXPOSED: Data under ``~/snap/<pkg>``.
        PRE_MIGRATION_HIDDEN: Hidden layout requested but data not moved yet;
            directories are still under ``~/snap/<pkg>``.
        POST_MIGRATION_HIDDEN: Data moved to ``~/.snap/data/<pkg>``.
    """

    EXPOSED = "exposed"
    PRE_MIGRATION_HIDDEN = "pre_migration_hidden"
    POST_MIGRATION_HIDDEN = "post_migration_hidden"


@dataclass(frozen=True, slots=True)
class DirOptions:
    """Options selecting the per-user directory layout.

    Attributes:
        hidden_snap_data_dir: The hidden layout is enabled for the package.
        migrated_to_hidden_dir: Data has already been moved to the hidden
            location. Only this flag changes the resolved paths.
    """

    hidden_snap_data_dir: bool = False
    migrated_to_hidden_dir: bool = False

    def __post_init__(self) -> None:
        """Reject a migrated layout that was never enabled."""
        if self.migrated_to_hidden_dir and not self.hidden_snap_data_dir:
            msg = "migrated_to_hidden_dir requires hidden_snap_data_dir"
            raise ValueError(msg)

    @property
    def mode(self) -> LayoutMode:
        """The layout mode these options describe."""
        if self.migrated_to_hidden_dir:
            return LayoutMode.POST_MIGRATION_HIDDEN
        if self.hidden_snap_data_dir:
            return LayoutMode.PRE_MIGRATION_HIDDEN
        return LayoutMode.EXPOSED

    @classmethod
    def for_mode(cls, mode: LayoutMode) -> "DirOptions":
        """Build the options matching a layout mode."""
        if mode == LayoutMode.POST_MIGRATION_HIDDEN:
            return cls(hidden_snap_data_dir=True, migrated_to_hidden_dir=True)
        if mode == LayoutMode.PRE_MIGRATION_HIDDEN:
            return cls(hidden_snap_data_dir=True)
        return cls()


EXPOSED = DirOptions()
PRE_MIGRATION = DirOptions.for_mode(LayoutMode.PRE_MIGRATION_HIDDEN)
POST_MIGRATION = DirOptions.for_mode(LayoutMode.POST_MIGRATION_HIDDEN)
