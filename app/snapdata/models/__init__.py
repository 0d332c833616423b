"""Data models for snapdata.

This module exports the value types shared by the layout, backend and
CLI modules.
"""

from snapdata.models.layout import (
    EXPOSED,
    POST_MIGRATION,
    PRE_MIGRATION,
    DataDirKind,
    DirOptions,
    LayoutMode,
)
from snapdata.models.package import PackageInfo
from snapdata.models.trash import TRASH_SUFFIX, TrashEntry, trash_path
from snapdata.models.user import UserAccount

__all__ = [
    "EXPOSED",
    "POST_MIGRATION",
    "PRE_MIGRATION",
    "TRASH_SUFFIX",
    "DataDirKind",
    "DirOptions",
    "LayoutMode",
    "PackageInfo",
    "TrashEntry",
    "UserAccount",
    "trash_path",
]
