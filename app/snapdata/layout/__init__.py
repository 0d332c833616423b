"""Directory layout and user account resolution.

This module maps packages and users onto filesystem paths and finds
the user accounts whose homes hold package data.
"""

from snapdata.layout.dirs import COMMON_DIR_NAME, DataLayout
from snapdata.layout.users import all_users, resolve_ownership

__all__ = [
    "COMMON_DIR_NAME",
    "DataLayout",
    "all_users",
    "resolve_ownership",
]
