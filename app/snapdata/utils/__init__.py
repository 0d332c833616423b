"""Utility modules for snapdata.

This module exports commonly used utility functions.
"""

from snapdata.utils.formatting import (
    console,
    create_layout_table,
    err_console,
    print_error,
    print_info,
    print_success,
)
from snapdata.utils.fsops import (
    atomic_rename,
    copy_tree,
    make_dirs,
    mkdir_all_chown,
    remove_all,
    remove_if_empty,
)
from snapdata.utils.shell import CommandResult, run_command

__all__ = [
    "CommandResult",
    "atomic_rename",
    "console",
    "copy_tree",
    "create_layout_table",
    "err_console",
    "make_dirs",
    "mkdir_all_chown",
    "print_error",
    "print_info",
    "print_success",
    "remove_all",
    "remove_if_empty",
    "run_command",
]
