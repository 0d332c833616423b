"""CLI commands for snapdata.

This package contains all subcommand implementations.
"""

from snapdata.cli.commands import config, data, layout

__all__ = ["config", "data", "layout"]
