"""CLI package for snapdata.

This package contains the Typer application and all subcommands.
"""

from snapdata.cli.main import app

__all__ = ["app"]
