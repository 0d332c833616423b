"""Helpers shared by CLI commands."""

from pathlib import Path

import typer

from snapdata.core.config import ConfigError, SnapDataConfig, load_config_or_default
from snapdata.layout.dirs import DataLayout
from snapdata.utils.formatting import print_error


def config_path_from(ctx: typer.Context) -> Path | None:
    """Return the --config path given to the root command, if any."""
    obj = ctx.find_root().obj or {}
    return obj.get("config_path")


def require_config(ctx: typer.Context) -> SnapDataConfig:
    """Load the config for this invocation or exit with an error.

    Raises:
        typer.Exit: If the config file exists but is invalid.
    """
    try:
        return load_config_or_default(config_path_from(ctx))
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def require_layout(ctx: typer.Context) -> DataLayout:
    """Build the DataLayout for this invocation."""
    return DataLayout(require_config(ctx))
