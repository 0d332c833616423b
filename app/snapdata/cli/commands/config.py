"""Configuration commands.

Provides commands to show the effective layout configuration and to
write a default config file.
"""

from typing import Annotated

import typer
from rich.table import Table

from snapdata.cli.common import config_path_from, require_config
from snapdata.core.config import ConfigError, SnapDataConfig, save_config
from snapdata.core.paths import get_config_path
from snapdata.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize the layout configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration."""
    config = require_config(ctx)
    path = config_path_from(ctx) or get_config_path()

    table = Table(
        title="snapdata configuration",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", no_wrap=True)
    table.add_column("Value")

    for key, value in config.model_dump().items():
        if key.endswith("_mode"):
            value = oct(value)
        elif isinstance(value, list):
            value = ", ".join(str(v) for v in value)
        table.add_row(key, str(value))

    console.print(table)
    source = path if path.exists() else "built-in defaults"
    console.print(f"\n[muted]Source: {source}[/]")


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with default settings."""
    path = config_path_from(ctx) or get_config_path()

    if path.exists() and not force:
        print_info(f"Config already exists: {path} (use --force to overwrite)")
        return

    try:
        saved = save_config(SnapDataConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Wrote default config to {saved}")
