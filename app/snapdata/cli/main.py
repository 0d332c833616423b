"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from snapdata import __version__
from snapdata.cli.commands import config, data, layout
from snapdata.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="snapdata",
    help="Manage per-user package data directories across revisions and layouts.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"snapdata version {__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool) -> None:
    """Route library logging through Rich on stderr."""
    root = logging.getLogger("snapdata")
    root.handlers.clear()
    root.addHandler(RichHandler(console=err_console, show_path=False, show_time=False))
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config.toml (default: ~/.config/snapdata/config.toml).",
        ),
    ] = None,
) -> None:
    """snapdata - package data directory lifecycle.

    Copy data forward when a package changes revision, roll the copy
    back, and move per-user data between ~/snap and ~/.snap/data.
    """
    _setup_logging(verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path


# Register commands
app.add_typer(data.app, name="data")
app.add_typer(layout.app, name="layout")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
