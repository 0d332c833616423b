"""Per-user layout commands.

Provides commands to move a package's per-user data between the exposed
(~/snap) and hidden (~/.snap/data) layouts and to show where it lives.
"""

from typing import Annotated

import typer

from snapdata.backend.hidden import HiddenLayoutMigrator
from snapdata.cli.common import require_layout
from snapdata.core.config import SnapDataConfig
from snapdata.core.errors import DataDirError, SnapDataError
from snapdata.layout.users import all_users
from snapdata.models.layout import EXPOSED, POST_MIGRATION, LayoutMode
from snapdata.models.user import UserAccount
from snapdata.utils.formatting import (
    console,
    create_layout_table,
    print_error,
    print_info,
    print_success,
)

app = typer.Typer(
    help="Move per-user data between the exposed and hidden layouts.",
    invoke_without_command=True,
    no_args_is_help=True,
)

NameArg = Annotated[str, typer.Argument(help="Package (instance) name.")]

_MODE_LABELS = {
    LayoutMode.EXPOSED: "[exposed]exposed[/]",
    LayoutMode.PRE_MIGRATION_HIDDEN: "[exposed]pre-migration[/]",
    LayoutMode.POST_MIGRATION_HIDDEN: "[hidden]hidden[/]",
}


@app.command()
def hide(ctx: typer.Context, name: NameArg) -> None:
    """Move every user's ~/snap/NAME to ~/.snap/data/NAME.

    Stops at the first user that fails; already moved users stay moved.
    """
    migrator = HiddenLayoutMigrator(require_layout(ctx))
    try:
        migrator.hide(name)
    except (DataDirError, SnapDataError) as e:
        print_error(str(e))
        print_info(f"Run 'snapdata layout unhide {name}' to restore the exposed layout.")
        raise typer.Exit(code=1) from e

    print_success(f"Moved {name} data to the hidden layout.")


@app.command()
def unhide(ctx: typer.Context, name: NameArg) -> None:
    """Move every user's ~/.snap/data/NAME back to ~/snap/NAME.

    All users are attempted; the first failure is reported.
    """
    migrator = HiddenLayoutMigrator(require_layout(ctx))
    try:
        migrator.unhide(name)
    except (DataDirError, SnapDataError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Moved {name} data back to the exposed layout.")


@app.command()
def status(ctx: typer.Context, name: NameArg) -> None:
    """Show which layout each user's data for NAME is in."""
    data_layout = require_layout(ctx)
    migrator = HiddenLayoutMigrator(data_layout)

    try:
        users = _known_users(data_layout.config)
    except (OSError, SnapDataError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    table = create_layout_table(f"Data layout for {name}")
    rows = 0
    for user in users:
        mode = migrator.mode_for(user, name)
        if mode is None:
            continue
        opts = POST_MIGRATION if mode == LayoutMode.POST_MIGRATION_HIDDEN else EXPOSED
        path = data_layout.user_snap_dir(user.home, name, opts)
        table.add_row(user.name, str(user.home), _MODE_LABELS[mode], str(path))
        rows += 1

    if rows == 0:
        print_info(f"No user data found for {name}.")
        return

    console.print(table)


def _known_users(config: SnapDataConfig) -> list[UserAccount]:
    """Users holding data in either layout, de-duplicated by name."""
    found: dict[str, UserAccount] = {}
    for opts in (EXPOSED, POST_MIGRATION):
        for user in all_users(opts, config=config):
            found.setdefault(user.name, user)
    return list(found.values())
