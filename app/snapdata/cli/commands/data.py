"""Revision data commands.

Provides commands to copy a package's data forward to a new revision,
undo that copy, and discard the trash it leaves behind.
"""

from typing import Annotated

import typer

from snapdata.backend.copydata import RevisionDataMigrator
from snapdata.cli.common import require_layout
from snapdata.core.errors import DataDirError, SnapDataError
from snapdata.models.layout import EXPOSED, POST_MIGRATION, DirOptions
from snapdata.models.package import PackageInfo
from snapdata.utils.formatting import print_error, print_info, print_success

app = typer.Typer(
    help="Copy package data between revisions.",
    invoke_without_command=True,
    no_args_is_help=True,
)

NameArg = Annotated[str, typer.Argument(help="Package name.")]
NewRevOpt = Annotated[str, typer.Option("--new", "-n", help="Revision being installed.")]
OldRevOpt = Annotated[
    str | None,
    typer.Option("--old", "-o", help="Currently installed revision (omit on first install)."),
]
InstanceKeyOpt = Annotated[
    str,
    typer.Option("--instance-key", "-k", help="Instance key for parallel installs."),
]
HiddenOpt = Annotated[
    bool,
    typer.Option("--hidden", help="User data already lives in the hidden layout."),
]


@app.command()
def copy(
    ctx: typer.Context,
    name: NameArg,
    new: NewRevOpt,
    old: OldRevOpt = None,
    instance_key: InstanceKeyOpt = "",
    hidden: HiddenOpt = False,
) -> None:
    """Copy data of the installed revision forward to a new revision."""
    old_info, new_info = _infos(name, new, old, instance_key)
    migrator = RevisionDataMigrator(require_layout(ctx))

    try:
        migrator.copy_forward(old_info, new_info, _opts(hidden))
    except (DataDirError, SnapDataError) as e:
        print_error(str(e))
        print_info(f"Run 'snapdata data undo {name} --new {new}' to roll back.")
        raise typer.Exit(code=1) from e

    if old_info is None:
        print_success(f"Created data directories for {new_info.instance_name} ({new}).")
    elif new_info.same_revision(old_info):
        print_info(f"{new_info.instance_name} is already at revision {new}; nothing to copy.")
    else:
        print_success(f"Copied {new_info.instance_name} data from revision {old} to {new}.")


@app.command()
def undo(
    ctx: typer.Context,
    name: NameArg,
    new: NewRevOpt,
    old: OldRevOpt = None,
    instance_key: InstanceKeyOpt = "",
    hidden: HiddenOpt = False,
) -> None:
    """Undo a copy: remove the new revision's data and restore the old one."""
    old_info, new_info = _infos(name, new, old, instance_key)
    migrator = RevisionDataMigrator(require_layout(ctx))

    try:
        migrator.undo_copy_forward(new_info, old_info, _opts(hidden))
    except (DataDirError, SnapDataError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Reverted {new_info.instance_name} data to its state before revision {new}.")


@app.command("clear-trash")
def clear_trash(
    ctx: typer.Context,
    name: NameArg,
    rev: Annotated[
        list[str],
        typer.Option("--rev", "-r", help="Revision whose trash to discard (repeatable)."),
    ],
    instance_key: InstanceKeyOpt = "",
) -> None:
    """Discard data staged aside by a previous copy.

    After an upgrade pass both the old and the new revision.
    """
    infos = [_package(name, r, instance_key) for r in rev]
    migrator = RevisionDataMigrator(require_layout(ctx))
    for info in infos:
        migrator.clear_trash(info)
    revisions = ", ".join(rev)
    print_success(f"Cleared trash for {infos[0].instance_name} revision(s) {revisions}.")


# === Private helper functions ===


def _package(name: str, revision: str, instance_key: str) -> PackageInfo:
    try:
        return PackageInfo(name=name, revision=revision, instance_key=instance_key)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=2) from e


def _infos(
    name: str, new: str, old: str | None, instance_key: str
) -> tuple[PackageInfo | None, PackageInfo]:
    old_info = _package(name, old, instance_key) if old else None
    return old_info, _package(name, new, instance_key)


def _opts(hidden: bool) -> DirOptions:
    return POST_MIGRATION if hidden else EXPOSED
