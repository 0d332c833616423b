"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules. User homes
and the system data root all live under ``tmp_path``.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from snapdata.core.config import SnapDataConfig
from snapdata.layout.dirs import DataLayout
from snapdata.models.layout import DirOptions
from snapdata.models.package import PackageInfo
from snapdata.models.user import UserAccount

from tests.helpers.fs import make_user


@pytest.fixture
def config(tmp_path: Path) -> SnapDataConfig:
    """Layout config rooted under tmp_path."""
    return SnapDataConfig(
        base_data_dir=tmp_path / "var" / "snap",
        home_roots=[tmp_path / "home"],
        include_root_home=False,
        root_home=tmp_path / "root",
    )


@pytest.fixture
def data_layout(config: SnapDataConfig) -> DataLayout:
    """DataLayout bound to the tmp_path config."""
    return DataLayout(config)


@pytest.fixture
def users(tmp_path: Path) -> list[UserAccount]:
    """Three fake users in iteration order alice, bob, carol."""
    return [make_user(tmp_path, name) for name in ("alice", "bob", "carol")]


@pytest.fixture
def user_source(
    users: list[UserAccount],
) -> Callable[[DirOptions | None], list[UserAccount]]:
    """User enumerator returning the fake users for any layout."""

    def _users(
        opts: DirOptions | None = None, *, config: SnapDataConfig | None = None
    ) -> list[UserAccount]:
        return list(users)

    return _users


@pytest.fixture
def old_info() -> PackageInfo:
    """Installed revision of the test package."""
    return PackageInfo(name="hello", revision="10")


@pytest.fixture
def new_info() -> PackageInfo:
    """Revision being installed."""
    return PackageInfo(name="hello", revision="11")
