"""Unit tests for user enumeration and ownership lookup."""

import pwd
from pathlib import Path
from unittest.mock import patch

import pytest
from snapdata.core.config import SnapDataConfig
from snapdata.core.errors import UserLookupError
from snapdata.layout.users import all_users, current_user, resolve_ownership
from snapdata.models.layout import POST_MIGRATION
from snapdata.models.user import UserAccount


def _passwd(name: str, uid: int, home: Path) -> pwd.struct_passwd:
    return pwd.struct_passwd((name, "x", uid, uid, "", str(home), "/bin/sh"))


@pytest.fixture
def homes(tmp_path: Path) -> dict[str, pwd.struct_passwd]:
    """Passwd entries for users whose homes live under tmp_path/home."""
    entries = {}
    for uid, name in enumerate(("alice", "bob", "carol", "alias"), start=1001):
        home = tmp_path / "home" / name
        home.mkdir(parents=True)
        entries[name] = _passwd(name, uid, home)
    # alias shares alice's uid
    entries["alias"] = _passwd("alias", 1001, tmp_path / "home" / "alias")
    return entries


def _lookup(entries: dict[str, pwd.struct_passwd]):
    def getpwnam(name: str) -> pwd.struct_passwd:
        return entries[name]

    return getpwnam


class TestAllUsers:
    """Tests for all_users()."""

    def test_non_root_returns_current_user(self) -> None:
        """Unprivileged runs only consider the current user."""
        entry = _passwd("me", 1000, Path("/home/me"))
        with (
            patch("snapdata.layout.users.os.geteuid", return_value=1000),
            patch("snapdata.layout.users.pwd.getpwuid", return_value=entry),
        ):
            users = all_users()

        assert users == [UserAccount("me", Path("/home/me"), 1000, 1000)]

    def test_root_finds_homes_with_snap_dir(
        self, tmp_path: Path, homes: dict[str, pwd.struct_passwd]
    ) -> None:
        """Only homes containing ~/snap are returned, looked up by name."""
        for name in ("alice", "carol"):
            (tmp_path / "home" / name / "snap").mkdir()
        (tmp_path / "home" / "ghost" / "snap").mkdir(parents=True)
        config = SnapDataConfig(home_roots=[tmp_path / "home"], include_root_home=False)

        with (
            patch("snapdata.layout.users.os.geteuid", return_value=0),
            patch("snapdata.layout.users.pwd.getpwnam", side_effect=_lookup(homes)),
        ):
            users = all_users(config=config)

        assert [u.name for u in users] == ["alice", "carol"]
        assert users[0].uid == 1001
        assert users[0].home == tmp_path / "home" / "alice"

    def test_root_hidden_layout(self, tmp_path: Path, homes: dict[str, pwd.struct_passwd]) -> None:
        """With migrated options homes are probed for ~/.snap/data."""
        (tmp_path / "home" / "alice" / "snap").mkdir()
        (tmp_path / "home" / "bob" / ".snap" / "data").mkdir(parents=True)
        config = SnapDataConfig(home_roots=[tmp_path / "home"], include_root_home=False)

        with (
            patch("snapdata.layout.users.os.geteuid", return_value=0),
            patch("snapdata.layout.users.pwd.getpwnam", side_effect=_lookup(homes)),
        ):
            users = all_users(POST_MIGRATION, config=config)

        assert [u.name for u in users] == ["bob"]

    def test_root_deduplicates_by_uid(
        self, tmp_path: Path, homes: dict[str, pwd.struct_passwd]
    ) -> None:
        """Two homes mapping to the same uid yield one user."""
        for name in ("alias", "alice"):
            (tmp_path / "home" / name / "snap").mkdir()
        config = SnapDataConfig(home_roots=[tmp_path / "home"], include_root_home=False)

        with (
            patch("snapdata.layout.users.os.geteuid", return_value=0),
            patch("snapdata.layout.users.pwd.getpwnam", side_effect=_lookup(homes)),
        ):
            users = all_users(config=config)

        assert [u.name for u in users] == ["alias"]

    def test_root_includes_root_home(self, tmp_path: Path) -> None:
        """Root's home is included when it has a snap directory."""
        root_home = tmp_path / "root"
        (root_home / "snap").mkdir(parents=True)
        config = SnapDataConfig(home_roots=[tmp_path / "home"], root_home=root_home)
        entry = _passwd("root", 0, root_home)

        with (
            patch("snapdata.layout.users.os.geteuid", return_value=0),
            patch("snapdata.layout.users.pwd.getpwnam", return_value=entry) as getpwnam,
        ):
            users = all_users(config=config)

        getpwnam.assert_called_once_with("root")
        assert users == [UserAccount("root", root_home, 0, 0)]


class TestCurrentUser:
    """Tests for current_user()."""

    def test_missing_passwd_entry(self) -> None:
        """An unknown effective uid raises UserLookupError."""
        with (
            patch("snapdata.layout.users.os.geteuid", return_value=4242),
            patch("snapdata.layout.users.pwd.getpwuid", side_effect=KeyError(4242)),
            pytest.raises(UserLookupError),
        ):
            current_user()


class TestResolveOwnership:
    """Tests for resolve_ownership()."""

    def test_known_ids(self) -> None:
        """Ids already on the account are returned without a lookup."""
        with patch("snapdata.layout.users.pwd.getpwnam") as getpwnam:
            assert resolve_ownership(UserAccount("a", Path("/h"), 5, 6)) == (5, 6)
        getpwnam.assert_not_called()

    def test_looks_up_missing_ids(self) -> None:
        """Missing ids come from the passwd database."""
        entry = pwd.struct_passwd(("a", "x", 7, 8, "", "/h", "/bin/sh"))
        with patch("snapdata.layout.users.pwd.getpwnam", return_value=entry):
            assert resolve_ownership(UserAccount("a", Path("/h"))) == (7, 8)

    def test_unknown_user(self) -> None:
        """An unknown name raises UserLookupError."""
        with (
            patch("snapdata.layout.users.pwd.getpwnam", side_effect=KeyError("a")),
            pytest.raises(UserLookupError, match="cannot find user"),
        ):
            resolve_ownership(UserAccount("a", Path("/h")))
