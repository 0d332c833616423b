"""User account enumeration and ownership lookup.

When running as root every user whose home contains the layout's
per-user container directory is returned; otherwise only the current
user is considered.
"""

import logging
import os
import pwd
from pathlib import Path

from snapdata.core.config import SnapDataConfig
from snapdata.core.errors import UserLookupError
from snapdata.layout.dirs import DataLayout
from snapdata.models.layout import DirOptions
from snapdata.models.user import UserAccount

logger = logging.getLogger(__name__)


def _from_passwd(entry: pwd.struct_passwd) -> UserAccount:
    return UserAccount(
        name=entry.pw_name,
        home=Path(entry.pw_dir),
        uid=entry.pw_uid,
        gid=entry.pw_gid,
    )


def current_user() -> UserAccount:
    """Return the account the process is running as.

    Raises:
        UserLookupError: If the effective uid has no passwd entry.
    """
    uid = os.geteuid()
    try:
        return _from_passwd(pwd.getpwuid(uid))
    except KeyError as e:
        raise UserLookupError(f"cannot find passwd entry for uid {uid}") from e


def all_users(
    opts: DirOptions | None = None,
    *,
    config: SnapDataConfig | None = None,
) -> list[UserAccount]:
    """Enumerate users that may hold package data under the given layout.

    Candidate homes are ``<root>/<name>`` for each configured home root
    plus root's home, kept only if they contain the per-user container
    directory (``snap`` or ``.snap/data``). The directory name is looked
    up in the passwd database; names without an entry are skipped, and
    users are de-duplicated by uid.

    Args:
        opts: Layout options selecting which container directory to probe.
        config: Layout configuration. Defaults to SnapDataConfig().

    Returns:
        List of UserAccount in discovery order.
    """
    if os.geteuid() != 0:
        return [current_user()]

    layout = DataLayout(config)
    cfg = layout.config
    container = layout.snap_dir(Path("."), opts)

    candidates: list[Path] = []
    for root in cfg.home_roots:
        candidates.extend(sorted(root.glob(f"*/{container}")))
    if cfg.include_root_home:
        root_container = cfg.root_home / container
        if root_container.exists():
            candidates.append(root_container)

    users: list[UserAccount] = []
    seen: set[int] = set()
    for found in candidates:
        home = found
        for _ in container.parts:
            home = home.parent
        try:
            user = _from_passwd(pwd.getpwnam(home.name))
        except KeyError:
            logger.debug("Skipping %s: no user named %r", found, home.name)
            continue
        if user.uid in seen:
            continue
        seen.add(user.uid)
        users.append(user)

    return users


def resolve_ownership(user: UserAccount) -> tuple[int, int]:
    """Return ``(uid, gid)`` for ``user``, looking it up if not known.

    Raises:
        UserLookupError: If the user has no passwd entry.
    """
    if user.uid is not None and user.gid is not None:
        return user.uid, user.gid
    try:
        entry = pwd.getpwnam(user.name)
    except KeyError as e:
        raise UserLookupError(f"cannot find user {user.name!r}") from e
    return entry.pw_uid, entry.pw_gid
