"""User account model."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class UserAccount:
    """A system user whose home may hold package data.

    Attributes:
        name: Login name.
        home: Home directory.
        uid: Numeric user id, None if it still has to be looked up.
        gid: Numeric primary group id, None if it still has to be looked up.
    """

    name: str
    home: Path
    uid: int | None = None
    gid: int | None = None
