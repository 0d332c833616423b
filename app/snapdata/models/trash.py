"""Trash entry model.

A trash entry is a directory tree moved aside, next to its original
location, so that a destructive step can be rolled back.
"""

from dataclasses import dataclass
from pathlib import Path

# Suffix appended to a directory path to form its trash location
TRASH_SUFFIX = ".old"


def trash_path(path: Path | str) -> Path:
    """Return the trash location for ``path`` (``<path>.old``)."""
    source = Path(path)
    return source.with_name(source.name + TRASH_SUFFIX)


@dataclass(frozen=True, slots=True)
class TrashEntry:
    """A directory staged aside for rollback.

    Attributes:
        original: Path the tree was moved away from.
        location: Path where the tree currently lives.
    """

    original: Path
    location: Path

    @classmethod
    def for_path(cls, path: Path | str) -> "TrashEntry":
        """Describe the (possibly not yet existing) trash entry for ``path``."""
        original = Path(path)
        return cls(original=original, location=trash_path(original))

    @classmethod
    def at(cls, location: Path | str) -> "TrashEntry":
        """Describe the trash entry living at ``location`` (``<original>.old``).

        Raises:
            ValueError: If ``location`` does not carry the trash suffix.
        """
        trashed = Path(location)
        if not trashed.name.endswith(TRASH_SUFFIX) or trashed.name == TRASH_SUFFIX:
            raise ValueError(f"not a trash location: {trashed}")
        original = trashed.with_name(trashed.name[: -len(TRASH_SUFFIX)])
        return cls(original=original, location=trashed)

    def exists(self) -> bool:
        """Check whether the trashed tree is present on disk."""
        return self.location.exists() or self.location.is_symlink()
