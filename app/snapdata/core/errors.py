"""Exception hierarchy for snapdata.

I/O failures are reported as DataDirError, an OSError subclass that
names the failing operation and path so callers can tell which step of
a multi-step migration broke.
"""

from pathlib import Path


class SnapDataError(Exception):
    """Base exception for non-I/O snapdata errors."""


class UserLookupError(SnapDataError):
    """Raised when a user's uid/gid cannot be resolved."""


class DataDirError(OSError):
    """A filesystem operation on a data directory failed.

    Attributes:
        operation: Short verb describing the step (e.g., "move", "copy").
        path: Path the operation was applied to.
        target: Destination path for two-path operations, None otherwise.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        operation: str,
        path: Path | str,
        cause: BaseException | None = None,
        *,
        target: Path | str | None = None,
    ) -> None:
        self.operation = operation
        self.path = Path(path)
        self.target = Path(target) if target is not None else None
        self.cause = cause

        message = f"cannot {operation} {str(self.path)!r}"
        if self.target is not None:
            message += f" to {str(self.target)!r}"
        if cause is not None:
            message += f": {_describe(cause)}"
        super().__init__(message)
        self.errno = getattr(cause, "errno", None)


class TrashEntryMissingError(DataDirError):
    """Raised when restoring a trash entry that no longer exists.

    A second restore of the same entry ends up here; callers treat it
    as "already recovered".
    """


def _describe(exc: BaseException) -> str:
    """Render an exception without repeating the path it names."""
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc)
