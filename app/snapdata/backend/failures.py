"""Failure aggregation policy for multi-step operations.

Each call site picks a policy: FAIL_FAST re-raises the first failure
immediately; BEST_EFFORT records the first failure, logs the rest, and
lets the caller keep going and raise at the end.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class FailurePolicy(str, Enum):
    """How a multi-step operation reacts to a failed step.

    Attributes:
        FAIL_FAST: Abort on the first failure.
        BEST_EFFORT: Attempt every step, report only the first failure.
    """

    FAIL_FAST = "fail_fast"
    BEST_EFFORT = "best_effort"


class FailureCollector:
    """Collects step failures according to a FailurePolicy.

    Example:
        >>> collector = FailureCollector(FailurePolicy.BEST_EFFORT)
        >>> for user in users:
        ...     try:
        ...         migrate(user)
        ...     except OSError as e:
        ...         collector.handle(e)
        >>> collector.raise_first()
    """

    def __init__(self, policy: FailurePolicy, *, log: logging.Logger | None = None) -> None:
        """Initialize the collector.

        Args:
            policy: Failure policy for this call site.
            log: Logger receiving suppressed failures. Defaults to this module's.
        """
        self._policy = policy
        self._log = log or logger
        self._first: Exception | None = None
        self._suppressed = 0

    @property
    def policy(self) -> FailurePolicy:
        """The policy this collector applies."""
        return self._policy

    @property
    def first_error(self) -> Exception | None:
        """The first failure handled, or None."""
        return self._first

    @property
    def suppressed_count(self) -> int:
        """Number of failures that were only logged."""
        return self._suppressed

    def handle(self, exc: Exception) -> None:
        """Record a failed step.

        Raises:
            Exception: ``exc`` itself, under FAIL_FAST.
        """
        if self._policy == FailurePolicy.FAIL_FAST:
            raise exc
        if self._first is None:
            self._first = exc
            return
        self._suppressed += 1
        self._log.warning("%s", exc)

    def raise_first(self) -> None:
        """Raise the first recorded failure, if any."""
        if self._first is not None:
            raise self._first
