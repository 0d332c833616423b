"""Unit tests for FailureCollector."""

import logging

import pytest
from snapdata.backend.failures import FailureCollector, FailurePolicy


class TestFailFast:
    """Tests for the FAIL_FAST policy."""

    def test_raises_immediately(self) -> None:
        """The handled exception is re-raised as-is."""
        collector = FailureCollector(FailurePolicy.FAIL_FAST)
        err = OSError("boom")

        with pytest.raises(OSError) as exc_info:
            collector.handle(err)

        assert exc_info.value is err

    def test_raise_first_without_errors(self) -> None:
        """raise_first() is a no-op when nothing failed."""
        collector = FailureCollector(FailurePolicy.FAIL_FAST)

        collector.raise_first()

        assert collector.first_error is None


class TestBestEffort:
    """Tests for the BEST_EFFORT policy."""

    def test_keeps_first_and_logs_rest(self, caplog: pytest.LogCaptureFixture) -> None:
        """Only the first error is kept; later ones go to the log."""
        collector = FailureCollector(FailurePolicy.BEST_EFFORT)
        first, second, third = OSError("first"), OSError("second"), OSError("third")

        with caplog.at_level(logging.WARNING, logger="snapdata.backend.failures"):
            for err in (first, second, third):
                collector.handle(err)

        assert collector.first_error is first
        assert collector.suppressed_count == 2
        assert "second" in caplog.text
        assert "third" in caplog.text
        assert "first" not in caplog.text

    def test_raise_first(self) -> None:
        """raise_first() raises the first handled error."""
        collector = FailureCollector(FailurePolicy.BEST_EFFORT)
        first = OSError("first")
        collector.handle(first)
        collector.handle(OSError("second"))

        with pytest.raises(OSError) as exc_info:
            collector.raise_first()

        assert exc_info.value is first

    def test_custom_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        """Suppressed errors go to the logger given by the call site."""
        collector = FailureCollector(
            FailurePolicy.BEST_EFFORT, log=logging.getLogger("snapdata.test")
        )

        with caplog.at_level(logging.WARNING, logger="snapdata.test"):
            collector.handle(OSError("first"))
            collector.handle(OSError("second"))

        assert [r.name for r in caplog.records] == ["snapdata.test"]

    def test_policy_property(self) -> None:
        """The collector exposes its policy."""
        assert FailureCollector(FailurePolicy.BEST_EFFORT).policy == FailurePolicy.BEST_EFFORT
