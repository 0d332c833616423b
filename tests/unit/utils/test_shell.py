"""Unit tests for subprocess helpers."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest
from snapdata.utils.shell import CommandResult, run_command


class TestCommandResult:
    """Tests for CommandResult."""

    def test_success(self) -> None:
        """Only a zero exit status counts as success."""
        assert CommandResult(("cp",), "", "", 0).success
        assert not CommandResult(("cp",), "", "boom", 1).success

    def test_failure_message_uses_last_stderr_line(self) -> None:
        """The tool's last stderr line describes the failure."""
        result = CommandResult(("cp",), "", "cp: warning\ncp: No space left on device\n", 1)

        assert result.failure_message() == "cp: No space left on device"

    def test_failure_message_without_stderr(self) -> None:
        """Silent failures fall back to the exit status."""
        assert CommandResult(("cp", "-a"), "", "", 4).failure_message() == (
            "cp exited with status 4"
        )


class TestRunCommand:
    """Tests for run_command function."""

    @patch("snapdata.utils.shell.subprocess.run")
    def test_captures_output(self, mock_run: MagicMock) -> None:
        """run_command wraps the completed process in a CommandResult."""
        mock_run.return_value = MagicMock(stdout="out", stderr="err", returncode=3)

        result = run_command(["cp", "-a", "a", "b"])

        assert result == CommandResult(("cp", "-a", "a", "b"), "out", "err", 3)
        assert mock_run.call_args.kwargs["capture_output"] is True
        assert mock_run.call_args.kwargs["check"] is False

    @patch("snapdata.utils.shell.subprocess.run")
    def test_runs_in_c_locale(self, mock_run: MagicMock) -> None:
        """Tools run with LC_ALL=C while inheriting the rest of the environment."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        run_command(["cp"], timeout=5.0)

        env = mock_run.call_args.kwargs["env"]
        assert env["LC_ALL"] == "C"
        assert "PATH" in env
        assert mock_run.call_args.kwargs["timeout"] == 5.0

    @patch("snapdata.utils.shell.subprocess.run")
    def test_propagates_timeout(self, mock_run: MagicMock) -> None:
        """Timeouts are raised to the caller."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd=["cp"], timeout=1.0)

        with pytest.raises(subprocess.TimeoutExpired):
            run_command(["cp"], timeout=1.0)

    def test_raises_file_not_found(self) -> None:
        """run_command raises FileNotFoundError for missing commands."""
        with pytest.raises(FileNotFoundError):
            run_command(["nonexistent_command_xyz_12345"])
