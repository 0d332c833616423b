"""Subprocess helpers for external tools such as cp(1)."""

import os
import subprocess
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of an external command.

    Attributes:
        args: The command line that was run.
        stdout: Captured standard output.
        stderr: Captured standard error.
        returncode: Exit status of the command.
    """

    args: tuple[str, ...]
    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if the command exited with status 0."""
        return self.returncode == 0

    def failure_message(self) -> str:
        """Short description of a failed run, preferring the tool's own message."""
        detail = self.stderr.strip()
        if detail:
            return detail.splitlines()[-1]
        return f"{self.args[0]} exited with status {self.returncode}"


def run_command(args: list[str], *, timeout: float | None = 60.0) -> CommandResult:
    """Run ``args`` with captured output in the C locale.

    Args:
        args: Command and arguments to execute.
        timeout: Maximum time in seconds to wait for the command.

    Returns:
        CommandResult for the finished process.

    Raises:
        subprocess.TimeoutExpired: If the command exceeds ``timeout``.
        FileNotFoundError: If the executable is not found.
    """
    env = {**os.environ, "LC_ALL": "C"}
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
        env=env,
    )
    return CommandResult(
        args=tuple(args),
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )
