"""Unit tests for the root CLI application."""

import logging
from pathlib import Path

from snapdata import __version__
from snapdata.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestMainApp:
    """Tests for global options."""

    def test_version(self) -> None:
        """--version prints the version and exits cleanly."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"snapdata version {__version__}" in result.output

    def test_help_lists_command_groups(self) -> None:
        """--help lists the data, layout and config groups."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for group in ("data", "layout", "config"):
            assert group in result.output

    def test_verbose_enables_debug_logging(self, config_file: Path) -> None:
        """--verbose lowers the package log level to DEBUG."""
        result = runner.invoke(app, ["--verbose", "--config", str(config_file), "config", "show"])

        assert result.exit_code == 0
        assert logging.getLogger("snapdata").level == logging.DEBUG

        runner.invoke(app, ["--config", str(config_file), "config", "show"])
        assert logging.getLogger("snapdata").level == logging.WARNING
