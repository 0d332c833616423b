"""Fixtures for CLI tests."""

from pathlib import Path

import pytest
from snapdata.core.config import SnapDataConfig, save_config


@pytest.fixture
def config_file(tmp_path: Path, config: SnapDataConfig) -> Path:
    """Config file pointing every data root under tmp_path."""
    return save_config(config, tmp_path / "config.toml")
