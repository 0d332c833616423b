"""Layout configuration and settings.

This module provides the configuration model and I/O functions that
describe where package data lives on this system: the system-wide base
directory, where user homes are found, and the names of the exposed and
hidden per-user directories.

Configuration is stored in ~/.config/snapdata/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from snapdata.core.errors import SnapDataError
from snapdata.core.paths import get_config_path

logger = logging.getLogger(__name__)


class SnapDataConfig(BaseModel):
    """Filesystem layout used by the data migrators.

    Attributes:
        base_data_dir: System-wide data root (``<base>/<pkg>/<rev>``).
        home_roots: Directories whose children are user homes.
        include_root_home: Also consider root's home directory.
        root_home: Root's home directory.
        exposed_dir_name: Per-user exposed directory, relative to home.
        hidden_dir_name: Per-user hidden directory, relative to home.
        dir_mode: Permission bits for system data directories.
        user_dir_mode: Permission bits for per-user layout containers.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    base_data_dir: Annotated[
        Path,
        Field(description="System-wide package data root"),
    ] = Path("/var/snap")
    home_roots: Annotated[
        list[Path],
        Field(description="Directories containing user homes"),
    ] = [Path("/home")]
    include_root_home: Annotated[
        bool,
        Field(description="Include root's home when enumerating users"),
    ] = True
    root_home: Annotated[
        Path,
        Field(description="Root's home directory"),
    ] = Path("/root")
    exposed_dir_name: Annotated[
        str,
        Field(min_length=1, description="Exposed per-user directory relative to home"),
    ] = "snap"
    hidden_dir_name: Annotated[
        str,
        Field(min_length=1, description="Hidden per-user directory relative to home"),
    ] = ".snap/data"
    dir_mode: Annotated[
        int,
        Field(ge=0, le=0o7777, description="Mode for system data directories"),
    ] = 0o755
    user_dir_mode: Annotated[
        int,
        Field(ge=0, le=0o7777, description="Mode for per-user layout containers"),
    ] = 0o700

    @field_validator("exposed_dir_name", "hidden_dir_name")
    @classmethod
    def validate_relative(cls, v: str) -> str:
        """Per-user directory names must stay inside the home directory."""
        rel = Path(v)
        if rel.is_absolute() or ".." in rel.parts:
            msg = f"must be a path relative to the home directory, got {v!r}"
            raise ValueError(msg)
        return v


class ConfigError(SnapDataError):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> SnapDataConfig:
    """Load layout configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated SnapDataConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return SnapDataConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> SnapDataConfig:
    """Load the config file, falling back to defaults when it is absent.

    Parse and validation errors still propagate.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file at %s, using defaults", path or get_config_path())
        return SnapDataConfig()


def save_config(config: SnapDataConfig, path: Path | None = None) -> Path:
    """Save layout configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The SnapDataConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(_config_to_dict(config), f)
        # os.replace() is atomic on POSIX
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: SnapDataConfig) -> dict[str, object]:
    """Convert SnapDataConfig to a dictionary for TOML serialization.

    Paths are written as strings; modes stay integers.
    """
    data = config.model_dump()
    data["base_data_dir"] = str(config.base_data_dir)
    data["root_home"] = str(config.root_home)
    data["home_roots"] = [str(p) for p in config.home_roots]
    return data
