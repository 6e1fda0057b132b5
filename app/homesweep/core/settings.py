"""Run settings for homesweep.

Defaults for every command-line option can be stored in config.toml
inside the config directory. Options given on the command line always
win over the file.

Example config.toml:

    mode = "show"
    parent_path = 'C:\\Users'
    prompt = true
    empty_directories = "retain"
    powershell_timeout = 30
"""

import logging
import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from homesweep.core.paths import get_settings_path
from homesweep.maintenance.models import RunMode, SelectionMode

logger = logging.getLogger(__name__)


class MaintenanceSettings(BaseModel):
    """Defaults for a maintenance run.

    Attributes:
        mode: Run mode used when -mode is not given.
        parent_path: Parent directory used when -parentPath is not given.
            Empty means the current working directory.
        prompt: Whether maintain mode asks before deleting.
        empty_directories: Selection mode for empty directories.
        powershell_timeout: Seconds allowed for each PowerShell call.
    """

    model_config = ConfigDict(extra="forbid")

    mode: RunMode = RunMode.SHOW
    parent_path: str = ""
    prompt: bool = True
    empty_directories: SelectionMode = SelectionMode.RETAIN
    powershell_timeout: Annotated[
        float,
        Field(gt=0, le=600, description="Timeout in seconds (0-600]"),
    ] = 30.0


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file is not valid TOML."""


def load_settings(path: Path | None = None) -> MaintenanceSettings:
    """Load run settings from a TOML file.

    A missing file is not an error; defaults are returned instead.

    Args:
        path: Path to the settings file. If None, uses the default location.

    Returns:
        Validated MaintenanceSettings object.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the file cannot be read or fails validation.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        logger.debug("No settings file at %s, using defaults", settings_path)
        return MaintenanceSettings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return MaintenanceSettings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise SettingsError(f"Invalid settings in {settings_path}: {e}") from e
