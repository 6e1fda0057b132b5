"""Path handling for homesweep.

Locates the configuration directory and resolves the user-supplied
parent directory that a maintenance run operates on.

Config directory lookup order:
- $HOMESWEEP_CONFIG_DIR
- %APPDATA%/homesweep
- $XDG_CONFIG_HOME/homesweep
- ~/.config/homesweep
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "homesweep"


class PathResolutionError(Exception):
    """Raised when a parent path cannot be resolved to an existing directory."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to the homesweep configuration directory (may not exist).
    """
    override = os.environ.get("HOMESWEEP_CONFIG_DIR")
    if override:
        return Path(override)

    for env_var in ("APPDATA", "XDG_CONFIG_HOME"):
        base = os.environ.get(env_var)
        if base:
            return Path(base) / APP_NAME

    return Path.home() / ".config" / APP_NAME


def get_settings_path() -> Path:
    """Get the settings file path.

    Returns:
        Path to config.toml inside the config directory.
    """
    return get_config_dir() / "config.toml"


def resolve_parent_path(raw: str | None, *, cwd: Path | None = None) -> Path:
    """Resolve a user-supplied path to an existing absolute directory.

    An empty or whitespace-only value selects the current working
    directory. Absolute paths are returned unchanged; relative paths are
    resolved against the working directory into a canonical path.

    Args:
        raw: Path as typed by the user, or None.
        cwd: Working directory to resolve against. Defaults to Path.cwd().

    Returns:
        Absolute path of an existing directory.

    Raises:
        PathResolutionError: If the path does not exist or is not a directory.
    """
    base = cwd if cwd is not None else Path.cwd()
    text = (raw or "").strip()

    if not text:
        resolved = base
    else:
        candidate = Path(text)
        if candidate.is_absolute():
            resolved = candidate
        else:
            try:
                resolved = (base / candidate).resolve(strict=True)
            except FileNotFoundError:
                raise PathResolutionError(text, "Path does not exist") from None
            except OSError as e:
                raise PathResolutionError(text, f"Cannot resolve path ({e.strerror})") from e

    if not resolved.exists():
        raise PathResolutionError(str(resolved), "Path does not exist")
    if not resolved.is_dir():
        raise PathResolutionError(str(resolved), "Path is not a directory")

    return resolved
