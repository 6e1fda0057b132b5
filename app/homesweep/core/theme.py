"""Colour theme for homesweep output.

The bundled data/theme.toml provides every colour. A theme.toml in the
config directory may override any subset of them; an invalid override
is logged and the built-in defaults are used instead.
"""

import logging
import re
import tomllib
from importlib import resources
from pathlib import Path
from typing import cast

from pydantic import BaseModel, ConfigDict, field_validator
from rich.theme import Theme

from homesweep.core.paths import get_config_dir

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")

# Styles rendered bold on top of their colour
_BOLD_STYLES = frozenset({"error", "unresolved"})


class ThemeColors(BaseModel):
    """Colours used by the report, all #RGB or #RRGGBB."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Directory status
    empty: str = "#faf870"
    not_empty: str = "#69B9A1"
    unresolved: str = "#d44ebc"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object) -> str:
        if not isinstance(v, str) or not _HEX_COLOR.fullmatch(v.strip()):
            msg = f"expected a hex colour like #RRGGBB, got {v!r}"
            raise ValueError(msg)
        return v.strip()


def get_user_theme_path() -> Path:
    """Get the path of the optional user theme override."""
    return get_config_dir() / "theme.toml"


def get_bundled_theme_path() -> Path:
    return resources.files("homesweep.data").joinpath("theme.toml")  # type: ignore[return-value]


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the [colors] table of a theme file.

    Args:
        path: Theme file.

    Returns:
        Colour name to value mapping, or None if the file is missing or
        unreadable.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return None
    return {k: v for k, v in cast(dict[str, object], colors).items() if isinstance(v, str)}


def load_theme() -> ThemeColors:
    """Load the bundled colours with user overrides applied on top.

    Returns:
        Validated ThemeColors; defaults if the merged theme is invalid.
    """
    colors = _load_toml_colors(Path(get_bundled_theme_path()))
    if colors is None:
        logger.error("Bundled theme missing, installation may be corrupted")
        colors = {}

    user_path = get_user_theme_path()
    overrides = _load_toml_colors(user_path)
    if overrides:
        logger.debug("Applying theme overrides from %s", user_path)
        colors = {**colors, **overrides}

    try:
        return ThemeColors(**colors)
    except ValueError as e:
        logger.warning("Invalid theme, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build a rich Theme with one style per colour plus bold_header and dim."""
    if colors is None:
        colors = load_theme()

    styles = {
        name: f"bold {value}" if name in _BOLD_STYLES else value
        for name, value in colors.model_dump().items()
    }
    styles["bold_header"] = f"bold {colors.header}"
    styles["dim"] = colors.muted
    return Theme(styles)


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Get the rich theme, loading it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
