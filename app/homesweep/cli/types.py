"""Shared option types for the homesweep CLI."""

from enum import Enum

import typer

_TRUE_VALUES = frozenset({"true", "$true", "yes", "y", "1", "on"})
_FALSE_VALUES = frozenset({"false", "$false", "no", "n", "0", "off"})


class OutputFormat(str, Enum):
    """Output format options for the candidate report."""

    TABLE = "table"
    JSON = "json"


def parse_switch(value: str) -> bool:
    """Parse a boolean option value.

    Accepts true/false, yes/no, 1/0, on/off and the PowerShell literals
    $true/$false, case-insensitively.

    Raises:
        typer.BadParameter: If the value is not a recognised boolean.
    """
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    msg = f"'{value}' is not a valid boolean (use true or false)."
    raise typer.BadParameter(msg)
