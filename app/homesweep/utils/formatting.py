"""Rich console output helpers.

Shared themed consoles, one-line status messages, and the markup used
for a directory row in the candidate report.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from homesweep.core.theme import get_theme

if TYPE_CHECKING:
    from homesweep.maintenance.models import DirectoryRecord


def _detect_color_system() -> str | None:
    # Full hex colours on a terminal, rich's own detection otherwise
    if sys.stdout.isatty():
        return "truecolor"
    return None


console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def print_info(message: str) -> None:
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    console.print(f"[success]{message}[/]")


def format_acl(record: DirectoryRecord) -> str:
    """Comma-join a record's ACL identities, '-' when there are none."""
    return ", ".join(record.acl_entries) if record.acl_entries else "-"


def format_directory_row(index: int, record: DirectoryRecord) -> tuple[str, str, str, str]:
    """Format a directory as a candidate table row.

    Directories with an unresolved SID are highlighted by name; the
    status cell is coloured by emptiness.

    Args:
        index: Zero-based position in the report.
        record: Inspected directory.

    Returns:
        Tuple of (index, name, status, acl) with Rich markup.
    """
    name_style = "unresolved" if record.has_unresolved_sid else "text"
    status_style = "empty" if record.is_empty else "not_empty"
    return (
        str(index),
        f"[{name_style}]{escape(record.name)}[/]",
        f"[{status_style}]{record.status}[/]",
        f"[muted]{escape(format_acl(record))}[/]",
    )
