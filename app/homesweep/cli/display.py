"""Rich display functions for maintenance runs.

Renders candidate directories, collected debug records, and deletion
summaries.
"""

import json
from collections.abc import Sequence

from rich.markup import escape
from rich.table import Table

from homesweep.core.debug import DebugRecord
from homesweep.maintenance.models import DirectoryRecord
from homesweep.maintenance.operator import DeletionResult
from homesweep.utils.formatting import (
    console,
    format_directory_row,
    print_success,
    print_warning,
)


def create_candidates_table(records: Sequence[DirectoryRecord], title: str) -> Table:
    """Create a Rich table listing directories with their table index.

    The index column is zero-based and is what the deletion prompt
    refers to.

    Args:
        records: Directories in display order.
        title: Table title.

    Returns:
        Rich Table configured for directory display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Index", justify="right", width=5)
    table.add_column("Directory", no_wrap=True)
    table.add_column("Status", width=10)
    table.add_column("ACL", overflow="fold")

    for index, record in enumerate(records):
        table.add_row(*format_directory_row(index, record))

    return table


def print_candidates_json(records: Sequence[DirectoryRecord]) -> None:
    """Display directories as JSON."""
    data = [
        {
            "index": index,
            "name": r.name,
            "path": str(r.path),
            "status": r.status,
            "acl": list(r.acl_entries),
            "has_unresolved_sid": r.has_unresolved_sid,
            "owner": r.owner,
            "acl_readable": r.acl_readable,
        }
        for index, r in enumerate(records)
    ]
    console.print_json(json.dumps(data))


def create_debug_table(records: Sequence[DebugRecord]) -> Table:
    """Create a Rich table of collected debug records."""
    table = Table(
        title="Debug",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Stage", width=8)
    table.add_column("Subject", no_wrap=True)
    table.add_column("Detail", style="muted")

    for record in records:
        table.add_row(record.stage, escape(record.path), escape(record.detail))

    return table


def print_deletion_summary(results: Sequence[DeletionResult]) -> None:
    """Print a one-line summary of deletion results.

    Args:
        results: Results returned by the deletion confirmer.
    """
    if not results:
        return

    success_count = sum(1 for r in results if r.success)
    fail_count = len(results) - success_count

    if fail_count:
        print_warning(f"{success_count} deleted, {fail_count} failed")
    else:
        print_success(f"All {success_count} selected directories deleted.")
