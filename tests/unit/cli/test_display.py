"""Unit tests for cli/display.py.

Tests for the candidate table, JSON output, debug table and deletion
summary.
"""

import io
import json
from pathlib import Path

import pytest
from homesweep.cli.display import (
    create_candidates_table,
    create_debug_table,
    print_candidates_json,
    print_deletion_summary,
)
from homesweep.core.debug import DebugRecord
from homesweep.core.theme import get_theme
from homesweep.maintenance.models import DirectoryRecord
from homesweep.maintenance.operator import DeletionResult
from homesweep.utils.formatting import format_acl, format_directory_row
from rich.console import Console

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def records(tmp_path: Path) -> list[DirectoryRecord]:
    """An orphaned non-empty profile and an empty unreadable one."""
    return [
        DirectoryRecord(
            path=tmp_path / "olduser",
            is_empty=False,
            acl_entries=("S-1-5-21-1-1104", "CONTOSO\\helpdesk"),
            has_unresolved_sid=True,
            owner="S-1-5-21-1-1104",
        ),
        DirectoryRecord(path=tmp_path / "locked", is_empty=True, acl_readable=False),
    ]


def _capture_console_output(func: object, *args: object, **kwargs: object) -> str:
    """Capture Rich console output by temporarily replacing the consoles."""
    import homesweep.cli.display as display_mod
    import homesweep.utils.formatting as fmt_mod

    buf = io.StringIO()
    test_console = Console(theme=get_theme(), file=buf, color_system=None, width=200)

    originals = (display_mod.console, fmt_mod.console, fmt_mod.err_console)
    display_mod.console = test_console
    fmt_mod.console = test_console
    fmt_mod.err_console = test_console
    try:
        func(*args, **kwargs)  # type: ignore[operator]
    finally:
        display_mod.console, fmt_mod.console, fmt_mod.err_console = originals

    return buf.getvalue()


def _render(renderable: object) -> str:
    buf = io.StringIO()
    Console(theme=get_theme(), file=buf, color_system=None, width=200).print(renderable)
    return buf.getvalue()


# ===========================================================================
# create_candidates_table
# ===========================================================================


class TestCreateCandidatesTable:
    """Tests for create_candidates_table."""

    def test_columns(self, records: list[DirectoryRecord]) -> None:
        table = create_candidates_table(records, "Candidates")

        assert [c.header for c in table.columns] == ["Index", "Directory", "Status", "ACL"]
        assert table.row_count == 2
        assert table.title == "Candidates"

    def test_rows(self, records: list[DirectoryRecord]) -> None:
        """Each row carries its zero-based index, name, status and ACL."""
        output = _render(create_candidates_table(records, "Candidates"))

        assert "olduser" in output
        assert "not empty" in output
        assert "S-1-5-21-1-1104, CONTOSO\\helpdesk" in output
        locked_line = next(line for line in output.splitlines() if "locked" in line)
        assert " 1 " in locked_line
        assert " empty " in locked_line
        assert " - " in locked_line

    def test_markup_in_names_escaped(self, tmp_path: Path) -> None:
        record = DirectoryRecord(path=tmp_path / "[bold]x", is_empty=True)

        output = _render(create_candidates_table([record], "t"))

        assert "[bold]x" in output


class TestFormatAcl:
    """Tests for format_acl."""

    def test_joined(self, records: list[DirectoryRecord]) -> None:
        assert format_acl(records[0]) == "S-1-5-21-1-1104, CONTOSO\\helpdesk"

    def test_empty(self, records: list[DirectoryRecord]) -> None:
        assert format_acl(records[1]) == "-"


class TestFormatDirectoryRow:
    """Tests for format_directory_row."""

    def test_unresolved_highlighted(self, records: list[DirectoryRecord]) -> None:
        index, name, status, acl = format_directory_row(0, records[0])

        assert index == "0"
        assert name == "[unresolved]olduser[/]"
        assert status == "[not_empty]not empty[/]"
        assert acl.startswith("[muted]")

    def test_plain_empty_directory(self, records: list[DirectoryRecord]) -> None:
        _, name, status, acl = format_directory_row(1, records[1])

        assert name == "[text]locked[/]"
        assert status == "[empty]empty[/]"
        assert acl == "[muted]-[/]"


# ===========================================================================
# print_candidates_json
# ===========================================================================


class TestPrintCandidatesJson:
    """Tests for print_candidates_json."""

    def test_fields(self, records: list[DirectoryRecord]) -> None:
        data = json.loads(_capture_console_output(print_candidates_json, records))

        assert data[0] == {
            "index": 0,
            "name": "olduser",
            "path": str(records[0].path),
            "status": "not empty",
            "acl": ["S-1-5-21-1-1104", "CONTOSO\\helpdesk"],
            "has_unresolved_sid": True,
            "owner": "S-1-5-21-1-1104",
            "acl_readable": True,
        }
        assert data[1]["index"] == 1
        assert data[1]["acl"] == []
        assert data[1]["acl_readable"] is False


# ===========================================================================
# create_debug_table
# ===========================================================================


class TestCreateDebugTable:
    """Tests for create_debug_table."""

    def test_rows(self) -> None:
        table = create_debug_table(
            [
                DebugRecord(stage="sid", path="S-1-5-21-1-1104", detail="not translated"),
                DebugRecord(stage="acl", path="C:\\Users\\locked", detail="Access is denied"),
            ]
        )

        assert table.title == "Debug"
        assert table.row_count == 2
        output = _render(table)
        assert "S-1-5-21-1-1104" in output
        assert "Access is denied" in output


# ===========================================================================
# print_deletion_summary
# ===========================================================================


class TestPrintDeletionSummary:
    """Tests for print_deletion_summary."""

    def test_all_succeeded(self) -> None:
        results = [DeletionResult(path="a", success=True), DeletionResult(path="b", success=True)]

        output = _capture_console_output(print_deletion_summary, results)

        assert "All 2 selected directories deleted." in output

    def test_with_failures(self) -> None:
        results = [
            DeletionResult(path="a", success=True),
            DeletionResult(path="b", success=False, error="Access is denied"),
        ]

        output = _capture_console_output(print_deletion_summary, results)

        assert "1 deleted, 1 failed" in output

    def test_nothing_attempted(self) -> None:
        assert _capture_console_output(print_deletion_summary, []) == ""
