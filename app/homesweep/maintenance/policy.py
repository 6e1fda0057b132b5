"""Candidate selection for maintenance runs."""

from collections.abc import Iterable

from homesweep.maintenance.models import DirectoryRecord, SelectionMode


def is_candidate(record: DirectoryRecord, mode: SelectionMode) -> bool:
    """Decide whether a single record is a deletion candidate.

    In DELETE mode a directory qualifies when it is empty or carries an
    unresolved SID. In RETAIN mode both branches of the expression test
    for an unresolved SID, so emptiness has no influence on the outcome.

    Args:
        record: Inspected directory.
        mode: Active selection mode.

    Returns:
        True if the directory should be listed as a candidate.
    """
    if mode == SelectionMode.DELETE:
        return record.is_empty or record.has_unresolved_sid

    # NOTE: collapses to `record.has_unresolved_sid`
    return (record.is_empty and record.has_unresolved_sid) or (
        not record.is_empty and record.has_unresolved_sid
    )


def select_candidates(
    records: Iterable[DirectoryRecord],
    mode: SelectionMode,
) -> list[DirectoryRecord]:
    """Filter records down to deletion candidates, preserving order."""
    return [r for r in records if is_candidate(r, mode)]
