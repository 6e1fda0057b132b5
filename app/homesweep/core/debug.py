"""Per-run collection of diagnostic records.

A DebugCollector is created once per run and handed to every component
that has something worth showing with -debug (skipped directories,
unreadable ACLs, unresolved SIDs, deletions).
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class DebugRecord:
    """One diagnostic record.

    Attributes:
        stage: Pipeline stage that produced the record (e.g. "listing").
        path: Directory or SID the record is about.
        detail: Free-form message.
    """

    stage: str
    path: str
    detail: str


@dataclass
class DebugCollector:
    """Accumulates DebugRecords in arrival order."""

    _records: list[DebugRecord] = field(default_factory=list)

    def record(self, stage: str, path: str, detail: str) -> None:
        self._records.append(DebugRecord(stage=stage, path=path, detail=detail))

    @property
    def records(self) -> tuple[DebugRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)
