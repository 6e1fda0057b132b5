"""Directory enumeration and inspection.

Lists the immediate subdirectories of a parent directory and turns each
one into a DirectoryRecord: emptiness, non-ignored ACL entries, owner,
and whether any entry refers to a SID that no longer resolves.
"""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from homesweep.core.debug import DebugCollector
from homesweep.core.paths import PathResolutionError
from homesweep.maintenance.models import DirectoryRecord
from homesweep.security.acl import AclReader, AclReadError
from homesweep.security.sids import SidClassifier, is_ignored_sid

logger = logging.getLogger(__name__)


def list_subdirectories(base: Path) -> list[Path]:
    """List immediate child directories of base, sorted by name.

    Files are skipped, and so are symbolic links and junctions, which
    are never followed.

    Args:
        base: Resolved parent directory.

    Returns:
        Absolute paths of the child directories.

    Raises:
        PathResolutionError: If base cannot be listed.
    """
    try:
        entries = sorted(base.iterdir(), key=lambda p: p.name.lower())
    except OSError as e:
        raise PathResolutionError(str(base), f"Cannot list directory ({e.strerror})") from e

    subdirs: list[Path] = []
    for entry in entries:
        try:
            if entry.is_symlink() or entry.is_junction():
                logger.debug("Skipping link: %s", entry)
                continue
            if entry.is_dir():
                subdirs.append(entry)
        except OSError:
            logger.warning("Cannot determine type of: %s", entry)
            continue

    return subdirs


class DirectoryInspector:
    """Builds DirectoryRecords for single directories.

    Inspection is read-only. Failures to list a directory or read its
    ACL are logged and recorded, and never abort the run.

    Args:
        acl_reader: Source of ACL snapshots.
        classifier: SID classifier shared across the run.
        debug: Optional collector for skipped directories.
    """

    def __init__(
        self,
        acl_reader: AclReader,
        classifier: SidClassifier,
        *,
        debug: DebugCollector | None = None,
    ) -> None:
        self._acl_reader = acl_reader
        self._classifier = classifier
        self._debug = debug

    def inspect(self, path: Path) -> DirectoryRecord:
        """Inspect one directory.

        Args:
            path: Absolute path of the directory.

        Returns:
            DirectoryRecord describing the directory.
        """
        is_empty = self._is_empty(path)

        try:
            snapshot = self._acl_reader.read(path)
        except AclReadError as e:
            logger.warning("%s", e)
            self._record("acl", path, e.reason)
            return DirectoryRecord(path=path, is_empty=is_empty, acl_readable=False)

        acl_entries: list[str] = []
        has_unresolved_sid = False
        for entry in snapshot.entries:
            if is_ignored_sid(entry.sid):
                continue
            acl_entries.append(entry.identity)
            if not self._classifier.classify(entry.sid).resolved:
                has_unresolved_sid = True

        return DirectoryRecord(
            path=path,
            is_empty=is_empty,
            acl_entries=tuple(acl_entries),
            has_unresolved_sid=has_unresolved_sid,
            owner=self._resolve_owner(snapshot.owner_sid),
        )

    def inspect_all(self, paths: list[Path]) -> Iterator[DirectoryRecord]:
        """Inspect directories one after another, in the given order."""
        for path in paths:
            yield self.inspect(path)

    def _is_empty(self, path: Path) -> bool:
        """Check for direct children; unreadable directories count as empty."""
        try:
            with os.scandir(path) as it:
                return next(it, None) is None
        except OSError as e:
            logger.warning("Cannot list %s, treating as empty: %s", path, e)
            self._record("listing", path, f"treated as empty ({e.strerror or e})")
            return True

    def _resolve_owner(self, owner_sid: str | None) -> str | None:
        if owner_sid is None:
            return None
        resolution = self._classifier.classify(owner_sid)
        return resolution.account if resolution.resolved else owner_sid

    def _record(self, stage: str, path: Path, detail: str) -> None:
        if self._debug is not None:
            self._debug.record(stage, str(path), detail)
