"""Maintenance domain models.

This module defines the data structures produced by directory
inspection and the enumerations that steer a maintenance run.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class SelectionMode(str, Enum):
    """How empty directories are treated when selecting candidates.

    Attributes:
        RETAIN: Only surface directories carrying unresolved SIDs.
        DELETE: Flag directories that are empty or carry unresolved SIDs.
    """

    RETAIN = "retain"
    DELETE = "delete"


class RunMode(str, Enum):
    """What a maintenance run does after inspection.

    Attributes:
        MAINTAIN: Report candidates, then offer to delete them.
        SHOW: Report candidates only.
        SHOW_ALL: Report every inspected directory, unfiltered.
    """

    MAINTAIN = "maintain"
    SHOW = "show"
    SHOW_ALL = "show all"


@dataclass(frozen=True, slots=True)
class DirectoryRecord:
    """Inspection result for one subdirectory.

    Attributes:
        path: Absolute path of the directory.
        is_empty: True if the directory has no direct children, or could
            not be listed.
        acl_entries: Identity display strings of the non-ignored ACL
            entries, in ACL order.
        has_unresolved_sid: True if any non-ignored entry's SID does not
            translate to an account name.
        owner: Owner account name, raw owner SID if unresolvable, or None
            when the ACL could not be read.
        acl_readable: False when the ACL could not be read at all.
    """

    path: Path
    is_empty: bool
    acl_entries: tuple[str, ...] = ()
    has_unresolved_sid: bool = False
    owner: str | None = None
    acl_readable: bool = True

    def __post_init__(self) -> None:
        """Validate directory record after initialization."""
        if not self.path.is_absolute():
            msg = f"Directory path must be absolute, got {self.path}"
            raise ValueError(msg)

    @property
    def name(self) -> str:
        """Final path segment, used for display."""
        return self.path.name

    @property
    def status(self) -> str:
        """Human-readable emptiness label."""
        return "empty" if self.is_empty else "not empty"
