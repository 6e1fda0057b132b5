"""Profile directories that must never be deleted.

Windows keeps a handful of well-known folders next to real user
profiles under C:\\Users. They carry no per-user ACL entries and are
frequently empty, so they look like candidates but are required by the
system.
"""

import fnmatch
from pathlib import Path

# Matched case-insensitively against the directory name (glob-style)
PROTECTED_DIRECTORY_NAMES: list[str] = [
    "All Users",
    "Default",
    "Default User",
    "Default.migrated",
    "Public",
    "defaultuser*",
    "WDAGUtilityAccount",
]


def is_protected_directory(path: Path | str) -> bool:
    """Check if a directory is a protected well-known profile folder.

    Args:
        path: Directory path; only its final segment is compared.

    Returns:
        True if the name matches any protected pattern.
    """
    name = Path(path).name.lower()
    return any(fnmatch.fnmatchcase(name, pattern.lower()) for pattern in PROTECTED_DIRECTORY_NAMES)
