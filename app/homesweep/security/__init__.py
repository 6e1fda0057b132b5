"""Windows security primitives: ACL retrieval and SID classification."""

from homesweep.security.acl import (
    AccessEntry,
    AclReader,
    AclReadError,
    AclSnapshot,
    PowerShellAclReader,
)
from homesweep.security.sids import IGNORED_SIDS, SidClassifier, SidResolution, is_ignored_sid

__all__ = [
    "IGNORED_SIDS",
    "AccessEntry",
    "AclReadError",
    "AclReader",
    "AclSnapshot",
    "PowerShellAclReader",
    "SidClassifier",
    "SidResolution",
    "is_ignored_sid",
]
