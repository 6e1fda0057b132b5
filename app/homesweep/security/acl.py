"""Access-control list retrieval.

Reads a directory's owner and access rules. Each rule is reported twice
by the OS: once as a display identity (DOMAIN\\user, or the bare SID
when the account no longer exists) and once as a SID. Both forms are
kept side by side in AccessEntry.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import cast

from homesweep.utils.shell import POWERSHELL, command_exists, powershell_json, ps_quote

logger = logging.getLogger(__name__)

_SID_TYPE = "[System.Security.Principal.SecurityIdentifier]"
_ACCOUNT_TYPE = "[System.Security.Principal.NTAccount]"


class AclReadError(Exception):
    """Raised when a directory's ACL cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read ACL of {path}: {reason}")


@dataclass(frozen=True, slots=True)
class AccessEntry:
    """One access-control entry.

    Attributes:
        identity: Identity reference as displayed by the OS.
        sid: SID of the principal the entry applies to.
    """

    identity: str
    sid: str


@dataclass(frozen=True, slots=True)
class AclSnapshot:
    """Owner and access entries of a filesystem object.

    Attributes:
        owner_sid: SID of the owning principal, None if not reported.
        entries: Access entries in ACL order.
    """

    owner_sid: str | None
    entries: tuple[AccessEntry, ...]


class AclReader(ABC):
    """Source of ACL snapshots for directories."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether this reader can run on the current host."""

    @abstractmethod
    def read(self, path: Path) -> AclSnapshot:
        """Read the ACL of a directory.

        Raises:
            AclReadError: If the ACL cannot be read.
        """


class PowerShellAclReader(AclReader):
    """Reads ACLs with Windows PowerShell's Get-Acl.

    Args:
        timeout: Seconds allowed for each Get-Acl call.
    """

    def __init__(self, timeout: float | None = 30.0) -> None:
        self._timeout = timeout

    def is_available(self) -> bool:
        return command_exists(POWERSHELL)

    def read(self, path: Path) -> AclSnapshot:
        script = self._build_script(path)
        try:
            data = powershell_json(script, timeout=self._timeout)
        except subprocess.TimeoutExpired as e:
            raise AclReadError(path, f"Get-Acl timed out after {e.timeout}s") from e
        except (RuntimeError, ValueError, OSError) as e:
            raise AclReadError(path, str(e)) from e

        if not isinstance(data, dict):
            raise AclReadError(path, "Get-Acl returned no data")
        return parse_acl_payload(path, cast(dict[str, object], data))

    @staticmethod
    def _build_script(path: Path) -> str:
        quoted = ps_quote(str(path))
        return (
            f"$acl = Get-Acl -LiteralPath {quoted} -ErrorAction Stop; "
            f"$names = @($acl.GetAccessRules($true, $true, {_ACCOUNT_TYPE})"
            " | ForEach-Object { $_.IdentityReference.Value }); "
            f"$sids = @($acl.GetAccessRules($true, $true, {_SID_TYPE})"
            " | ForEach-Object { $_.IdentityReference.Value }); "
            f"$owner = $acl.GetOwner({_SID_TYPE}); "
            "[pscustomobject]@{ "
            "Owner = $(if ($owner) { $owner.Value } else { $null }); "
            "Names = $names; Sids = $sids }"
        )


def parse_acl_payload(path: Path, data: dict[str, object]) -> AclSnapshot:
    """Build an AclSnapshot from the decoded Get-Acl payload.

    Args:
        path: Directory the payload belongs to (for error messages).
        data: Mapping with Owner, Names and Sids keys.

    Returns:
        AclSnapshot pairing each display name with its SID.

    Raises:
        AclReadError: If names and SIDs do not line up.
    """
    names = _as_str_list(data.get("Names"))
    sids = _as_str_list(data.get("Sids"))
    if len(names) != len(sids):
        raise AclReadError(path, f"Mismatched rule lists ({len(names)} names, {len(sids)} SIDs)")

    owner = data.get("Owner")
    entries = tuple(AccessEntry(identity=n, sid=s) for n, s in zip(names, sids, strict=True))
    return AclSnapshot(owner_sid=owner if isinstance(owner, str) else None, entries=entries)


def _as_str_list(value: object) -> list[str]:
    # ConvertTo-Json collapses single-element arrays to a scalar
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(v) for v in cast(list[object], value)]
    return [str(value)]
