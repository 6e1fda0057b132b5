"""Security identifier classification.

Decides whether a SID still maps to an account. SIDs left behind by
deleted accounts fail to translate; that is an expected outcome and is
returned as data, never raised.
"""

import logging
import subprocess
from collections.abc import Callable
from dataclasses import dataclass

from homesweep.core.debug import DebugCollector
from homesweep.utils.shell import ps_quote, run_powershell

logger = logging.getLogger(__name__)

EVERYONE_SID: str = "S-1-1-0"
LOCAL_SYSTEM_SID: str = "S-1-5-18"
ADMINISTRATORS_SID: str = "S-1-5-32-544"

# Well-known principals excluded from anomaly detection
IGNORED_SIDS: frozenset[str] = frozenset({EVERYONE_SID, LOCAL_SYSTEM_SID, ADMINISTRATORS_SID})


@dataclass(frozen=True, slots=True)
class SidResolution:
    """Outcome of translating a SID to an account name.

    Attributes:
        sid: The SID that was classified.
        account: Account name (DOMAIN\\user), or None if unresolved.
        error: Diagnostic message when the SID could not be resolved.
    """

    sid: str
    account: str | None = None
    error: str | None = None

    @property
    def resolved(self) -> bool:
        return self.account is not None


# Callable that returns the account name, or raises LookupError with a message
SidTranslator = Callable[[str], str]


def is_ignored_sid(sid: str) -> bool:
    """Check if a SID belongs to the ignore-list."""
    return sid.upper() in IGNORED_SIDS


def powershell_translator(timeout: float | None = 30.0) -> SidTranslator:
    """Build a translator backed by SecurityIdentifier.Translate().

    Args:
        timeout: Seconds allowed for each PowerShell call.

    Returns:
        SidTranslator raising LookupError for unresolvable SIDs.
    """

    def translate(sid: str) -> str:
        script = (
            f"([System.Security.Principal.SecurityIdentifier]{ps_quote(sid)})"
            ".Translate([System.Security.Principal.NTAccount]).Value"
        )
        try:
            result = run_powershell(script, timeout=timeout)
        except subprocess.TimeoutExpired as e:
            raise LookupError(f"Translation timed out after {e.timeout}s") from e
        except OSError as e:
            raise LookupError(f"Cannot run powershell: {e}") from e
        except ValueError as e:
            raise LookupError(f"Unreadable powershell output: {e}") from e

        account = result.stdout.strip()
        if not result.success or not account:
            raise LookupError(result.stderr.strip() or "Identity could not be translated")
        return account

    return translate


class SidClassifier:
    """Classifies SIDs as resolvable or orphaned.

    Results are cached for the lifetime of the instance, which is one
    maintenance run.

    Args:
        translator: Callable mapping a SID to an account name. Defaults
            to a PowerShell-backed translator.
        debug: Optional collector that receives unresolved SIDs.
    """

    def __init__(
        self,
        translator: SidTranslator | None = None,
        *,
        debug: DebugCollector | None = None,
    ) -> None:
        self._translate = translator or powershell_translator()
        self._debug = debug
        self._cache: dict[str, SidResolution] = {}

    def classify(self, sid: str) -> SidResolution:
        """Translate a SID, returning a failed resolution instead of raising.

        Args:
            sid: SID string (e.g. "S-1-5-21-...-1104").

        Returns:
            SidResolution with either account or error set.
        """
        cached = self._cache.get(sid)
        if cached is not None:
            return cached

        try:
            resolution = SidResolution(sid=sid, account=self._translate(sid))
        except LookupError as e:
            message = str(e) or "Identity could not be translated"
            logger.debug("Unresolved SID %s: %s", sid, message)
            if self._debug is not None:
                self._debug.record("sid", sid, message)
            resolution = SidResolution(sid=sid, error=message)

        self._cache[sid] = resolution
        return resolution
