"""Shell execution utilities.

Provides subprocess execution with proper error handling, plus thin
helpers for running Windows PowerShell snippets and decoding their
JSON output.
"""

import json
import shutil
import subprocess
from dataclasses import dataclass

POWERSHELL: str = "powershell"

# Redirected PowerShell output uses the OEM code page unless told otherwise
_UTF8_PREAMBLE = "[Console]::OutputEncoding = [System.Text.Encoding]::UTF8; "


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


def run_command(
    args: list[str],
    *,
    check: bool = False,
    timeout: float | None = 60.0,
    cwd: str | None = None,
) -> CommandResult:
    """Execute a shell command and return the result.

    Args:
        args: Command and arguments to execute.
        check: If True, raise CalledProcessError on non-zero exit.
        timeout: Maximum time in seconds to wait for command.
        cwd: Working directory for the command. If None, uses current directory.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.CalledProcessError: If check=True and command fails.
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(
        args,
        capture_output=True,
        encoding="utf-8",
        errors="replace",
        check=check,
        timeout=timeout,
        cwd=cwd,
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH.

    Args:
        name: Command name to check.

    Returns:
        True if command exists, False otherwise.
    """
    return shutil.which(name) is not None


def ps_quote(value: str) -> str:
    """Quote a value as a single-quoted PowerShell string literal."""
    return "'" + value.replace("'", "''") + "'"


def run_powershell(script: str, *, timeout: float | None = 30.0) -> CommandResult:
    """Run a PowerShell snippet without loading the user profile.

    Output is forced to UTF-8 so account names outside ASCII survive
    the round trip.

    Args:
        script: PowerShell source to execute.
        timeout: Maximum time in seconds to wait.

    Returns:
        CommandResult of the powershell process.

    Raises:
        subprocess.TimeoutExpired: If the snippet exceeds timeout.
        FileNotFoundError: If powershell is not installed.
    """
    return run_command(
        [POWERSHELL, "-NoProfile", "-NonInteractive", "-Command", _UTF8_PREAMBLE + script],
        timeout=timeout,
    )


def powershell_json(script: str, *, timeout: float | None = 30.0) -> object:
    """Run a PowerShell snippet piped through ConvertTo-Json and decode it.

    Returns:
        The decoded JSON value, or None when the snippet printed nothing.

    Raises:
        RuntimeError: If PowerShell exits non-zero.
        ValueError: If the output is not valid JSON.
    """
    result = run_powershell(f"{script} | ConvertTo-Json -Compress -Depth 4", timeout=timeout)
    if not result.success:
        raise RuntimeError(result.stderr.strip() or f"powershell exited with {result.returncode}")

    raw = result.stdout.strip()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON from powershell: {e}"
        raise ValueError(msg) from e
