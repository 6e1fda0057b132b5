"""Unit tests for shell execution utilities."""

import json
import subprocess
import sys
from unittest.mock import MagicMock, patch

import pytest
from homesweep.utils.shell import (
    CommandResult,
    command_exists,
    powershell_json,
    ps_quote,
    run_command,
    run_powershell,
)


class TestRunCommand:
    """Tests for run_command."""

    @patch("homesweep.utils.shell.subprocess.run")
    def test_wraps_completed_process(self, mock_run: MagicMock) -> None:
        mock_run.return_value = MagicMock(stdout="out", stderr="err", returncode=3)

        result = run_command(["tool", "--flag"], timeout=5)

        assert result == CommandResult(stdout="out", stderr="err", returncode=3)
        assert result.success is False
        mock_run.assert_called_once_with(
            ["tool", "--flag"],
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=5,
            cwd=None,
        )

    def test_undecodable_output_replaced(self) -> None:
        """Bytes outside UTF-8 (an OEM code page name) do not raise."""
        code = "import sys; sys.stdout.buffer.write(b'CONTOSO\\\\J\\x81rgen\\n')"

        result = run_command([sys.executable, "-c", code], timeout=30)

        assert result.success is True
        assert result.stdout == "CONTOSO\\J\ufffdrgen\n"

    @patch("homesweep.utils.shell.subprocess.run")
    def test_timeout_propagates(self, mock_run: MagicMock) -> None:
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="tool", timeout=1)

        with pytest.raises(subprocess.TimeoutExpired):
            run_command(["tool"], timeout=1)


class TestCommandExists:
    @patch("homesweep.utils.shell.shutil.which", return_value=None)
    def test_missing(self, _which: MagicMock) -> None:
        assert command_exists("powershell") is False

    @patch("homesweep.utils.shell.shutil.which", return_value="C:/Windows/powershell.exe")
    def test_present(self, _which: MagicMock) -> None:
        assert command_exists("powershell") is True


class TestPsQuote:
    """Tests for ps_quote."""

    def test_plain(self) -> None:
        assert ps_quote("C:\\Users\\alice") == "'C:\\Users\\alice'"

    def test_embedded_quote_doubled(self) -> None:
        assert ps_quote("o'brien") == "'o''brien'"


class TestRunPowershell:
    """Tests for run_powershell."""

    @patch("homesweep.utils.shell.run_command")
    def test_arguments(self, mock_run: MagicMock) -> None:
        """The user profile is skipped and the session is non-interactive."""
        mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)

        run_powershell("Get-Date", timeout=4)

        args = mock_run.call_args.args[0]
        assert args[:4] == ["powershell", "-NoProfile", "-NonInteractive", "-Command"]
        assert args[4].endswith("Get-Date")
        assert mock_run.call_args.kwargs == {"timeout": 4}

    @patch("homesweep.utils.shell.run_command")
    def test_output_forced_to_utf8(self, mock_run: MagicMock) -> None:
        mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)

        run_powershell("Get-Date")

        script = mock_run.call_args.args[0][-1]
        assert script.startswith("[Console]::OutputEncoding = [System.Text.Encoding]::UTF8;")


class TestPowershellJson:
    """Tests for powershell_json."""

    @patch("homesweep.utils.shell.run_command")
    def test_decodes_output(self, mock_run: MagicMock) -> None:
        mock_run.return_value = CommandResult(
            stdout=json.dumps({"Owner": "S-1-5-18"}) + "\r\n", stderr="", returncode=0
        )

        assert powershell_json("Get-Acl x") == {"Owner": "S-1-5-18"}
        script = mock_run.call_args.args[0][-1]
        assert script.endswith("Get-Acl x | ConvertTo-Json -Compress -Depth 4")

    @patch("homesweep.utils.shell.run_command")
    def test_empty_output(self, mock_run: MagicMock) -> None:
        mock_run.return_value = CommandResult(stdout="  \r\n", stderr="", returncode=0)
        assert powershell_json("Get-ChildItem") is None

    @patch("homesweep.utils.shell.run_command")
    def test_failure(self, mock_run: MagicMock) -> None:
        mock_run.return_value = CommandResult(stdout="", stderr="Access denied\r\n", returncode=1)

        with pytest.raises(RuntimeError, match="Access denied"):
            powershell_json("Get-Acl x")

    @patch("homesweep.utils.shell.run_command")
    def test_failure_without_stderr(self, mock_run: MagicMock) -> None:
        mock_run.return_value = CommandResult(stdout="", stderr="", returncode=5)

        with pytest.raises(RuntimeError, match="exited with 5"):
            powershell_json("Get-Acl x")

    @patch("homesweep.utils.shell.run_command")
    def test_invalid_json(self, mock_run: MagicMock) -> None:
        mock_run.return_value = CommandResult(stdout="{broken", stderr="", returncode=0)

        with pytest.raises(ValueError, match="Invalid JSON"):
            powershell_json("Get-Acl x")
