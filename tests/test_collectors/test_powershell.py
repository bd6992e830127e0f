"""Tests for the PowerShell runner."""

from __future__ import annotations

import subprocess

import pytest

from hwprint.collectors import powershell
from hwprint.collectors.powershell import PowerShellResult, build_invocation, run_ps


def _completed(stdout="", stderr="", returncode=0):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def fake_ps(monkeypatch):
    """Pretend PowerShell is installed and capture the subprocess call."""
    calls = {}
    monkeypatch.setattr(powershell, "get_powershell_path", lambda prefer_legacy=False: "pwsh")

    def install(result=None, exc=None):
        def fake_run(args, **kwargs):
            calls["args"] = args
            calls["kwargs"] = kwargs
            if exc is not None:
                raise exc
            return result
        monkeypatch.setattr(powershell.subprocess, "run", fake_run)
        return calls

    return install


class TestRunPs:
    def test_missing_powershell(self, monkeypatch):
        monkeypatch.setattr(powershell, "get_powershell_path", lambda prefer_legacy=False: None)
        result = run_ps("Get-CimInstance -ClassName Win32_BIOS")
        assert result.success is False
        assert result.error == "PowerShell not found on this system"
        assert result.return_code == -1

    def test_json_output_parsed(self, fake_ps):
        calls = fake_ps(_completed(stdout='{"SerialNumber":"ABC"}'))
        result = run_ps("Get-CimInstance -ClassName Win32_BIOS")
        assert result.success is True
        assert result.json_output == {"SerialNumber": "ABC"}
        assert calls["args"][-1].endswith("| ConvertTo-Json -Depth 4 -Compress")
        assert "-NoProfile" in calls["args"]

    def test_bom_stripped(self, fake_ps):
        fake_ps(_completed(stdout='\ufeff[{"a":1},{"a":2}]'))
        assert run_ps("x").json_output == [{"a": 1}, {"a": 2}]

    def test_plain_output(self, fake_ps):
        calls = fake_ps(_completed(stdout="True\r\n"))
        result = run_ps("Confirm-SecureBootUEFI", as_json=False)
        assert result.output == "True"
        assert result.json_output is None
        assert calls["args"][-1] == "Confirm-SecureBootUEFI"

    def test_nonzero_exit(self, fake_ps):
        fake_ps(_completed(stderr="Access denied", returncode=1))
        result = run_ps("x")
        assert result.success is False
        assert result.error == "Access denied"
        assert result.return_code == 1

    def test_invalid_json(self, fake_ps):
        fake_ps(_completed(stdout="not json"))
        result = run_ps("x")
        assert result.success is False
        assert "Failed to parse" in result.error

    def test_timeout(self, fake_ps):
        fake_ps(exc=subprocess.TimeoutExpired(cmd="pwsh", timeout=5))
        result = run_ps("x", timeout=5)
        assert result.success is False
        assert "timed out after 5 seconds" in result.error

    def test_os_error(self, fake_ps):
        fake_ps(exc=PermissionError("denied"))
        result = run_ps("x")
        assert result.success is False
        assert result.error.startswith("OS error executing PowerShell")


class TestBuildInvocation:
    def test_json_suffix_only_when_requested(self):
        assert build_invocation("pwsh", "Get-Date", as_json=True)[-1] == "Get-Date | ConvertTo-Json -Depth 4 -Compress"
        assert build_invocation("pwsh", "Get-Date", as_json=False)[-1] == "Get-Date"

    def test_non_interactive_flags(self):
        args = build_invocation("powershell.exe", "x", as_json=False)
        assert args[0] == "powershell.exe"
        assert args[1:6] == ["-NoProfile", "-NonInteractive", "-ExecutionPolicy", "Bypass", "-Command"]


class TestPowerShellResult:
    def test_describe_error_flattens_whitespace(self):
        result = PowerShellResult(success=False, output="", error="Get-CimInstance : Access denied\r\n  At line:1")
        assert result.describe_error() == "Get-CimInstance : Access denied At line:1"

    def test_describe_error_without_message(self):
        result = PowerShellResult(success=False, output="", return_code=3)
        assert result.describe_error() == "PowerShell exited with code 3"


@pytest.mark.windows_only
class TestRunPsWindows:
    def test_real_command(self):
        result = run_ps("Get-CimInstance -ClassName Win32_OperatingSystem | Select-Object Caption")
        assert result.success is True
        assert "Caption" in result.json_output
