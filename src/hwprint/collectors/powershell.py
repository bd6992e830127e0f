"""PowerShell runner for hardware inventory commands.

Every call is a fresh non-interactive process. Failures of any kind come
back as a PowerShellResult with success=False; callers decide whether
that is a fault for the attribute they are collecting.
"""

from __future__ import annotations

import json
import subprocess
from dataclasses import dataclass, field
from typing import Any

from hwprint.platform import get_powershell_path

JSON_SUFFIX = " | ConvertTo-Json -Depth 4 -Compress"
_BOM = "\ufeff"


@dataclass
class PowerShellResult:
    success: bool
    output: str
    json_output: Any = field(default=None)
    error: str | None = None
    return_code: int = 0

    @classmethod
    def failed(cls, error: str, output: str = "", return_code: int = -1) -> PowerShellResult:
        return cls(success=False, output=output, error=error, return_code=return_code)

    def describe_error(self) -> str:
        """One-line fault description suitable for the diagnostic log."""
        if self.error:
            return " ".join(self.error.split())
        return f"PowerShell exited with code {self.return_code}"


def build_invocation(ps_path: str, command: str, as_json: bool) -> list[str]:
    """Argument vector for one PowerShell call."""
    script = command + JSON_SUFFIX if as_json else command
    return [ps_path, "-NoProfile", "-NonInteractive", "-ExecutionPolicy", "Bypass", "-Command", script]


def _clean_stdout(raw: str | None) -> str:
    text = (raw or "").strip()
    # Windows PowerShell 5.1 may prefix redirected output with a BOM
    return text[len(_BOM):] if text.startswith(_BOM) else text


def run_ps(
    command: str,
    timeout: int = 60,
    as_json: bool = True,
    legacy: bool = False,
) -> PowerShellResult:
    """Run ``command`` and return its output, parsed as JSON when ``as_json``.

    ``legacy`` prefers Windows PowerShell 5.1 over pwsh, which the
    Get-WmiObject fallback needs.
    """
    ps_path = get_powershell_path(prefer_legacy=legacy)
    if ps_path is None:
        return PowerShellResult.failed("PowerShell not found on this system")

    try:
        proc = subprocess.run(
            build_invocation(ps_path, command, as_json),
            capture_output=True,
            timeout=timeout,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except subprocess.TimeoutExpired:
        return PowerShellResult.failed(f"PowerShell command timed out after {timeout} seconds")
    except FileNotFoundError:
        return PowerShellResult.failed(f"PowerShell executable not found: {ps_path}")
    except OSError as exc:
        return PowerShellResult.failed(f"OS error executing PowerShell: {exc}")

    stdout = _clean_stdout(proc.stdout)
    stderr = (proc.stderr or "").strip() or None

    if proc.returncode != 0:
        return PowerShellResult.failed(
            stderr or f"PowerShell exited with code {proc.returncode}",
            output=stdout,
            return_code=proc.returncode,
        )

    parsed = None
    if as_json and stdout:
        try:
            parsed = json.loads(stdout)
        except json.JSONDecodeError as exc:
            return PowerShellResult.failed(
                f"Failed to parse PowerShell JSON output: {exc}",
                output=stdout,
                return_code=proc.returncode,
            )

    return PowerShellResult(
        success=True,
        output=stdout,
        json_output=parsed,
        error=stderr,
        return_code=proc.returncode,
    )
