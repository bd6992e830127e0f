"""Platform detection and PowerShell discovery."""

from __future__ import annotations

import shutil
import socket
import sys


def is_windows() -> bool:
    """Return True if running on Windows."""
    return sys.platform == "win32"


def is_admin() -> bool:
    """Return True if running with administrator privileges on Windows.

    TPM and Secure Boot queries are denied without elevation.
    Returns False on non-Windows platforms.
    """
    if not is_windows():
        return False
    try:
        import ctypes
        return bool(ctypes.windll.shell32.IsUserAnAdmin())
    except (AttributeError, OSError):
        return False


def get_hostname() -> str:
    """Return the system hostname."""
    return socket.gethostname()


def get_powershell_path(prefer_legacy: bool = False) -> str | None:
    """Return path to PowerShell executable, or None if not found.

    Prefers pwsh (PowerShell 7+) over powershell.exe (Windows PowerShell 5.1).
    With prefer_legacy the order is reversed: Get-WmiObject only exists in
    Windows PowerShell 5.1.
    """
    names = ["pwsh", "powershell.exe", "powershell"]
    if prefer_legacy:
        names = ["powershell.exe", "powershell", "pwsh"]
    for name in names:
        path = shutil.which(name)
        if path:
            return path
    return None
