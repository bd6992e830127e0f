"""WMI query wrapper using PowerShell.

Two query paths are exposed: the CIM cmdlets (Get-CimInstance, the modern
API) and the legacy WMI cmdlets (Get-WmiObject). Both run through the
PowerShell subprocess runner and raise InventoryQueryError on any failure,
so callers can tell a faulting query apart from one that found nothing.
"""

from __future__ import annotations

from hwprint.collectors.powershell import PowerShellResult, run_ps

DEFAULT_NAMESPACE = "root\\cimv2"


class InventoryQueryError(Exception):
    """A WMI/CIM query could not be executed or its output parsed."""

    def __init__(self, wmi_class: str, detail: str):
        super().__init__(f"{wmi_class}: {detail}")
        self.wmi_class = wmi_class
        self.detail = detail


def _build_command(
    cmdlet: str,
    wmi_class: str,
    properties: list[str] | None,
    namespace: str,
    where: str | None,
) -> str:
    class_flag = "-Class" if cmdlet == "Get-WmiObject" else "-ClassName"
    cmd_parts = [f"{cmdlet} {class_flag} {wmi_class} -ErrorAction Stop"]

    if namespace != DEFAULT_NAMESPACE:
        cmd_parts.append(f"-Namespace '{namespace}'")

    if where:
        cmd_parts.append(f"-Filter \"{where}\"")

    if properties:
        prop_list = ", ".join(properties)
        cmd_parts.append(f"| Select-Object {prop_list}")

    return " ".join(cmd_parts)


def _normalize(wmi_class: str, result: PowerShellResult) -> list[dict]:
    if not result.success:
        raise InventoryQueryError(wmi_class, result.describe_error())

    # No instances: PowerShell prints nothing at all.
    if result.json_output is None:
        return []

    # PowerShell returns a single object (dict) if only one result,
    # or a list of objects if multiple. Normalize to list.
    if isinstance(result.json_output, dict):
        return [result.json_output]
    if isinstance(result.json_output, list):
        return [row for row in result.json_output if isinstance(row, dict)]
    raise InventoryQueryError(
        wmi_class,
        f"unexpected output type {type(result.json_output).__name__}",
    )


def query(
    wmi_class: str,
    properties: list[str] | None = None,
    namespace: str = DEFAULT_NAMESPACE,
    where: str | None = None,
    timeout: int = 60,
) -> list[dict]:
    """Execute a CIM query and return results as a list of dicts.

    Args:
        wmi_class: WMI class name (e.g., 'Win32_BIOS').
        properties: List of property names to select. None = all properties.
        namespace: WMI namespace (default: root\\cimv2).
        where: Optional WMI filter expression (e.g., "IPEnabled=TRUE").
        timeout: Timeout in seconds for the PowerShell command.

    Returns:
        List of dicts, each representing one WMI object with requested
        properties. Empty when the class has no instances.

    Raises:
        InventoryQueryError: PowerShell is missing, the query failed or
            timed out, or its output could not be parsed.
    """
    command = _build_command("Get-CimInstance", wmi_class, properties, namespace, where)
    return _normalize(wmi_class, run_ps(command, timeout=timeout, as_json=True))


def query_legacy(
    wmi_class: str,
    properties: list[str] | None = None,
    namespace: str = DEFAULT_NAMESPACE,
    where: str | None = None,
    timeout: int = 60,
) -> list[dict]:
    """Execute the same query through the legacy Get-WmiObject cmdlet.

    Same contract as query(). Runs under Windows PowerShell 5.1 where
    available, since pwsh 7 no longer ships Get-WmiObject.
    """
    command = _build_command("Get-WmiObject", wmi_class, properties, namespace, where)
    return _normalize(wmi_class, run_ps(command, timeout=timeout, as_json=True, legacy=True))


def first_instance(rows: list[dict]) -> dict | None:
    """Return the first instance of a multi-instance class, or None."""
    return rows[0] if rows else None
