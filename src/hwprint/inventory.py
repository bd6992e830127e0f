"""Inventory query service: one operation per hardware class.

The collector and probes only see the InventoryService protocol. Each
operation returns the first instance of its class as a dict (or None when
the class has no instances) and raises when the query itself fails.
WmiInventory is the Windows implementation backed by WMI/CIM.
"""

from __future__ import annotations

from typing import Protocol

from hwprint.collectors import network, wmi_collector
from hwprint.collectors.powershell import run_ps
from hwprint.config import Config

TPM_NAMESPACE = "root\\cimv2\\Security\\MicrosoftTpm"
TPM_CLASS = "Win32_Tpm"
TPM_PROPERTIES = ["ManufacturerId", "ManufacturerVersion", "SerialNumber"]

# WMI class and selected properties behind each hardware-class operation
_CLASS_QUERIES: dict[str, tuple[str, list[str], str | None]] = {
    "bios": ("Win32_BIOS", ["Manufacturer", "Version", "SerialNumber"], None),
    "computer_system": ("Win32_ComputerSystem", ["Manufacturer", "Model"], None),
    "system_product": ("Win32_ComputerSystemProduct", ["IdentifyingNumber", "UUID"], None),
    "baseboard": ("Win32_BaseBoard", ["Manufacturer", "Product", "SerialNumber", "Version"], None),
    "processor": ("Win32_Processor", ["Manufacturer", "ProcessorId"], None),
    "chassis": ("Win32_SystemEnclosure", ["Manufacturer", "SerialNumber", "SMBIOSAssetTag", "Tag"], None),
    "memory": ("Win32_PhysicalMemory", ["Manufacturer", "PartNumber", "SerialNumber", "Tag"], None),
    "disk": ("Win32_DiskDrive", ["Model", "SerialNumber", "Index"], None),
    "network_configuration": (
        "Win32_NetworkAdapterConfiguration",
        ["Description", "MACAddress", "IPAddress"],
        "IPEnabled=TRUE",
    ),
}


class SecureBootQueryError(Exception):
    """Confirm-SecureBootUEFI failed (legacy BIOS, access denied) or gave no answer."""


class InventoryService(Protocol):
    def bios(self) -> dict | None: ...
    def computer_system(self) -> dict | None: ...
    def system_product(self) -> dict | None: ...
    def baseboard(self) -> dict | None: ...
    def processor(self) -> dict | None: ...
    def chassis(self) -> dict | None: ...
    def memory(self) -> dict | None: ...
    def disk(self) -> dict | None: ...
    def network_configuration(self) -> dict | None: ...
    def tpm(self) -> dict | None: ...
    def tpm_legacy(self) -> dict | None: ...
    def secure_boot_enabled(self) -> bool: ...
    def public_ipv4(self) -> str | None: ...
    def public_dns(self) -> str | None: ...


class WmiInventory:
    """InventoryService backed by PowerShell CIM/WMI cmdlets."""

    def __init__(self, config: Config):
        self.config = config

    def _first(self, operation: str) -> dict | None:
        wmi_class, properties, where = _CLASS_QUERIES[operation]
        rows = wmi_collector.query(
            wmi_class,
            properties=properties,
            where=where,
            timeout=self.config.inventory_timeout,
        )
        return wmi_collector.first_instance(rows)

    def bios(self) -> dict | None:
        return self._first("bios")

    def computer_system(self) -> dict | None:
        return self._first("computer_system")

    def system_product(self) -> dict | None:
        return self._first("system_product")

    def baseboard(self) -> dict | None:
        return self._first("baseboard")

    def processor(self) -> dict | None:
        return self._first("processor")

    def chassis(self) -> dict | None:
        return self._first("chassis")

    def memory(self) -> dict | None:
        return self._first("memory")

    def disk(self) -> dict | None:
        wmi_class, properties, _ = _CLASS_QUERIES["disk"]
        rows = wmi_collector.query(wmi_class, properties=properties, timeout=self.config.inventory_timeout)
        # Enumeration order is not guaranteed; the boot disk is normally Index 0.
        rows.sort(key=lambda row: row.get("Index") if isinstance(row.get("Index"), int) else 1 << 16)
        return wmi_collector.first_instance(rows)

    def network_configuration(self) -> dict | None:
        return self._first("network_configuration")

    def tpm(self) -> dict | None:
        rows = wmi_collector.query(
            TPM_CLASS,
            properties=TPM_PROPERTIES,
            namespace=TPM_NAMESPACE,
            timeout=self.config.inventory_timeout,
        )
        return wmi_collector.first_instance(rows)

    def tpm_legacy(self) -> dict | None:
        rows = wmi_collector.query_legacy(
            TPM_CLASS,
            properties=TPM_PROPERTIES,
            namespace=TPM_NAMESPACE,
            timeout=self.config.inventory_timeout,
        )
        return wmi_collector.first_instance(rows)

    def secure_boot_enabled(self) -> bool:
        result = run_ps("Confirm-SecureBootUEFI", timeout=self.config.inventory_timeout, as_json=False)
        if not result.success:
            raise SecureBootQueryError(result.describe_error())
        answer = result.output.strip().lower()
        if answer == "true":
            return True
        if answer == "false":
            return False
        raise SecureBootQueryError(f"unexpected Confirm-SecureBootUEFI output: {result.output[:80]!r}")

    def public_ipv4(self) -> str | None:
        return network.fetch_public_ipv4(self.config.public_ip_url, timeout=self.config.ip_timeout)

    def public_dns(self) -> str | None:
        return network.resolve_public_dns(
            hostname=self.config.dns_hostname,
            resolver=self.config.dns_resolver,
            timeout=self.config.dns_timeout,
        )
