"""Shared test fixtures and a fake inventory service."""

from __future__ import annotations

import sys
from datetime import datetime

import pytest

from hwprint.config import Config
from hwprint.diagnostics import DiagnosticLog
from hwprint.models import AttributeKey, HardwareReport

windows_only = pytest.mark.skipif(
    sys.platform != "win32",
    reason="Test requires Windows",
)


def pytest_configure(config):
    config.addinivalue_line("markers", "windows_only: test runs real PowerShell and needs Windows")


def pytest_collection_modifyitems(config, items):
    for item in items:
        if item.get_closest_marker("windows_only"):
            item.add_marker(windows_only)


def default_records() -> dict:
    """Values returned by a healthy machine, one entry per inventory operation."""
    return {
        "bios": {"Manufacturer": "Dell Inc.", "Version": "1.15.0", "SerialNumber": "BIOS1"},
        "computer_system": {"Manufacturer": "Dell Inc.", "Model": "Latitude 5540"},
        "system_product": {"IdentifyingNumber": "SYS1", "UUID": "UUID1"},
        "baseboard": {"Manufacturer": "Dell Inc.", "Product": "0X1234", "SerialNumber": "MB1", "Version": "A00"},
        "processor": {"Manufacturer": "GenuineIntel", "ProcessorId": "CPU1"},
        "chassis": {
            "Manufacturer": "Dell Inc.",
            "SerialNumber": "CHS1",
            "SMBIOSAssetTag": "ASSET-42",
            "Tag": "System Enclosure 0",
        },
        "memory": {
            "Manufacturer": "Samsung",
            "PartNumber": "M471A2G43BB2-CWE",
            "SerialNumber": "RAM1",
            "Tag": "Physical Memory 0",
        },
        "disk": {"Model": "Samsung SSD 980", "SerialNumber": "DISK1", "Index": 0},
        "network_configuration": {
            "Description": "Intel(R) Ethernet Connection",
            "MACAddress": "00:11:22:33:44:55",
            "IPAddress": ["fe80::1c2d:3e4f:5a6b:7c8d", "192.168.1.20"],
        },
        "tpm": {"ManufacturerId": 1229346816, "ManufacturerVersion": "7.2.3.1", "SerialNumber": "TPM-PRIMARY"},
        "tpm_legacy": {"ManufacturerId": 1229346816, "ManufacturerVersion": "7.2.3.1", "SerialNumber": "TPM-LEGACY"},
        "secure_boot_enabled": True,
        "public_ipv4": "203.0.113.7",
        "public_dns": "203.0.113.8",
    }


class FakeInventory:
    """InventoryService double.

    ``records`` override the default per-operation results; ``faults``
    maps an operation name to the exception it raises.
    """

    def __init__(self, records: dict | None = None, faults: dict | None = None):
        self.records = default_records()
        self.records.update(records or {})
        self.faults = faults or {}
        self.calls: list[str] = []

    def _answer(self, operation: str):
        self.calls.append(operation)
        if operation in self.faults:
            raise self.faults[operation]
        return self.records.get(operation)

    def bios(self):
        return self._answer("bios")

    def computer_system(self):
        return self._answer("computer_system")

    def system_product(self):
        return self._answer("system_product")

    def baseboard(self):
        return self._answer("baseboard")

    def processor(self):
        return self._answer("processor")

    def chassis(self):
        return self._answer("chassis")

    def memory(self):
        return self._answer("memory")

    def disk(self):
        return self._answer("disk")

    def network_configuration(self):
        return self._answer("network_configuration")

    def tpm(self):
        return self._answer("tpm")

    def tpm_legacy(self):
        return self._answer("tpm_legacy")

    def secure_boot_enabled(self):
        return self._answer("secure_boot_enabled")

    def public_ipv4(self):
        return self._answer("public_ipv4")

    def public_dns(self):
        return self._answer("public_dns")


@pytest.fixture
def fake_inventory() -> FakeInventory:
    """Return a FakeInventory answering every query with default values."""
    return FakeInventory()


@pytest.fixture
def make_inventory():
    """Factory for FakeInventory with custom records and faults."""
    return FakeInventory


@pytest.fixture
def default_config(tmp_path) -> Config:
    """Return a Config writing under a temporary directory."""
    return Config(output_directory=str(tmp_path / "reports"), wait_for_ack=False)


@pytest.fixture
def silent_log(tmp_path) -> DiagnosticLog:
    """Return a disabled DiagnosticLog."""
    return DiagnosticLog(tmp_path / "errors.log", enabled=False)


@pytest.fixture
def sample_report() -> HardwareReport:
    """Return a complete HardwareReport with every value set to the key name."""
    return HardwareReport(
        hostname="TEST-LAPTOP",
        generated_at=datetime(2026, 3, 7, 9, 5),
        values={key: key.value for key in AttributeKey},
    )
