"""Core Pydantic models for hwprint."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator

NOT_AVAILABLE = "Not Available"
UNABLE_TO_RETRIEVE = "Unable to retrieve"
ENABLED = "Enabled"
DISABLED = "Disabled"


def error_placeholder(key: AttributeKey) -> str:
    """Placeholder recorded when the query for ``key`` raised."""
    return f"Error Retrieving {key.value}"


class Section(str, Enum):
    NETWORK = "Network"
    BIOS = "BIOS"
    SYSTEM = "System"
    MOTHERBOARD = "Motherboard"
    PROCESSOR = "Processor"
    CHASSIS = "Chassis"
    RAM = "RAM"
    DISK = "HDD/SSD"
    FINGERPRINT = "Fingerprint"
    TPM = "TPM"
    SECURE_BOOT = "Secure Boot"


SECTION_ORDER = {section: i for i, section in enumerate(Section)}


class AttributeKey(str, Enum):
    MAC_ADDRESS = "MacAddress"
    LOCAL_IPV4 = "LocalIPv4"
    PUBLIC_IPV4 = "PublicIPv4"
    PUBLIC_DNS = "PublicDns"
    BIOS_VENDOR = "BiosVendor"
    BIOS_VERSION = "BiosVersion"
    BIOS_SERIAL = "BiosSerial"
    SYSTEM_MANUFACTURER = "SystemManufacturer"
    SYSTEM_MODEL = "SystemModel"
    SYSTEM_UUID = "SystemUUID"
    SYSTEM_SERIAL = "SystemSerial"
    MOTHERBOARD_MANUFACTURER = "MotherboardManufacturer"
    MOTHERBOARD_PRODUCT = "MotherboardProduct"
    MOTHERBOARD_SERIAL = "MotherboardSerial"
    MOTHERBOARD_VERSION = "MotherboardVersion"
    PROCESSOR_MANUFACTURER = "ProcessorManufacturer"
    PROCESSOR_SERIAL = "ProcessorSerial"
    CHASSIS_MANUFACTURER = "ChassisManufacturer"
    CHASSIS_SERIAL = "ChassisSerial"
    CHASSIS_ASSET_TAG = "ChassisAssetTag"
    RAM_MANUFACTURER = "RamManufacturer"
    RAM_PART_NUMBER = "RamPartNumber"
    RAM_SERIAL = "RamSerial"
    RAM_TAG = "RamTag"
    DISK_MODEL = "DiskModel"
    DISK_SERIAL = "DiskSerial"
    HARDWARE_FINGERPRINT = "HardwareFingerprint"
    TPM_MANUFACTURER_ID = "TpmManufacturerId"
    TPM_MANUFACTURER_VERSION = "TpmManufacturerVersion"
    TPM_SERIAL = "TpmSerial"
    SECURE_BOOT_STATE = "SecureBootState"


@dataclass(frozen=True)
class AttributeSpec:
    key: AttributeKey
    section: Section
    label: str


# Fixed layout of the report. Row order is the collection order and the
# line order of every rendered report.
ATTRIBUTE_TABLE: tuple[AttributeSpec, ...] = (
    AttributeSpec(AttributeKey.MAC_ADDRESS, Section.NETWORK, "MAC Address"),
    AttributeSpec(AttributeKey.LOCAL_IPV4, Section.NETWORK, "Local IPv4"),
    AttributeSpec(AttributeKey.PUBLIC_IPV4, Section.NETWORK, "Public IPv4"),
    AttributeSpec(AttributeKey.PUBLIC_DNS, Section.NETWORK, "Public DNS"),
    AttributeSpec(AttributeKey.BIOS_VENDOR, Section.BIOS, "Vendor"),
    AttributeSpec(AttributeKey.BIOS_VERSION, Section.BIOS, "Version"),
    AttributeSpec(AttributeKey.BIOS_SERIAL, Section.BIOS, "Serial Number"),
    AttributeSpec(AttributeKey.SYSTEM_MANUFACTURER, Section.SYSTEM, "Manufacturer"),
    AttributeSpec(AttributeKey.SYSTEM_MODEL, Section.SYSTEM, "Model"),
    AttributeSpec(AttributeKey.SYSTEM_UUID, Section.SYSTEM, "UUID"),
    AttributeSpec(AttributeKey.SYSTEM_SERIAL, Section.SYSTEM, "Serial Number"),
    AttributeSpec(AttributeKey.MOTHERBOARD_MANUFACTURER, Section.MOTHERBOARD, "Manufacturer"),
    AttributeSpec(AttributeKey.MOTHERBOARD_PRODUCT, Section.MOTHERBOARD, "Product"),
    AttributeSpec(AttributeKey.MOTHERBOARD_SERIAL, Section.MOTHERBOARD, "Serial Number"),
    AttributeSpec(AttributeKey.MOTHERBOARD_VERSION, Section.MOTHERBOARD, "Version"),
    AttributeSpec(AttributeKey.PROCESSOR_MANUFACTURER, Section.PROCESSOR, "Manufacturer"),
    AttributeSpec(AttributeKey.PROCESSOR_SERIAL, Section.PROCESSOR, "Processor ID"),
    AttributeSpec(AttributeKey.CHASSIS_MANUFACTURER, Section.CHASSIS, "Manufacturer"),
    AttributeSpec(AttributeKey.CHASSIS_SERIAL, Section.CHASSIS, "Serial Number"),
    AttributeSpec(AttributeKey.CHASSIS_ASSET_TAG, Section.CHASSIS, "Asset Tag"),
    AttributeSpec(AttributeKey.RAM_MANUFACTURER, Section.RAM, "Manufacturer"),
    AttributeSpec(AttributeKey.RAM_PART_NUMBER, Section.RAM, "Part Number"),
    AttributeSpec(AttributeKey.RAM_SERIAL, Section.RAM, "Serial Number"),
    AttributeSpec(AttributeKey.RAM_TAG, Section.RAM, "Tag"),
    AttributeSpec(AttributeKey.DISK_MODEL, Section.DISK, "Model"),
    AttributeSpec(AttributeKey.DISK_SERIAL, Section.DISK, "Serial Number"),
    AttributeSpec(AttributeKey.HARDWARE_FINGERPRINT, Section.FINGERPRINT, "Hardware Fingerprint"),
    AttributeSpec(AttributeKey.TPM_MANUFACTURER_ID, Section.TPM, "ManufacturerID"),
    AttributeSpec(AttributeKey.TPM_MANUFACTURER_VERSION, Section.TPM, "ManufacturerVersion"),
    AttributeSpec(AttributeKey.TPM_SERIAL, Section.TPM, "SerialNumber"),
    AttributeSpec(AttributeKey.SECURE_BOOT_STATE, Section.SECURE_BOOT, "Secure Boot"),
)

ATTRIBUTE_SPECS = {spec.key: spec for spec in ATTRIBUTE_TABLE}

TPM_KEYS = (
    AttributeKey.TPM_MANUFACTURER_ID,
    AttributeKey.TPM_MANUFACTURER_VERSION,
    AttributeKey.TPM_SERIAL,
)

# Inputs to the hardware fingerprint, in digest order.
FINGERPRINT_KEYS = (
    AttributeKey.SYSTEM_UUID,
    AttributeKey.BIOS_SERIAL,
    AttributeKey.DISK_SERIAL,
    AttributeKey.PROCESSOR_SERIAL,
    AttributeKey.MOTHERBOARD_SERIAL,
    AttributeKey.RAM_SERIAL,
)


class AttributeFault(BaseModel):
    """One attribute whose query raised, with the fault detail."""
    key: AttributeKey
    detail: str


class HardwareReport(BaseModel):
    """Completed inventory of one machine. Every AttributeKey is present."""
    hostname: str
    generated_at: datetime
    values: dict[AttributeKey, str]
    faults: list[AttributeFault] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_complete(self) -> HardwareReport:
        missing = [key.value for key in AttributeKey if key not in self.values]
        if missing:
            raise ValueError(f"report is missing attributes: {', '.join(missing)}")
        # Re-key in table order so iteration follows the report layout.
        self.values = {spec.key: self.values[spec.key] for spec in ATTRIBUTE_TABLE}
        return self

    def get(self, key: AttributeKey) -> str:
        return self.values[key]

    @property
    def fingerprint(self) -> str:
        return self.values[AttributeKey.HARDWARE_FINGERPRINT]

    def sections(self) -> list[tuple[Section, list[tuple[str, str]]]]:
        """Group ``(label, value)`` lines under their section, in layout order."""
        grouped: dict[Section, list[tuple[str, str]]] = {}
        for spec in ATTRIBUTE_TABLE:
            grouped.setdefault(spec.section, []).append((spec.label, self.values[spec.key]))
        return sorted(grouped.items(), key=lambda item: SECTION_ORDER[item[0]])
