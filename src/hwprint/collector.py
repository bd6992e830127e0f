"""Attribute collection: one query per key, placeholder on failure.

Every attribute is resolved independently through attempt(); a fault in
one query becomes that attribute's placeholder and collection moves on.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from hwprint.builder import ReportBuilder
from hwprint.diagnostics import DiagnosticLog
from hwprint.inventory import InventoryService
from hwprint.models import (
    NOT_AVAILABLE,
    UNABLE_TO_RETRIEVE,
    AttributeKey,
    error_placeholder,
)
from hwprint.outcome import OutcomeStatus, Query, attempt

_IPV4_RE = re.compile(r"^\d{1,3}(\.\d{1,3}){3}$")


class FaultPolicy(str, Enum):
    """Which placeholder a failed query turns into."""
    INVENTORY = "inventory"  # "Not Available" / "Error Retrieving {key}"
    NETWORK = "network"  # "Unable to retrieve"


@dataclass(frozen=True)
class AttributeQuery:
    key: AttributeKey
    query: Query
    policy: FaultPolicy = FaultPolicy.INVENTORY


def field_value(record: dict | None, name: str) -> str | None:
    """Read one property from a query record as text, None when blank."""
    if not record:
        return None
    value = record.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        value = ", ".join(str(v) for v in value if v is not None)
    text = str(value).strip()
    return text or None


def first_ipv4(addresses: Any) -> str | None:
    """Return the first dotted-quad address of an adapter's IPAddress list."""
    if addresses is None:
        return None
    if isinstance(addresses, str):
        addresses = [addresses]
    for address in addresses:
        if isinstance(address, str) and _IPV4_RE.match(address.strip()):
            return address.strip()
    return None


def _field_query(operation: Callable[[], dict | None], name: str) -> Query:
    return lambda: field_value(operation(), name)


def system_serial_query(inventory: InventoryService) -> Query:
    """Serial from the system product, else from the BIOS.

    An absent BIOS record and an empty BIOS serial both fall through to
    the placeholder.
    """
    def query() -> str | None:
        serial = field_value(inventory.system_product(), "IdentifyingNumber")
        if serial:
            return serial
        return field_value(inventory.bios(), "SerialNumber")
    return query


def build_attribute_queries(inventory: InventoryService) -> list[AttributeQuery]:
    """The fixed collection plan, in report order.

    Covers every key except the fingerprint, TPM and Secure Boot, which
    are filled in by later steps.
    """
    inv = inventory
    return [
        AttributeQuery(
            AttributeKey.MAC_ADDRESS,
            _field_query(inv.network_configuration, "MACAddress"),
        ),
        AttributeQuery(
            AttributeKey.LOCAL_IPV4,
            lambda: first_ipv4((inv.network_configuration() or {}).get("IPAddress")),
        ),
        AttributeQuery(AttributeKey.PUBLIC_IPV4, inv.public_ipv4, FaultPolicy.NETWORK),
        AttributeQuery(AttributeKey.PUBLIC_DNS, inv.public_dns, FaultPolicy.NETWORK),
        AttributeQuery(AttributeKey.BIOS_VENDOR, _field_query(inv.bios, "Manufacturer")),
        AttributeQuery(AttributeKey.BIOS_VERSION, _field_query(inv.bios, "Version")),
        AttributeQuery(AttributeKey.BIOS_SERIAL, _field_query(inv.bios, "SerialNumber")),
        AttributeQuery(AttributeKey.SYSTEM_MANUFACTURER, _field_query(inv.computer_system, "Manufacturer")),
        AttributeQuery(AttributeKey.SYSTEM_MODEL, _field_query(inv.computer_system, "Model")),
        AttributeQuery(AttributeKey.SYSTEM_UUID, _field_query(inv.system_product, "UUID")),
        AttributeQuery(AttributeKey.SYSTEM_SERIAL, system_serial_query(inv)),
        AttributeQuery(AttributeKey.MOTHERBOARD_MANUFACTURER, _field_query(inv.baseboard, "Manufacturer")),
        AttributeQuery(AttributeKey.MOTHERBOARD_PRODUCT, _field_query(inv.baseboard, "Product")),
        AttributeQuery(AttributeKey.MOTHERBOARD_SERIAL, _field_query(inv.baseboard, "SerialNumber")),
        AttributeQuery(AttributeKey.MOTHERBOARD_VERSION, _field_query(inv.baseboard, "Version")),
        AttributeQuery(AttributeKey.PROCESSOR_MANUFACTURER, _field_query(inv.processor, "Manufacturer")),
        AttributeQuery(AttributeKey.PROCESSOR_SERIAL, _field_query(inv.processor, "ProcessorId")),
        AttributeQuery(AttributeKey.CHASSIS_MANUFACTURER, _field_query(inv.chassis, "Manufacturer")),
        AttributeQuery(AttributeKey.CHASSIS_SERIAL, _field_query(inv.chassis, "SerialNumber")),
        AttributeQuery(AttributeKey.CHASSIS_ASSET_TAG, _field_query(inv.chassis, "SMBIOSAssetTag")),
        AttributeQuery(AttributeKey.RAM_MANUFACTURER, _field_query(inv.memory, "Manufacturer")),
        AttributeQuery(AttributeKey.RAM_PART_NUMBER, _field_query(inv.memory, "PartNumber")),
        AttributeQuery(AttributeKey.RAM_SERIAL, _field_query(inv.memory, "SerialNumber")),
        AttributeQuery(AttributeKey.RAM_TAG, _field_query(inv.memory, "Tag")),
        AttributeQuery(AttributeKey.DISK_MODEL, _field_query(inv.disk, "Model")),
        AttributeQuery(AttributeKey.DISK_SERIAL, _field_query(inv.disk, "SerialNumber")),
    ]


def resolve_attribute(
    item: AttributeQuery,
    builder: ReportBuilder,
    diagnostics: DiagnosticLog,
) -> str:
    """Run one attribute query and store its value or placeholder."""
    outcome = attempt(item.query)

    if outcome.status is OutcomeStatus.OK:
        value = str(outcome.value).strip()
    elif item.policy is FaultPolicy.NETWORK:
        value = UNABLE_TO_RETRIEVE
    elif outcome.status is OutcomeStatus.EMPTY:
        value = NOT_AVAILABLE
    else:
        value = error_placeholder(item.key)

    if outcome.status is OutcomeStatus.FAULT:
        detail = outcome.error or "unknown error"
        builder.record_fault(item.key, detail)
        diagnostics.record(item.key, detail)

    builder.set(item.key, value)
    return value


def collect_attributes(
    inventory: InventoryService,
    builder: ReportBuilder,
    diagnostics: DiagnosticLog,
    on_step: Callable[[AttributeKey, str], None] | None = None,
) -> None:
    """Resolve every inventory attribute into ``builder`` in fixed order.

    ``on_step`` is called with each key and the value stored for it.
    """
    for item in build_attribute_queries(inventory):
        value = resolve_attribute(item, builder, diagnostics)
        if on_step is not None:
            on_step(item.key, value)
