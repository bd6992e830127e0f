"""TPM and Secure Boot probes."""

from __future__ import annotations

from hwprint.builder import ReportBuilder
from hwprint.collector import field_value
from hwprint.diagnostics import DiagnosticLog
from hwprint.inventory import InventoryService
from hwprint.models import (
    DISABLED,
    ENABLED,
    NOT_AVAILABLE,
    TPM_KEYS,
    AttributeKey,
)
from hwprint.outcome import OutcomeStatus, attempt, first_success

_TPM_FIELDS = ("ManufacturerId", "ManufacturerVersion", "SerialNumber")


def probe_tpm(
    inventory: InventoryService,
    builder: ReportBuilder,
    diagnostics: DiagnosticLog,
) -> tuple[str, str, str]:
    """Fill the three TPM keys from the CIM query, else the legacy WMI query.

    All three values come from the one record that answered first. When
    neither query produced a record, all three are "Not Available".
    """
    record, outcomes = first_success([inventory.tpm, inventory.tpm_legacy], default=None)

    if record is None:
        values = (NOT_AVAILABLE, NOT_AVAILABLE, NOT_AVAILABLE)
        errors = [o.error for o in outcomes if o.status is OutcomeStatus.FAULT and o.error]
        if errors:
            detail = "; ".join(errors)
            for key in TPM_KEYS:
                builder.record_fault(key, detail)
            diagnostics.record(AttributeKey.TPM_MANUFACTURER_ID, detail)
    else:
        values = tuple(field_value(record, name) or NOT_AVAILABLE for name in _TPM_FIELDS)

    for key, value in zip(TPM_KEYS, values):
        builder.set(key, value)
    return values


def probe_secure_boot(
    inventory: InventoryService,
    builder: ReportBuilder,
    diagnostics: DiagnosticLog,
) -> str:
    """Record "Enabled", "Disabled", or "Not Available" when the check faults."""
    outcome = attempt(inventory.secure_boot_enabled, keep_falsy=True)

    if outcome.status is OutcomeStatus.FAULT:
        value = NOT_AVAILABLE
        detail = outcome.error or "unknown error"
        builder.record_fault(AttributeKey.SECURE_BOOT_STATE, detail)
        diagnostics.record(AttributeKey.SECURE_BOOT_STATE, detail)
    elif outcome.status is OutcomeStatus.OK and outcome.value:
        value = ENABLED
    else:
        value = DISABLED

    builder.set(AttributeKey.SECURE_BOOT_STATE, value)
    return value
