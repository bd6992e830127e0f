"""Hardware fingerprint derivation."""

from __future__ import annotations

import hashlib

from hwprint.builder import ReportBuilder
from hwprint.models import FINGERPRINT_KEYS, AttributeKey

DELIMITER = "-"


def compute_fingerprint(
    uuid: str,
    bios_serial: str,
    disk_serial: str,
    processor_serial: str,
    motherboard_serial: str,
    ram_serial: str,
) -> str:
    """MD5 of the six identifiers joined by "-", as 32 uppercase hex digits.

    Placeholders such as "Not Available" take part as literal text. MD5
    gives a compact fixed-length identifier here; it is not a security
    control.
    """
    joined = DELIMITER.join(
        (uuid, bios_serial, disk_serial, processor_serial, motherboard_serial, ram_serial)
    )
    return hashlib.md5(joined.encode("utf-8"), usedforsecurity=False).hexdigest().upper()


def apply_fingerprint(builder: ReportBuilder) -> str:
    """Compute the fingerprint from collected values and store it."""
    fingerprint = compute_fingerprint(*(builder.get(key) for key in FINGERPRINT_KEYS))
    builder.set(AttributeKey.HARDWARE_FINGERPRINT, fingerprint)
    return fingerprint
