"""Accumulator threaded through the collection steps of one run."""

from __future__ import annotations

from datetime import datetime

from hwprint.models import AttributeFault, AttributeKey, HardwareReport


class ReportBuilder:
    """Collects attribute values until the report is complete.

    Each key may be set exactly once; build() refuses an incomplete report.
    """

    def __init__(self, hostname: str):
        self.hostname = hostname
        self._values: dict[AttributeKey, str] = {}
        self._faults: list[AttributeFault] = []

    def set(self, key: AttributeKey, value: str) -> None:
        if key in self._values:
            raise ValueError(f"{key.value} already collected")
        self._values[key] = value

    def get(self, key: AttributeKey) -> str:
        return self._values[key]

    def has(self, key: AttributeKey) -> bool:
        return key in self._values

    def record_fault(self, key: AttributeKey, detail: str) -> None:
        self._faults.append(AttributeFault(key=key, detail=detail))

    @property
    def faults(self) -> list[AttributeFault]:
        return list(self._faults)

    def build(self, generated_at: datetime) -> HardwareReport:
        return HardwareReport(
            hostname=self.hostname,
            generated_at=generated_at,
            values=dict(self._values),
            faults=list(self._faults),
        )
