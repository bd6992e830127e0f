"""JSON report output."""

from __future__ import annotations

from hwprint.models import HardwareReport
from hwprint.reporters.sink import resolve_path, write_text


def generate(report: HardwareReport, output_dir: str) -> str:
    """Serialize the report to a JSON file.

    Args:
        report: The completed hardware report.
        output_dir: Directory to write the report file.

    Returns:
        Path to the generated JSON file.
    """
    path = resolve_path(report, output_dir, "json")
    return write_text(path, report.model_dump_json(indent=2))
