"""Plain-text report: section headers and "Label: value" lines."""

from __future__ import annotations

from hwprint.models import HardwareReport
from hwprint.reporters.sink import resolve_path, write_text


def render(report: HardwareReport) -> str:
    """Render the report in fixed section and line order."""
    lines: list[str] = []
    for section, entries in report.sections():
        if lines:
            lines.append("")
        lines.append(f"=== {section.value} ===")
        for label, value in entries:
            lines.append(f"{label}: {value}")
    return "\n".join(lines) + "\n"


def generate(report: HardwareReport, output_dir: str, output_path: str | None = None) -> str:
    """Write the text report and return its path.

    Args:
        report: The completed hardware report.
        output_dir: Directory for the timestamped file.
        output_path: Explicit file path, overriding output_dir.

    Raises:
        ReportWriteError: the file could not be written.
    """
    path = resolve_path(report, output_dir, "txt", output_path)
    return write_text(path, render(report))
