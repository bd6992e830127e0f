"""Shared file naming and writing for report outputs."""

from __future__ import annotations

from pathlib import Path

from hwprint.models import HardwareReport

FILENAME_PREFIX = "hardware_info"


class ReportWriteError(Exception):
    """A report file could not be written."""


def report_filename(report: HardwareReport, extension: str) -> str:
    """``hardware_info_MM-dd_HH-mm.<extension>`` for the run's timestamp."""
    return f"{FILENAME_PREFIX}_{report.generated_at.strftime('%m-%d_%H-%M')}.{extension}"


def resolve_path(report: HardwareReport, output_dir: str, extension: str, output_path: str | None = None) -> Path:
    """Explicit output path when given, else a timestamped name in output_dir."""
    if output_path:
        return Path(output_path)
    return Path(output_dir) / report_filename(report, extension)


def write_text(path: Path, content: str) -> str:
    """Write UTF-8 content, creating parent directories.

    Raises:
        ReportWriteError: the directory or file could not be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ReportWriteError(f"Failed to write {path}: {exc}") from exc
    return str(path)
