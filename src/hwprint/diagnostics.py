"""Append-only diagnostic log of attribute retrieval faults."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console

from hwprint.models import AttributeKey

console = Console(stderr=True)


class DiagnosticLog:
    """Writes one line per fault when enabled; otherwise a no-op.

    The file is opened per write so a crash mid-run still leaves every
    line recorded so far. Write failures are reported on the console and
    never interrupt collection.
    """

    def __init__(self, path: str | Path, enabled: bool = False):
        self.path = Path(path)
        self.enabled = enabled
        self.lines_written = 0

    @staticmethod
    def format_line(key: AttributeKey, detail: str) -> str:
        return f"Error: Failed to retrieve {key.value}: {detail}"

    def record(self, key: AttributeKey, detail: str) -> None:
        if not self.enabled:
            return
        line = self.format_line(key, " ".join(detail.split()))
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as exc:
            console.print(f"[yellow]Warning: could not write diagnostic log {self.path}: {exc}[/yellow]")
            return
        self.lines_written += 1
