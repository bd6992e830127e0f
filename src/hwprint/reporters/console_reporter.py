"""Rich console report output.

Prints the same section headers and "Label: value" lines as the text
report, with styling for placeholders, errors and the fingerprint.
"""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from hwprint.models import NOT_AVAILABLE, UNABLE_TO_RETRIEVE, HardwareReport, Section


def _value_style(value: str) -> str:
    if value in (NOT_AVAILABLE, UNABLE_TO_RETRIEVE):
        return "dim"
    if value.startswith("Error Retrieving"):
        return "red"
    return ""


def _line(label: str, value: str, section: Section) -> Text:
    style = "bold green" if section is Section.FINGERPRINT else _value_style(value)
    line = Text(f"{label}: ", style="cyan")
    line.append(value, style=style)
    return line


def generate(report: HardwareReport, console: Console | None = None) -> None:
    """Display the report on the console in text-report order."""
    con = console or Console()

    con.print()
    con.print("[bold]Hardware Information[/bold]")
    con.print(Text(f"Host: {report.hostname}"))
    con.print(f"Generated: {report.generated_at.strftime('%Y-%m-%d %H:%M')}")

    for section, entries in report.sections():
        con.print()
        con.print(Text(f"=== {section.value} ===", style="bold"))
        for label, value in entries:
            con.print(_line(label, value, section))

    if report.faults:
        con.print()
        con.print(f"[yellow]{len(report.faults)} attribute(s) could not be retrieved[/yellow]")
    con.print()
