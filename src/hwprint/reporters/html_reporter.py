"""HTML report output via Jinja2 templating."""

from __future__ import annotations

from importlib import resources

from jinja2 import BaseLoader, Environment

from hwprint.models import NOT_AVAILABLE, UNABLE_TO_RETRIEVE, HardwareReport
from hwprint.reporters.sink import resolve_path, write_text


def _load_template() -> str:
    """Load the HTML template from package data."""
    ref = resources.files("hwprint.templates").joinpath("report.html.j2")
    return ref.read_text(encoding="utf-8")


def _value_class(value: str) -> str:
    if value in (NOT_AVAILABLE, UNABLE_TO_RETRIEVE):
        return "missing"
    if value.startswith("Error Retrieving"):
        return "error"
    return ""


def render(report: HardwareReport) -> str:
    env = Environment(loader=BaseLoader(), autoescape=True)
    template = env.from_string(_load_template())
    return template.render(
        report=report,
        sections=report.sections(),
        value_class=_value_class,
        generated=report.generated_at.strftime("%Y-%m-%d %H:%M"),
    )


def generate(report: HardwareReport, output_dir: str) -> str:
    """Render the report as a self-contained HTML file.

    Returns:
        Path to the generated HTML file.
    """
    path = resolve_path(report, output_dir, "html")
    return write_text(path, render(report))
