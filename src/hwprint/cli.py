"""Click CLI interface for hwprint."""

from __future__ import annotations

import sys

import click
from rich.console import Console

from hwprint import __version__
from hwprint.config import Config
from hwprint.engine import Engine
from hwprint.inventory import WmiInventory
from hwprint.platform import is_admin, is_windows
from hwprint.reporters import console_reporter, json_reporter, text_reporter

console = Console()

FATAL_MESSAGE = "An error occurred while collecting hardware information."


def _acknowledge(config: Config) -> None:
    if config.wait_for_ack:
        click.pause("Press any key to exit...")


@click.command()
@click.version_option(version=__version__, prog_name="hwprint")
@click.option("--log-errors", "-l", is_flag=True, help="Append attribute retrieval errors to the diagnostic log")
@click.option("--output", "-o", default=None, type=click.Path(dir_okay=False), help="Write the text report to this file")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True), help="Path to config YAML")
@click.option("--format", "formats", default=None, help="Extra exports: json,html (default: none)")
@click.option("--no-wait", is_flag=True, help="Exit without waiting for a keypress")
@click.option("--verbose", is_flag=True, help="Show each value as it is collected")
def main(
    log_errors: bool,
    output: str | None,
    config_path: str | None,
    formats: str | None,
    no_wait: bool,
    verbose: bool,
):
    """Collect hardware identifiers and write a fingerprint report."""
    overrides = dict(
        log_errors=log_errors,
        output=output,
        formats=formats,
        no_wait=no_wait,
        verbose=verbose,
    )
    # Stand-in so --no-wait and --verbose hold even if the config file is bad
    config = Config()
    config.apply_overrides(**overrides)

    try:
        if config_path:
            config = Config.from_yaml(config_path)
        else:
            config = Config.from_defaults()
        config.apply_overrides(**overrides)
        _run(config)
    except Exception as exc:
        console.print(f"[bold red]{FATAL_MESSAGE}[/bold red]")
        if config.verbose:
            console.print(f"[red]{type(exc).__name__}: {exc}[/red]")
        _acknowledge(config)
        sys.exit(1)

    _acknowledge(config)


def _run(config: Config) -> None:
    if not is_windows():
        console.print(
            "[yellow]WARNING: Not running on Windows. Hardware queries will "
            "report placeholders.[/yellow]"
        )
    elif not is_admin():
        console.print(
            "[yellow]WARNING: Running without administrator privileges. "
            "TPM and Secure Boot values may be unavailable.[/yellow]"
        )

    engine = Engine(config, WmiInventory(config))
    report = engine.run()

    console_reporter.generate(report, console)

    output_files = [text_reporter.generate(report, config.output_directory, config.output_path)]
    for fmt in config.export_formats:
        if fmt == "json":
            output_files.append(json_reporter.generate(report, config.output_directory))
        elif fmt == "html":
            from hwprint.reporters import html_reporter
            output_files.append(html_reporter.generate(report, config.output_directory))

    console.print("[bold]Reports written:[/bold]")
    for path in output_files:
        console.print(f"  {path}")
    if config.log_errors and engine.diagnostics.lines_written:
        console.print(f"Errors logged to: {engine.diagnostics.path}")
