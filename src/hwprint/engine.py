"""Run orchestration: collect, probe, fingerprint, assemble the report."""

from __future__ import annotations

from datetime import datetime

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.text import Text

from hwprint.builder import ReportBuilder
from hwprint.collector import build_attribute_queries, collect_attributes
from hwprint.config import Config
from hwprint.diagnostics import DiagnosticLog
from hwprint.fingerprint import apply_fingerprint
from hwprint.inventory import InventoryService
from hwprint.models import AttributeKey, HardwareReport
from hwprint.platform import get_hostname
from hwprint.probes import probe_secure_boot, probe_tpm

console = Console()


class Engine:
    """Runs the collection steps in order and produces a HardwareReport."""

    def __init__(
        self,
        config: Config,
        inventory: InventoryService,
        diagnostics: DiagnosticLog | None = None,
        show_progress: bool = True,
    ):
        self.config = config
        self.inventory = inventory
        self.diagnostics = diagnostics or DiagnosticLog(
            config.diagnostic_log_path,
            enabled=config.log_errors,
        )
        self.show_progress = show_progress

    def run(self) -> HardwareReport:
        """Collect every attribute and return the completed report."""
        builder = ReportBuilder(get_hostname())
        queries = build_attribute_queries(self.inventory)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TimeElapsedColumn(),
            console=console,
            transient=True,
            disable=not self.show_progress,
        ) as progress:
            # Attributes plus the TPM and Secure Boot probes
            task = progress.add_task("Collecting hardware information...", total=len(queries) + 2)

            def on_step(key: AttributeKey, value: str) -> None:
                progress.update(task, description=f"[cyan]{key.value}[/cyan]")
                if self.config.verbose:
                    progress.console.print(Text(f"  {key.value}: {value}"))
                progress.advance(task)

            collect_attributes(self.inventory, builder, self.diagnostics, on_step=on_step)

            progress.update(task, description="[cyan]TPM[/cyan]")
            probe_tpm(self.inventory, builder, self.diagnostics)
            progress.advance(task)

            progress.update(task, description="[cyan]Secure Boot[/cyan]")
            probe_secure_boot(self.inventory, builder, self.diagnostics)
            progress.advance(task)

        apply_fingerprint(builder)

        if self.config.verbose and builder.faults:
            console.print(f"[yellow]{len(builder.faults)} attribute(s) could not be retrieved[/yellow]")

        return builder.build(generated_at=datetime.now())
