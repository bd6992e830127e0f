"""YAML configuration loader with defaults."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

import yaml

from hwprint.collectors.network import (
    DEFAULT_DNS_HOSTNAME,
    DEFAULT_DNS_RESOLVER,
    DEFAULT_PUBLIC_IP_URL,
)

_DEFAULT_CONFIG_RESOURCE = "hwprint.data"
_DEFAULT_CONFIG_FILE = "default_config.yaml"

# Formats written in addition to the console and text report.
EXPORT_FORMATS = ("json", "html")


class Config:
    """Application configuration loaded from YAML with CLI overrides."""

    def __init__(
        self,
        output_directory: str = "./reports",
        output_path: str | None = None,
        export_formats: list[str] | None = None,
        log_errors: bool = False,
        diagnostic_log_file: str = "hardware_errors.log",
        public_ip_url: str = DEFAULT_PUBLIC_IP_URL,
        ip_timeout: float = 5.0,
        dns_resolver: str = DEFAULT_DNS_RESOLVER,
        dns_hostname: str = DEFAULT_DNS_HOSTNAME,
        dns_timeout: int = 10,
        inventory_timeout: int = 60,
        wait_for_ack: bool = True,
        verbose: bool = False,
    ):
        self.output_directory = output_directory
        self.output_path = output_path
        self.export_formats = export_formats or []
        self.log_errors = log_errors
        self.diagnostic_log_file = diagnostic_log_file
        self.public_ip_url = public_ip_url
        self.ip_timeout = ip_timeout
        self.dns_resolver = dns_resolver
        self.dns_hostname = dns_hostname
        self.dns_timeout = dns_timeout
        self.inventory_timeout = inventory_timeout
        self.wait_for_ack = wait_for_ack
        self.verbose = verbose

    @property
    def diagnostic_log_path(self) -> Path:
        """Diagnostic log location; relative names resolve under the output directory."""
        path = Path(self.diagnostic_log_file)
        if path.is_absolute():
            return path
        return Path(self.output_directory) / path

    @classmethod
    def from_yaml(cls, path: str | Path) -> Config:
        """Load configuration from a YAML file."""
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        return cls._from_dict(raw)

    @classmethod
    def from_defaults(cls) -> Config:
        """Load built-in default configuration."""
        try:
            ref = resources.files(_DEFAULT_CONFIG_RESOURCE).joinpath(_DEFAULT_CONFIG_FILE)
            raw = yaml.safe_load(ref.read_text(encoding="utf-8")) or {}
            return cls._from_dict(raw)
        except (FileNotFoundError, TypeError):
            return cls()

    @classmethod
    def _from_dict(cls, raw: dict) -> Config:
        """Parse a raw dict into Config."""
        output_section = raw.get("output", {}) or {}
        diag_section = raw.get("diagnostics", {}) or {}
        network_section = raw.get("network", {}) or {}
        inventory_section = raw.get("inventory", {}) or {}
        run_section = raw.get("run", {}) or {}

        formats = [
            f for f in output_section.get("formats", []) or []
            if f in EXPORT_FORMATS
        ]

        return cls(
            output_directory=output_section.get("directory", "./reports"),
            export_formats=formats,
            log_errors=bool(diag_section.get("enabled", False)),
            diagnostic_log_file=diag_section.get("log_file", "hardware_errors.log"),
            public_ip_url=network_section.get("public_ip_url", DEFAULT_PUBLIC_IP_URL),
            ip_timeout=float(network_section.get("ip_timeout", 5.0)),
            dns_resolver=network_section.get("dns_resolver", DEFAULT_DNS_RESOLVER),
            dns_hostname=network_section.get("dns_hostname", DEFAULT_DNS_HOSTNAME),
            dns_timeout=int(network_section.get("dns_timeout", 10)),
            inventory_timeout=int(inventory_section.get("timeout", 60)),
            wait_for_ack=bool(run_section.get("wait_for_ack", True)),
        )

    def apply_overrides(
        self,
        log_errors: bool = False,
        output: str | None = None,
        formats: str | None = None,
        no_wait: bool = False,
        verbose: bool = False,
    ) -> None:
        """Apply CLI flag overrides to this config."""
        if log_errors:
            self.log_errors = True
        if output:
            self.output_path = output
        if formats:
            requested = [f.strip().lower() for f in formats.split(",")]
            self.export_formats = [f for f in requested if f in EXPORT_FORMATS]
        if no_wait:
            self.wait_for_ack = False
        if verbose:
            self.verbose = True
