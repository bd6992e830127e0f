"""Tests for the command-line entry point."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from hwprint import cli
from hwprint.reporters import text_reporter
from hwprint.reporters.sink import ReportWriteError


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def patched_inventory(monkeypatch, make_inventory):
    """Replace the WMI inventory with a fake; returns the fake's factory."""
    created = {}

    def factory(config, **kwargs):
        inventory = make_inventory(**kwargs)
        created["inventory"] = inventory
        return inventory

    def install(**kwargs):
        monkeypatch.setattr(cli, "WmiInventory", lambda config: factory(config, **kwargs))
        return created

    return install


def _config_file(tmp_path, extra: str = "") -> str:
    path = tmp_path / "cfg.yaml"
    path.write_text(
        f"output:\n  directory: {(tmp_path / 'reports').as_posix()}\n{extra}",
        encoding="utf-8",
    )
    return str(path)


class TestCli:
    def test_writes_report(self, runner, tmp_path, patched_inventory):
        patched_inventory()
        result = runner.invoke(cli.main, ["--config", _config_file(tmp_path), "--no-wait"])
        assert result.exit_code == 0, result.output
        reports = list((tmp_path / "reports").glob("hardware_info_*.txt"))
        assert len(reports) == 1
        content = reports[0].read_text(encoding="utf-8")
        assert "Hardware Fingerprint: 656DEDBBCB84D820EC5469696D67D7EB" in content
        assert "Reports written" in result.output

    def test_output_override(self, runner, tmp_path, patched_inventory):
        patched_inventory()
        target = tmp_path / "custom.txt"
        result = runner.invoke(
            cli.main,
            ["--config", _config_file(tmp_path), "--output", str(target), "--no-wait"],
        )
        assert result.exit_code == 0, result.output
        assert target.exists()
        assert not (tmp_path / "reports").exists()

    def test_log_errors_flag(self, runner, tmp_path, patched_inventory):
        patched_inventory(faults={"bios": OSError("WMI repository corrupt")})
        result = runner.invoke(
            cli.main,
            ["--config", _config_file(tmp_path), "--log-errors", "--no-wait"],
        )
        assert result.exit_code == 0, result.output
        log = tmp_path / "reports" / "hardware_errors.log"
        lines = log.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "Error: Failed to retrieve BiosVendor: OSError: WMI repository corrupt"

    def test_no_log_without_flag(self, runner, tmp_path, patched_inventory):
        patched_inventory(faults={"bios": OSError("x")})
        result = runner.invoke(cli.main, ["--config", _config_file(tmp_path), "--no-wait"])
        assert result.exit_code == 0
        assert not (tmp_path / "reports" / "hardware_errors.log").exists()

    def test_extra_formats(self, runner, tmp_path, patched_inventory):
        patched_inventory()
        result = runner.invoke(
            cli.main,
            ["--config", _config_file(tmp_path), "--format", "json,html", "--no-wait"],
        )
        assert result.exit_code == 0, result.output
        assert len(list((tmp_path / "reports").glob("*.json"))) == 1
        assert len(list((tmp_path / "reports").glob("*.html"))) == 1

    def test_sink_failure_is_fatal(self, runner, tmp_path, patched_inventory, monkeypatch):
        patched_inventory()

        def fail(*args, **kwargs):
            raise ReportWriteError("disk full")

        monkeypatch.setattr(text_reporter, "generate", fail)
        result = runner.invoke(cli.main, ["--config", _config_file(tmp_path), "--no-wait"])
        assert result.exit_code == 1
        assert cli.FATAL_MESSAGE in result.output
        assert "disk full" not in result.output

    def test_fatal_waits_for_acknowledgment(self, runner, tmp_path, patched_inventory, monkeypatch):
        patched_inventory()
        pauses = []
        monkeypatch.setattr(cli.click, "pause", lambda *a, **k: pauses.append(a))

        def fail(*args, **kwargs):
            raise OSError("read-only file system")

        monkeypatch.setattr(text_reporter, "generate", fail)
        result = runner.invoke(cli.main, ["--config", _config_file(tmp_path, "run:\n  wait_for_ack: true\n")])
        assert result.exit_code == 1
        assert len(pauses) == 1

    def test_success_waits_for_acknowledgment(self, runner, tmp_path, patched_inventory, monkeypatch):
        patched_inventory()
        pauses = []
        monkeypatch.setattr(cli.click, "pause", lambda *a, **k: pauses.append(a))
        result = runner.invoke(cli.main, ["--config", _config_file(tmp_path)])
        assert result.exit_code == 0
        assert len(pauses) == 1

    def test_no_wait_skips_acknowledgment(self, runner, tmp_path, patched_inventory, monkeypatch):
        patched_inventory()
        pauses = []
        monkeypatch.setattr(cli.click, "pause", lambda *a, **k: pauses.append(a))
        runner.invoke(cli.main, ["--config", _config_file(tmp_path), "--no-wait"])
        assert pauses == []

    def test_bad_config_is_fatal(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("output: [unclosed\n", encoding="utf-8")
        result = runner.invoke(cli.main, ["--config", str(path), "--no-wait"])
        assert result.exit_code == 1
        assert cli.FATAL_MESSAGE in result.output

    def test_version(self, runner):
        result = runner.invoke(cli.main, ["--version"])
        assert result.exit_code == 0
        assert "hwprint" in result.output
