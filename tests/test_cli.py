"""Tests for the command line interface."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

import cleanmypc.cli as cli
from cleanmypc.platforms import HostEnvironment


@pytest.fixture
def runner(host, monkeypatch):
    monkeypatch.setattr(HostEnvironment, "detect", classmethod(lambda cls: host))
    return CliRunner()


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"largeFileThreshold": 100}), encoding="utf-8")
    return path


class TestCli:
    def test_dry_run_temp_only(self, runner, config_path, fake_root, make_file):
        junk = make_file(fake_root / "tmp" / "junk.tmp", size=50)

        result = runner.invoke(cli.main, ["--dry-run", "--temp", "--config", str(config_path)])

        assert result.exit_code == 0, result.output
        assert "DRY RUN" in result.output
        assert "CLEANUP SUMMARY" in result.output
        assert "Total files cleaned:   1" in result.output
        assert junk.exists()

    def test_silent_runs_everything_and_writes_report(self, runner, config_path, tmp_path, fake_root, make_file):
        make_file(fake_root / "tmp" / "junk.tmp", size=50)
        report = tmp_path / "report.json"

        result = runner.invoke(cli.main, ["--silent", "--config", str(config_path), "--report", str(report)])

        assert result.exit_code == 0, result.output
        assert "CLEANUP SUMMARY" not in result.output
        data = json.loads(report.read_text(encoding="utf-8"))
        assert [r["task"] for r in data["results"]] == [
            "temp", "cache", "browsers", "trash", "downloads", "large_files",
        ]
        assert not (fake_root / "tmp" / "junk.tmp").exists()

    def test_init_config(self, runner, tmp_path):
        path = tmp_path / "cfg" / "config.json"

        first = runner.invoke(cli.main, ["--init-config", "--config", str(path)])
        second = runner.invoke(cli.main, ["--init-config", "--config", str(path)])

        assert first.exit_code == 0
        assert "Wrote default config" in first.output
        assert "already exists" in second.output
        assert json.loads(path.read_text(encoding="utf-8"))["maxFileAge"] == 0

    def test_interactive_abort(self, runner, config_path):
        result = runner.invoke(cli.main, ["--config", str(config_path)], input="n\n")
        assert result.exit_code == 0
        assert "Aborted." in result.output
        assert "CLEANUP SUMMARY" not in result.output

    def test_interactive_select(self, runner, config_path, fake_root, make_file):
        junk = make_file(fake_root / "tmp" / "junk.tmp")

        result = runner.invoke(cli.main, ["--config", str(config_path)], input="select\n1\nn\n")

        assert result.exit_code == 0, result.output
        assert not junk.exists()
        assert "CLEANUP SUMMARY" in result.output

    def test_interactive_large_file_deletion(self, runner, config_path, fake_root, make_file):
        big = make_file(fake_root / "home" / "user" / "big.iso", size=500)

        result = runner.invoke(cli.main, ["--config", str(config_path)], input="select\n6\n1\ny\nn\n")

        assert result.exit_code == 0, result.output
        assert str(big) in result.output
        assert not big.exists()

    def test_interactive_report_prompt(self, runner, config_path, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(cli.main, ["--config", str(config_path)], input="select\n1\ny\njson\n")

        assert result.exit_code == 0, result.output
        reports = list(tmp_path.glob("cleanmypc-report-*.json"))
        assert len(reports) == 1

    def test_error_exits_non_zero(self, runner, monkeypatch):
        def _boom(path, host):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(cli, "load_config", _boom)

        result = runner.invoke(cli.main, ["--temp"])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "disk on fire" in result.output
