"""Tests for the command line entry point."""

import json

import pytest
import yaml

from conftest import FakeCollector
from hwcheck.core.errors import PrivilegeRequired
from hwcheck.core.models import Domain
from hwcheck.main import build_parser, main, selected_domains


@pytest.fixture
def collectors(fake_collectors, monkeypatch):
    monkeypatch.setattr("hwcheck.core.aggregator.default_collectors", lambda: fake_collectors)
    return fake_collectors


def called(collectors):
    return {domain for domain, c in collectors.items() if c.calls}


def test_cpu_only_json(collectors, capsys):
    assert main(["--cpu", "--format", "json"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert list(data) == ["generated_at", "cpu"]
    assert data["cpu"]["data"]["model"] == "Test CPU 3000"
    assert called(collectors) == {Domain.CPU}


def test_default_selects_everything(collectors, capsys):
    assert main(["-f", "yaml"]) == 0

    data = yaml.safe_load(capsys.readouterr().out)
    assert list(data)[1:] == [d.value for d in Domain]
    assert called(collectors) == set(Domain)


def test_health_selects_motherboard_and_battery(collectors, capsys):
    assert main(["--health", "--format", "json"]) == 0
    assert called(collectors) == {Domain.MOTHERBOARD, Domain.BATTERY}


def test_missing_privilege_is_not_fatal(collectors, capsys):
    collectors[Domain.RAM] = FakeCollector(Domain.RAM, error=PrivilegeRequired())

    assert main(["--ram", "--cpu"]) == 0

    out = capsys.readouterr().out
    assert "RAM Information" in out
    assert "requires elevated privilege" in out
    assert "CPU Information" in out


def test_malformed_config_is_not_fatal(collectors, capsys, write_config):
    path = write_config("cpu_thresholds: [oops\n")
    assert main(["--cpu", "-f", "json", "--config", path]) == 0

    captured = capsys.readouterr()
    assert json.loads(captured.out)["cpu"]["status"] == "ok"
    assert "using defaults" in captured.err


@pytest.mark.parametrize("logging_section", ["{format: plain text}", "{format: 123}", "{level: []}"])
def test_bad_logging_config_is_not_fatal(collectors, capsys, write_config, logging_section):
    path = write_config(f"logging: {logging_section}\n")
    assert main(["--cpu", "-f", "json", "-c", path]) == 0

    captured = capsys.readouterr()
    assert json.loads(captured.out)["cpu"]["status"] == "ok"
    assert "using defaults" in captured.err


def test_config_thresholds_change_severity(collectors, capsys, write_config):
    path = write_config("cpu_thresholds: {warning: 5, critical: 10}\n")
    assert main(["--cpu", "-f", "json", "-c", path]) == 0

    severity = json.loads(capsys.readouterr().out)["cpu"]["data"]["severity"]
    assert severity["usage_percent"] == "critical"


def test_write_config(collectors, tmp_path):
    target = tmp_path / "written.yaml"
    assert main(["--write-config", str(target)]) == 0

    data = yaml.safe_load(target.read_text())
    assert data["cpu_thresholds"] == {"warning": 70.0, "critical": 90.0}
    assert called(collectors) == set()


@pytest.mark.parametrize(
    "argv",
    [
        ["--format", "xml"],
        ["--watch", "--format", "json"],
        ["--watch", "0"],
        ["--bogus"],
    ],
)
def test_invalid_arguments_exit_with_usage_error(collectors, argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2


@pytest.mark.parametrize(
    "argv,expected",
    [
        ([], list(Domain)),
        (["--all"], list(Domain)),
        (["--pci", "--full"], list(Domain)),
        (["--usb", "--cpu"], [Domain.CPU, Domain.USB]),
        (["--storage", "--network"], [Domain.STORAGE, Domain.NETWORK]),
    ],
)
def test_selected_domains(argv, expected):
    assert selected_domains(build_parser().parse_args(argv)) == expected
