"""Tests for threshold configuration loading."""

import pytest
import yaml

from hwcheck.core.config import Config, LoggingConfig, Thresholds, ThresholdSet
from hwcheck.core.errors import ConfigError
from hwcheck.core.models import Severity


def test_defaults_without_path():
    config = Config.load(None)
    assert config.thresholds == ThresholdSet()
    assert config.thresholds.cpu == Thresholds(warning=70.0, critical=90.0)
    assert config.source is None


def test_loads_custom_thresholds(write_config):
    path = write_config(
        "cpu_thresholds:\n"
        "  warning: 50\n"
        "  critical: 80.5\n"
        "storage_thresholds: {warning: 85, critical: 95}\n"
    )
    config = Config.load(path)

    assert config.thresholds.cpu == Thresholds(50.0, 80.5)
    assert config.thresholds.storage == Thresholds(85.0, 95.0)
    # Categories absent from the file keep their defaults
    assert config.thresholds.ram == Thresholds()
    assert config.source == path


@pytest.mark.parametrize(
    "text",
    [
        "cpu_thresholds: [1, 2\n",
        "- just\n- a list\n",
        "cpu_thresholds: 80\n",
        "cpu_thresholds: {warning: high, critical: 90}\n",
        "cpu_thresholds: {warning: 80}\n",
        "ram_thresholds: {warning: 95, critical: 90}\n",
        "ram_thresholds: {warning: yes, critical: 90}\n",
        "logging: verbose\n",
        "logging: {colour: blue}\n",
        "logging: {format: plain text}\n",
        "logging: {format: 123}\n",
        "logging: {format: \"%(nope\"}\n",
        "logging: {level: 10}\n",
        "logging: {level: chatty}\n",
        "\x00\x01binary",
    ],
)
def test_malformed_file_falls_back_to_defaults(write_config, text):
    config = Config.load(write_config(text))
    assert config.thresholds == ThresholdSet()
    assert config.logging == LoggingConfig()
    assert config.source is None


def test_missing_file_falls_back_to_defaults(tmp_path):
    config = Config.load(str(tmp_path / "nope.yaml"))
    assert config.thresholds == ThresholdSet()


def test_from_yaml_raises_config_error(write_config):
    with pytest.raises(ConfigError):
        Config.from_yaml(write_config("cpu_thresholds: nope\n"))


def test_empty_file_is_valid(write_config):
    config = Config.load(write_config(""))
    assert config.thresholds == ThresholdSet()
    assert config.source is not None


def test_env_selects_config_file(write_config, monkeypatch):
    path = write_config("ram_thresholds: {warning: 10, critical: 20}\n")
    monkeypatch.setenv("HWCHECK_CONFIG", path)
    assert Config.load().thresholds.ram == Thresholds(10.0, 20.0)


def test_env_overrides_log_level(write_config, monkeypatch):
    monkeypatch.setenv("HWCHECK_LOG_LEVEL", "DEBUG")
    config = Config.load(write_config("logging: {level: ERROR}\n"))
    assert config.logging.level == "DEBUG"


def test_to_yaml_round_trips(tmp_path):
    config = Config(thresholds=ThresholdSet(cpu=Thresholds(60.0, 85.0)))
    path = tmp_path / "out.yaml"
    config.to_yaml(str(path))

    data = yaml.safe_load(path.read_text())
    assert list(data)[:2] == ["cpu_thresholds", "ram_thresholds"]
    assert data["cpu_thresholds"] == {"warning": 60.0, "critical": 85.0}
    assert Config.load(str(path)).thresholds == config.thresholds


@pytest.mark.parametrize(
    "value,expected",
    [
        (10.0, Severity.NORMAL),
        (70.0, Severity.NORMAL),
        (70.1, Severity.WARNING),
        (90.0, Severity.WARNING),
        (90.5, Severity.CRITICAL),
        (None, None),
    ],
)
def test_classify(value, expected):
    assert Thresholds(warning=70.0, critical=90.0).classify(value) is expected
