"""
Configuration management for hwcheck.

Loads warning/critical thresholds and logging settings from an
optional YAML file and environment variables. A bad file never stops a
run: it is reported and the built-in defaults are used instead.
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

import yaml

from .errors import ConfigError
from .models import Severity


logger = logging.getLogger(__name__)

THRESHOLD_SUFFIX = "_thresholds"


@dataclass(frozen=True)
class Thresholds:
    """Warning/critical limits for one metric category."""

    warning: float = 70.0
    critical: float = 90.0

    def classify(self, value: Optional[float]) -> Optional[Severity]:
        """Classify a reading; values strictly above a limit cross it."""
        if value is None:
            return None
        if value > self.critical:
            return Severity.CRITICAL
        if value > self.warning:
            return Severity.WARNING
        return Severity.NORMAL


@dataclass(frozen=True)
class ThresholdSet:
    """Thresholds for every category, fixed for the lifetime of a run."""

    cpu: Thresholds = field(default_factory=Thresholds)
    ram: Thresholds = field(default_factory=Thresholds)
    swap: Thresholds = field(default_factory=Thresholds)
    storage: Thresholds = field(default_factory=Thresholds)
    temperature: Thresholds = field(
        default_factory=lambda: Thresholds(warning=75.0, critical=90.0)
    )

    @classmethod
    def categories(cls):
        return [f.name for f in fields(cls)]


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class Config:
    """Main configuration container."""

    thresholds: ThresholdSet = field(default_factory=ThresholdSet)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    source: Optional[str] = None

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        """
        Load configuration, falling back to defaults on any problem.

        Without an explicit path, HWCHECK_CONFIG and then the standard
        locations are tried. Missing implicit files are silently skipped.
        """
        if path is None:
            path = os.getenv("HWCHECK_CONFIG") or get_default_config_path()

        config = cls()
        if path:
            try:
                config = cls.from_yaml(path)
            except ConfigError as e:
                logger.warning(f"Ignoring configuration {path}: {e}; using defaults")

        config._apply_env_overrides()
        return config

    @classmethod
    def from_yaml(cls, path: str) -> "Config":
        """Load configuration from YAML file. Raises ConfigError."""
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigError("file not found")

        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"cannot read file: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("top level must be a mapping")

        config = cls._from_dict(data)
        config.source = str(config_path)
        logger.debug(f"Loaded configuration from {config_path}")
        return config

    @classmethod
    def _from_dict(cls, data: dict) -> "Config":
        """Create config from dictionary."""
        limits = {}
        known = set()
        for category in ThresholdSet.categories():
            key = category + THRESHOLD_SUFFIX
            known.add(key)
            if key in data:
                limits[category] = _parse_thresholds(key, data[key])

        config = cls(thresholds=ThresholdSet(**limits))

        if "logging" in data:
            known.add("logging")
            section = data["logging"]
            if not isinstance(section, dict):
                raise ConfigError("logging must be a mapping")
            try:
                config.logging = LoggingConfig(**section)
            except TypeError as e:
                raise ConfigError(f"logging: {e}") from e
            _check_logging(config.logging)

        for key in data:
            if key not in known:
                logger.debug(f"Unknown configuration key: {key}")

        return config

    def _apply_env_overrides(self):
        """Apply environment variable overrides."""
        if os.getenv("HWCHECK_LOG_LEVEL"):
            self.logging.level = os.getenv("HWCHECK_LOG_LEVEL")

    def to_dict(self) -> dict:
        data = {}
        for category in ThresholdSet.categories():
            limits = getattr(self.thresholds, category)
            data[category + THRESHOLD_SUFFIX] = {
                "warning": limits.warning,
                "critical": limits.critical,
            }
        data["logging"] = {"level": self.logging.level}
        return data

    def to_yaml(self, path: str):
        """Save configuration to YAML file."""
        with open(path, "w") as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


def _parse_thresholds(key: str, value) -> Thresholds:
    if not isinstance(value, dict):
        raise ConfigError(f"{key} must be a mapping with warning and critical")

    parsed = {}
    for name in ("warning", "critical"):
        if name not in value:
            raise ConfigError(f"{key}.{name} is missing")
        number = value[name]
        # bool is an int subclass; `warning: yes` is a typo, not 1.0
        if isinstance(number, bool) or not isinstance(number, (int, float)):
            raise ConfigError(f"{key}.{name} must be a number, got {number!r}")
        parsed[name] = float(number)

    if parsed["warning"] > parsed["critical"]:
        raise ConfigError(f"{key}: warning exceeds critical")
    return Thresholds(**parsed)


def _check_logging(settings: LoggingConfig):
    if not isinstance(settings.level, str):
        raise ConfigError(f"logging.level must be a string, got {settings.level!r}")
    if not isinstance(logging.getLevelName(settings.level.upper()), int):
        raise ConfigError(f"logging.level: unknown level {settings.level!r}")

    if not isinstance(settings.format, str):
        raise ConfigError(f"logging.format must be a string, got {settings.format!r}")
    try:
        logging.Formatter(settings.format)
    except (ValueError, TypeError) as e:
        raise ConfigError(f"logging.format: {e}") from e


def get_default_config_path() -> Optional[str]:
    """Return the first existing standard config location, if any."""
    candidates = [
        Path("hwcheck.yaml"),
        Path.home() / ".config" / "hwcheck" / "config.yaml",
        Path("/etc/hwcheck/config.yaml"),
    ]

    for path in candidates:
        if path.is_file():
            return str(path)
    return None
