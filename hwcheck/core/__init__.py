"""Core module containing data models, configuration and aggregation."""

from .config import Config, Thresholds, ThresholdSet
from .errors import (
    CollectError,
    CollectorFailure,
    ConfigError,
    HwCheckError,
    PlatformUnsupported,
    PrivilegeRequired,
)
from .models import Domain, Report, Section, SectionStatus, Severity

__all__ = [
    "Config",
    "Thresholds",
    "ThresholdSet",
    "CollectError",
    "CollectorFailure",
    "ConfigError",
    "HwCheckError",
    "PlatformUnsupported",
    "PrivilegeRequired",
    "Domain",
    "Report",
    "Section",
    "SectionStatus",
    "Severity",
]
