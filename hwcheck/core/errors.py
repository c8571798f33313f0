"""
Exception hierarchy.

Collector errors never abort a report: the aggregator turns each one
into an annotated empty section. Only argument parsing and output
writes are fatal.
"""


class HwCheckError(Exception):
    """Base class for all hwcheck errors."""


class ConfigError(HwCheckError):
    """Configuration file is missing, unreadable or malformed."""


class CollectError(HwCheckError):
    """A collector could not produce its record."""

    status = "error"
    default_message = "collection failed"

    def __init__(self, message: str = ""):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class PlatformUnsupported(CollectError):
    """The domain is not available on this operating system."""

    status = "unsupported"
    default_message = "not supported on this platform"


class PrivilegeRequired(CollectError):
    """The domain needs elevated rights to be read."""

    status = "privilege_required"
    default_message = "requires elevated privilege"


class CollectorFailure(CollectError):
    """The underlying discovery library or interface failed."""

    status = "error"
