"""Helpers for reading Linux sysfs attributes."""

from pathlib import Path
from typing import Optional


SYSFS_ROOT = Path("/sys")

# Strings firmware vendors leave in unset DMI/SMBIOS fields
PLACEHOLDERS = {
    "",
    "0",
    "none",
    "unknown",
    "not specified",
    "not provided",
    "not applicable",
    "not available",
    "no module installed",
    "to be filled by o.e.m.",
    "default string",
    "system serial number",
    "0123456789",
}


def read_restricted(path: Path) -> Optional[str]:
    """
    Read an attribute that may be root-only.

    Returns the stripped text, or None when the file is missing or
    empty. PermissionError propagates so callers can report it.
    """
    try:
        text = path.read_text(errors="replace")
    except PermissionError:
        raise
    except OSError:
        return None
    return text.strip() or None


def read_value(path: Path) -> Optional[str]:
    """Read an attribute, treating unreadable files as absent."""
    try:
        return read_restricted(path)
    except PermissionError:
        return None


def read_hex(path: Path) -> Optional[int]:
    """Read a hexadecimal attribute such as `0x8086` or `1d6b`."""
    value = read_value(path)
    if value is None:
        return None
    try:
        return int(value, 16)
    except ValueError:
        return None


def clean_placeholder(value: Optional[str]) -> Optional[str]:
    """Map firmware placeholder strings to None."""
    if value is None:
        return None
    value = value.strip()
    lowered = value.lower()
    if lowered in PLACEHOLDERS or "empty" in lowered:
        return None
    return value
