"""
Memory collector.

Totals and swap come from psutil. Per-module detail is read from the
SMBIOS memory device table through `dmidecode -t 17`, which needs root.
"""

import logging
import os
import platform
import re
import shutil
import subprocess
from typing import Dict, List, Optional

import psutil

from ..core.errors import CollectorFailure
from ..core.models import Domain, RamInfo, RamStick
from .base import Collector
from .sysfs import clean_placeholder


logger = logging.getLogger(__name__)

PRIVILEGE_NOTICE = "DIMM details: requires elevated privilege"

# JEDEC manufacturer ids as they appear in SMBIOS Manufacturer strings
JEDEC_MANUFACTURERS = [
    (("0198",), "Kingston"),
    (("04CB",), "ADATA"),
    (("00AD", "80AD"), "SK Hynix"),
    (("00CE", "80CE"), "Samsung"),
    (("012F", "812F"), "Micron"),
    (("029E", "829E"), "Corsair"),
    (("0423", "8423", "059B", "859B"), "Crucial"),
]


class MemoryCollector(Collector):
    """Collects RAM/swap usage and, when permitted, installed modules."""

    domain = Domain.RAM

    def __init__(self, dmidecode: Optional[str] = None):
        super().__init__()
        self._dmidecode = dmidecode

    def _collect(self) -> RamInfo:
        try:
            mem = psutil.virtual_memory()
            swap = psutil.swap_memory()
        except (psutil.Error, OSError) as e:
            raise CollectorFailure(f"cannot read memory counters: {e}") from e

        return RamInfo(
            total=mem.total,
            used=mem.used,
            free=mem.free,
            available=mem.available,
            usage_percent=mem.percent,
            swap_total=swap.total,
            swap_used=swap.used,
            swap_free=swap.free,
            swap_usage_percent=swap.percent,
            sticks=self._get_ram_sticks(),
        )

    def _get_ram_sticks(self) -> Optional[List[RamStick]]:
        if platform.system() != "Linux":
            self.notice("DIMM details are not supported on this platform")
            return None

        dmidecode = self._dmidecode or shutil.which("dmidecode") or _sbin("dmidecode")
        if not dmidecode:
            self.notice("DIMM details unavailable: dmidecode is not installed")
            return None

        if not is_privileged():
            self.notice(PRIVILEGE_NOTICE)
            return None

        try:
            result = subprocess.run(
                [dmidecode, "-t", "17"],
                capture_output=True,
                text=True,
                timeout=10,
            )
        except (OSError, subprocess.SubprocessError) as e:
            self.notice(f"DIMM details unavailable: {e}")
            return None

        if result.returncode != 0:
            if "permission denied" in result.stderr.lower():
                self.notice(PRIVILEGE_NOTICE)
            else:
                self.notice(f"DIMM details unavailable: dmidecode exited with {result.returncode}")
            logger.debug(f"dmidecode stderr: {result.stderr.strip()}")
            return None

        return parse_dmidecode_memory(result.stdout)


def is_privileged() -> bool:
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


def _sbin(name: str) -> Optional[str]:
    # sbin is often missing from unprivileged PATHs
    for directory in ("/usr/sbin", "/sbin"):
        candidate = os.path.join(directory, name)
        if os.access(candidate, os.X_OK):
            return candidate
    return None


def parse_dmidecode_memory(output: str) -> List[RamStick]:
    """Parse `dmidecode -t 17` output into populated modules."""
    sticks = []
    for block in _memory_device_blocks(output):
        size = clean_placeholder(block.get("Size"))
        if size is None or size.lower().startswith("no module"):
            continue

        manufacturer = clean_placeholder(block.get("Manufacturer"))
        speed = (
            block.get("Configured Memory Speed")
            or block.get("Configured Clock Speed")
            or block.get("Speed")
        )

        sticks.append(
            RamStick(
                locator=clean_placeholder(block.get("Locator")),
                size=size,
                manufacturer=map_ram_manufacturer(manufacturer) if manufacturer else None,
                part_number=clean_placeholder(block.get("Part Number")),
                serial_number=clean_placeholder(block.get("Serial Number")),
                speed_mts=_parse_speed(speed),
                memory_type=clean_placeholder(block.get("Type")),
            )
        )
    return sticks


def _memory_device_blocks(output: str) -> List[Dict[str, str]]:
    blocks = []
    current = None
    for line in output.splitlines():
        if line.strip() == "Memory Device":
            current = {}
            blocks.append(current)
            continue
        if not line.strip() or line.startswith("Handle "):
            current = None
            continue
        # Only single-tab attributes; deeper lines are list items
        if current is None or not line.startswith("\t") or line.startswith("\t\t"):
            continue
        key, sep, value = line.strip().partition(":")
        if sep:
            current[key.strip()] = value.strip()
    return blocks


def _parse_speed(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    match = re.match(r"\s*(\d+)", value)
    if not match:
        return None
    speed = int(match.group(1))
    return speed or None


def map_ram_manufacturer(raw: str) -> str:
    """Translate JEDEC id strings such as `80AD000080AD` to vendor names."""
    upper = raw.upper()
    for codes, name in JEDEC_MANUFACTURERS:
        if any(code in upper for code in codes):
            return name
    return raw
