"""
CPU collector.

Usage, frequency, load and temperature come from psutil; brand,
vendor and cache sizes from py-cpuinfo.
"""

import logging
import platform
import subprocess
from typing import List, Optional

import cpuinfo
import psutil

from ..core.errors import CollectorFailure
from ..core.models import CpuCore, CpuInfo, Domain
from .base import Collector


logger = logging.getLogger(__name__)

VENDOR_BRANDS = {
    "GenuineIntel": "Intel",
    "AuthenticAMD": "AMD",
    "HygonGenuine": "Hygon",
    "CentaurHauls": "Centaur",
    "  Shanghai  ": "Zhaoxin",
    "VIA VIA VIA ": "VIA",
}

TEMPERATURE_SENSORS = ["coretemp", "k10temp", "zenpower", "cpu_thermal", "cpu-thermal"]


class CpuCollector(Collector):
    """Collects CPU identification and a short usage sample."""

    domain = Domain.CPU

    def __init__(self, interval: float = 0.1):
        super().__init__()
        self.interval = interval

    def _collect(self) -> CpuInfo:
        try:
            usage = psutil.cpu_percent(interval=self.interval, percpu=True)
        except (psutil.Error, OSError) as e:
            raise CollectorFailure(f"cannot sample CPU usage: {e}") from e

        frequencies = self._get_core_frequencies()
        cores = [
            CpuCore(
                index=i,
                usage_percent=percent,
                frequency_mhz=frequencies[i] if i < len(frequencies) else None,
            )
            for i, percent in enumerate(usage)
        ]

        try:
            freq = psutil.cpu_freq()
        except (psutil.Error, OSError, NotImplementedError):
            freq = None

        info = self._get_cpuinfo()
        vendor_id = info.get("vendor_id_raw") or None

        return CpuInfo(
            model=info.get("brand_raw") or self._get_cpu_model(),
            vendor_id=vendor_id,
            brand=VENDOR_BRANDS.get(vendor_id, vendor_id),
            architecture=platform.machine() or None,
            physical_cores=psutil.cpu_count(logical=False),
            logical_cores=psutil.cpu_count(logical=True),
            frequency_mhz=freq.current if freq and freq.current else None,
            frequency_max_mhz=freq.max if freq and freq.max else None,
            usage_percent=sum(usage) / len(usage) if usage else 0.0,
            temperature_celsius=self._get_cpu_temperature(),
            load_average=self._get_load_average(),
            l1_cache=format_cache(info.get("l1_data_cache_size")),
            l2_cache=format_cache(info.get("l2_cache_size")),
            l3_cache=format_cache(info.get("l3_cache_size")),
            per_core=cores,
        )

    def _get_cpuinfo(self) -> dict:
        try:
            return cpuinfo.get_cpu_info()
        except Exception as e:
            # py-cpuinfo probes several backends and can fail in any of them
            logger.debug(f"py-cpuinfo failed: {e}")
            self.notice("cache details unavailable")
            return {}

    def _get_core_frequencies(self) -> List[Optional[float]]:
        try:
            per_core = psutil.cpu_freq(percpu=True) or []
        except (psutil.Error, OSError, NotImplementedError):
            return []
        return [f.current or None for f in per_core]

    def _get_load_average(self):
        try:
            return tuple(round(v, 2) for v in psutil.getloadavg())
        except (AttributeError, OSError):
            return None

    def _get_cpu_temperature(self) -> Optional[float]:
        """Attempt to get CPU temperature."""
        try:
            temps = psutil.sensors_temperatures()
        except (AttributeError, OSError):
            # Not exposed on Windows or macOS
            return None
        if not temps:
            return None

        for name in TEMPERATURE_SENSORS:
            readings = temps.get(name)
            if readings:
                return readings[0].current
        for readings in temps.values():
            if readings:
                return readings[0].current
        return None

    def _get_cpu_model(self) -> Optional[str]:
        """Fallback model lookup when py-cpuinfo has no brand string."""
        system = platform.system()
        try:
            if system == "Linux":
                with open("/proc/cpuinfo", "r") as f:
                    for line in f:
                        if line.startswith("model name"):
                            return line.split(":", 1)[1].strip()
            elif system == "Darwin":
                result = subprocess.run(
                    ["sysctl", "-n", "machdep.cpu.brand_string"],
                    capture_output=True,
                    text=True,
                    timeout=5,
                )
                if result.stdout.strip():
                    return result.stdout.strip()
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"CPU model lookup failed: {e}")
        return platform.processor() or None


def format_cache(value) -> Optional[str]:
    """Format a py-cpuinfo cache size (bytes, or a preformatted string)."""
    if value is None or value == 0:
        return None
    if isinstance(value, int):
        if value >= 1024 * 1024 and value % (1024 * 1024) == 0:
            return f"{value // (1024 * 1024)} MB"
        return f"{value // 1024} KB"
    return str(value)
