"""
Battery collector.

Linux power_supply entries give per-battery status and capacity;
psutil adds charger state and time remaining, and is the only source
on other platforms.
"""

import logging
from pathlib import Path
from typing import List, Optional

import psutil

from ..core.models import BatteryInfo, Domain
from .base import Collector
from .sysfs import SYSFS_ROOT, read_value


logger = logging.getLogger(__name__)


class BatteryCollector(Collector):
    """Collects system batteries; an empty list means none are present."""

    domain = Domain.BATTERY

    def __init__(self, sysfs_root: Path = SYSFS_ROOT):
        super().__init__()
        self.sysfs_root = Path(sysfs_root)

    def _collect(self) -> List[BatteryInfo]:
        batteries = self._read_power_supply()
        sensor = self._sensors_battery()

        if sensor is None:
            return batteries

        plugged_in = sensor.power_plugged
        seconds_left = sensor.secsleft if sensor.secsleft > 0 else None

        if not batteries:
            # psutil cannot tell charging from idle on AC power
            status = None
            if plugged_in is False:
                status = "Discharging"
            elif plugged_in:
                status = "Full" if sensor.percent >= 100 else "Plugged in"
            return [
                BatteryInfo(
                    name="Battery",
                    status=status,
                    capacity_percent=round(sensor.percent, 1),
                    plugged_in=plugged_in,
                    seconds_left=seconds_left,
                )
            ]

        # psutil reports one combined battery; attach its charger state to each
        for battery in batteries:
            battery.plugged_in = plugged_in
            battery.seconds_left = seconds_left
        return batteries

    def _read_power_supply(self) -> List[BatteryInfo]:
        supply = self.sysfs_root / "class" / "power_supply"
        if not supply.is_dir():
            return []

        batteries = []
        for entry in sorted(supply.iterdir()):
            if read_value(entry / "type") != "Battery" and not entry.name.startswith("BAT"):
                continue
            # Peripheral batteries (mice, headsets) report scope Device
            if read_value(entry / "scope") == "Device":
                continue

            batteries.append(
                BatteryInfo(
                    name=entry.name,
                    status=read_value(entry / "status"),
                    capacity_percent=_to_float(read_value(entry / "capacity")),
                )
            )
        return batteries

    def _sensors_battery(self):
        try:
            return psutil.sensors_battery()
        except (AttributeError, psutil.Error, OSError) as e:
            logger.debug(f"psutil battery sensor unavailable: {e}")
            return None


def _to_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None
