"""
PCI collector.

Enumerates functions from /sys/bus/pci/devices and resolves vendor,
device and class names through pci.ids.
"""

import logging
from pathlib import Path
from typing import List, Optional

from ..core.errors import PlatformUnsupported
from ..core.models import Domain, PciDevice
from .base import Collector
from .ids import IdDatabase, pci_database
from .sysfs import SYSFS_ROOT, read_hex


logger = logging.getLogger(__name__)


class PciCollector(Collector):
    domain = Domain.PCI

    def __init__(self, sysfs_root: Path = SYSFS_ROOT, ids: Optional[IdDatabase] = None):
        super().__init__()
        self.sysfs_root = Path(sysfs_root)
        self.ids = ids or pci_database()

    def _collect(self) -> List[PciDevice]:
        devices_dir = self.sysfs_root / "bus" / "pci" / "devices"
        if not devices_dir.is_dir():
            raise PlatformUnsupported("PCI enumeration needs Linux sysfs")

        devices = []
        for entry in sorted(devices_dir.iterdir()):
            vendor_id = read_hex(entry / "vendor")
            device_id = read_hex(entry / "device")
            if vendor_id is None or device_id is None:
                logger.debug(f"Skipping {entry.name}: no vendor/device id")
                continue

            class_code = read_hex(entry / "class")
            class_name = None
            if class_code is not None:
                class_name = self.ids.class_name(class_code >> 16, (class_code >> 8) & 0xFF)

            devices.append(
                PciDevice(
                    slot=entry.name,
                    vendor_id=vendor_id,
                    device_id=device_id,
                    vendor_name=self.ids.vendor(vendor_id),
                    device_name=self.ids.device(vendor_id, device_id),
                    class_code=class_code,
                    class_name=class_name,
                    driver=_driver_name(entry),
                )
            )
        return devices


def _driver_name(entry: Path) -> Optional[str]:
    link = entry / "driver"
    try:
        return link.resolve(strict=True).name if link.exists() else None
    except OSError:
        return None
