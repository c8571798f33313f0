"""
USB collector.

Enumerates devices from /sys/bus/usb/devices. Descriptor strings are
read as exposed by the kernel; missing names fall back to usb.ids.
"""

import logging
from pathlib import Path
from typing import List, Optional

from ..core.errors import PlatformUnsupported
from ..core.models import Domain, UsbDevice
from .base import Collector
from .ids import IdDatabase, usb_database
from .sysfs import SYSFS_ROOT, read_hex, read_value


logger = logging.getLogger(__name__)


class UsbCollector(Collector):
    domain = Domain.USB

    def __init__(self, sysfs_root: Path = SYSFS_ROOT, ids: Optional[IdDatabase] = None):
        super().__init__()
        self.sysfs_root = Path(sysfs_root)
        self.ids = ids or usb_database()

    def _collect(self) -> List[UsbDevice]:
        devices_dir = self.sysfs_root / "bus" / "usb" / "devices"
        if not devices_dir.is_dir():
            raise PlatformUnsupported("USB enumeration needs Linux sysfs")

        devices = []
        for entry in devices_dir.iterdir():
            device = self._read_device(entry)
            if device is not None:
                devices.append(device)

        devices.sort(key=lambda d: (d.bus, d.address))
        return devices

    def _read_device(self, entry: Path) -> Optional[UsbDevice]:
        # Interface nodes (1-1:1.0) have no idVendor
        vendor_id = read_hex(entry / "idVendor")
        product_id = read_hex(entry / "idProduct")
        if vendor_id is None or product_id is None:
            return None

        try:
            bus = int(read_value(entry / "busnum") or 0)
            address = int(read_value(entry / "devnum") or 0)
        except ValueError:
            logger.debug(f"Skipping {entry.name}: bad bus/device number")
            return None

        speed = read_value(entry / "speed")
        try:
            speed_mbps = float(speed) if speed else None
        except ValueError:
            speed_mbps = None

        device_class = read_hex(entry / "bDeviceClass")
        return UsbDevice(
            bus=bus,
            address=address,
            vendor_id=vendor_id,
            product_id=product_id,
            manufacturer=read_value(entry / "manufacturer") or self.ids.vendor(vendor_id),
            product=read_value(entry / "product") or self.ids.device(vendor_id, product_id),
            speed_mbps=speed_mbps,
            # Class 0 means "defined per interface"
            device_class=self.ids.class_name(device_class) if device_class else None,
        )
