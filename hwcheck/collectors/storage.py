"""
Storage collector.

Mounted filesystems and usage come from psutil. On Linux the disk
behind each partition is looked up in sysfs for vendor, model, serial
and rotational type.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional

import psutil

from ..core.errors import CollectorFailure
from ..core.models import Domain, StorageInfo
from .base import Collector
from .sysfs import SYSFS_ROOT, clean_placeholder, read_value


logger = logging.getLogger(__name__)

# Pseudo filesystems psutil still lists for physical devices
SKIPPED_FILESYSTEMS = {"squashfs", "iso9660", "udf"}

INTERFACES = [
    ("nvme", "NVMe"),
    ("sd", "SATA/SAS"),
    ("hd", "IDE"),
    ("vd", "Virtio"),
    ("xvd", "Xen"),
    ("mmcblk", "MMC"),
]


class StorageCollector(Collector):
    """Collects usage for all mounted filesystems."""

    domain = Domain.STORAGE

    def __init__(self, sysfs_root: Path = SYSFS_ROOT):
        super().__init__()
        self.sysfs_root = Path(sysfs_root)

    def _collect(self) -> List[StorageInfo]:
        try:
            partitions = psutil.disk_partitions(all=False)
        except (psutil.Error, OSError) as e:
            raise CollectorFailure(f"cannot list partitions: {e}") from e

        disks = []
        for partition in partitions:
            if partition.fstype in SKIPPED_FILESYSTEMS:
                continue
            try:
                usage = psutil.disk_usage(partition.mountpoint)
            except (PermissionError, OSError) as e:
                logger.debug(f"Could not access {partition.mountpoint}: {e}")
                continue

            name = Path(partition.device).name or partition.device
            disk = StorageInfo(
                name=name,
                device=partition.device,
                mount_point=partition.mountpoint,
                filesystem=partition.fstype,
                total=usage.total,
                used=usage.used,
                free=usage.free,
                usage_percent=usage.percent,
                removable="removable" in (partition.opts or "").lower(),
            )
            self._add_disk_metadata(disk)
            disks.append(disk)

        return disks

    def _add_disk_metadata(self, disk: StorageInfo):
        """Fill vendor/model/serial/type from /sys/block for the parent disk."""
        parent = parent_disk(disk.name)
        disk.interface = disk_interface(parent)

        block = self.sysfs_root / "block" / parent
        if not block.is_dir():
            return

        device = block / "device"
        disk.vendor = clean_placeholder(read_value(device / "vendor"))
        disk.model = clean_placeholder(read_value(device / "model"))
        disk.serial_number = clean_placeholder(read_value(device / "serial"))

        if read_value(block / "removable") == "1":
            disk.removable = True

        if parent.startswith("nvme"):
            disk.disk_type = "SSD"
        else:
            rotational = read_value(block / "queue" / "rotational")
            if rotational == "0":
                disk.disk_type = "SSD"
            elif rotational == "1":
                disk.disk_type = "HDD"


def parent_disk(name: str) -> str:
    """Map a partition name to its disk: sda1 -> sda, nvme0n1p2 -> nvme0n1."""
    if name.startswith(("nvme", "mmcblk")):
        return re.sub(r"p\d+$", "", name)
    if name.startswith(("sd", "hd", "vd", "xvd")):
        return name.rstrip("0123456789")
    return name


def disk_interface(disk: str) -> Optional[str]:
    for prefix, interface in INTERFACES:
        if disk.startswith(prefix):
            return interface
    return None
