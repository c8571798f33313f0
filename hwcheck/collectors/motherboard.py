"""Motherboard, system and BIOS identification from /sys/class/dmi/id."""

import logging
from pathlib import Path

from ..core.errors import PlatformUnsupported
from ..core.models import Domain, MotherboardInfo
from .base import Collector
from .sysfs import SYSFS_ROOT, clean_placeholder, read_restricted, read_value


logger = logging.getLogger(__name__)

DMI_FIELDS = {
    "vendor": "board_vendor",
    "product": "board_name",
    "version": "board_version",
    "system_vendor": "sys_vendor",
    "system_product": "product_name",
    "bios_vendor": "bios_vendor",
    "bios_version": "bios_version",
    "bios_date": "bios_date",
}


class MotherboardCollector(Collector):
    domain = Domain.MOTHERBOARD

    def __init__(self, sysfs_root: Path = SYSFS_ROOT):
        super().__init__()
        self.sysfs_root = Path(sysfs_root)

    def _collect(self) -> MotherboardInfo:
        dmi = self.sysfs_root / "class" / "dmi" / "id"
        if not dmi.is_dir():
            raise PlatformUnsupported("DMI information needs Linux sysfs")

        info = MotherboardInfo(
            **{attr: clean_placeholder(read_value(dmi / name)) for attr, name in DMI_FIELDS.items()}
        )

        try:
            info.serial_number = clean_placeholder(read_restricted(dmi / "board_serial"))
        except PermissionError:
            self.notice("board serial requires elevated privilege")

        return info
