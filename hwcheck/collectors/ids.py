"""
Vendor, device and class name lookup from the pci.ids / usb.ids files
shipped by pciutils, usbutils and hwdata.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple


logger = logging.getLogger(__name__)

PCI_IDS_PATHS = [
    Path("/usr/share/misc/pci.ids"),
    Path("/usr/share/hwdata/pci.ids"),
    Path("/var/lib/pciutils/pci.ids"),
    Path("/usr/share/pci.ids"),
]

USB_IDS_PATHS = [
    Path("/usr/share/misc/usb.ids"),
    Path("/usr/share/hwdata/usb.ids"),
    Path("/var/lib/usbutils/usb.ids"),
    Path("/usr/share/usb.ids"),
]


class IdDatabase:
    """
    Lazily parsed ids database.

    Both files share the same layout: vendor lines at column zero,
    device lines indented by one tab, subsystem lines by two tabs, and
    a class section introduced by lines starting with `C `. Other
    sections (usb.ids has several) are skipped.
    """

    def __init__(self, candidates: Iterable[Path]):
        self._candidates = list(candidates)
        self._loaded = False
        self.path: Optional[Path] = None
        self.vendors: Dict[int, str] = {}
        self.devices: Dict[Tuple[int, int], str] = {}
        self.classes: Dict[int, str] = {}
        self.subclasses: Dict[Tuple[int, int], str] = {}

    def _load(self):
        if self._loaded:
            return
        self._loaded = True

        for path in self._candidates:
            try:
                with open(path, "r", encoding="utf-8", errors="replace") as f:
                    self.parse(f)
            except OSError:
                continue
            self.path = path
            logger.debug(f"Loaded {len(self.vendors)} vendors from {path}")
            return

        logger.debug("No ids database found; names will not be resolved")

    def parse(self, lines: Iterable[str]):
        """Parse ids file lines into the lookup tables."""
        section = None
        current = None

        for raw in lines:
            line = raw.rstrip("\n")
            if not line.strip() or line.startswith("#"):
                continue

            if line.startswith("\t\t"):
                continue

            if line.startswith("\t"):
                if current is None:
                    continue
                code, name = _split(line)
                if code is None:
                    continue
                if section == "vendor":
                    self.devices[(current, code)] = name
                elif section == "class":
                    self.subclasses[(current, code)] = name
                continue

            if line.startswith("C "):
                code, name = _split(line[2:])
                section, current = ("class", code) if code is not None else (None, None)
                if code is not None:
                    self.classes[code] = name
                continue

            token = line.split(None, 1)[0]
            code, name = _split(line) if len(token) == 4 else (None, None)
            if code is None:
                # An unrelated top-level section (usb.ids: AT, HID, L, ...)
                section, current = None, None
                continue
            section, current = "vendor", code
            self.vendors[code] = name

    def vendor(self, vendor_id: int) -> Optional[str]:
        self._load()
        return self.vendors.get(vendor_id)

    def device(self, vendor_id: int, device_id: int) -> Optional[str]:
        self._load()
        return self.devices.get((vendor_id, device_id))

    def class_name(self, class_id: int, subclass_id: Optional[int] = None) -> Optional[str]:
        """Most specific known name for a class/subclass pair."""
        self._load()
        if subclass_id is not None:
            name = self.subclasses.get((class_id, subclass_id))
            if name:
                return name
        return self.classes.get(class_id)


def _split(text: str) -> Tuple[Optional[int], Optional[str]]:
    parts = text.strip().split(None, 1)
    if len(parts) != 2:
        return None, None
    try:
        return int(parts[0], 16), parts[1].strip()
    except ValueError:
        return None, None


def pci_database() -> IdDatabase:
    return IdDatabase(PCI_IDS_PATHS)


def usb_database() -> IdDatabase:
    return IdDatabase(USB_IDS_PATHS)
