"""Collectors module for gathering hardware information, one per domain."""

from typing import Dict

from ..core.models import Domain
from .base import Collector
from .battery import BatteryCollector
from .cpu import CpuCollector
from .memory import MemoryCollector
from .motherboard import MotherboardCollector
from .network import NetworkCollector
from .pci import PciCollector
from .storage import StorageCollector
from .system import SystemCollector
from .usb import UsbCollector

COLLECTORS = {
    Domain.SYSTEM: SystemCollector,
    Domain.CPU: CpuCollector,
    Domain.RAM: MemoryCollector,
    Domain.STORAGE: StorageCollector,
    Domain.NETWORK: NetworkCollector,
    Domain.USB: UsbCollector,
    Domain.PCI: PciCollector,
    Domain.MOTHERBOARD: MotherboardCollector,
    Domain.BATTERY: BatteryCollector,
}


def default_collectors() -> Dict[Domain, Collector]:
    """Instantiate one collector per domain. Construction does no I/O."""
    return {domain: cls() for domain, cls in COLLECTORS.items()}


__all__ = [
    "COLLECTORS",
    "Collector",
    "BatteryCollector",
    "CpuCollector",
    "MemoryCollector",
    "MotherboardCollector",
    "NetworkCollector",
    "PciCollector",
    "StorageCollector",
    "SystemCollector",
    "UsbCollector",
    "default_collectors",
]
