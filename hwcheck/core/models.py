"""
Data models for hardware reports.

These dataclasses hold the normalized records produced by the
collectors. Fields a source could not provide are None rather than
placeholder values.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class Domain(Enum):
    """Report sections, declared in output order."""

    SYSTEM = "system"
    CPU = "cpu"
    RAM = "ram"
    STORAGE = "storage"
    NETWORK = "network"
    USB = "usb"
    PCI = "pci"
    MOTHERBOARD = "motherboard"
    BATTERY = "battery"

    @classmethod
    def ordered(cls, domains) -> List["Domain"]:
        """Return the given domains sorted in canonical report order."""
        wanted = set(domains)
        return [d for d in cls if d in wanted]


class Severity(Enum):
    """Classification of a metric against warning/critical limits."""

    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


class SectionStatus(Enum):
    OK = "ok"
    UNSUPPORTED = "unsupported"
    PRIVILEGE_REQUIRED = "privilege_required"
    ERROR = "error"


@dataclass
class SystemSummary:
    """Host identification and uptime."""

    hostname: str
    os_name: str
    os_version: Optional[str] = None
    kernel_version: Optional[str] = None
    architecture: Optional[str] = None
    uptime_seconds: Optional[int] = None


@dataclass
class CpuCore:
    """Per logical core reading."""

    index: int
    usage_percent: float
    frequency_mhz: Optional[float] = None
    severity: Dict[str, Severity] = field(default_factory=dict)


@dataclass
class CpuInfo:
    """CPU identification and current load."""

    model: Optional[str] = None
    vendor_id: Optional[str] = None
    brand: Optional[str] = None
    architecture: Optional[str] = None
    physical_cores: Optional[int] = None
    logical_cores: Optional[int] = None
    frequency_mhz: Optional[float] = None
    frequency_max_mhz: Optional[float] = None
    usage_percent: float = 0.0
    temperature_celsius: Optional[float] = None
    load_average: Optional[Tuple[float, float, float]] = None
    l1_cache: Optional[str] = None
    l2_cache: Optional[str] = None
    l3_cache: Optional[str] = None
    per_core: List[CpuCore] = field(default_factory=list)
    severity: Dict[str, Severity] = field(default_factory=dict)


@dataclass
class RamStick:
    """A populated memory module as reported by SMBIOS."""

    locator: Optional[str] = None
    size: Optional[str] = None
    manufacturer: Optional[str] = None
    part_number: Optional[str] = None
    serial_number: Optional[str] = None
    speed_mts: Optional[int] = None
    memory_type: Optional[str] = None


@dataclass
class RamInfo:
    """Memory/RAM and swap usage."""

    total: int
    used: int
    free: int
    available: Optional[int] = None
    usage_percent: float = 0.0
    swap_total: int = 0
    swap_used: int = 0
    swap_free: int = 0
    swap_usage_percent: float = 0.0
    # None when module detail could not be read at all
    sticks: Optional[List[RamStick]] = None
    severity: Dict[str, Severity] = field(default_factory=dict)


@dataclass
class StorageInfo:
    """A mounted filesystem and the disk behind it."""

    name: str
    device: str
    mount_point: str
    filesystem: str
    total: int
    used: int
    free: int
    usage_percent: float
    vendor: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    disk_type: Optional[str] = None
    interface: Optional[str] = None
    removable: bool = False
    severity: Dict[str, Severity] = field(default_factory=dict)


@dataclass
class NetworkInfo:
    """Network interface counters and addresses."""

    name: str
    mac_address: Optional[str] = None
    ipv4_address: Optional[str] = None
    ipv6_address: Optional[str] = None
    is_up: bool = False
    speed_mbps: Optional[int] = None
    mtu: Optional[int] = None
    received: int = 0
    transmitted: int = 0
    packets_received: int = 0
    packets_transmitted: int = 0
    errors_in: int = 0
    errors_out: int = 0


@dataclass
class UsbDevice:
    bus: int
    address: int
    vendor_id: int
    product_id: int
    manufacturer: Optional[str] = None
    product: Optional[str] = None
    speed_mbps: Optional[float] = None
    device_class: Optional[str] = None


@dataclass
class PciDevice:
    slot: str
    vendor_id: int
    device_id: int
    vendor_name: Optional[str] = None
    device_name: Optional[str] = None
    class_code: Optional[int] = None
    class_name: Optional[str] = None
    driver: Optional[str] = None


@dataclass
class MotherboardInfo:
    """Baseboard, system and BIOS identification from DMI."""

    vendor: Optional[str] = None
    product: Optional[str] = None
    version: Optional[str] = None
    serial_number: Optional[str] = None
    system_vendor: Optional[str] = None
    system_product: Optional[str] = None
    bios_vendor: Optional[str] = None
    bios_version: Optional[str] = None
    bios_date: Optional[str] = None


@dataclass
class BatteryInfo:
    name: str
    status: Optional[str] = None
    capacity_percent: Optional[float] = None
    plugged_in: Optional[bool] = None
    seconds_left: Optional[int] = None


@dataclass
class Section:
    """
    Outcome of one collector within a report.

    `data` is None when the collector failed; `status` and `message`
    then say why. `notices` list non-fatal gaps in otherwise good data.
    """

    domain: Domain
    status: SectionStatus = SectionStatus.OK
    message: Optional[str] = None
    notices: List[str] = field(default_factory=list)
    data: Any = None

    @property
    def ok(self) -> bool:
        return self.status is SectionStatus.OK

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "message": self.message,
            "notices": list(self.notices),
            "data": to_plain(self.data),
        }


@dataclass
class Report:
    """The full snapshot for one invocation, keyed by domain."""

    sections: Dict[Domain, Section] = field(default_factory=dict)
    generated_at: datetime = field(default_factory=datetime.now)

    def get(self, domain: Domain) -> Optional[Section]:
        return self.sections.get(domain)

    @property
    def domains(self) -> List[Domain]:
        return Domain.ordered(self.sections)

    def to_dict(self) -> dict:
        """Convert the report to plain data, sections in canonical order."""
        data = {"generated_at": self.generated_at.isoformat(timespec="seconds")}
        for domain in self.domains:
            data[domain.value] = self.sections[domain].to_dict()
        return data


def to_plain(value: Any) -> Any:
    """Recursively convert dataclasses and enums to JSON/YAML-safe values."""
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value
