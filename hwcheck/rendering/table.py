"""
Terminal table rendering with rich.

One table per report section. Severity-tagged values are colored
green, yellow or red; sections that could not be collected show their
reason instead of a table.
"""

from typing import Callable, Dict, List, Optional

from rich import box
from rich.console import Console, Group, RenderableType
from rich.table import Table
from rich.text import Text

from ..core.models import (
    BatteryInfo,
    CpuInfo,
    Domain,
    MotherboardInfo,
    NetworkInfo,
    PciDevice,
    RamInfo,
    Report,
    Section,
    Severity,
    StorageInfo,
    SystemSummary,
    UsbDevice,
)

TITLES = {
    Domain.SYSTEM: "System Summary",
    Domain.CPU: "CPU Information",
    Domain.RAM: "RAM Information",
    Domain.STORAGE: "Storage Information",
    Domain.NETWORK: "Network Interfaces",
    Domain.USB: "USB Devices",
    Domain.PCI: "PCI Devices",
    Domain.MOTHERBOARD: "Motherboard & BIOS",
    Domain.BATTERY: "Battery",
}

SEVERITY_STYLES = {
    Severity.NORMAL: "green",
    Severity.WARNING: "yellow",
    Severity.CRITICAL: "red",
}

MISSING = "-"
MIB = 1024 ** 2
GIB = 1024 ** 3


def render_table(report: Report, console: Console):
    """Print every section of the report to the console."""
    console.print(build_view(report))


def build_view(report: Report) -> Group:
    """Build the renderable for a whole report."""
    parts: List[RenderableType] = []
    for domain in report.domains:
        parts.extend(render_section(report.sections[domain]))
    return Group(*parts)


def render_section(section: Section) -> List[RenderableType]:
    parts: List[RenderableType] = [Text(""), Text(TITLES[section.domain], style="bold cyan")]

    if not section.ok:
        parts.append(Text(f"Unavailable: {section.message}", style="yellow"))
    elif section.data is None:
        parts.extend(empty("No data"))
    else:
        parts.extend(SECTION_RENDERERS[section.domain](section.data))

    for notice in section.notices:
        parts.append(Text(f"note: {notice}", style="dim"))
    return parts


def new_table(*headers: str) -> Table:
    table = Table(box=box.ROUNDED, show_lines=False, header_style="bold")
    for header in headers:
        table.add_column(header)
    return table


def key_value_table(rows) -> Table:
    table = new_table("Property", "Value")
    for key, value in rows:
        table.add_row(key, show(value))
    return table


def show(value) -> str:
    if value is None or value == "":
        return MISSING
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def metric(value: Optional[float], severity: Optional[Severity], fmt: str = "{:.1f}") -> Text:
    """A numeric cell colored by its severity tag."""
    if value is None:
        return Text(MISSING)
    return Text(fmt.format(value), style=SEVERITY_STYLES.get(severity, ""))


def mib(value: Optional[int]) -> str:
    return MISSING if value is None else str(value // MIB)


def gib(value: Optional[int]) -> str:
    return MISSING if value is None else f"{value / GIB:.1f}"


def format_uptime(seconds: Optional[int]) -> str:
    if seconds is None:
        return MISSING
    days = seconds // (24 * 3600)
    hours = (seconds % (24 * 3600)) // 3600
    minutes = (seconds % 3600) // 60

    if days > 0:
        return f"{days}d {hours}h {minutes}m"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_duration(seconds: Optional[int]) -> str:
    if seconds is None:
        return MISSING
    return f"{seconds // 3600}h {(seconds % 3600) // 60:02d}m"


def empty(message: str) -> List[RenderableType]:
    return [Text(message, style="dim")]


def render_system(summary: SystemSummary) -> List[RenderableType]:
    table = new_table("Hostname", "OS", "Kernel", "Arch", "Uptime")
    os_label = " ".join(p for p in (summary.os_name, summary.os_version) if p)
    table.add_row(
        Text(summary.hostname, style="magenta"),
        show(os_label),
        show(summary.kernel_version),
        show(summary.architecture),
        format_uptime(summary.uptime_seconds),
    )
    return [table]


def render_cpu(cpu: CpuInfo) -> List[RenderableType]:
    overview = new_table("Property", "Value")
    overview.add_row("Model", show(cpu.model))
    overview.add_row("Vendor", show(cpu.brand or cpu.vendor_id))
    overview.add_row("Architecture", show(cpu.architecture))
    overview.add_row("Cores / Threads", f"{show(cpu.physical_cores)} / {show(cpu.logical_cores)}")
    overview.add_row(
        "Frequency (MHz)",
        f"{show(_round(cpu.frequency_mhz))} (max {show(_round(cpu.frequency_max_mhz))})",
    )
    overview.add_row("Usage (%)", metric(cpu.usage_percent, cpu.severity.get("usage_percent")))
    overview.add_row(
        "Temperature (°C)",
        metric(cpu.temperature_celsius, cpu.severity.get("temperature_celsius")),
    )
    if cpu.load_average:
        overview.add_row("Load Average", " / ".join(f"{v:.2f}" for v in cpu.load_average))
    overview.add_row(
        "Cache L1 / L2 / L3",
        " / ".join(show(c) for c in (cpu.l1_cache, cpu.l2_cache, cpu.l3_cache)),
    )

    parts: List[RenderableType] = [overview]
    if cpu.per_core:
        cores = new_table("Core", "Frequency (MHz)", "Usage (%)")
        for core in cpu.per_core:
            cores.add_row(
                str(core.index),
                show(_round(core.frequency_mhz)),
                metric(core.usage_percent, core.severity.get("usage_percent")),
            )
        parts.append(cores)
    return parts


def render_ram(ram: RamInfo) -> List[RenderableType]:
    table = new_table("Type", "Total (MiB)", "Used (MiB)", "Free (MiB)", "Usage (%)")
    table.add_row(
        "Main Memory",
        mib(ram.total),
        mib(ram.used),
        mib(ram.free),
        metric(ram.usage_percent, ram.severity.get("usage_percent")),
    )
    table.add_row(
        "Swap",
        mib(ram.swap_total),
        mib(ram.swap_used),
        mib(ram.swap_free),
        metric(ram.swap_usage_percent, ram.severity.get("swap_usage_percent")),
    )

    parts: List[RenderableType] = [table]
    if ram.sticks:
        sticks = new_table("Slot", "Size", "Type", "Manufacturer", "Part Number", "Serial", "Speed (MT/s)")
        for stick in ram.sticks:
            sticks.add_row(
                show(stick.locator),
                show(stick.size),
                show(stick.memory_type),
                show(stick.manufacturer),
                show(stick.part_number),
                show(stick.serial_number),
                show(stick.speed_mts),
            )
        parts.append(sticks)
    return parts


def render_storage(disks: List[StorageInfo]) -> List[RenderableType]:
    if not disks:
        return empty("No mounted filesystems found")

    table = new_table("Name", "Mount", "FS", "Type", "Model", "Total (GiB)", "Used (GiB)", "Usage (%)")
    for disk in disks:
        model = " ".join(p for p in (disk.vendor, disk.model) if p)
        table.add_row(
            disk.name,
            disk.mount_point,
            show(disk.filesystem),
            show(" ".join(p for p in (disk.interface, disk.disk_type) if p)),
            show(model),
            gib(disk.total),
            gib(disk.used),
            metric(disk.usage_percent, disk.severity.get("usage_percent")),
        )
    return [table]


def render_network(interfaces: List[NetworkInfo]) -> List[RenderableType]:
    if not interfaces:
        return empty("No network interfaces found")

    table = new_table("Interface", "MAC", "IPv4", "State", "Speed (Mbps)", "MTU", "Received (MiB)", "Transmitted (MiB)")
    for net in interfaces:
        table.add_row(
            net.name,
            show(net.mac_address),
            show(net.ipv4_address),
            Text("up", style="green") if net.is_up else Text("down", style="dim"),
            show(net.speed_mbps),
            show(net.mtu),
            f"{net.received / MIB:.2f}",
            f"{net.transmitted / MIB:.2f}",
        )
    return [table]


def render_usb(devices: List[UsbDevice]) -> List[RenderableType]:
    if not devices:
        return empty("No USB devices found")

    table = new_table("Bus", "Device", "ID", "Manufacturer", "Product", "Class", "Speed (Mbps)")
    for dev in devices:
        table.add_row(
            f"{dev.bus:03d}",
            f"{dev.address:03d}",
            f"{dev.vendor_id:04x}:{dev.product_id:04x}",
            show(dev.manufacturer),
            show(dev.product),
            show(dev.device_class),
            show(_round(dev.speed_mbps)),
        )
    return [table]


def render_pci(devices: List[PciDevice]) -> List[RenderableType]:
    if not devices:
        return empty("No PCI devices found")

    table = new_table("Slot", "Class", "Vendor", "Device", "Driver")
    for dev in devices:
        table.add_row(
            dev.slot,
            show(dev.class_name),
            dev.vendor_name or f"[{dev.vendor_id:04x}]",
            dev.device_name or f"[{dev.device_id:04x}]",
            show(dev.driver),
        )
    return [table]


def render_motherboard(board: MotherboardInfo) -> List[RenderableType]:
    return [
        key_value_table(
            [
                ("Board Vendor", board.vendor),
                ("Board Product", board.product),
                ("Board Version", board.version),
                ("Board Serial", board.serial_number),
                ("System Vendor", board.system_vendor),
                ("System Product", board.system_product),
                ("BIOS Vendor", board.bios_vendor),
                ("BIOS Version", board.bios_version),
                ("BIOS Date", board.bios_date),
            ]
        )
    ]


def render_battery(batteries: List[BatteryInfo]) -> List[RenderableType]:
    if not batteries:
        return empty("No battery detected")

    table = new_table("Name", "Status", "Capacity (%)", "Plugged In", "Time Left")
    for battery in batteries:
        table.add_row(
            battery.name,
            show(battery.status),
            show(_round(battery.capacity_percent)),
            show(battery.plugged_in),
            format_duration(battery.seconds_left),
        )
    return [table]


def _round(value: Optional[float]) -> Optional[int]:
    return None if value is None else int(round(value))


SECTION_RENDERERS: Dict[Domain, Callable[..., List[RenderableType]]] = {
    Domain.SYSTEM: render_system,
    Domain.CPU: render_cpu,
    Domain.RAM: render_ram,
    Domain.STORAGE: render_storage,
    Domain.NETWORK: render_network,
    Domain.USB: render_usb,
    Domain.PCI: render_pci,
    Domain.MOTHERBOARD: render_motherboard,
    Domain.BATTERY: render_battery,
}
