"""Shared fixtures for hwcheck tests."""

import pytest

from hwcheck.collectors.base import Collector
from hwcheck.core.models import (
    CpuCore,
    CpuInfo,
    Domain,
    MotherboardInfo,
    RamInfo,
    StorageInfo,
    SystemSummary,
)


class FakeCollector(Collector):
    """Returns canned data (or raises) and counts its invocations."""

    def __init__(self, domain, data=None, error=None, notices=()):
        super().__init__()
        self.domain = domain
        self.data = data
        self.error = error
        self.canned_notices = list(notices)
        self.calls = 0

    def _collect(self):
        self.calls += 1
        for message in self.canned_notices:
            self.notice(message)
        if self.error is not None:
            raise self.error
        return self.data


def make_cpu(usage=12.5, cores=(10.0, 15.0)):
    return CpuInfo(
        model="Test CPU 3000",
        vendor_id="GenuineIntel",
        brand="Intel",
        physical_cores=len(cores),
        logical_cores=len(cores),
        frequency_mhz=2400.0,
        usage_percent=usage,
        temperature_celsius=45.0,
        per_core=[CpuCore(index=i, usage_percent=u, frequency_mhz=2400.0) for i, u in enumerate(cores)],
    )


def make_ram(usage=40.0):
    return RamInfo(
        total=16 * 1024 ** 3,
        used=int(16 * 1024 ** 3 * usage / 100),
        free=8 * 1024 ** 3,
        available=9 * 1024 ** 3,
        usage_percent=usage,
        swap_total=2 * 1024 ** 3,
        swap_used=0,
        swap_free=2 * 1024 ** 3,
        swap_usage_percent=0.0,
        sticks=[],
    )


def make_disk(usage=50.0, name="sda1"):
    return StorageInfo(
        name=name,
        device=f"/dev/{name}",
        mount_point="/",
        filesystem="ext4",
        total=100 * 1024 ** 3,
        used=int(100 * 1024 ** 3 * usage / 100),
        free=int(100 * 1024 ** 3 * (100 - usage) / 100),
        usage_percent=usage,
    )


@pytest.fixture
def fake_collectors():
    """One fake collector per domain with plausible data."""
    data = {
        Domain.SYSTEM: SystemSummary(hostname="testbox", os_name="Linux", uptime_seconds=3 * 3600 + 5 * 60),
        Domain.CPU: make_cpu(),
        Domain.RAM: make_ram(),
        Domain.STORAGE: [make_disk()],
        Domain.NETWORK: [],
        Domain.USB: [],
        Domain.PCI: [],
        Domain.MOTHERBOARD: MotherboardInfo(vendor="ACME", product="B450", bios_version="1.2"),
        Domain.BATTERY: [],
    }
    return {domain: FakeCollector(domain, data=data.get(domain)) for domain in Domain}


@pytest.fixture
def sysfs(tmp_path):
    """Build a fake sysfs tree: sysfs({"bus/usb/devices/1-1/idVendor": "1d6b"})."""

    def build(files):
        for relative, content in files.items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content + "\n")
        return tmp_path

    return build


@pytest.fixture
def write_config(tmp_path):
    def write(text: str) -> str:
        path = tmp_path / "hwcheck.yaml"
        path.write_text(text)
        return str(path)

    return write


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    monkeypatch.delenv("HWCHECK_CONFIG", raising=False)
    monkeypatch.delenv("HWCHECK_LOG_LEVEL", raising=False)
    monkeypatch.setattr("hwcheck.core.config.get_default_config_path", lambda: None)
