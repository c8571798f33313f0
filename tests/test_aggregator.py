"""Tests for report aggregation and threshold tagging."""

import pytest

from conftest import FakeCollector, make_cpu, make_disk, make_ram
from hwcheck.core.aggregator import Aggregator
from hwcheck.core.config import Thresholds, ThresholdSet
from hwcheck.core.errors import CollectorFailure, PlatformUnsupported, PrivilegeRequired
from hwcheck.core.models import Domain, SectionStatus, Severity


@pytest.mark.parametrize(
    "selected",
    [
        [Domain.CPU],
        [Domain.RAM, Domain.STORAGE],
        [Domain.MOTHERBOARD, Domain.BATTERY],
        list(Domain),
        [],
    ],
)
def test_invokes_exactly_the_selected_collectors(fake_collectors, selected):
    report = Aggregator(ThresholdSet(), fake_collectors).build_report(selected)

    for domain, collector in fake_collectors.items():
        assert collector.calls == (1 if domain in selected else 0)
    assert set(report.sections) == set(selected)


def test_cpu_only_report(fake_collectors):
    report = Aggregator(ThresholdSet(), fake_collectors).build_report([Domain.CPU])

    assert report.domains == [Domain.CPU]
    assert report.get(Domain.CPU).data.model == "Test CPU 3000"
    assert report.get(Domain.RAM) is None
    assert list(report.to_dict()) == ["generated_at", "cpu"]


def test_sections_follow_canonical_order(fake_collectors):
    report = Aggregator(ThresholdSet(), fake_collectors).build_report(
        [Domain.BATTERY, Domain.CPU, Domain.SYSTEM]
    )
    assert report.domains == [Domain.SYSTEM, Domain.CPU, Domain.BATTERY]


@pytest.mark.parametrize(
    "error,status",
    [
        (PlatformUnsupported(), SectionStatus.UNSUPPORTED),
        (PrivilegeRequired(), SectionStatus.PRIVILEGE_REQUIRED),
        (CollectorFailure("library exploded"), SectionStatus.ERROR),
        (RuntimeError("bug"), SectionStatus.ERROR),
    ],
)
def test_failures_degrade_to_annotated_sections(fake_collectors, error, status):
    fake_collectors[Domain.RAM] = FakeCollector(Domain.RAM, error=error)
    report = Aggregator(ThresholdSet(), fake_collectors).build_report([Domain.CPU, Domain.RAM])

    ram = report.get(Domain.RAM)
    assert ram.status is status
    assert ram.data is None
    assert ram.message
    # The other section is unaffected
    assert report.get(Domain.CPU).ok


def test_privilege_message(fake_collectors):
    fake_collectors[Domain.RAM] = FakeCollector(Domain.RAM, error=PrivilegeRequired())
    report = Aggregator(ThresholdSet(), fake_collectors).build_report([Domain.RAM])
    assert report.get(Domain.RAM).message == "requires elevated privilege"


def test_notices_are_carried_into_sections(fake_collectors):
    fake_collectors[Domain.RAM] = FakeCollector(
        Domain.RAM, data=make_ram(), notices=["DIMM details require elevated privilege"]
    )
    report = Aggregator(ThresholdSet(), fake_collectors).build_report([Domain.RAM])

    section = report.get(Domain.RAM)
    assert section.ok
    assert section.notices == ["DIMM details require elevated privilege"]


def test_missing_collector_is_an_error_section():
    report = Aggregator(ThresholdSet(), {}).build_report([Domain.PCI])
    assert report.get(Domain.PCI).status is SectionStatus.ERROR


def test_thresholds_tag_numeric_fields():
    collectors = {
        Domain.CPU: FakeCollector(Domain.CPU, data=make_cpu(usage=97.0, cores=(50.0, 80.0))),
        Domain.RAM: FakeCollector(Domain.RAM, data=make_ram(usage=75.0)),
        Domain.STORAGE: FakeCollector(Domain.STORAGE, data=[make_disk(10.0), make_disk(99.0, "sdb1")]),
    }
    thresholds = ThresholdSet(cpu=Thresholds(60.0, 90.0))
    report = Aggregator(thresholds, collectors).build_report(list(collectors))

    cpu = report.get(Domain.CPU).data
    assert cpu.severity["usage_percent"] is Severity.CRITICAL
    assert cpu.severity["temperature_celsius"] is Severity.NORMAL
    assert [c.severity["usage_percent"] for c in cpu.per_core] == [Severity.NORMAL, Severity.WARNING]

    ram = report.get(Domain.RAM).data
    assert ram.severity["usage_percent"] is Severity.WARNING
    assert ram.severity["swap_usage_percent"] is Severity.NORMAL

    disks = report.get(Domain.STORAGE).data
    assert [d.severity["usage_percent"] for d in disks] == [Severity.NORMAL, Severity.CRITICAL]


def test_unknown_values_get_no_severity():
    cpu = make_cpu()
    cpu.temperature_celsius = None
    ram = make_ram()
    ram.swap_total = 0
    collectors = {
        Domain.CPU: FakeCollector(Domain.CPU, data=cpu),
        Domain.RAM: FakeCollector(Domain.RAM, data=ram),
    }
    report = Aggregator(ThresholdSet(), collectors).build_report(list(collectors))

    assert "temperature_celsius" not in report.get(Domain.CPU).data.severity
    assert "swap_usage_percent" not in report.get(Domain.RAM).data.severity
