"""
Aggregator - runs the selected collectors and assembles a Report.

Every selected domain is attempted exactly once, in report order. A
failing collector yields an annotated empty section instead of
aborting the report. Thresholds are applied afterwards so renderers
only read severity tags.
"""

import logging
from typing import Dict, Iterable, Optional

from ..collectors import Collector, default_collectors
from .config import Thresholds, ThresholdSet
from .errors import CollectError
from .models import Domain, Report, Section, SectionStatus


logger = logging.getLogger(__name__)


class Aggregator:
    """Builds reports from a fixed set of collectors and thresholds."""

    def __init__(
        self,
        thresholds: Optional[ThresholdSet] = None,
        collectors: Optional[Dict[Domain, Collector]] = None,
    ):
        self.thresholds = thresholds or ThresholdSet()
        self.collectors = collectors if collectors is not None else default_collectors()

    def build_report(self, domains: Iterable[Domain]) -> Report:
        """Collect the given domains and return a tagged report."""
        report = Report()
        for domain in Domain.ordered(domains):
            report.sections[domain] = self._collect(domain)
        apply_thresholds(report, self.thresholds)
        return report

    def _collect(self, domain: Domain) -> Section:
        collector = self.collectors.get(domain)
        if collector is None:
            logger.error(f"No collector registered for {domain.value}")
            return Section(domain, SectionStatus.ERROR, "no collector available")

        logger.debug(f"Collecting {domain.value}")
        try:
            data = collector.collect()
        except CollectError as e:
            logger.info(f"{domain.value}: {e.message}")
            return Section(
                domain,
                status=SectionStatus(e.status),
                message=e.message,
                notices=list(collector.notices),
            )
        except Exception as e:
            logger.error(f"{domain.value} collector failed: {e}", exc_info=logger.isEnabledFor(logging.DEBUG))
            return Section(
                domain,
                status=SectionStatus.ERROR,
                message=str(e) or type(e).__name__,
                notices=list(collector.notices),
            )

        return Section(domain, data=data, notices=list(collector.notices))


def apply_thresholds(report: Report, thresholds: ThresholdSet):
    """Tag thresholded numeric fields of every populated section."""
    cpu = _data(report, Domain.CPU)
    if cpu is not None:
        _tag(cpu, "usage_percent", thresholds.cpu)
        _tag(cpu, "temperature_celsius", thresholds.temperature)
        for core in cpu.per_core:
            _tag(core, "usage_percent", thresholds.cpu)

    ram = _data(report, Domain.RAM)
    if ram is not None:
        _tag(ram, "usage_percent", thresholds.ram)
        if ram.swap_total:
            _tag(ram, "swap_usage_percent", thresholds.swap)

    for disk in _data(report, Domain.STORAGE) or []:
        _tag(disk, "usage_percent", thresholds.storage)


def _data(report: Report, domain: Domain):
    section = report.get(domain)
    if section is None or not section.ok:
        return None
    return section.data


def _tag(record, name: str, limits: Thresholds):
    severity = limits.classify(getattr(record, name))
    if severity is not None:
        record.severity[name] = severity
