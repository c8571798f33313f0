"""Continuously refreshed table view."""

import logging
import time
from typing import Iterable

from rich.console import Console, Group
from rich.live import Live
from rich.text import Text

from ..core.aggregator import Aggregator
from ..core.models import Domain
from .table import build_view


logger = logging.getLogger(__name__)


def watch(aggregator: Aggregator, domains: Iterable[Domain], console: Console, interval: float = 1.0):
    """Redraw the report every `interval` seconds until interrupted."""
    domains = list(domains)
    footer = Text(f"Refreshing every {interval:g}s - press Ctrl+C to quit", style="dim")

    report = aggregator.build_report(domains)
    with Live(console=console, auto_refresh=False, screen=False) as live:
        while True:
            live.update(_with_footer(build_view(report), footer), refresh=True)
            time.sleep(interval)
            report = aggregator.build_report(domains)
            logger.debug(f"Refreshed report at {report.generated_at}")


def _with_footer(view, footer) -> Group:
    return Group(view, Text(""), footer)
