"""Report renderers: terminal table, JSON and YAML."""

from typing import TextIO

from rich.console import Console

from ..core.models import Report
from .serialize import to_json, to_yaml
from .table import build_view, render_table

FORMATS = ["table", "json", "yaml"]


def make_console(stream: TextIO, color: bool = True) -> Console:
    return Console(file=stream, no_color=not color, highlight=False, markup=False, emoji=False)


def render(report: Report, fmt: str, stream: TextIO, color: bool = True):
    """Write the report to the stream in the given format."""
    if fmt == "json":
        stream.write(to_json(report))
    elif fmt == "yaml":
        stream.write(to_yaml(report))
    elif fmt == "table":
        render_table(report, make_console(stream, color))
    else:
        raise ValueError(f"Unknown output format: {fmt}")
    stream.flush()


__all__ = ["FORMATS", "build_view", "make_console", "render", "render_table", "to_json", "to_yaml"]
