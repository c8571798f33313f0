"""JSON and YAML serialization of reports."""

import json

import yaml

from ..core.models import Report


def to_json(report: Report) -> str:
    """Serialize a report as indented JSON, keys in report order."""
    return json.dumps(report.to_dict(), indent=2, ensure_ascii=False) + "\n"


def to_yaml(report: Report) -> str:
    """Serialize a report as block-style YAML, keys in report order."""
    return yaml.safe_dump(
        report.to_dict(),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
