"""JSON formatter for Circuit Insight."""

import json
from dataclasses import asdict
from typing import Any

from ..insights import InsightReport
from ..models import ComplexityReport
from .base import BaseFormatter


def _dumps(data: Any) -> str:
    # datetimes are the only non-JSON values in the report models
    return json.dumps(data, indent=2, default=lambda value: value.isoformat())


class JsonFormatter(BaseFormatter):
    """Render reports as JSON."""

    def render_report(self, report: ComplexityReport) -> None:
        print(self.format_report(report))

    def render_insights(self, insights: InsightReport) -> None:
        print(self.format_insights(insights))

    def format_report(self, report: ComplexityReport) -> str:
        data = asdict(report)
        data["total_cost"] = report.total_cost
        return _dumps(data)

    def format_insights(self, insights: InsightReport) -> str:
        return _dumps(asdict(insights))
