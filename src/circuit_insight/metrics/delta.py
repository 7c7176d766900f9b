"""Line-by-line comparison of two complexity reports."""

from __future__ import annotations

from datetime import datetime, timezone

from ..models import ComplexityReport, MetricsComparison, MetricsDelta, MetricType


def _metric_label(metric_type: MetricType) -> str:
    return metric_type if isinstance(metric_type, str) else metric_type.value


def compare_reports(
    current: ComplexityReport,
    previous: ComplexityReport,
    metric_type: MetricType = "acir",
) -> MetricsComparison:
    """Compute per-line and overall changes from ``previous`` to ``current``.

    Only lines present in both primary files are compared, and lines whose
    value did not change are omitted. A negative delta is an improvement.
    """
    current_file = current.primary_file
    previous_file = previous.primary_file
    current_lines = current_file.lines if current_file else []
    previous_by_line = {line.line_number: line for line in previous_file.lines} if previous_file else {}

    deltas: list[MetricsDelta] = []
    for line in current_lines:
        before = previous_by_line.get(line.line_number)
        if before is None:
            continue

        current_value = line.value_for(metric_type)
        previous_value = before.value_for(metric_type)
        delta = current_value - previous_value
        if delta == 0:
            continue

        deltas.append(
            MetricsDelta(
                line_number=line.line_number,
                previous_value=previous_value,
                current_value=current_value,
                delta=delta,
                delta_percent=(delta / previous_value) * 100 if previous_value > 0 else 0.0,
                is_improvement=delta < 0,
                is_regression=delta > 0,
            )
        )

    current_total = current.total_for(metric_type)
    previous_total = previous.total_for(metric_type)
    overall_change = current_total - previous_total

    return MetricsComparison(
        deltas=deltas,
        overall_change=overall_change,
        overall_change_percent=(overall_change / previous_total) * 100 if previous_total > 0 else 0.0,
        is_improvement=overall_change < 0,
        compared_at=datetime.now(timezone.utc),
        metric_type=_metric_label(metric_type),
    )
