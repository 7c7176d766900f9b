"""Per-line heat data for editor overlays (data only, no rendering)."""

from __future__ import annotations

from typing import Optional

from ..models import ComplexityReport, HeatmapData, LineMetric, MetricsFilter


def format_badge(line: LineMetric, metric_type: str) -> str:
    suffix = "g" if metric_type == "gates" else "ops"
    return f"{line.value_for(metric_type)}{suffix}"


def format_tooltip(line: LineMetric) -> str:
    return (
        f"ACIR: {line.constrained_ops} ops | Brillig: {line.unconstrained_ops} ops | "
        f"Gates: {line.gate_count} | {line.percent_of_circuit:.2f}%"
    )


def generate_heatmap_data(
    report: ComplexityReport, metrics_filter: Optional[MetricsFilter] = None
) -> list[HeatmapData]:
    """Heat entries for the primary file's lines, hottest first."""
    metrics_filter = metrics_filter or MetricsFilter()
    file_metric = report.primary_file
    if file_metric is None:
        return []

    entries = [
        HeatmapData(
            line_number=line.line_number,
            heat_value=line.normalized_heat,
            primary_metric=line.value_for(metrics_filter.metric_type),
            metric_type=metrics_filter.metric_type,
            badge_text=format_badge(line, metrics_filter.metric_type),
            tooltip=format_tooltip(line),
        )
        for line in file_metric.lines
        if line.percent_of_circuit >= metrics_filter.threshold
    ]
    entries.sort(key=lambda entry: entry.heat_value, reverse=True)

    if metrics_filter.show_top_n is not None:
        entries = entries[: metrics_filter.show_top_n]
    return entries
