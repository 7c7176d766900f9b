"""Hotspot selection: filter and rank aggregated lines or functions.

Kept apart from the aggregation fold so the criteria can change (domain,
absolute cost, top-K functions) without touching how costs are summed.
"""

from __future__ import annotations

from typing import Sequence

from ..config import HotspotCriteria
from ..models import FunctionMetric, LineMetric


def _sort_value(line: LineMetric, criteria: HotspotCriteria) -> float:
    if criteria.sort_by == "percentage":
        return line.percent_of_circuit
    return line.value_for(criteria.metric_type)


def is_hotspot(line: LineMetric, criteria: HotspotCriteria) -> bool:
    """Check a line against the threshold of the configured sort key.

    For percentage sorting the threshold is a fraction (0.05 means 5% of
    the circuit); for absolute sorting it is a raw cost in the metric's
    unit.
    """
    if criteria.sort_by == "percentage":
        return line.percent_of_circuit >= criteria.minimum_threshold * 100
    return line.value_for(criteria.metric_type) >= criteria.minimum_threshold


def select_hotspots(lines: Sequence[LineMetric], criteria: HotspotCriteria) -> list[LineMetric]:
    """Lines passing the threshold, highest first, at most max_results.

    The sort is stable, so ties keep input (line) order.
    """
    candidates = [line for line in lines if is_hotspot(line, criteria)]
    candidates.sort(key=lambda line: _sort_value(line, criteria), reverse=True)
    return candidates[: criteria.max_results]


def select_top_functions(functions: Sequence[FunctionMetric], limit: int) -> list[FunctionMetric]:
    ranked = sorted(functions, key=lambda f: f.total_cost, reverse=True)
    return ranked[:limit]
