"""Metrics aggregation — line, function and file rollups, hotspots and deltas."""

from .aggregator import MetricsAggregator
from .delta import compare_reports
from .functions import FunctionSpan, aggregate_functions, detect_functions
from .heatmap import generate_heatmap_data
from .hotspots import is_hotspot, select_hotspots, select_top_functions

__all__ = [
    "MetricsAggregator",
    "FunctionSpan",
    "aggregate_functions",
    "compare_reports",
    "detect_functions",
    "generate_heatmap_data",
    "is_hotspot",
    "select_hotspots",
    "select_top_functions",
]
