"""
Circuit Insight - Cost analysis for compiled arithmetic circuits

Turns per-line profiler annotations from three cost domains (ACIR opcodes,
Brillig opcodes, backend gates) into a queryable complexity report, picks
the hotspots, and derives heuristic optimization suggestions.
"""

__version__ = "0.1.0"

from .api import CircuitInsightEngine, analyze_profile
from .cache import ReportCache
from .config import EngineConfig, load_config
from .insights import InsightReport, Suggestion
from .models import ComplexityReport, CostDomain, CostRecord
from .parsing import parse_cost_records, unescape

__all__ = [
    "analyze_profile",  # One-shot entry point
    "CircuitInsightEngine",  # Long-lived facade with cache
    "ReportCache",
    "EngineConfig",
    "load_config",
    "ComplexityReport",
    "CostDomain",
    "CostRecord",
    "InsightReport",
    "Suggestion",
    "parse_cost_records",
    "unescape",
]
