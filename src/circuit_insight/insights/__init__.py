"""Optimization insights — heuristic rules over a complexity report and its source."""

from .analyzer import OptimizationAnalyzer
from .models import Impact, InsightReport, Suggestion
from .protocols import Rule, RuleContext

__all__ = [
    "Impact",
    "InsightReport",
    "OptimizationAnalyzer",
    "Rule",
    "RuleContext",
    "Suggestion",
]
