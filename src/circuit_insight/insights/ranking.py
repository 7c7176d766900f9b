"""Suggestion ordering, savings totals and complexity classification."""

from __future__ import annotations

from ..config import AnalyzerConfig
from .models import SEVERITY_ORDER, ComplexityClass, Suggestion


def sort_suggestions(suggestions: list[Suggestion]) -> list[Suggestion]:
    """Severity first (high, medium, low), then estimated savings descending.

    The sort is stable, so equal suggestions keep rule order.
    """
    return sorted(
        suggestions,
        key=lambda s: (SEVERITY_ORDER[s.severity], -s.impact.estimated_savings),
    )


def total_savings(suggestions: list[Suggestion]) -> tuple[int, float]:
    """Summed savings and summed percent, the percent clamped to 100."""
    estimated = sum(s.impact.estimated_savings for s in suggestions)
    percent = sum(s.impact.savings_percent for s in suggestions)
    return estimated, min(percent, 100.0)


def classify_complexity(total_gates: int, config: AnalyzerConfig) -> ComplexityClass:
    if total_gates < config.complexity_low:
        return "low"
    if total_gates < config.complexity_medium:
        return "medium"
    return "high"
