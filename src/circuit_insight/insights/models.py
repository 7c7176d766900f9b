"""Data models for optimization suggestions."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, Optional

Severity = Literal["high", "medium", "low"]
Category = Literal["loop", "arithmetic", "storage", "algorithm", "general", "best-practice"]
ComplexityClass = Literal["low", "medium", "high"]

SEVERITY_ORDER: dict[str, int] = {"high": 0, "medium": 1, "low": 2}


@dataclass
class Impact:
    estimated_savings: int  # opcodes/gates a fix would remove
    savings_percent: float  # same, as percent of the circuit


@dataclass
class Suggestion:
    id: str  # "loop-large-12", "best-practice-high-acir", ...
    line_number: int  # 0 = circuit-wide
    severity: Severity
    category: Category
    title: str
    description: str
    impact: Impact
    code_snippet: Optional[str] = None
    suggested_fix: Optional[str] = None
    learn_more_url: Optional[str] = None
    file: Optional[str] = None  # set when the line is outside the analyzed file


@dataclass
class InsightReport:
    suggestions: list[Suggestion]
    total_potential_savings: int
    total_potential_savings_percent: float  # clamped to 100
    circuit_complexity: ComplexityClass
    total_gates: int
    total_constrained_ops: int
    total_unconstrained_ops: int
    analyzed_at: datetime
    rules_run: list[str] = field(default_factory=list)

    def by_severity(self, severity: Severity) -> list[Suggestion]:
        return [s for s in self.suggestions if s.severity == severity]
