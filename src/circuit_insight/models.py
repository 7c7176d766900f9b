"""Data models for circuit cost records and aggregated complexity reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union


class CostDomain(Enum):
    """The three independently profiled cost domains."""

    CONSTRAINED = "acir"  # ACIR opcodes, proof-cost bearing
    UNCONSTRAINED = "brillig"  # Brillig opcodes, witness helpers
    GATES = "gates"  # proving-backend gates

    @classmethod
    def parse(cls, value: Union[str, "CostDomain"]) -> "CostDomain":
        if isinstance(value, cls):
            return value
        return cls(value)


MetricType = Union[CostDomain, str]  # CostDomain, its value, or "total"


@dataclass(frozen=True)
class CostRecord:
    """One profiler annotation: the cost of an expression at file:line:column."""

    file: str
    line: int
    column: int
    expression: str
    cost: int
    share_percent: float


@dataclass
class ExpressionMetric:
    expression: str
    column: int
    constrained_ops: int = 0
    unconstrained_ops: int = 0
    gate_count: int = 0
    domains: list[str] = field(default_factory=list)

    @property
    def total_cost(self) -> int:
        return self.constrained_ops + self.unconstrained_ops + self.gate_count


@dataclass
class LineMetric:
    line_number: int
    file: str
    expressions: list[ExpressionMetric] = field(default_factory=list)
    constrained_ops: int = 0
    unconstrained_ops: int = 0
    gate_count: int = 0
    total_cost: int = 0
    normalized_heat: float = 0.0  # 0-1, relative to the costliest line
    percent_of_circuit: float = 0.0  # 0-100

    def value_for(self, metric: MetricType) -> int:
        return _metric_value(self, metric)


@dataclass
class FunctionMetric:
    name: str
    start_line: int
    end_line: int  # exclusive
    constrained_ops: int = 0
    unconstrained_ops: int = 0
    gate_count: int = 0
    total_cost: int = 0
    normalized_heat: float = 0.0  # relative to the costliest function
    percent_of_circuit: float = 0.0  # share of the total cost of all functions

    @property
    def line_span(self) -> int:
        return self.end_line - self.start_line

    def value_for(self, metric: MetricType) -> int:
        return _metric_value(self, metric)


@dataclass
class FileMetric:
    file_name: str
    lines: list[LineMetric] = field(default_factory=list)
    functions: list[FunctionMetric] = field(default_factory=list)
    total_constrained_ops: int = 0
    total_unconstrained_ops: int = 0
    total_gates: int = 0

    def line(self, line_number: int) -> Optional[LineMetric]:
        for line in self.lines:
            if line.line_number == line_number:
                return line
        return None


@dataclass
class ComplexityReport:
    """Queryable cost model of one profiled circuit."""

    files: list[FileMetric]
    total_constrained_ops: int
    total_unconstrained_ops: int
    total_gates: int
    hotspots: list[LineMetric]
    top_functions: list[FunctionMetric]
    generated_at: datetime
    source_hash: str = ""

    @property
    def total_cost(self) -> int:
        return self.total_constrained_ops + self.total_unconstrained_ops + self.total_gates

    @property
    def primary_file(self) -> Optional[FileMetric]:
        """The file whose source was analyzed; always files[0]."""
        return self.files[0] if self.files else None

    def total_for(self, metric: MetricType) -> int:
        if metric == "total":
            return self.total_cost
        domain = CostDomain.parse(metric)
        if domain is CostDomain.CONSTRAINED:
            return self.total_constrained_ops
        if domain is CostDomain.UNCONSTRAINED:
            return self.total_unconstrained_ops
        return self.total_gates


@dataclass
class MetricsDelta:
    """Change of one line's metric between two successive reports."""

    line_number: int
    previous_value: int
    current_value: int
    delta: int  # current - previous
    delta_percent: float
    is_improvement: bool
    is_regression: bool


@dataclass
class MetricsComparison:
    deltas: list[MetricsDelta]
    overall_change: int
    overall_change_percent: float
    is_improvement: bool
    compared_at: datetime
    metric_type: str
    baseline_label: str = "Previous Run"


@dataclass(frozen=True)
class MetricsFilter:
    """Selects which lines get heatmap data."""

    metric_type: str = "acir"
    threshold: float = 0.0  # minimum percent_of_circuit
    show_top_n: Optional[int] = None


@dataclass
class HeatmapData:
    line_number: int
    heat_value: float
    primary_metric: int
    metric_type: str
    badge_text: str
    tooltip: str


def _metric_value(metric_source: Union[LineMetric, FunctionMetric], metric: MetricType) -> int:
    if metric == "total":
        return metric_source.total_cost
    domain = CostDomain.parse(metric)
    if domain is CostDomain.CONSTRAINED:
        return metric_source.constrained_ops
    if domain is CostDomain.UNCONSTRAINED:
        return metric_source.unconstrained_ops
    return metric_source.gate_count
