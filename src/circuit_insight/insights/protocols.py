"""Protocol and context shared by the analyzer rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

from ..config import AnalyzerConfig
from ..models import ComplexityReport, LineMetric
from .models import Suggestion


@dataclass
class RuleContext:
    """Read-only inputs every rule sees.

    ``source_lines`` is the source split on newlines; ``line_metrics`` holds
    the analyzed file's lines keyed by 1-based line number.
    """

    report: ComplexityReport
    source_code: str
    config: AnalyzerConfig
    source_lines: list[str] = field(init=False)
    line_metrics: dict[int, LineMetric] = field(init=False)

    def __post_init__(self) -> None:
        self.source_lines = self.source_code.split("\n") if self.source_code else []
        primary = self.report.primary_file
        self.line_metrics = {line.line_number: line for line in primary.lines} if primary else {}

    @property
    def file_name(self) -> Optional[str]:
        primary = self.report.primary_file
        return primary.file_name if primary else None

    def metrics_for(self, line_number: int) -> Optional[LineMetric]:
        return self.line_metrics.get(line_number)

    def text_of(self, line_number: int) -> str:
        if 1 <= line_number <= len(self.source_lines):
            return self.source_lines[line_number - 1].strip()
        return ""


class Rule(Protocol):
    """Rules read the report and source (NEVER write) and return suggestions."""

    name: str

    def find(self, context: RuleContext) -> list[Suggestion]: ...
