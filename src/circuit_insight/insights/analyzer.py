"""OptimizationAnalyzer — runs the rule set over a report and its source."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from ..config import AnalyzerConfig
from ..logging_config import get_logger
from ..models import ComplexityReport
from .models import InsightReport, Suggestion
from .protocols import Rule, RuleContext
from .ranking import classify_complexity, sort_suggestions, total_savings
from .rules import get_default_rules

logger = get_logger(__name__)


class OptimizationAnalyzer:
    """Orchestrate analysis: build context -> run enabled rules -> rank."""

    def __init__(self, config: Optional[AnalyzerConfig] = None, rules: Optional[list[Rule]] = None):
        self.config = config or AnalyzerConfig()
        self._rules = rules if rules is not None else get_default_rules()

    @property
    def rules(self) -> list[Rule]:
        return list(self._rules)

    def enabled_rules(self) -> list[Rule]:
        return [rule for rule in self._rules if rule.name in self.config.enabled_rules]

    def analyze(self, report: ComplexityReport, source_code: str) -> InsightReport:
        """Produce ranked suggestions for ``report``.

        Parameters
        ----------
        report : ComplexityReport
            Aggregated costs; hotspots and line metrics drive the impact
            estimates.
        source_code : str
            Source of the report's primary file, scanned lexically.

        Returns
        -------
        InsightReport
            Suggestions sorted high to low severity, then by savings.
        """
        context = RuleContext(report=report, source_code=source_code or "", config=self.config)

        suggestions: list[Suggestion] = []
        rules_run: list[str] = []
        for rule in self.enabled_rules():
            found = rule.find(context)
            logger.debug(f"Rule {rule.name}: {len(found)} suggestion(s)")
            suggestions.extend(found)
            rules_run.append(rule.name)

        ranked = sort_suggestions(suggestions)
        savings, savings_percent = total_savings(ranked)

        return InsightReport(
            suggestions=ranked,
            total_potential_savings=savings,
            total_potential_savings_percent=savings_percent,
            circuit_complexity=classify_complexity(report.total_gates, self.config),
            total_gates=report.total_gates,
            total_constrained_ops=report.total_constrained_ops,
            total_unconstrained_ops=report.total_unconstrained_ops,
            analyzed_at=datetime.now(timezone.utc),
            rules_run=rules_run,
        )
