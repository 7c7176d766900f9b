"""MetricsAggregator — fold per-domain cost records into a complexity report."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Mapping, Optional, Sequence, Union

import numpy as np

from ..cache import ReportCache, content_hash
from ..config import MetricsConfig
from ..exceptions import EmptyInputError
from ..logging_config import get_logger
from ..models import (
    ComplexityReport,
    CostDomain,
    CostRecord,
    ExpressionMetric,
    FileMetric,
    LineMetric,
    MetricsComparison,
    MetricType,
)
from ..parsing import parse_cost_records
from .delta import compare_reports
from .functions import aggregate_functions, detect_functions
from .hotspots import select_hotspots, select_top_functions

logger = get_logger(__name__)

DomainRecords = Mapping[Union[CostDomain, str], Optional[Sequence[CostRecord]]]

# LineMetric / ExpressionMetric attribute that accumulates each domain
_DOMAIN_SLOT = {
    CostDomain.CONSTRAINED: "constrained_ops",
    CostDomain.UNCONSTRAINED: "unconstrained_ops",
    CostDomain.GATES: "gate_count",
}


def _matches_file(record_file: str, file_name: str) -> bool:
    return record_file == file_name or record_file.endswith("/" + file_name)


class MetricsAggregator:
    """Build complexity reports and keep them in the injected cache."""

    def __init__(self, config: Optional[MetricsConfig] = None, cache: Optional[ReportCache] = None):
        self.config = config or MetricsConfig()
        self.cache = cache or ReportCache(
            ttl_seconds=self.config.cache_ttl_seconds,
            history_depth=self.config.history_depth,
        )

    def reconfigure(self, config: MetricsConfig) -> None:
        """Apply new settings; cached reports built under other criteria are dropped."""
        previous = self.config
        self.config = config
        self.cache.reconfigure(config.cache_ttl_seconds, config.history_depth)

        # cache limits alone do not change a report's contents
        same_shape = replace(
            previous,
            cache_ttl_seconds=config.cache_ttl_seconds,
            history_depth=config.history_depth,
        ) == config
        if not same_shape:
            logger.debug("Report settings changed, dropping cached reports")
            self.cache.invalidate()

    # ── Cached entry point ─────────────────────────────────────────────

    def generate_report(
        self,
        constrained_text: Optional[str] = None,
        unconstrained_text: Optional[str] = None,
        gates_text: Optional[str] = None,
        *,
        source_code: str = "",
        file_name: Optional[str] = None,
    ) -> ComplexityReport:
        """Parse up to three profiler outputs and aggregate them, via the cache.

        Raises:
            EmptyInputError: If there is neither source code nor any text
            ComputeInFlightError: If the same source is already being computed
        """
        texts = {
            CostDomain.CONSTRAINED: constrained_text,
            CostDomain.UNCONSTRAINED: unconstrained_text,
            CostDomain.GATES: gates_text,
        }
        if not source_code and not any(texts.values()):
            raise EmptyInputError()

        file_name = file_name or self.config.default_file_name
        source_hash = content_hash(source_code)

        def _compute() -> ComplexityReport:
            extension = self.config.source_extension
            domains = {
                domain: parse_cost_records(text, extension)
                for domain, text in texts.items()
                if text
            }
            return self.aggregate(domains, source_code, file_name, source_hash=source_hash)

        return self.cache.get_or_compute(source_hash, _compute)

    def compare_with_previous(
        self, current: ComplexityReport, metric_type: MetricType = "acir"
    ) -> Optional[MetricsComparison]:
        """Compare ``current`` with the report retained just before the latest one."""
        pair = self.cache.previous_pair()
        if pair is None:
            return None
        previous, _ = pair
        return compare_reports(current, previous, metric_type)

    def clear_cache(self) -> None:
        self.cache.clear()

    # ── Pure aggregation ───────────────────────────────────────────────

    def aggregate(
        self,
        domains: DomainRecords,
        source_code: str,
        file_name: Optional[str] = None,
        source_hash: str = "",
    ) -> ComplexityReport:
        """Merge per-domain records into line, function and file metrics.

        Domains missing from ``domains`` contribute zero. Normalization is
        circuit-wide: heat is relative to the costliest line in any file and
        percent is relative to the total cost across all three domains.
        """
        file_name = file_name or self.config.default_file_name
        files = self._fold(domains, file_name)

        all_lines = [line for lines in files.values() for line in lines.values()]
        self._normalize(all_lines)

        file_metrics: list[FileMetric] = []
        for name in [file_name] + sorted(n for n in files if n != file_name):
            lines = sorted(files.get(name, {}).values(), key=lambda line: line.line_number)
            functions = []
            if name == file_name:
                functions = aggregate_functions(detect_functions(source_code), lines)
            file_metrics.append(
                FileMetric(
                    file_name=name,
                    lines=lines,
                    functions=functions,
                    total_constrained_ops=sum(line.constrained_ops for line in lines),
                    total_unconstrained_ops=sum(line.unconstrained_ops for line in lines),
                    total_gates=sum(line.gate_count for line in lines),
                )
            )

        primary = file_metrics[0]
        ordered_lines = [line for file_metric in file_metrics for line in file_metric.lines]

        report = ComplexityReport(
            files=file_metrics,
            total_constrained_ops=sum(f.total_constrained_ops for f in file_metrics),
            total_unconstrained_ops=sum(f.total_unconstrained_ops for f in file_metrics),
            total_gates=sum(f.total_gates for f in file_metrics),
            hotspots=select_hotspots(ordered_lines, self.config.hotspots),
            top_functions=select_top_functions(primary.functions, self.config.top_functions_limit),
            generated_at=datetime.now(timezone.utc),
            source_hash=source_hash,
        )
        logger.debug(
            f"Aggregated {len(ordered_lines)} lines in {len(file_metrics)} file(s), "
            f"{len(primary.functions)} functions, {len(report.hotspots)} hotspots"
        )
        return report

    def _fold(self, domains: DomainRecords, file_name: str) -> dict[str, dict[int, LineMetric]]:
        """Accumulate every domain through the same routine, keyed by file and line."""
        by_domain = {CostDomain.parse(domain): records for domain, records in domains.items()}
        files: dict[str, dict[int, LineMetric]] = {}

        for domain in CostDomain:
            slot = _DOMAIN_SLOT[domain]
            for record in by_domain.get(domain) or ():
                owner = file_name if _matches_file(record.file, file_name) else record.file
                lines = files.setdefault(owner, {})
                line = lines.get(record.line)
                if line is None:
                    line = lines[record.line] = LineMetric(line_number=record.line, file=owner)

                setattr(line, slot, getattr(line, slot) + record.cost)
                self._merge_expression(line, record, domain, slot)

        for lines in files.values():
            for line in lines.values():
                line.total_cost = line.constrained_ops + line.unconstrained_ops + line.gate_count
        return files

    @staticmethod
    def _merge_expression(line: LineMetric, record: CostRecord, domain: CostDomain, slot: str) -> None:
        for existing in line.expressions:
            if existing.column == record.column and existing.expression == record.expression:
                break
        else:
            existing = ExpressionMetric(expression=record.expression, column=record.column)
            line.expressions.append(existing)

        setattr(existing, slot, getattr(existing, slot) + record.cost)
        if domain.value not in existing.domains:
            existing.domains.append(domain.value)

    @staticmethod
    def _normalize(lines: list[LineMetric]) -> None:
        if not lines:
            return

        costs = np.array([line.total_cost for line in lines], dtype=np.float64)
        max_cost = costs.max()
        total = costs.sum()

        heat = costs / max_cost if max_cost > 0 else np.zeros_like(costs)
        percent = costs * 100.0 / total if total > 0 else np.zeros_like(costs)

        for line, line_heat, line_percent in zip(lines, heat, percent):
            line.normalized_heat = float(line_heat)
            line.percent_of_circuit = float(line_percent)
