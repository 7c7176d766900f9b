"""Public API for Circuit Insight.

CircuitInsightEngine is the single object UIs and orchestration layers talk
to. It owns one aggregator (and through it, one report cache) and one
analyzer; nothing is shared through module globals.

Example:
    >>> from circuit_insight import CircuitInsightEngine
    >>>
    >>> with CircuitInsightEngine() as engine:
    ...     report = engine.generate_complexity_report(
    ...         constrained_text=acir_svg,
    ...         gates_text=gates_svg,
    ...         source_code=source,
    ...     )
    ...     insights = engine.analyze_circuit(report, source)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from .cache import ReportCache
from .config import EngineConfig, load_config, merge_config
from .exceptions import ProfilingError
from .insights import InsightReport, OptimizationAnalyzer
from .logging_config import get_logger
from .metrics import MetricsAggregator, generate_heatmap_data
from .models import (
    ComplexityReport,
    CostRecord,
    HeatmapData,
    MetricsComparison,
    MetricsFilter,
    MetricType,
)
from .parsing import parse_cost_records
from .profiler import ProfilerBackend

logger = get_logger(__name__)


class CircuitInsightEngine:
    """Parse, aggregate, compare and analyze circuit cost profiles."""

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        profiler: Optional[ProfilerBackend] = None,
        cache: Optional[ReportCache] = None,
    ):
        self._config = config or EngineConfig()
        self.profiler = profiler
        self.aggregator = MetricsAggregator(self._config.metrics, cache)
        self.analyzer = OptimizationAnalyzer(self._config.analyzer)

    def __enter__(self) -> "CircuitInsightEngine":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ── Parsing and aggregation ─────────────────────────────────────────

    def parse_cost_records(self, raw_text: Optional[str]) -> list[CostRecord]:
        return parse_cost_records(raw_text, self._config.metrics.source_extension)

    def generate_complexity_report(
        self,
        constrained_text: Optional[str] = None,
        unconstrained_text: Optional[str] = None,
        gates_text: Optional[str] = None,
        *,
        source_code: str = "",
        file_name: Optional[str] = None,
    ) -> ComplexityReport:
        """Build (or fetch from cache) the report for one profiled source.

        Raises:
            EmptyInputError: If neither source code nor any text is given
            ComputeInFlightError: If the same source is already being computed
        """
        return self.aggregator.generate_report(
            constrained_text,
            unconstrained_text,
            gates_text,
            source_code=source_code,
            file_name=file_name,
        )

    def get_complexity_report(
        self,
        source_code: str,
        manifest: Optional[str] = None,
        file_name: Optional[str] = None,
    ) -> Optional[ComplexityReport]:
        """Profile ``source_code`` with the injected backend and build its report.

        ``manifest`` is handed to the backend untouched.

        Returns:
            The report, or None when there is nothing to profile (blank
            source or no backend configured)

        Raises:
            ProfilingError: If the backend fails or reports an error
        """
        if not source_code or not source_code.strip():
            return None
        if self.profiler is None:
            logger.debug("No profiler backend configured")
            return None

        file_name = file_name or self._config.metrics.default_file_name
        try:
            output = self.profiler.profile(source_code, manifest)
        except ProfilingError:
            raise
        except Exception as e:
            raise ProfilingError(str(e), file_name=file_name) from e

        if output.error:
            raise ProfilingError(output.error, file_name=file_name)

        return self.generate_complexity_report(
            output.constrained_text,
            output.unconstrained_text,
            output.gates_text,
            source_code=source_code,
            file_name=file_name,
        )

    def compare_with_previous(
        self, report: ComplexityReport, metric_type: MetricType = "acir"
    ) -> Optional[MetricsComparison]:
        return self.aggregator.compare_with_previous(report, metric_type)

    def generate_heatmap_data(
        self, report: ComplexityReport, metrics_filter: Optional[MetricsFilter] = None
    ) -> list[HeatmapData]:
        return generate_heatmap_data(report, metrics_filter)

    # ── Insights ────────────────────────────────────────────────────────

    def analyze_circuit(self, report: ComplexityReport, source_code: str) -> InsightReport:
        return self.analyzer.analyze(report, source_code)

    # ── State and configuration ─────────────────────────────────────────

    def clear_cache(self) -> None:
        self.aggregator.clear_cache()

    def update_configuration(self, **partial: Any) -> EngineConfig:
        """Apply partial overrides and return the resulting configuration.

        Raises:
            ConfigurationError: On unknown keys or invalid values; the
                current configuration is left unchanged
        """
        config = merge_config(self._config, partial)
        self._config = config
        self.aggregator.reconfigure(config.metrics)
        self.analyzer.config = config.analyzer
        return config

    def get_configuration(self) -> EngineConfig:
        return self._config

    def close(self) -> None:
        self.aggregator.cache.close()


def analyze_profile(
    source_code: str,
    constrained_text: Optional[str] = None,
    unconstrained_text: Optional[str] = None,
    gates_text: Optional[str] = None,
    file_name: Optional[str] = None,
    config_file: Optional[Path] = None,
    **overrides: Any,
) -> tuple[ComplexityReport, InsightReport]:
    """One-shot analysis: load configuration, build the report, analyze it.

    Args:
        source_code: Source of the profiled file
        constrained_text: ACIR profiler output
        unconstrained_text: Brillig profiler output
        gates_text: Gates profiler output
        file_name: Name of the profiled file (default from config)
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g., hotspot_threshold=2.0)

    Returns:
        Tuple of (ComplexityReport, InsightReport)
    """
    config = load_config(config_file=config_file, **overrides)
    with CircuitInsightEngine(config) as engine:
        report = engine.generate_complexity_report(
            constrained_text,
            unconstrained_text,
            gates_text,
            source_code=source_code,
            file_name=file_name,
        )
        return report, engine.analyze_circuit(report, source_code)
