"""Tests for the CircuitInsightEngine facade and analyze_profile."""

import pytest

from circuit_insight import CircuitInsightEngine, analyze_profile
from circuit_insight.config import EngineConfig, MetricsConfig
from circuit_insight.exceptions import ConfigurationError, EmptyInputError, ProfilingError
from circuit_insight.models import MetricsFilter
from circuit_insight.profiler import ProfilerOutput


class FakeProfiler:
    def __init__(self, output=None, error=None):
        self.output = output
        self.error = error
        self.calls = []

    def profile(self, source_code, manifest=None):
        self.calls.append((source_code, manifest))
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def engine():
    e = CircuitInsightEngine()
    yield e
    e.close()


class TestGenerateComplexityReport:
    def test_parse_cost_records(self, engine, acir_text):
        records = engine.parse_cost_records(acir_text)
        assert [r.line for r in records] == [5, 6, 8, 12]

    def test_report(self, engine, acir_text, brillig_text, gates_text, sample_source):
        report = engine.generate_complexity_report(
            acir_text, brillig_text, gates_text, source_code=sample_source
        )
        assert report.total_cost == 505
        assert report.primary_file.file_name == "main.nr"

    def test_requires_input(self, engine):
        with pytest.raises(EmptyInputError):
            engine.generate_complexity_report(source_code="")

    def test_heatmap(self, engine, acir_text, sample_source):
        report = engine.generate_complexity_report(acir_text, source_code=sample_source)
        entries = engine.generate_heatmap_data(report, MetricsFilter(show_top_n=1))
        assert [e.line_number for e in entries] == [5]

    def test_analyze_circuit(self, engine, acir_text, gates_text, sample_source):
        report = engine.generate_complexity_report(acir_text, None, gates_text, source_code=sample_source)
        insights = engine.analyze_circuit(report, sample_source)
        assert insights.suggestions[0].id == "hotspot-6"


class TestGetComplexityReport:
    def test_without_backend(self, engine, sample_source):
        assert engine.get_complexity_report(sample_source) is None

    @pytest.mark.parametrize("source", ["", "   \n\t"])
    def test_blank_source(self, source, acir_text):
        profiler = FakeProfiler(ProfilerOutput(constrained_text=acir_text))
        with CircuitInsightEngine(profiler=profiler) as engine:
            assert engine.get_complexity_report(source) is None
        assert profiler.calls == []

    def test_backend_output_aggregated(self, acir_text, gates_text, sample_source):
        profiler = FakeProfiler(ProfilerOutput(constrained_text=acir_text, gates_text=gates_text))
        with CircuitInsightEngine(profiler=profiler) as engine:
            report = engine.get_complexity_report(sample_source, manifest="[package]\nname = \"demo\"")
        assert report.total_gates == 400
        assert report.total_unconstrained_ops == 0
        assert profiler.calls == [(sample_source, "[package]\nname = \"demo\"")]

    def test_backend_exception_wrapped(self, sample_source):
        profiler = FakeProfiler(error=RuntimeError("nargo not found"))
        with CircuitInsightEngine(profiler=profiler) as engine:
            with pytest.raises(ProfilingError) as exc_info:
                engine.get_complexity_report(sample_source)
        assert exc_info.value.reason == "nargo not found"
        assert exc_info.value.file_name == "main.nr"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_backend_reported_error(self, sample_source):
        profiler = FakeProfiler(ProfilerOutput(error="compilation failed"))
        with CircuitInsightEngine(profiler=profiler) as engine:
            with pytest.raises(ProfilingError, match="compilation failed"):
                engine.get_complexity_report(sample_source, file_name="lib.nr")

    def test_empty_backend_output_is_a_valid_report(self, sample_source):
        profiler = FakeProfiler(ProfilerOutput())
        assert ProfilerOutput().is_empty
        with CircuitInsightEngine(profiler=profiler) as engine:
            report = engine.get_complexity_report(sample_source)
        assert report.total_cost == 0
        assert report.hotspots == []


class TestStateAndConfiguration:
    def test_compare_with_previous(self, acir_text, sample_source):
        config = EngineConfig(metrics=MetricsConfig(cache_ttl_seconds=0))
        with CircuitInsightEngine(config) as engine:
            first = engine.generate_complexity_report(acir_text, source_code=sample_source)
            assert engine.compare_with_previous(first) is None
            second = engine.generate_complexity_report(acir_text, source_code=sample_source)
            comparison = engine.compare_with_previous(second, "gates")
        assert comparison.deltas == []
        assert comparison.overall_change == 0
        assert comparison.metric_type == "gates"

    def test_clear_cache(self, engine, acir_text, sample_source):
        engine.generate_complexity_report(acir_text, source_code=sample_source)
        engine.clear_cache()
        assert engine.aggregator.cache.history == []
        assert engine.aggregator.cache.stats()["entries"] == 0

    def test_update_configuration(self, engine, acir_text, gates_text, sample_source):
        config = engine.update_configuration(hotspot_threshold=30.0, hotspots={"max_results": 1})
        assert engine.get_configuration() is config
        assert config.analyzer.hotspot_threshold == 30.0

        report = engine.generate_complexity_report(acir_text, None, gates_text, source_code=sample_source)
        assert len(report.hotspots) == 1
        insights = engine.analyze_circuit(report, sample_source)
        assert [s.id for s in insights.suggestions if s.category == "general"] == ["hotspot-6"]

    def test_update_configuration_refreshes_cached_report(self, engine, acir_text, gates_text, sample_source):
        first = engine.generate_complexity_report(acir_text, None, gates_text, source_code=sample_source)
        assert len(first.hotspots) > 1

        engine.update_configuration(hotspots={"max_results": 1})
        second = engine.generate_complexity_report(acir_text, None, gates_text, source_code=sample_source)
        assert len(second.hotspots) == 1
        assert len(engine.aggregator.cache.history) == 2

    def test_cache_limits_keep_cached_report(self, engine, acir_text, sample_source):
        engine.generate_complexity_report(acir_text, source_code=sample_source)
        engine.update_configuration(cache_ttl_seconds=600)
        assert engine.aggregator.cache.stats()["entries"] == 1

    def test_update_configuration_reaches_cache(self, engine):
        engine.update_configuration(cache_ttl_seconds=5, history_depth=2)
        assert engine.aggregator.cache.ttl_seconds == 5
        assert engine.aggregator.cache.history_depth == 2

    def test_invalid_update_keeps_configuration(self, engine):
        before = engine.get_configuration()
        with pytest.raises(ConfigurationError):
            engine.update_configuration(history_depth=0)
        with pytest.raises(ConfigurationError):
            engine.update_configuration(not_a_setting=True)
        assert engine.get_configuration() is before


class TestAnalyzeProfile:
    def test_one_shot(self, acir_text, gates_text, sample_source, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        report, insights = analyze_profile(
            sample_source, constrained_text=acir_text, gates_text=gates_text, hotspot_threshold=40.0
        )
        assert report.total_gates == 400
        assert [s.id for s in insights.suggestions if s.category == "general"] == ["hotspot-6"]
