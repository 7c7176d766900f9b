"""Tests for OptimizationAnalyzer, ranking and the lexical helpers."""

import pytest

from circuit_insight.config import AnalyzerConfig
from circuit_insight.insights import Impact, OptimizationAnalyzer, Suggestion
from circuit_insight.insights.helpers import code_part, has_loop_within, literal_iterations
from circuit_insight.insights.ranking import classify_complexity, sort_suggestions, total_savings


def _suggestion(id, severity, savings, percent=0.0):
    return Suggestion(
        id=id,
        line_number=1,
        severity=severity,
        category="general",
        title=id,
        description=id,
        impact=Impact(estimated_savings=savings, savings_percent=percent),
    )


class FixedRule:
    """Rule stub returning a preset list."""

    def __init__(self, name, suggestions):
        self.name = name
        self.suggestions = suggestions

    def find(self, context):
        return list(self.suggestions)


class TestAnalyze:
    def test_sample_circuit(self, sample_report, sample_source):
        result = OptimizationAnalyzer().analyze(sample_report, sample_source)
        assert [s.id for s in result.suggestions] == [
            "hotspot-6",
            "hotspot-12",
            "hotspot-8",
            "loop-large-5",
            "arithmetic-division-12",
        ]
        assert result.total_potential_savings == 160
        assert result.circuit_complexity == "low"
        assert result.total_gates == 400
        assert result.total_constrained_ops == 100
        assert result.total_unconstrained_ops == 5
        assert result.rules_run == [
            "hotspots",
            "loops",
            "arithmetic",
            "arrays",
            "hash_operations",
            "best_practices",
        ]

    def test_severity_then_savings_order(self, sample_report, sample_source):
        suggestions = OptimizationAnalyzer().analyze(sample_report, sample_source).suggestions
        rank = {"high": 0, "medium": 1, "low": 2}
        for earlier, later in zip(suggestions, suggestions[1:]):
            assert rank[earlier.severity] <= rank[later.severity]
            if earlier.severity == later.severity:
                assert earlier.impact.estimated_savings >= later.impact.estimated_savings

    def test_disabled_rules_not_run(self, sample_report, sample_source):
        analyzer = OptimizationAnalyzer(AnalyzerConfig(enabled_rules=frozenset({"loops"})))
        result = analyzer.analyze(sample_report, sample_source)
        assert result.rules_run == ["loops"]
        assert {s.category for s in result.suggestions} == {"loop"}

    def test_no_rules_enabled(self, sample_report, sample_source):
        result = OptimizationAnalyzer(AnalyzerConfig(enabled_rules=frozenset())).analyze(
            sample_report, sample_source
        )
        assert result.suggestions == []
        assert result.total_potential_savings == 0
        assert result.total_potential_savings_percent == 0.0

    def test_injected_rules(self, sample_report):
        rules = [
            FixedRule("arrays", [_suggestion("low-big", "low", 500)]),
            FixedRule("loops", [_suggestion("high-small", "high", 1), _suggestion("medium", "medium", 9)]),
        ]
        result = OptimizationAnalyzer(rules=rules).analyze(sample_report, "")
        assert [s.id for s in result.suggestions] == ["high-small", "medium", "low-big"]

    def test_empty_source(self, sample_report):
        result = OptimizationAnalyzer().analyze(sample_report, "")
        assert {s.category for s in result.suggestions} == {"general"}

    def test_does_not_modify_report(self, sample_report, sample_source):
        hotspots = [line.line_number for line in sample_report.hotspots]
        OptimizationAnalyzer().analyze(sample_report, sample_source)
        assert [line.line_number for line in sample_report.hotspots] == hotspots

    def test_by_severity(self, sample_report, sample_source):
        result = OptimizationAnalyzer().analyze(sample_report, sample_source)
        assert [s.id for s in result.by_severity("medium")] == ["arithmetic-division-12"]


class TestRanking:
    def test_mixed_set(self):
        ranked = sort_suggestions(
            [
                _suggestion("a", "low", 100),
                _suggestion("b", "medium", 5),
                _suggestion("c", "high", 1),
                _suggestion("d", "medium", 50),
                _suggestion("e", "high", 70),
            ]
        )
        assert [s.id for s in ranked] == ["e", "c", "d", "b", "a"]

    def test_equal_savings_keep_order(self):
        ranked = sort_suggestions([_suggestion("first", "high", 5), _suggestion("second", "high", 5)])
        assert [s.id for s in ranked] == ["first", "second"]

    def test_total_savings_clamped(self):
        savings, percent = total_savings(
            [_suggestion("a", "high", 10, 80.0), _suggestion("b", "high", 20, 45.0)]
        )
        assert savings == 30
        assert percent == 100.0

    def test_total_savings_unclamped(self):
        assert total_savings([_suggestion("a", "low", 3, 1.5)]) == (3, 1.5)

    @pytest.mark.parametrize(
        "gates,expected",
        [(0, "low"), (999, "low"), (1_000, "medium"), (9_999, "medium"), (10_000, "high")],
    )
    def test_classify_complexity(self, gates, expected):
        assert classify_complexity(gates, AnalyzerConfig()) == expected


class TestHelpers:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("let x = a / b; // note", "let x = a / b; "),
            ("// whole line", ""),
            ("/* block", ""),
            ("   * continued", ""),
            ("plain", "plain"),
        ],
    )
    def test_code_part(self, text, expected):
        assert code_part(text) == expected

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("0..20", 20),
            ("3..8", 5),
            ("0..=10", 11),
            (" 0 .. 4 ", 4),
            ("0..20u32", 20),
            ("0u8..=9u8", 10),
            ("(0..20)", 20),
            ("0..1_000", 1000),
            ("0..N", None),
            ("0..20 + n", None),
            ("arr", None),
        ],
    )
    def test_literal_iterations(self, text, expected):
        assert literal_iterations(text) == expected

    def test_has_loop_within_looks_back_only(self):
        lines = ["x", "for i in 0..3 {", "y", "z"]
        assert has_loop_within(lines, 3, 1)
        assert not has_loop_within(lines, 2, 5)  # the header line itself is excluded
        assert not has_loop_within(lines, 4, 1)
