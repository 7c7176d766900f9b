"""Tests for profiler text parsing."""

import pytest

from circuit_insight.models import CostRecord
from circuit_insight.parsing import ParsedProfile, parse_cost_records, unescape

from conftest import svg, tag


class TestParseCostRecords:
    def test_single_tag(self):
        records = parse_cost_records("<title>main.nr:3:12::x != 0 (2 opcodes, 4.35%)</title>")
        assert records == [
            CostRecord(
                file="main.nr",
                line=3,
                column=12,
                expression="x != 0",
                cost=2,
                share_percent=4.35,
            )
        ]

    @pytest.mark.parametrize("raw", [None, "", "no tags here", "<svg></svg>"])
    def test_empty_or_tagless_input(self, raw):
        assert parse_cost_records(raw) == []

    def test_sorted_by_line_then_column(self):
        raw = svg(
            tag("main.nr", 9, 1, "c", 1),
            tag("main.nr", 2, 7, "b", 1),
            tag("main.nr", 2, 3, "a", 1),
        )
        records = parse_cost_records(raw)
        assert [(r.line, r.column) for r in records] == [(2, 3), (2, 7), (9, 1)]

    def test_equal_keys_keep_input_order(self):
        raw = svg(tag("main.nr", 4, 1, "first", 1), tag("main.nr", 4, 1, "second", 2))
        assert [r.expression for r in parse_cost_records(raw)] == ["first", "second"]

    def test_malformed_tags_are_skipped(self):
        raw = "\n".join(
            [
                "<title>main.nr:abc:1::x (2 opcodes, 1%)</title>",  # non-numeric line
                "<title>main.rs:1:1::x (2 opcodes, 1%)</title>",  # wrong extension
                "<title>main.nr:1:1::x (two opcodes, 1%)</title>",  # non-numeric cost
                "<title>main.nr:1:1::x (2 opcodes)</title>",  # missing percent
                "<title>main.nr:0:1::x (2 opcodes, 1%)</title>",  # line must be positive
                "<title>main.nr:5:2::ok (7 opcodes, 3.5%)</title>",
            ]
        )
        records = parse_cost_records(raw)
        assert len(records) == 1
        assert records[0].expression == "ok"
        assert records[0].cost == 7

    def test_expression_never_spans_tags(self):
        raw = "<title>main.nr:1:1::broken</title><title>main.nr:2:1::y (3 opcodes, 1%)</title>"
        records = parse_cost_records(raw)
        assert len(records) == 1
        assert records[0].line == 2
        assert records[0].expression == "y"

    def test_path_prefixed_file_names(self):
        records = parse_cost_records(tag("src/lib/utils.nr", 10, 4, "x + 1", 1))
        assert records[0].file == "src/lib/utils.nr"

    def test_custom_extension(self):
        raw = tag("circuit.zk", 1, 1, "x", 3)
        assert parse_cost_records(raw) == []
        assert parse_cost_records(raw, extension=".zk")[0].cost == 3

    def test_zero_cost_and_integer_percent(self):
        record = parse_cost_records(tag("main.nr", 1, 1, "x", 0, 100))[0]
        assert record.cost == 0
        assert record.share_percent == 100.0


class TestUnescape:
    def test_entities_decoded(self):
        record = parse_cost_records(tag("main.nr", 1, 1, "a &gt; b &amp;&amp; c", 1))[0]
        assert record.expression == "a > b && c"

    def test_all_named_entities(self):
        assert unescape("&lt;&gt;&amp;&quot;&apos;") == "<>&\"'"

    def test_markup_stripped(self):
        assert unescape("<tspan>x</tspan> + <b>y</b>") == "x + y"

    def test_escaped_generics_survive(self):
        assert unescape("foo::&lt;Field&gt;(x)") == "foo::<Field>(x)"

    def test_whitespace_trimmed(self):
        assert unescape("   x  ") == "x"


class TestParsedProfile:
    @pytest.fixture
    def profile(self):
        return ParsedProfile(
            svg(
                tag("main.nr", 3, 5, "main_expr", 10),
                tag("lib.nr", 3, 5, "lib_expr", 4),
                tag("main.nr", 3, 9, "other", 1),
                tag("lib.nr", 7, 1, "tail", 2),
            )
        )

    def test_len(self, profile):
        assert len(profile) == 4

    def test_multi_file_records_stay_separate(self, profile):
        assert profile.expressions_for_line(3, "main.nr") == ["main_expr", "other"]
        assert profile.expressions_for_line(3, "lib.nr") == ["lib_expr"]
        assert profile.total_for_line(3, "main.nr") == 11
        assert profile.total_for_line(3, "lib.nr") == 4

    def test_line_lookup_across_files(self, profile):
        assert profile.total_for_line(3) == 15
        assert profile.for_line(99) == []

    def test_file_lookup(self, profile):
        assert sorted(profile.file_names()) == ["lib.nr", "main.nr"]
        assert [r.line for r in profile.for_file("lib.nr")] == [3, 7]
        assert profile.for_file("missing.nr") == []

    def test_lines(self, profile):
        assert profile.lines() == [3, 7]
        assert profile.lines("main.nr") == [3]

    def test_accessors_return_copies(self, profile):
        profile.for_file("main.nr").clear()
        assert len(profile.for_file("main.nr")) == 2

    def test_empty_profile(self):
        profile = ParsedProfile(None)
        assert len(profile) == 0
        assert profile.lines() == []
