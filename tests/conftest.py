"""Shared test fixtures for Circuit Insight tests."""

import pytest

from circuit_insight.cache import ReportCache
from circuit_insight.config import MetricsConfig
from circuit_insight.metrics import MetricsAggregator

SAMPLE_SOURCE = "\n".join(
    [
        "use std::hash::poseidon;",  # 1
        "",  # 2
        "fn main(x: Field, y: pub Field) {",  # 3
        "    let mut sum = 0;",  # 4
        "    for i in 0..20 {",  # 5
        "        sum += x * i;",  # 6
        "    }",  # 7
        "    assert(sum != y);",  # 8
        "}",  # 9
        "",  # 10
        "fn helper(a: Field) -> Field {",  # 11
        "    a / 2",  # 12
        "}",  # 13
    ]
)


def tag(file, line, column, expression, cost, percent=1.0):
    """One profiler frame title, the way the flamegraph emits it."""
    return f"<title>{file}:{line}:{column}::{expression} ({cost} opcodes, {percent}%)</title>"


def svg(*tags):
    body = "\n".join(f'<g class="func_g">{t}<rect x="0" y="0"/></g>' for t in tags)
    return f'<?xml version="1.0"?>\n<svg xmlns="http://www.w3.org/2000/svg">\n{body}\n</svg>'


@pytest.fixture
def sample_source():
    return SAMPLE_SOURCE


@pytest.fixture
def acir_text():
    # total 100 opcodes
    return svg(
        tag("main.nr", 5, 5, "for i in 0..20", 40, 40.0),
        tag("main.nr", 6, 9, "sum += x * i", 30, 30.0),
        tag("main.nr", 8, 5, "assert(sum != y)", 10, 10.0),
        tag("main.nr", 12, 5, "a / 2", 20, 20.0),
    )


@pytest.fixture
def brillig_text():
    return svg(tag("main.nr", 4, 5, "let mut sum = 0", 5, 100.0))


@pytest.fixture
def gates_text():
    # total 400 gates
    return svg(
        tag("main.nr", 6, 9, "sum += x * i", 200, 50.0),
        tag("main.nr", 8, 5, "assert(sum != y)", 100, 25.0),
        tag("main.nr", 12, 5, "a / 2", 100, 25.0),
    )


@pytest.fixture
def aggregator():
    agg = MetricsAggregator(MetricsConfig())
    yield agg
    agg.cache.close()


@pytest.fixture
def uncached_aggregator():
    """Aggregator whose cache never hits, so every call is recomputed and kept in history."""
    config = MetricsConfig(cache_ttl_seconds=0)
    agg = MetricsAggregator(config, ReportCache(ttl_seconds=0))
    yield agg
    agg.cache.close()


@pytest.fixture
def sample_report(aggregator, acir_text, brillig_text, gates_text, sample_source):
    return aggregator.generate_report(
        acir_text, brillig_text, gates_text, source_code=sample_source, file_name="main.nr"
    )
