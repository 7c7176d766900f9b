"""Lexical function detection and function-level cost rollups.

Function boundaries come from a declaration regex, not a parser: a
function runs from its ``fn`` line up to the line before the next
declaration, or to the end of the source for the last one. Nested and
trailing non-function items are attributed to the preceding function.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from ..models import FunctionMetric, LineMetric

FUNCTION_DECLARATION = re.compile(
    r"^\s*(?:pub(?:\([^)]*\))?\s+)?(?:comptime\s+)?(?:unconstrained\s+)?fn\s+(\w+)"
)


@dataclass(frozen=True)
class FunctionSpan:
    name: str
    start_line: int
    end_line: int  # exclusive


def detect_functions(source_code: str) -> list[FunctionSpan]:
    """Find function declarations and their half-open line ranges."""
    source_lines = source_code.split("\n") if source_code else []

    declarations: list[tuple[str, int]] = []
    for index, text in enumerate(source_lines):
        match = FUNCTION_DECLARATION.match(text)
        if match:
            declarations.append((match.group(1), index + 1))

    end_of_source = len(source_lines) + 1
    spans = []
    for position, (name, start_line) in enumerate(declarations):
        if position + 1 < len(declarations):
            end_line = declarations[position + 1][1]
        else:
            end_line = end_of_source
        spans.append(FunctionSpan(name=name, start_line=start_line, end_line=end_line))
    return spans


def aggregate_functions(spans: Iterable[FunctionSpan], lines: list[LineMetric]) -> list[FunctionMetric]:
    """Roll line costs up into functions, normalized among functions only.

    Heat is relative to the costliest function and percent is the share of
    the summed cost of all functions, independent of the line-level base.
    Returned costliest first; equal costs keep declaration order.
    """
    functions: list[FunctionMetric] = []
    for span in spans:
        metric = FunctionMetric(name=span.name, start_line=span.start_line, end_line=span.end_line)
        for line in lines:
            if span.start_line <= line.line_number < span.end_line:
                metric.constrained_ops += line.constrained_ops
                metric.unconstrained_ops += line.unconstrained_ops
                metric.gate_count += line.gate_count
        metric.total_cost = metric.constrained_ops + metric.unconstrained_ops + metric.gate_count
        functions.append(metric)

    if not functions:
        return functions

    max_cost = max(f.total_cost for f in functions)
    total_cost = sum(f.total_cost for f in functions)
    for metric in functions:
        metric.normalized_heat = metric.total_cost / max_cost if max_cost > 0 else 0.0
        metric.percent_of_circuit = 100.0 * metric.total_cost / total_cost if total_cost > 0 else 0.0

    return sorted(functions, key=lambda f: f.total_cost, reverse=True)
