"""LOOPS — loop headers that unroll into many constraints.

Circuits unroll every loop at compile time, so cost grows with the
iteration count. Three findings per header:

- large loop: literal range with more iterations than the threshold (high)
- dynamic bound: non-literal range (medium)
- nested loop: another loop header within the lookback window (high)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..helpers import LOOP_DECLARATION, has_loop_within, iter_code_lines, literal_iterations, scaled_impact
from ..models import Impact, Suggestion

if TYPE_CHECKING:
    from ..protocols import RuleContext


class LoopRule:
    """Detects large, dynamically bounded and nested loops."""

    name = "loops"

    def find(self, context: RuleContext) -> list[Suggestion]:
        config = context.config
        suggestions: list[Suggestion] = []

        for line_number, code in iter_code_lines(context.source_lines):
            match = LOOP_DECLARATION.search(code)
            if match is None:
                continue

            line = context.metrics_for(line_number)
            snippet = context.text_of(line_number)
            iterations = literal_iterations(match.group(2))

            if iterations is not None:
                if iterations > config.large_loop_iterations:
                    if line is not None:
                        impact = scaled_impact(line, config.large_loop_factor, 0)
                    else:
                        impact = Impact(
                            estimated_savings=iterations * config.large_loop_fallback_per_iteration,
                            savings_percent=0.0,
                        )
                    suggestions.append(
                        Suggestion(
                            id=f"loop-large-{line_number}",
                            line_number=line_number,
                            severity="high",
                            category="loop",
                            title=f"Loop: {iterations} iterations",
                            description=(
                                f"Loop unrolls {iterations} times - reduce iterations or "
                                f"restructure to lower constraint count"
                            ),
                            impact=impact,
                            code_snippet=snippet,
                            suggested_fix="Shrink the range or hoist loop-invariant work out of the body",
                        )
                    )
            else:
                suggestions.append(
                    Suggestion(
                        id=f"loop-dynamic-{line_number}",
                        line_number=line_number,
                        severity="medium",
                        category="loop",
                        title="Loop: variable bounds",
                        description=(
                            "Loop has variable bounds - use compile-time constants "
                            "or fixed-size arrays"
                        ),
                        impact=scaled_impact(line, config.dynamic_loop_factor, config.dynamic_loop_fallback),
                        code_snippet=snippet,
                        suggested_fix="Loop to a constant upper bound and guard the body with a condition",
                    )
                )

            if has_loop_within(context.source_lines, line_number, config.nested_loop_window):
                suggestions.append(
                    Suggestion(
                        id=f"loop-nested-{line_number}",
                        line_number=line_number,
                        severity="high",
                        category="loop",
                        title="Nested loop",
                        description=(
                            "Nested loops create quadratic complexity - flatten logic, "
                            "use lookup tables, or restructure"
                        ),
                        impact=scaled_impact(line, config.nested_loop_factor, config.nested_loop_fallback),
                        code_snippet=snippet,
                    )
                )

        return suggestions
