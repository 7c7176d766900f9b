"""BEST_PRACTICES — circuit-wide size checks.

- very large circuit (gate total above the large-circuit threshold): high
- large circuit without the recursive-composition marker: medium
- one non-entry function holding most of the cost: medium
- high ACIR opcode total: medium
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from ..models import Impact, Suggestion

if TYPE_CHECKING:
    from ..protocols import RuleContext


class BestPracticeRule:
    name = "best_practices"

    def find(self, context: RuleContext) -> list[Suggestion]:
        config = context.config
        report = context.report
        suggestions: list[Suggestion] = []

        if report.total_gates > config.large_circuit_gates:
            suggestions.append(
                Suggestion(
                    id="best-practice-large-circuit",
                    line_number=0,
                    severity="high",
                    category="best-practice",
                    title="Very large circuit",
                    description=(
                        f"Circuit has {report.total_gates:,} gates - break into sub-circuits "
                        f"or use recursion to reduce proving time"
                    ),
                    impact=Impact(
                        estimated_savings=math.floor(report.total_gates * config.large_circuit_factor),
                        savings_percent=config.large_circuit_percent,
                    ),
                    learn_more_url="https://noir-lang.org/docs/noir/concepts/data_types",
                )
            )

        if report.total_gates > config.recursive_gates and config.recursive_marker not in context.source_code:
            suggestions.append(
                Suggestion(
                    id="best-practice-missing-recursive",
                    line_number=0,
                    severity="medium",
                    category="best-practice",
                    title="Large circuit without recursive composition",
                    description=(
                        f"Circuit has {report.total_gates:,} gates without "
                        f"{config.recursive_marker} attribute - consider using recursive proof "
                        f"composition to split into sub-circuits"
                    ),
                    impact=Impact(
                        estimated_savings=math.floor(report.total_gates * config.recursive_factor),
                        savings_percent=config.recursive_percent,
                    ),
                    suggested_fix=f"Mark sub-circuits with {config.recursive_marker} and verify their proofs",
                    learn_more_url="https://noir-lang.org/docs/noir/concepts/recursion",
                )
            )

        if report.top_functions:
            largest = report.top_functions[0]
            if (
                largest.percent_of_circuit > config.dominant_function_percent
                and largest.name != config.entry_point
            ):
                suggestions.append(
                    Suggestion(
                        id="best-practice-large-function",
                        line_number=largest.start_line,
                        severity="medium",
                        category="best-practice",
                        title=f"Function dominates: {largest.name}",
                        description=(
                            f'"{largest.name}" uses {largest.percent_of_circuit:.1f}% of circuit - '
                            f"split into smaller functions or optimize logic"
                        ),
                        impact=Impact(
                            estimated_savings=math.floor(largest.gate_count * config.dominant_function_factor),
                            savings_percent=largest.percent_of_circuit * config.dominant_function_factor,
                        ),
                        code_snippet=context.text_of(largest.start_line),
                    )
                )

        if report.total_constrained_ops > config.high_acir_ops:
            suggestions.append(
                Suggestion(
                    id="best-practice-high-acir",
                    line_number=0,
                    severity="medium",
                    category="best-practice",
                    title="High ACIR opcode count",
                    description=(
                        f"Circuit has {report.total_constrained_ops:,} ACIR opcodes - "
                        f"optimize hotspots to reduce proving time"
                    ),
                    impact=Impact(
                        estimated_savings=math.floor(report.total_constrained_ops * config.high_acir_factor),
                        savings_percent=config.high_acir_percent,
                    ),
                    learn_more_url="https://noir-lang.org/docs/",
                )
            )

        return suggestions
