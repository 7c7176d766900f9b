"""ARITHMETIC — division, which costs a field inversion per use."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..helpers import iter_code_lines, scaled_impact
from ..models import Suggestion

if TYPE_CHECKING:
    from ..protocols import RuleContext


class ArithmeticRule:
    name = "arithmetic"

    def find(self, context: RuleContext) -> list[Suggestion]:
        config = context.config
        suggestions: list[Suggestion] = []

        for line_number, code in iter_code_lines(context.source_lines):
            if "/" not in code:
                continue

            suggestions.append(
                Suggestion(
                    id=f"arithmetic-division-{line_number}",
                    line_number=line_number,
                    severity="medium",
                    category="arithmetic",
                    title="Division",
                    description=(
                        "Division requires expensive field inversion - multiply by modular "
                        "inverse for constants or restructure logic to avoid division"
                    ),
                    impact=scaled_impact(
                        context.metrics_for(line_number), config.division_factor, config.division_fallback
                    ),
                    code_snippet=context.text_of(line_number),
                    suggested_fix="Pass the quotient as a hint and constrain q * d == n instead",
                )
            )

        return suggestions
