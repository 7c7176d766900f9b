"""ARRAYS — dynamic vectors and push-style growth.

Impacts are fixed: the cost of a Vec is spread over every access, not the
line that declares it.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ..helpers import iter_code_lines
from ..models import Impact, Suggestion

if TYPE_CHECKING:
    from ..protocols import RuleContext

DYNAMIC_ARRAY = re.compile(r"\bVec\s*<")
PUSH_CALL = re.compile(r"\.(?:push|push_back|push_front|append)\s*\(")


class ArrayRule:
    name = "arrays"

    def find(self, context: RuleContext) -> list[Suggestion]:
        config = context.config
        suggestions: list[Suggestion] = []

        for line_number, code in iter_code_lines(context.source_lines):
            if DYNAMIC_ARRAY.search(code):
                suggestions.append(
                    Suggestion(
                        id=f"array-vec-{line_number}",
                        line_number=line_number,
                        severity="medium",
                        category="storage",
                        title="Dynamic array (Vec)",
                        description=(
                            "Vec is less efficient than fixed-size arrays - use "
                            "[Field; 10] instead of Vec<Field>"
                        ),
                        impact=Impact(
                            estimated_savings=config.vec_savings,
                            savings_percent=config.vec_savings_percent,
                        ),
                        code_snippet=context.text_of(line_number),
                        suggested_fix="Use a fixed-size array or BoundedVec with a compile-time capacity",
                    )
                )

            if PUSH_CALL.search(code):
                suggestions.append(
                    Suggestion(
                        id=f"array-push-{line_number}",
                        line_number=line_number,
                        severity="low",
                        category="storage",
                        title="Array push",
                        description="push() adds overhead - use fixed-size arrays with manual indexing",
                        impact=Impact(
                            estimated_savings=config.push_savings,
                            savings_percent=config.push_savings_percent,
                        ),
                        code_snippet=context.text_of(line_number),
                    )
                )

        return suggestions
