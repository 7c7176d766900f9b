"""HASH_OPERATIONS — hash calls repeated inside a loop body.

A hash line counts as "inside a loop" when a loop header appears within
the lookback window above it. Import lines are ignored.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ..helpers import has_loop_within, iter_code_lines, scaled_impact
from ..models import Suggestion

if TYPE_CHECKING:
    from ..protocols import RuleContext

LEARN_MORE_URL = "https://noir-lang.org/docs/noir/standard_library/cryptographic_primitives"


class HashInLoopRule:
    name = "hash_operations"

    def find(self, context: RuleContext) -> list[Suggestion]:
        config = context.config
        if not config.hash_functions:
            return []

        hash_call = re.compile(
            "|".join(re.escape(name) for name in config.hash_functions), re.IGNORECASE
        )
        suggestions: list[Suggestion] = []

        for line_number, code in iter_code_lines(context.source_lines):
            if code.lstrip().startswith("use "):
                continue
            if not hash_call.search(code):
                continue
            if not has_loop_within(context.source_lines, line_number, config.hash_loop_window):
                continue

            suggestions.append(
                Suggestion(
                    id=f"hash-in-loop-{line_number}",
                    line_number=line_number,
                    severity="high",
                    category="algorithm",
                    title="Hash function inside loop",
                    description=(
                        "Hash function called inside loop - move hash calls outside loop "
                        "or batch with Merkle tree structure"
                    ),
                    impact=scaled_impact(
                        context.metrics_for(line_number), config.hash_factor, config.hash_fallback
                    ),
                    code_snippet=context.text_of(line_number),
                    suggested_fix="Hash the collected inputs once after the loop",
                    learn_more_url=LEARN_MORE_URL,
                )
            )

        return suggestions
