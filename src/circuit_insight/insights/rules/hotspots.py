"""HOTSPOTS — lines that carry a large share of the circuit's gates.

Severity: high at >= 20% of the circuit, low below 10%, medium between.
Lines without gate cost are skipped; their opcodes alone are not actionable.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from ..models import Impact, Suggestion

if TYPE_CHECKING:
    from ..protocols import RuleContext


class HotspotRule:
    """Flags report hotspots above the analyzer's percent threshold."""

    name = "hotspots"

    def find(self, context: RuleContext) -> list[Suggestion]:
        config = context.config
        suggestions: list[Suggestion] = []

        for hotspot in context.report.hotspots:
            if hotspot.percent_of_circuit < config.hotspot_threshold:
                continue
            if hotspot.gate_count == 0:
                continue

            in_primary = hotspot.file == context.file_name
            if hotspot.percent_of_circuit >= config.hotspot_high_percent:
                severity = "high"
            elif hotspot.percent_of_circuit < config.hotspot_low_percent:
                severity = "low"
            else:
                severity = "medium"

            percent = hotspot.percent_of_circuit
            suggestions.append(
                Suggestion(
                    id=f"hotspot-{hotspot.line_number}" if in_primary
                    else f"hotspot-{hotspot.file}-{hotspot.line_number}",
                    line_number=hotspot.line_number,
                    severity=severity,
                    category="general",
                    title=f"Hotspot: {percent:.1f}% of circuit",
                    description=(
                        f"Uses {percent:.1f}% of circuit ({hotspot.gate_count} gates) - "
                        f"split into smaller operations or optimize algorithm"
                    ),
                    impact=Impact(
                        estimated_savings=math.floor(hotspot.gate_count * config.hotspot_factor),
                        savings_percent=percent * config.hotspot_factor,
                    ),
                    code_snippet=context.text_of(hotspot.line_number) if in_primary else None,
                    file=None if in_primary else hotspot.file,
                )
            )

        return suggestions
