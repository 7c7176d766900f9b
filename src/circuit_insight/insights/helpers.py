"""Lexical helpers shared by the analyzer rules.

These are textual heuristics: a line "is in a loop" when a loop header
appears within a fixed number of preceding lines, regardless of braces.
"""

from __future__ import annotations

import math
import re
from typing import Iterator, Optional

from ..models import LineMetric
from .models import Impact

LOOP_DECLARATION = re.compile(r"\bfor\s+(\w+)\s+in\s+(.+?)\s*\{")
# integer literal with optional digit separators and type suffix (1_000, 20u32)
_INT_LITERAL = r"(\d+(?:_\d+)*)(?:_?[ui]\d+)?"
LITERAL_RANGE = re.compile(rf"\(?\s*{_INT_LITERAL}\s*\.\.(=?)\s*{_INT_LITERAL}\s*\)?")


def code_part(text: str) -> str:
    """Text before a line comment; empty for block-comment lines."""
    stripped = text.strip()
    if stripped.startswith(("/*", "*")):
        return ""
    return text.split("//", 1)[0]


def iter_code_lines(source_lines: list[str]) -> Iterator[tuple[int, str]]:
    """Yield (1-based line number, code part) for lines that have code."""
    for index, text in enumerate(source_lines):
        code = code_part(text)
        if code.strip():
            yield index + 1, code


def has_loop_within(source_lines: list[str], line_number: int, window: int) -> bool:
    """True if one of the ``window`` lines before ``line_number`` opens a loop."""
    start = max(0, line_number - 1 - window)
    return any(
        LOOP_DECLARATION.search(code_part(text)) for text in source_lines[start : line_number - 1]
    )


def literal_iterations(range_text: str) -> Optional[int]:
    """Iteration count of a literal ``a..b`` / ``a..=b`` range, else None.

    Parentheses around the range and typed literals such as ``0..20u32``
    still count as literal.
    """
    match = LITERAL_RANGE.fullmatch(range_text.strip())
    if match is None:
        return None
    start, inclusive, end = int(match.group(1)), match.group(2), int(match.group(3))
    return end - start + (1 if inclusive else 0)


def scaled_impact(line: Optional[LineMetric], factor: float, fallback: int) -> Impact:
    """Savings as a share of the line's gate cost, or a fixed fallback."""
    if line is None:
        return Impact(estimated_savings=fallback, savings_percent=0.0)
    return Impact(
        estimated_savings=math.floor(line.gate_count * factor),
        savings_percent=line.percent_of_circuit * factor,
    )
