"""Parser for profiler annotation text.

The profiler emits one flamegraph per cost domain. Each frame carries a
title of the form::

    <title>main.nr:3:12::x != 0 (2 opcodes, 4.35%)</title>

Only this tag shape is parsed; the surrounding container (SVG, log file)
is ignored. Fragments that do not match are skipped without error.
"""

from __future__ import annotations

import html
import re
from collections import defaultdict
from functools import lru_cache
from typing import Optional

from ..logging_config import get_logger
from ..models import CostRecord

logger = get_logger(__name__)

DEFAULT_EXTENSION = ".nr"

_MARKUP = re.compile(r"<[^>]*>")
_TITLE_OPEN = re.compile(r"<title>")


@lru_cache(maxsize=8)
def _tag_pattern(extension: str) -> re.Pattern[str]:
    return re.compile(
        r"<title>"
        rf"([^:<>\n]+?{re.escape(extension)})"  # file
        r":(\d+):(\d+)::"  # line, column
        r"((?:(?!</?title>)[^\n])+?)"  # expression, never spans another tag
        r" \((\d+) opcodes, (\d+(?:\.\d+)?)%\)"
        r"</title>"
    )


def unescape(text: str) -> str:
    """Strip markup tags, then decode HTML entities.

    Tags are removed before decoding so that escaped angle brackets in
    generic expressions (``foo::&lt;Field&gt;``) survive as text.

    >>> unescape("a &gt; b &amp;&amp; c")
    'a > b && c'
    """
    return html.unescape(_MARKUP.sub("", text)).strip()


def parse_cost_records(raw_text: Optional[str], extension: str = DEFAULT_EXTENSION) -> list[CostRecord]:
    """Extract every well-formed cost annotation from ``raw_text``.

    Returns records sorted by (line, column); records with equal keys keep
    their input order. Never raises for malformed input.
    """
    if not raw_text:
        return []

    records: list[CostRecord] = []
    for match in _tag_pattern(extension).finditer(raw_text):
        file_name, line, column, expression, cost, share = match.groups()
        line_no = int(line)
        column_no = int(column)
        if line_no < 1 or column_no < 1:
            continue

        records.append(
            CostRecord(
                file=file_name.strip(),
                line=line_no,
                column=column_no,
                expression=unescape(expression),
                cost=int(cost),
                share_percent=float(share),
            )
        )

    skipped = len(_TITLE_OPEN.findall(raw_text)) - len(records)
    if skipped > 0:
        logger.debug(f"Skipped {skipped} unparseable annotation(s)")
    logger.debug(f"Parsed {len(records)} cost records from {len(raw_text)} chars")

    records.sort(key=lambda r: (r.line, r.column))
    return records


class ParsedProfile:
    """One parsed profiler output with per-line and per-file lookups.

    Parsing happens once, in the constructor; every accessor reads the
    indexed records.
    """

    def __init__(self, raw_text: Optional[str], extension: str = DEFAULT_EXTENSION):
        self.records = parse_cost_records(raw_text, extension)
        self._by_file: dict[str, list[CostRecord]] = defaultdict(list)
        self._by_line: dict[int, list[CostRecord]] = defaultdict(list)
        for record in self.records:
            self._by_file[record.file].append(record)
            self._by_line[record.line].append(record)

    def __len__(self) -> int:
        return len(self.records)

    def file_names(self) -> list[str]:
        """Distinct file names in first-seen order."""
        return list(self._by_file)

    def for_file(self, file_name: str) -> list[CostRecord]:
        return list(self._by_file.get(file_name, []))

    def for_line(self, line: int, file_name: Optional[str] = None) -> list[CostRecord]:
        records = self._by_line.get(line, [])
        if file_name is None:
            return list(records)
        return [r for r in records if r.file == file_name]

    def total_for_line(self, line: int, file_name: Optional[str] = None) -> int:
        return sum(r.cost for r in self.for_line(line, file_name))

    def expressions_for_line(self, line: int, file_name: Optional[str] = None) -> list[str]:
        return [r.expression for r in self.for_line(line, file_name)]

    def lines(self, file_name: Optional[str] = None) -> list[int]:
        """Sorted line numbers that carry at least one record."""
        if file_name is None:
            return sorted(self._by_line)
        return sorted({r.line for r in self._by_file.get(file_name, [])})
