"""Profiler text parsing."""

from .profile_text import ParsedProfile, parse_cost_records, unescape

__all__ = ["ParsedProfile", "parse_cost_records", "unescape"]
