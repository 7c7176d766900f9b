"""Analysis-related exceptions: empty input, upstream profiling, cache guard."""

from typing import Optional

from .base import CircuitInsightError


class AnalysisError(CircuitInsightError):
    """Base class for analysis-related errors."""
    pass


class EmptyInputError(AnalysisError):
    """Raised when neither source code nor any profiler text was supplied."""

    def __init__(self, reason: str = "no source code and no profiler output"):
        super().__init__(f"Nothing to analyze: {reason}", details={"reason": reason})
        self.reason = reason


class ProfilingError(AnalysisError):
    """Raised when the external profiler fails to produce cost data."""

    def __init__(self, reason: str, file_name: Optional[str] = None):
        details = {"reason": reason}
        if file_name:
            details["file"] = file_name

        super().__init__("Circuit profiling failed", details=details)
        self.reason = reason
        self.file_name = file_name


class ComputeInFlightError(AnalysisError):
    """Raised when a report for the same source hash is already being computed."""

    def __init__(self, source_hash: str):
        super().__init__(
            "Report computation already in flight",
            details={"source_hash": source_hash},
        )
        self.source_hash = source_hash
