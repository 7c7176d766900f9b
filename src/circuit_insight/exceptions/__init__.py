"""Exception hierarchy for Circuit Insight."""

from .analysis import (
    AnalysisError,
    ComputeInFlightError,
    EmptyInputError,
    ProfilingError,
)
from .base import CircuitInsightError
from .config import ConfigurationError, InvalidConfigError

__all__ = [
    "CircuitInsightError",
    "AnalysisError",
    "EmptyInputError",
    "ProfilingError",
    "ComputeInFlightError",
    "ConfigurationError",
    "InvalidConfigError",
]
