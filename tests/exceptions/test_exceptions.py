"""Tests for the exception hierarchy."""

import pytest

from circuit_insight.exceptions import (
    AnalysisError,
    CircuitInsightError,
    ComputeInFlightError,
    ConfigurationError,
    EmptyInputError,
    InvalidConfigError,
    ProfilingError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "error",
        [
            EmptyInputError(),
            ProfilingError("nargo exited with status 1"),
            ComputeInFlightError("abc123"),
        ],
    )
    def test_analysis_errors(self, error):
        assert isinstance(error, AnalysisError)
        assert isinstance(error, CircuitInsightError)

    def test_config_errors(self):
        error = InvalidConfigError("history_depth", 0, "must be at least 1")
        assert isinstance(error, ConfigurationError)
        assert isinstance(error, CircuitInsightError)


class TestDetails:
    def test_message_without_details(self):
        assert str(CircuitInsightError("boom")) == "boom"

    def test_details_appended(self):
        error = CircuitInsightError("boom", details={"file": "main.nr"})
        assert str(error) == "boom (file=main.nr)"

    def test_empty_input_reason(self):
        error = EmptyInputError()
        assert error.reason == "no source code and no profiler output"
        assert "Nothing to analyze" in str(error)

    def test_profiling_error_file(self):
        error = ProfilingError("timeout", file_name="main.nr")
        assert error.reason == "timeout"
        assert error.details == {"reason": "timeout", "file": "main.nr"}

    def test_profiling_error_without_file(self):
        assert "file" not in ProfilingError("timeout").details

    def test_compute_in_flight_hash(self):
        error = ComputeInFlightError("abc123")
        assert error.source_hash == "abc123"
        assert "abc123" in str(error)

    def test_invalid_config_fields(self):
        error = InvalidConfigError("hash_factor", 1.5, "must be between 0.0 and 1.0")
        assert error.key == "hash_factor"
        assert error.value == 1.5
        assert error.details["value"] == "1.5"
