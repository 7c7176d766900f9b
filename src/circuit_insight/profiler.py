"""Interface to the external profiler that produces annotation text.

The compiler/profiler itself lives outside this package; callers inject an
object satisfying ProfilerBackend.
"""

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass
class ProfilerOutput:
    """Raw profiler text per cost domain; any of them may be missing."""

    constrained_text: Optional[str] = None  # ACIR opcodes flamegraph
    unconstrained_text: Optional[str] = None  # Brillig opcodes flamegraph
    gates_text: Optional[str] = None  # backend gates flamegraph
    error: Optional[str] = None  # upstream failure message, if any

    @property
    def is_empty(self) -> bool:
        return not (self.constrained_text or self.unconstrained_text or self.gates_text)


class ProfilerBackend(Protocol):
    """Produces profiler output for a source file.

    Implementations either return output with ``error`` set or raise; both
    surface to callers as ProfilingError.
    """

    def profile(self, source_code: str, manifest: Optional[str] = None) -> ProfilerOutput: ...
