"""Base formatter interface for Circuit Insight output rendering."""

from abc import ABC, abstractmethod

from ..insights import InsightReport
from ..models import ComplexityReport


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render_report(self, report: ComplexityReport) -> None:
        """Render a complexity report to stdout."""

    @abstractmethod
    def render_insights(self, insights: InsightReport) -> None:
        """Render ranked suggestions to stdout."""
