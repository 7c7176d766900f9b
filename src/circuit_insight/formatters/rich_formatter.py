"""Rich terminal formatter for Circuit Insight."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..insights import InsightReport
from ..models import ComplexityReport
from .base import BaseFormatter

console = Console()

_SEVERITY_STYLE = {
    "high": "red bold",
    "medium": "yellow",
    "low": "dim",
}


def _heat_label(heat: float) -> str:
    if heat >= 0.75:
        return "[red bold]hot[/red bold]"
    elif heat >= 0.4:
        return "[yellow]warm[/yellow]"
    else:
        return "[green]cool[/green]"


class RichFormatter(BaseFormatter):
    """Summary panel plus hotspot, function and suggestion tables."""

    def render_report(self, report: ComplexityReport) -> None:
        primary = report.primary_file
        name = primary.file_name if primary else "-"
        console.print(
            Panel(
                f"[bold]{name}[/bold]\n"
                f"ACIR opcodes: [cyan]{report.total_constrained_ops:,}[/cyan]   "
                f"Brillig opcodes: [cyan]{report.total_unconstrained_ops:,}[/cyan]   "
                f"Gates: [cyan]{report.total_gates:,}[/cyan]",
                title="[bold cyan]Circuit Complexity[/bold cyan]",
                expand=False,
            )
        )

        if report.hotspots:
            table = Table(title="Hotspots", show_lines=False)
            table.add_column("File", style="blue")
            table.add_column("Line", justify="right")
            table.add_column("ACIR", justify="right")
            table.add_column("Brillig", justify="right")
            table.add_column("Gates", justify="right")
            table.add_column("% of circuit", justify="right")
            table.add_column("Heat")
            for line in report.hotspots:
                table.add_row(
                    line.file,
                    str(line.line_number),
                    f"{line.constrained_ops:,}",
                    f"{line.unconstrained_ops:,}",
                    f"{line.gate_count:,}",
                    f"{line.percent_of_circuit:.2f}%",
                    _heat_label(line.normalized_heat),
                )
            console.print(table)
        else:
            console.print("[green]No hotspots above the configured threshold.[/green]")

        if report.top_functions:
            table = Table(title="Top functions")
            table.add_column("Function", style="bold")
            table.add_column("Lines", justify="right")
            table.add_column("Total cost", justify="right")
            table.add_column("% of functions", justify="right")
            for fn in report.top_functions:
                table.add_row(
                    fn.name,
                    f"{fn.start_line}-{fn.end_line - 1}",
                    f"{fn.total_cost:,}",
                    f"{fn.percent_of_circuit:.1f}%",
                )
            console.print(table)

    def render_insights(self, insights: InsightReport) -> None:
        console.print(
            f"Complexity: [bold]{insights.circuit_complexity}[/bold]   "
            f"Potential savings: [bold green]{insights.total_potential_savings:,}[/bold green] "
            f"({insights.total_potential_savings_percent:.1f}%)"
        )
        if not insights.suggestions:
            console.print("[green]No optimization suggestions.[/green]")
            return

        table = Table(show_lines=True)
        table.add_column("Severity")
        table.add_column("Line", justify="right")
        table.add_column("Suggestion")
        table.add_column("Savings", justify="right")
        for s in insights.suggestions:
            style = _SEVERITY_STYLE.get(s.severity, "")
            where = str(s.line_number) if s.line_number else "-"
            if s.file:
                where = f"{s.file}:{where}"
            body = f"[bold]{s.title}[/bold]\n{s.description}"
            if s.suggested_fix:
                body += f"\n[dim]Fix:[/dim] {s.suggested_fix}"
            table.add_row(
                f"[{style}]{s.severity}[/{style}]" if style else s.severity,
                where,
                body,
                f"{s.impact.estimated_savings:,} ({s.impact.savings_percent:.1f}%)",
            )
        console.print(table)
