"""Insights CLI command -- ranked optimization suggestions."""

from pathlib import Path
from typing import Optional

import typer

from ..api import CircuitInsightEngine
from ..exceptions import CircuitInsightError
from ..formatters import get_formatter
from ..logging_config import setup_logging
from . import app
from ._common import (
    check_format,
    console,
    profile_option,
    read_optional,
    resolve_config,
    source_option,
)


@app.command()
def insights(
    source: Path = source_option(),
    acir: Optional[Path] = profile_option("--acir", "ACIR opcodes flamegraph (SVG)"),
    brillig: Optional[Path] = profile_option("--brillig", "Brillig opcodes flamegraph (SVG)"),
    gates: Optional[Path] = profile_option("--gates", "Backend gates flamegraph (SVG)"),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich, json",
        callback=check_format,
    ),
    severity: Optional[str] = typer.Option(
        None,
        "--severity",
        "-s",
        help="Only show suggestions of this severity (high, medium, low)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
):
    """
    Suggest optimizations for a profiled circuit.

    Runs every enabled rule over the cost report and the source text and
    prints the suggestions ranked by severity, then by estimated savings.

    [bold cyan]Examples:[/bold cyan]

      circuit-insight insights src/main.nr --acir acir.svg --gates gates.svg

      circuit-insight insights src/main.nr --acir acir.svg --severity high
    """
    logger = setup_logging(verbose=verbose)

    if severity is not None and severity not in ("high", "medium", "low"):
        console.print(f"[red]Error:[/red] unknown severity {severity!r}")
        raise typer.Exit(2)

    try:
        engine_config = resolve_config(config=config)
        source_code = source.read_text(encoding="utf-8")
        with CircuitInsightEngine(engine_config) as engine:
            result = engine.generate_complexity_report(
                read_optional(acir),
                read_optional(brillig),
                read_optional(gates),
                source_code=source_code,
                file_name=source.name,
            )
            found = engine.analyze_circuit(result, source_code)

        if severity is not None:
            found.suggestions = found.by_severity(severity)
        get_formatter(fmt).render_insights(found)

    except CircuitInsightError as e:
        logger.debug("Insight analysis failed", exc_info=True)
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
