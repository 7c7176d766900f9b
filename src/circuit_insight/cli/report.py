"""Report CLI command -- per-line and per-function cost breakdown."""

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
def report(
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
    threshold: Optional[float] = typer.Option(
        None,
        "--threshold",
        "-t",
        help="Hotspot threshold (percent of circuit)",
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
    Show where a circuit's cost comes from.

    Parses up to three profiler outputs, attributes each cost to its source
    line, and prints the hotspot lines and the costliest functions.

    [bold cyan]Examples:[/bold cyan]

      circuit-insight report src/main.nr --acir acir.svg --gates gates.svg

      circuit-insight report src/main.nr --acir acir.svg --format json
    """
    logger = setup_logging(verbose=verbose)

    try:
        engine_config = resolve_config(config=config, threshold=threshold)
        with CircuitInsightEngine(engine_config) as engine:
            result = engine.generate_complexity_report(
                read_optional(acir),
                read_optional(brillig),
                read_optional(gates),
                source_code=source.read_text(encoding="utf-8"),
                file_name=source.name,
            )
        get_formatter(fmt).render_report(result)

    except CircuitInsightError as e:
        logger.debug("Report generation failed", exc_info=True)
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
