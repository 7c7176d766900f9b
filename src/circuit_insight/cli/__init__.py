"""CLI entry point — registers all subcommands."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="circuit-insight",
    help="Circuit Insight - Cost hotspots and optimization hints for compiled circuits",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"circuit-insight {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Analyze profiler flamegraph output against the profiled source."""


# Import subcommands to register them
from .report import report as _report  # noqa: F401, E402
from .insights import insights as _insights  # noqa: F401, E402
