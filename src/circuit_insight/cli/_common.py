"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import EngineConfig, load_config

console = Console(stderr=True)

FORMATS = ("rich", "json")


def resolve_config(
    config: Optional[Path] = None,
    threshold: Optional[float] = None,
) -> EngineConfig:
    """Build configuration from CLI options.

    ``threshold`` is a percent of the circuit. It selects report hotspots by
    percentage and also sets the analyzer's hotspot threshold.
    """
    overrides = {}
    if threshold is not None:
        overrides["hotspots"] = {"minimum_threshold": threshold / 100, "sort_by": "percentage"}
        overrides["hotspot_threshold"] = threshold
    return load_config(config_file=config, **overrides)


def read_optional(path: Optional[Path]) -> Optional[str]:
    """Read a profiler output file if one was given."""
    if path is None:
        return None
    return path.read_text(encoding="utf-8")


def check_format(value: str) -> str:
    if value not in FORMATS:
        raise typer.BadParameter(f"must be one of: {', '.join(FORMATS)}")
    return value


def source_option() -> Path:
    return typer.Argument(
        ...,
        help="Source file that was profiled",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    )


def profile_option(flag: str, help_text: str) -> Optional[Path]:
    return typer.Option(
        None,
        flag,
        help=help_text,
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    )
