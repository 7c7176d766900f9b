"""Configuration loading and management for Circuit Insight.

Configuration sources are merged in priority order:
    1. Defaults (defined in the dataclasses below)
    2. Project config (./circuit-insight.toml)
    3. Explicit config file
    4. Environment variables (CIRCUIT_INSIGHT_* prefix)
    5. Keyword overrides

Example:
    >>> config = load_config(cache_ttl_seconds=60, hotspot_threshold=2.5)
    >>> config.metrics.cache_ttl_seconds
    60
    >>> config.analyzer.hotspot_threshold
    2.5
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Literal, Mapping, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

SortKey = Literal["percentage", "absolute"]

METRIC_TYPES = ("acir", "brillig", "gates", "total")

RULE_NAMES = frozenset(
    {"hotspots", "loops", "arithmetic", "arrays", "hash_operations", "best_practices"}
)

DEFAULT_HASH_FUNCTIONS = (
    "poseidon",
    "pedersen",
    "keccak",
    "blake2s",
    "blake3",
    "sha256",
    "sha512",
    "mimc",
)

PROJECT_CONFIG_NAME = "circuit-insight.toml"
ENV_PREFIX = "CIRCUIT_INSIGHT_"


def _require(condition: bool, key: str, value: Any, reason: str) -> None:
    if not condition:
        raise InvalidConfigError(key, value, reason)


@dataclass(frozen=True)
class HotspotCriteria:
    """How hotspot lines are selected from the aggregated lines.

    Attributes:
        metric_type: Domain used for absolute filtering/sorting
            ("acir", "brillig", "gates" or "total")
        minimum_threshold: Fraction of the circuit (0.05 = 5%) when sorting by
            percentage, raw cost when sorting by absolute value
        sort_by: "percentage" or "absolute"
        max_results: Upper bound on the hotspot list length
    """

    metric_type: str = "acir"
    minimum_threshold: float = 0.05
    sort_by: SortKey = "percentage"
    max_results: int = 10

    def __post_init__(self) -> None:
        _require(
            self.metric_type in METRIC_TYPES,
            "metric_type", self.metric_type, f"must be one of {', '.join(METRIC_TYPES)}",
        )
        _require(
            self.sort_by in ("percentage", "absolute"),
            "sort_by", self.sort_by, "must be 'percentage' or 'absolute'",
        )
        _require(self.minimum_threshold >= 0, "minimum_threshold", self.minimum_threshold,
                 "must be non-negative")
        _require(self.max_results >= 0, "max_results", self.max_results, "must be non-negative")


@dataclass(frozen=True)
class MetricsConfig:
    """Aggregation and cache settings.

    Attributes:
        cache_ttl_seconds: Age after which a cached report is recomputed
        history_depth: Number of prior reports kept for delta comparison
        top_functions_limit: Length of ComplexityReport.top_functions
        source_extension: Extension a profiler tag's file must end with
        default_file_name: File name used when the caller passes none
        hotspots: Hotspot selection criteria
    """

    cache_ttl_seconds: float = 300.0
    history_depth: int = 10
    top_functions_limit: int = 5
    source_extension: str = ".nr"
    default_file_name: str = "main.nr"
    hotspots: HotspotCriteria = field(default_factory=HotspotCriteria)

    def __post_init__(self) -> None:
        _require(self.cache_ttl_seconds >= 0, "cache_ttl_seconds", self.cache_ttl_seconds,
                 "must be non-negative")
        _require(self.history_depth >= 1, "history_depth", self.history_depth,
                 "must be at least 1")
        _require(self.top_functions_limit >= 0, "top_functions_limit", self.top_functions_limit,
                 "must be non-negative")
        _require(self.source_extension.startswith("."), "source_extension",
                 self.source_extension, "must start with '.'")


@dataclass(frozen=True)
class AnalyzerConfig:
    """Thresholds, savings multipliers and rule toggles for the analyzer.

    The multipliers are product policy, not measured values. They estimate
    how much of a line's gate cost a typical rewrite removes.
    """

    # Hotspot rule
    hotspot_threshold: float = 5.0  # percent of circuit
    hotspot_high_percent: float = 20.0
    hotspot_low_percent: float = 10.0
    hotspot_factor: float = 0.3

    # Loop rule
    large_loop_iterations: int = 10
    large_loop_factor: float = 0.4
    large_loop_fallback_per_iteration: int = 10
    dynamic_loop_factor: float = 0.3
    dynamic_loop_fallback: int = 50
    nested_loop_window: int = 5
    nested_loop_factor: float = 0.5
    nested_loop_fallback: int = 100

    # Arithmetic rule
    division_factor: float = 0.4
    division_fallback: int = 20

    # Array rule
    vec_savings: int = 30
    vec_savings_percent: float = 0.5
    push_savings: int = 10
    push_savings_percent: float = 0.2

    # Hash-in-loop rule
    hash_loop_window: int = 10
    hash_factor: float = 0.5
    hash_fallback: int = 100
    hash_functions: tuple[str, ...] = DEFAULT_HASH_FUNCTIONS

    # Best-practice rules
    large_circuit_gates: int = 100_000
    large_circuit_factor: float = 0.2
    large_circuit_percent: float = 20.0
    recursive_gates: int = 50_000
    recursive_factor: float = 0.15
    recursive_percent: float = 15.0
    recursive_marker: str = "#[recursive]"
    dominant_function_percent: float = 50.0
    dominant_function_factor: float = 0.25
    entry_point: str = "main"
    high_acir_ops: int = 10_000
    high_acir_factor: float = 0.15
    high_acir_percent: float = 15.0

    # Complexity classification (gate counts)
    complexity_low: int = 1_000
    complexity_medium: int = 10_000

    enabled_rules: frozenset[str] = RULE_NAMES

    def __post_init__(self) -> None:
        factor_fields = [
            "hotspot_factor",
            "large_loop_factor",
            "dynamic_loop_factor",
            "nested_loop_factor",
            "division_factor",
            "hash_factor",
            "large_circuit_factor",
            "recursive_factor",
            "dominant_function_factor",
            "high_acir_factor",
        ]
        for field_name in factor_fields:
            value = getattr(self, field_name)
            _require(0.0 <= value <= 1.0, field_name, value, "must be between 0.0 and 1.0")

        _require(self.hotspot_low_percent <= self.hotspot_high_percent, "hotspot_low_percent",
                 self.hotspot_low_percent, "must not exceed hotspot_high_percent")
        _require(self.complexity_low <= self.complexity_medium, "complexity_low",
                 self.complexity_low, "must not exceed complexity_medium")
        _require(self.nested_loop_window >= 1, "nested_loop_window", self.nested_loop_window,
                 "must be at least 1")
        _require(self.hash_loop_window >= 1, "hash_loop_window", self.hash_loop_window,
                 "must be at least 1")

        # TOML and env sources hand over lists; normalize before checking
        object.__setattr__(self, "enabled_rules", frozenset(self.enabled_rules))
        object.__setattr__(self, "hash_functions", tuple(self.hash_functions))
        unknown = self.enabled_rules - RULE_NAMES
        _require(not unknown, "enabled_rules", sorted(unknown), "unknown rule names")


@dataclass(frozen=True)
class EngineConfig:
    """Complete configuration for the engine."""

    metrics: MetricsConfig = field(default_factory=MetricsConfig)
    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)


DEFAULT_CONFIG = EngineConfig()


def merge_config(config: EngineConfig, overrides: Mapping[str, Any]) -> EngineConfig:
    """Apply flat or sectioned overrides to an existing configuration.

    Keys may be any MetricsConfig or AnalyzerConfig field name, the section
    names "metrics"/"analyzer" holding dicts, or "hotspots" holding either a
    dict or a HotspotCriteria.

    Raises:
        ConfigurationError: On unknown keys
        InvalidConfigError: On values that fail validation
    """
    metrics_fields = {f.name for f in fields(MetricsConfig)}
    analyzer_fields = {f.name for f in fields(AnalyzerConfig)}

    metrics_updates: dict[str, Any] = {}
    analyzer_updates: dict[str, Any] = {}

    flat = dict(overrides)
    for section, target in (("metrics", metrics_updates), ("analyzer", analyzer_updates)):
        section_values = flat.pop(section, None)
        if section_values is None:
            continue
        if not isinstance(section_values, Mapping):
            raise ConfigurationError(f"[{section}] must be a table, got {type(section_values).__name__}")
        target.update(section_values)

    for key, value in flat.items():
        if key in metrics_fields:
            metrics_updates[key] = value
        elif key in analyzer_fields:
            analyzer_updates[key] = value
        else:
            raise ConfigurationError(f"Unknown configuration key: {key}")

    for key in metrics_updates:
        if key not in metrics_fields:
            raise ConfigurationError(f"Unknown [metrics] key: {key}")
    for key in analyzer_updates:
        if key not in analyzer_fields:
            raise ConfigurationError(f"Unknown [analyzer] key: {key}")

    hotspots = metrics_updates.pop("hotspots", None)
    if hotspots is not None:
        if isinstance(hotspots, HotspotCriteria):
            metrics_updates["hotspots"] = hotspots
        elif isinstance(hotspots, Mapping):
            try:
                metrics_updates["hotspots"] = replace(config.metrics.hotspots, **hotspots)
            except TypeError as e:
                raise ConfigurationError(f"Invalid [metrics.hotspots] config: {e}")
        else:
            raise ConfigurationError("hotspots must be a table or HotspotCriteria")

    metrics = replace(config.metrics, **metrics_updates) if metrics_updates else config.metrics
    analyzer = replace(config.analyzer, **analyzer_updates) if analyzer_updates else config.analyzer
    return EngineConfig(metrics=metrics, analyzer=analyzer)


def load_config(config_file: Optional[Path] = None, **overrides) -> EngineConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit TOML file path
        **overrides: Direct overrides (flat field names or sections)

    Returns:
        Validated EngineConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
    """
    config = DEFAULT_CONFIG

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        config = _merge_file(config, project_config)

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        config = _merge_file(config, config_file)

    env_overrides = _load_env_vars()
    if env_overrides:
        config = merge_config(config, env_overrides)

    if overrides:
        config = merge_config(config, overrides)

    return config


def _merge_file(config: EngineConfig, path: Path) -> EngineConfig:
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")
    return merge_config(config, data)


def _load_env_vars() -> dict[str, Any]:
    """Load scalar settings from CIRCUIT_INSIGHT_* environment variables.

    Examples:
        CIRCUIT_INSIGHT_CACHE_TTL_SECONDS=60
        CIRCUIT_INSIGHT_HOTSPOT_THRESHOLD=2.5
        CIRCUIT_INSIGHT_ENTRY_POINT=main

    Returns:
        Dict of field_name -> parsed_value for any variables found.
    """
    result: dict[str, Any] = {}

    for config_cls in (MetricsConfig, AnalyzerConfig):
        type_hints = get_type_hints(config_cls)
        for config_field in fields(config_cls):
            env_key = f"{ENV_PREFIX}{config_field.name.upper()}"
            env_value = os.environ.get(env_key)
            if env_value is None:
                continue

            try:
                parsed = _parse_env_value(env_value, type_hints[config_field.name])
            except ValueError as e:
                raise ConfigurationError(f"Invalid {env_key}: {e}")
            if parsed is not None:
                result[config_field.name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment string to a scalar field type; None if unsupported."""
    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    origin = getattr(type_hint, "__origin__", None)
    if type_hint is str or origin is Literal:
        return value

    # Nested dataclasses and collections are TOML-only
    return None
