"""
Logging configuration for Circuit Insight.

Handlers are attached to the ``circuit_insight`` logger only, so embedding
the engine in another application leaves that application's root logger
alone. The CLI calls setup_logging() once per command; calling it again
replaces the handlers it installed before instead of stacking them.
"""

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_ROOT_LOGGER = "circuit_insight"

LOG_LEVEL_ENV = "CIRCUIT_INSIGHT_LOG_LEVEL"

# marks handlers owned by setup_logging()
_HANDLER_FLAG = "_circuit_insight_handler"


def resolve_level(verbose: bool = False, quiet: bool = False) -> tuple[int, Optional[str]]:
    """
    Pick the log level from CLI flags, then CIRCUIT_INSIGHT_LOG_LEVEL.

    Returns:
        (level, rejected) where ``rejected`` is an unrecognized environment
        value that was ignored, or None
    """
    if quiet:
        return logging.ERROR, None
    if verbose:
        return logging.DEBUG, None

    env_value = os.environ.get(LOG_LEVEL_ENV, "").strip()
    if not env_value:
        return logging.WARNING, None

    level = logging.getLevelName(env_value.upper())
    if isinstance(level, int):
        return level, None
    return logging.WARNING, env_value


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure the circuit_insight logger with a rich stderr handler.

    Args:
        verbose: Enable DEBUG level logging, with paths and traceback locals
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path that also receives every record

    Returns:
        Configured logger instance for circuit_insight
    """
    level, rejected = resolve_level(verbose, quiet)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=True,
            show_time=True,
            show_path=verbose,
            log_time_format="[%X]",
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logger = logging.getLogger(_ROOT_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_FLAG, False):
            logger.removeHandler(handler)
            handler.close()

    for handler in handlers:
        setattr(handler, _HANDLER_FLAG, True)
        logger.addHandler(handler)

    logger.setLevel(level)
    logger.propagate = False

    if rejected is not None:
        logger.warning(f"Ignoring unknown {LOG_LEVEL_ENV}={rejected!r}, using WARNING")

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger below the circuit_insight namespace.

    Args:
        name: Module name (e.g., 'circuit_insight.parsing' or 'parsing')
              If None, returns the root circuit_insight logger
    """
    if name is None:
        return logging.getLogger(_ROOT_LOGGER)

    if name != _ROOT_LOGGER and not name.startswith(_ROOT_LOGGER + "."):
        name = f"{_ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
