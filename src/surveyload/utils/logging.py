"""
Logging for surveyload.

Every event goes to stderr, leaving stdout to the validation report. Loads
bind the source file and validation mode, so row-level warnings can be traced
back to the file that produced them.
"""

import logging
import sys
from typing import Any

import structlog


def _renderer(json_output: bool) -> list[structlog.types.Processor]:
    if json_output:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """
    Route surveyload events to stderr at the given level.

    Safe to call more than once; the CLI calls it after reading the survey
    config.

    Args:
        level: Minimum level name, e.g. "WARNING" to hide per-load progress.
        json_output: Emit one JSON object per event (for log collectors).
    """
    threshold = getattr(logging, level.upper(), logging.INFO)

    # Third-party libraries log through the standard library
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=threshold)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            *_renderer(json_output),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        # Not cached: the stream is resolved again after reconfiguration
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Module logger; pass __name__."""
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> structlog.contextvars.bound_contextvars:
    """
    Attach fields to every event logged inside a with block.

    Example:
        with log_context(source="pses_2024.csv", mode="fail_fast"):
            log.warning("Data error", line=5)  # carries source and mode
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
