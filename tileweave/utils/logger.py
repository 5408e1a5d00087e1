# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileWeave — Structured Logging
JSON-formatted logs via structlog. Every log entry carries the app name
and, inside a pipeline run, the tileset source path.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from tileweave.config import get_settings


def _add_app_info(
    logger: Any, method: str, event_dict: EventDict
) -> EventDict:
    """Inject application name into every log entry."""
    event_dict["app"] = "tileweave"
    return event_dict


def configure_logging(log_level: str | None = None) -> None:
    """
    Configure structlog for JSON output by default and
    human-readable console output at DEBUG level.
    Called once by the CLI before any work starts.

    Args:
        log_level: Overrides Settings.log_level when given.
    """
    level_name = (log_level or get_settings().log_level).upper()
    level = getattr(logging, level_name, logging.INFO)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _add_app_info,
    ]

    if level_name == "DEBUG":
        # Pretty console output for local development
        processors: list[Processor] = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True)
        ]
    else:
        processors = shared_processors + [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        # Logs go to stderr so the CLI summary on stdout stays clean
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )


def get_logger(name: str = "tileweave") -> structlog.BoundLogger:
    """
    Return a structlog bound logger.

    Usage:
        log = get_logger(__name__)
        log.info("adjacency_build_complete", n_tiles=64, edges=210)

    To bind the tileset source for a whole run:
        structlog.contextvars.bind_contextvars(source=str(path))
        log.info("stage_start", stage="slicing")
        structlog.contextvars.clear_contextvars()
    """
    return structlog.get_logger(name)
