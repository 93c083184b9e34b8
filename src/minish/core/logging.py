# src/minish/core/logging.py
"""Structured run events for minish.

The runner logs seed selection, failures and shrink results as structlog
events. Reports meant for a person reading test output go through
minish.engine.reporting instead.

configure_logging() is opt-in. It attaches one handler to the "minish"
logger, formatting both structlog events and plain logging records with
the same processor chain, and leaves the root logger to the host.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter


def _remove_internal_fields(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Drop the _record and _from_structlog keys ProcessorFormatter adds."""
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
) -> None:
    """Send minish run events to stderr.

    Args:
        json_output: One JSON object per event instead of console text.
        level: Minimum level name for the minish logger, e.g. "DEBUG".
    """
    log_level = getattr(logging, level.upper())

    # Applied to structlog events and foreign logging records alike
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        final_processors: list[Any] = [
            _remove_internal_fields,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        final_processors = [
            _remove_internal_fields,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=[*shared_processors, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Caching off so tests can reconfigure logging
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        ProcessorFormatter(
            processors=final_processors,
            foreign_pre_chain=shared_processors,
        )
    )

    # Only the package logger is touched; the host test suite owns the root.
    package_logger = logging.getLogger("minish")
    package_logger.handlers = [handler]
    package_logger.setLevel(log_level)
    package_logger.propagate = False


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Bound structlog logger for ``name`` (usually the module's __name__)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
