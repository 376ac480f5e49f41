"""Logging configuration using structlog for structured logging."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger

# Queries are user input; keep log lines bounded.
MAX_LOGGED_QUERY_LENGTH = 64


def configure_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_logs: bool = True,
    enable_performance_logging: bool = True,
) -> FilteringBoundLogger:
    """Configure structured logging with structlog.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path for file logging
        json_logs: Whether to use JSON formatting
        enable_performance_logging: Whether performance metrics are emitted

    Returns:
        Configured structlog logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if not enable_performance_logging:
        processors.insert(0, _drop_performance_events)

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
    )
    logging.getLogger().setLevel(numeric_level)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # Rotating file handler with 10MB max size
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        logging.getLogger().addHandler(file_handler)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger()


def _drop_performance_events(
    logger: Any, method_name: str, event_dict: dict
) -> dict:
    if event_dict.get("metric_type") == "performance":
        raise structlog.DropEvent
    return event_dict


def get_logger(name: str, **initial_context: Any) -> FilteringBoundLogger:
    """Get a logger instance with optional initial context.

    Args:
        name: Logger name (typically __name__)
        **initial_context: Initial context to bind to logger

    Returns:
        Configured logger with bound context
    """
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger


def log_performance(
    logger: FilteringBoundLogger,
    operation: str,
    duration_ms: float,
    **context: Any,
) -> None:
    """Log performance metrics in a structured format.

    Args:
        logger: Structlog logger instance
        operation: Name of the operation being measured
        duration_ms: Duration in milliseconds
        **context: Additional context to include
    """
    logger.info(
        "Performance metric",
        operation=operation,
        duration_ms=round(duration_ms, 3),
        metric_type="performance",
        **context,
    )


def log_search(
    logger: FilteringBoundLogger,
    query: str,
    status: str,
    result_count: int,
    cache_hit: bool = False,
    **context: Any,
) -> None:
    """Log the outcome of a single search call.

    Args:
        logger: Structlog logger instance
        query: Normalized query (truncated before logging)
        status: Outcome status (empty, invalid, ok, error)
        result_count: Number of results returned
        cache_hit: Whether the results came from the cache
        **context: Additional context
    """
    logger.debug(
        "Search completed",
        query=truncate_for_log(query),
        status=status,
        result_count=result_count,
        cache_hit=cache_hit,
        metric_type="search",
        **context,
    )


def truncate_for_log(text: str, limit: int = MAX_LOGGED_QUERY_LENGTH) -> str:
    """Shorten user-provided text for inclusion in log lines."""
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."
