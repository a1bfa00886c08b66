"""
structlog setup for the client and the command line.

The library only asks for loggers; nothing is configured on import.
Applications (and the CLI) call ``setup_logging`` once.
"""

import logging
import sys
from typing import IO, TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from structlog.types import Processor

from steam_storefront.config import LoggingConfig, get_settings


def _renderer(config: LoggingConfig, stream: IO[str]) -> "Processor":
    if config.format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=stream.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def setup_logging(config: LoggingConfig | None = None, *, stream: IO[str] | None = None) -> None:
    """
    Configure structlog for the process.

    Args:
        config: Logging configuration; read from the environment if None
        stream: Where log lines go; stderr by default, keeping stdout for results
    """
    config = config or get_settings().logging
    stream = stream or sys.stderr
    level = logging.getLevelName(config.level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if config.include_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso", utc=True))
    processors.append(_renderer(config, stream))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=stream, level=level)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(config.httpx_level)


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """
    Get a logger with ``initial_context`` bound to every event.

    Example:
        >>> logger = get_logger(__name__, component="client")
        >>> logger.info("Fetching app", app_id=219990)
    """
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
