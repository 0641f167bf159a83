"""Structured logging configuration for line protocol metrics"""
import logging
import os
import sys
from typing import TYPE_CHECKING
import structlog
from structlog.stdlib import LoggerFactory
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer, TimeStamper, StackInfoRenderer

if TYPE_CHECKING:
    from .config import LoggingConfig


# Marks handlers installed here so repeated setup replaces them instead of stacking
_HANDLER_ATTR = "_line_protocol_handler"


def setup_structured_logging(config: "LoggingConfig") -> None:
    """Setup structured logging with JSON format for production and console for development.

    This is the only place the library configures structlog; applications
    call it explicitly when they want the library's log format.
    """

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        TimeStamper(fmt="iso"),
        StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    is_development = os.getenv("ENVIRONMENT", "production").lower() == "development"
    if is_development:
        processors.append(ConsoleRenderer())
    else:
        processors.append(JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, config.log_level.upper())
    handlers = []

    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(config.log_file))
        file_handler.setLevel(level)
        handlers.append(file_handler)

    # stdout carries metric lines, so logs go to stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    handlers.append(console_handler)

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_ATTR, False):
            root.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter("%(message)s")
    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_ATTR, True)
        root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger backed by the stdlib logger of the same name.

    Wrapping leaves the global structlog configuration untouched, and stdlib
    level filtering keeps the library quiet until the host enables it.
    """
    return structlog.wrap_logger(logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger)


def log_metric_output(logger: structlog.stdlib.BoundLogger, metric_name: str, tags_count: int, values_count: int, with_timestamp: bool = False) -> None:
    """Log a formatted line with structured data"""
    logger.debug(
        "Metric line formatted",
        metric=metric_name,
        tags_count=tags_count,
        values_count=values_count,
        with_timestamp=with_timestamp,
        event_type="metric_output"
    )


def log_assertion_failure(logger: structlog.stdlib.BoundLogger, metric_name: str, error: Exception) -> None:
    """Log a failed container assertion"""
    mismatches = getattr(error, "mismatches", [])
    logger.info(
        "Metric assertion failed",
        metric=metric_name,
        mismatch_count=len(mismatches),
        mismatch_kinds=sorted({m.kind.value for m in mismatches}),
        event_type="assertion_failure"
    )
