"""In-memory metric containers rendered as line protocol"""
from typing import Optional
from pydantic import ValidationError

from .config import Config, LoggingConfig, load_config
from .container import MetricContainer
from .exceptions import (
    InvalidTimestampError,
    LineProtocolError,
    MetricAssertionError,
    Mismatch,
    MismatchKind,
    UnsupportedValueError,
)
from .formatter import LineFormatter
from .interfaces import Metric, MetricGatherer, MetricPrinter, MetricTester
from .logging_config import get_logger, setup_structured_logging
from .models import FieldType, FieldValue, MetricSnapshot, field_type_of
from .version import VERSION

__version__ = VERSION

logger = get_logger(__name__)


def new(name: str, config: Optional[Config] = None) -> MetricContainer:
    """Create an empty container named ``name`` stamped with the current time.

    Formatting follows ``config``, or the process-wide configuration read
    from ``LINE_PROTOCOL_*`` environment variables when none is given. An
    unreadable environment falls back to the default formatter, so creating
    a container never fails.
    """
    if config is None:
        try:
            config = load_config()
        except ValidationError as e:
            logger.warning(
                "Ignoring invalid line protocol settings",
                error=str(e),
                event_type="config_fallback",
            )
            return MetricContainer(name, formatter=LineFormatter())
    return MetricContainer(name, formatter=LineFormatter.from_config(config))


__all__ = [
    "VERSION",
    "Config",
    "LoggingConfig",
    "FieldType",
    "FieldValue",
    "InvalidTimestampError",
    "LineFormatter",
    "LineProtocolError",
    "Metric",
    "MetricAssertionError",
    "MetricContainer",
    "MetricGatherer",
    "MetricPrinter",
    "MetricSnapshot",
    "MetricTester",
    "Mismatch",
    "MismatchKind",
    "UnsupportedValueError",
    "field_type_of",
    "load_config",
    "new",
    "setup_structured_logging",
]
