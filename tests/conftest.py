"""Shared fixtures"""
import pytest

from line_protocol import LoggingConfig, setup_structured_logging


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Keep container debug logs out of test output"""
    setup_structured_logging(LoggingConfig(log_level="WARNING", log_file=None))
    yield
