"""Role interfaces implemented by metric containers"""
import abc
from typing import Mapping, Optional, TextIO

from .models import FieldValue


class MetricPrinter(abc.ABC):
    """Formats gathered tags and values as a line"""

    @abc.abstractmethod
    def output(self) -> str:
        """Return the line without a timestamp"""
        pass

    @abc.abstractmethod
    def print_output(self, stream: Optional[TextIO] = None) -> None:
        """Write the line to stdout"""
        pass


class MetricGatherer(abc.ABC):
    """Collects tags and values for later output"""

    @abc.abstractmethod
    def add(self, tags: Mapping[str, str], values: Mapping[str, FieldValue]) -> None:
        pass

    @abc.abstractmethod
    def add_tags(self, tags: Mapping[str, str]) -> None:
        pass

    @abc.abstractmethod
    def add_values(self, values: Mapping[str, FieldValue]) -> None:
        pass

    @abc.abstractmethod
    def set_timestamp(self, ts: int) -> None:
        pass


class Metric(MetricPrinter, MetricGatherer):
    """Everything a metric can do"""


class MetricTester(abc.ABC):
    """Assertions over a container's contents, raising MetricAssertionError on mismatch"""

    @abc.abstractmethod
    def contains_tags(self, expected: Mapping[str, str]) -> None:
        pass

    @abc.abstractmethod
    def contains_values(self, expected: Mapping[str, FieldValue]) -> None:
        pass

    @abc.abstractmethod
    def contains(self, expected_tags: Mapping[str, str], expected_values: Mapping[str, FieldValue]) -> None:
        pass

    @abc.abstractmethod
    def has_name(self, expected: str) -> None:
        pass

    @abc.abstractmethod
    def has_timestamp(self, expected: int) -> None:
        pass
