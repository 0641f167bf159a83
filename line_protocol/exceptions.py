"""Errors raised by metric containers"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional


class MismatchKind(Enum):
    """Why an expected entry did not match"""
    MISSING = "missing"
    VALUE = "value"
    TYPE = "type"


@dataclass(frozen=True)
class Mismatch:
    """One difference between expected and stored container contents"""
    section: str
    key: str
    kind: MismatchKind
    expected: Any
    actual: Any = None

    @property
    def message(self) -> str:
        if self.section == "tag":
            if self.kind is MismatchKind.MISSING:
                return f"Tag {self.key} was not found."
            return f"Tag {self.key} does not match stored value. Want: '{self.expected}'. Got: '{self.actual}'."

        if self.section == "value":
            if self.kind is MismatchKind.MISSING:
                return f"The value {self.key} is missing from the metrics container."
            if self.kind is MismatchKind.TYPE:
                return (
                    f"The types of the values are not the same for {self.key}. "
                    f"Want: {_type_name(self.expected)}. Got: {_type_name(self.actual)}."
                )
            return (
                f"The values for {self.key} do not match. "
                f"Want: '{_describe(self.expected)}'. Got: '{_describe(self.actual)}'."
            )

        return f"The metric {self.section} does not match. Want: {self.expected}, got: {self.actual}"


def _type_name(value: Any) -> str:
    return type(value).__name__


def _describe(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class LineProtocolError(Exception):
    """Base exception for all line protocol errors."""
    pass


class UnsupportedValueError(LineProtocolError, TypeError):
    """A tag or field value is outside the supported scalar types."""
    pass


class InvalidTimestampError(LineProtocolError, ValueError):
    """A timestamp is not a signed 64-bit integer."""
    pass


class MetricAssertionError(LineProtocolError, AssertionError):
    """Container contents differ from what a caller expected.

    Carries every mismatch found by a single check, so callers can inspect
    them individually or read the combined message.
    """

    def __init__(self, mismatches: List[Mismatch], message: Optional[str] = None):
        self.mismatches = list(mismatches)
        if message is None:
            message = " ".join(m.message for m in self.mismatches)
        super().__init__(message)

    @property
    def type_mismatches(self) -> List[Mismatch]:
        return [m for m in self.mismatches if m.kind is MismatchKind.TYPE]

    @property
    def has_type_mismatch(self) -> bool:
        return bool(self.type_mismatches)
