"""Metric data models"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Union

from .exceptions import InvalidTimestampError, UnsupportedValueError

FieldValue = Union[bool, int, float, str]

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class FieldType(Enum):
    """Scalar types a field value may hold"""
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    STRING = "string"


def field_type_of(value: Any) -> FieldType:
    """Classify a field value, rejecting anything outside the supported scalars"""
    # bool subclasses int, so it has to be checked first
    if isinstance(value, bool):
        return FieldType.BOOLEAN
    if isinstance(value, int):
        return FieldType.INTEGER
    if isinstance(value, float):
        return FieldType.FLOAT
    if isinstance(value, str):
        return FieldType.STRING
    raise UnsupportedValueError(
        f"Unsupported field value type {type(value).__name__}: expected int, float, bool or str"
    )


def validate_tags(tags: Mapping[str, str]) -> Dict[str, str]:
    """Copy a tag mapping, checking that keys and values are strings"""
    checked = {}
    for key, value in tags.items():
        if not isinstance(key, str):
            raise UnsupportedValueError(f"Tag keys must be strings, got {type(key).__name__}")
        if not isinstance(value, str):
            raise UnsupportedValueError(
                f"Tag {key} must have a string value, got {type(value).__name__}"
            )
        checked[key] = value
    return checked


def validate_values(values: Mapping[str, FieldValue]) -> Dict[str, FieldValue]:
    """Copy a field mapping, checking that keys are strings and values are supported scalars"""
    checked = {}
    for key, value in values.items():
        if not isinstance(key, str):
            raise UnsupportedValueError(f"Value keys must be strings, got {type(key).__name__}")
        field_type_of(value)
        checked[key] = value
    return checked


def validate_timestamp(ts: Any) -> int:
    """Check that a timestamp is a signed 64-bit nanosecond count"""
    if isinstance(ts, bool) or not isinstance(ts, int):
        raise InvalidTimestampError(f"Timestamp must be an integer, got {type(ts).__name__}")
    if not INT64_MIN <= ts <= INT64_MAX:
        raise InvalidTimestampError(f"Timestamp {ts} is outside the signed 64-bit range")
    return ts


@dataclass(frozen=True)
class MetricSnapshot:
    """Consistent copy of a container's contents taken under one read lock"""
    name: str
    tags: Dict[str, str] = field(default_factory=dict)
    values: Dict[str, FieldValue] = field(default_factory=dict)
    timestamp: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "tags": dict(self.tags),
            "values": dict(self.values),
            "timestamp": self.timestamp,
        }
