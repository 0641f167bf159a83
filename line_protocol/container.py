"""Thread-safe metric container"""
import time
from typing import Dict, List, Mapping, Optional, TextIO

from .logging_config import get_logger, log_assertion_failure, log_metric_output
from .exceptions import MetricAssertionError, Mismatch, MismatchKind
from .formatter import LineFormatter
from .interfaces import Metric, MetricTester
from .locks import ReadWriteLock
from .models import (
    FieldValue,
    MetricSnapshot,
    validate_tags,
    validate_timestamp,
    validate_values,
)


logger = get_logger(__name__)


class MetricContainer(Metric, MetricTester):
    """Holds one metric's name, tags, values and timestamp.

    Every mutation takes the write lock for the whole merge and every read
    takes the read lock, so a container can be shared between threads.
    Merges are last-write-wins per key.
    """

    def __init__(self, name: str, formatter: Optional[LineFormatter] = None):
        self._name = name
        self._tags: Dict[str, str] = {}
        self._values: Dict[str, FieldValue] = {}
        self._timestamp = time.time_ns()
        self._formatter = formatter or LineFormatter()
        self._lock = ReadWriteLock()

    def __repr__(self) -> str:
        snap = self.snapshot()
        return (
            f"MetricContainer(name={snap.name!r}, tags={snap.tags!r}, "
            f"values={snap.values!r}, timestamp={snap.timestamp})"
        )

    @property
    def name(self) -> str:
        with self._lock.read_locked():
            return self._name

    @property
    def tags(self) -> Dict[str, str]:
        """Copy of the stored tags"""
        with self._lock.read_locked():
            return dict(self._tags)

    @property
    def values(self) -> Dict[str, FieldValue]:
        """Copy of the stored values"""
        with self._lock.read_locked():
            return dict(self._values)

    @property
    def timestamp(self) -> int:
        with self._lock.read_locked():
            return self._timestamp

    @property
    def formatter(self) -> LineFormatter:
        return self._formatter

    def snapshot(self) -> MetricSnapshot:
        """Copy every attribute under a single read lock"""
        with self._lock.read_locked():
            return MetricSnapshot(
                name=self._name,
                tags=dict(self._tags),
                values=dict(self._values),
                timestamp=self._timestamp,
            )

    # Gathering

    def add_tags(self, tags: Mapping[str, str]) -> None:
        """Merge tags into the container; existing keys are overwritten"""
        checked = validate_tags(tags)
        with self._lock.write_locked():
            self._tags.update(checked)
        logger.debug("Tags added", metric=self._name, keys=list(checked), event_type="tags_added")

    def add_values(self, values: Mapping[str, FieldValue]) -> None:
        """Merge values into the container; existing keys are overwritten"""
        checked = validate_values(values)
        with self._lock.write_locked():
            self._values.update(checked)
        logger.debug("Values added", metric=self._name, keys=list(checked), event_type="values_added")

    def add(self, tags: Mapping[str, str], values: Mapping[str, FieldValue]) -> None:
        """Shortcut for add_tags followed by add_values.

        The two merges are separate critical sections, so a concurrent reader
        may see the tags before the values land.
        """
        self.add_tags(tags)
        self.add_values(values)

    def set_timestamp(self, ts: int) -> None:
        """Overwrite the timestamp (nanoseconds since the epoch)"""
        ts = validate_timestamp(ts)
        with self._lock.write_locked():
            self._timestamp = ts

    # Printing

    def output(self) -> str:
        """Return the line without a timestamp"""
        snap = self.snapshot()
        log_metric_output(logger, snap.name, len(snap.tags), len(snap.values))
        return self._formatter.format_line(snap.name, snap.tags, snap.values)

    def output_with_timestamp(self) -> str:
        """Return the line followed by the timestamp"""
        snap = self.snapshot()
        log_metric_output(logger, snap.name, len(snap.tags), len(snap.values), with_timestamp=True)
        return self._formatter.format_line(snap.name, snap.tags, snap.values, snap.timestamp)

    def print_output(self, stream: Optional[TextIO] = None) -> None:
        print(self.output(), file=stream)

    def print_output_with_timestamp(self, stream: Optional[TextIO] = None) -> None:
        print(self.output_with_timestamp(), file=stream)

    # Testing

    def contains_tags(self, expected: Mapping[str, str]) -> None:
        """Assert that every expected tag is stored with the same value.

        All mismatches are collected before raising MetricAssertionError.
        """
        tags = self.tags
        mismatches: List[Mismatch] = []
        for key, want in expected.items():
            if key not in tags:
                mismatches.append(Mismatch("tag", key, MismatchKind.MISSING, want))
            elif tags[key] != want:
                mismatches.append(Mismatch("tag", key, MismatchKind.VALUE, want, tags[key]))
        self._raise_if_any(mismatches)

    def contains_values(self, expected: Mapping[str, FieldValue]) -> None:
        """Assert that every expected value is stored with the same type and value.

        A type difference (e.g. 1 against "1" or 1 against 1.0) is reported as
        a TYPE mismatch, distinct from a VALUE mismatch between equal types.
        Expected values outside the supported scalars are TYPE mismatches too.
        """
        values = self.values
        mismatches: List[Mismatch] = []
        for key, want in expected.items():
            if key not in values:
                mismatches.append(Mismatch("value", key, MismatchKind.MISSING, want))
                continue
            got = values[key]
            if type(want) is not type(got):
                mismatches.append(Mismatch("value", key, MismatchKind.TYPE, want, got))
            elif want != got:
                mismatches.append(Mismatch("value", key, MismatchKind.VALUE, want, got))
        self._raise_if_any(mismatches)

    def contains(self, expected_tags: Mapping[str, str], expected_values: Mapping[str, FieldValue]) -> None:
        """Run contains_tags and contains_values, reporting both failures together"""
        failures: List[MetricAssertionError] = []
        for check, expected in ((self.contains_tags, expected_tags), (self.contains_values, expected_values)):
            try:
                check(expected)
            except MetricAssertionError as e:
                failures.append(e)

        if failures:
            raise MetricAssertionError(
                [m for e in failures for m in e.mismatches],
                "\n".join(str(e) for e in failures),
            )

    def has_name(self, expected: str) -> None:
        actual = self.name
        if actual != expected:
            self._raise_if_any([Mismatch("name", "name", MismatchKind.VALUE, expected, actual)])

    def has_timestamp(self, expected: int) -> None:
        actual = self.timestamp
        if actual != expected:
            self._raise_if_any([Mismatch("timestamp", "timestamp", MismatchKind.VALUE, expected, actual)])

    def _raise_if_any(self, mismatches: List[Mismatch]) -> None:
        if not mismatches:
            return
        error = MetricAssertionError(mismatches)
        log_assertion_failure(logger, self._name, error)
        raise error
