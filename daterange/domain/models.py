"""
Domain model for closed date ranges and their algebra.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Tuple

from pendulum import DateTime

from .instant import (
    difference,
    format_instant,
    microseconds_between,
    milliseconds_between,
    normalize_unit,
    shift,
    to_instant,
    to_native,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateRange:
    """
    Represents an immutable closed range [start, end] between two instants.

    Invariant: start <= end. Endpoints given in reverse order are swapped,
    and a zero-length range (start == end) is valid.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        start = to_instant(self.start)
        end = to_instant(self.end)

        if end < start:
            start, end = end, start

        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    def clone(self) -> "DateRange":
        """Return a new range with the same endpoints."""
        return DateRange(self.start, self.end)

    def contains(self, other: Any) -> bool:
        """
        Check if an instant or another range lies within this range.

        Both boundaries are inclusive. Non-range values are coerced to an
        instant first.
        """
        if isinstance(other, DateRange):
            return self.start <= other.start and self.end >= other.end

        point = to_instant(other)
        return self.start <= point <= self.end

    def __contains__(self, other: Any) -> bool:
        return self.contains(other)

    def overlaps(self, other: "DateRange") -> bool:
        """Check if this range shares at least one instant with another."""
        return self.intersect(other) is not None

    def intersect(self, other: "DateRange") -> "DateRange | None":
        """
        Calculate the intersection of two ranges.

        Returns None if there is no overlap. When one range encloses the
        other, the enclosed range itself is returned rather than a copy.
        """
        start, end = self.start, self.end

        # [--self--]
        #      [--other--]
        if start <= other.start <= end and end < other.end:
            return DateRange(other.start, end)

        #      [--self--]
        # [--other--]
        if other.start < start and start <= other.end <= end:
            return DateRange(start, other.end)

        #   [--self--]
        # [----other----]
        if other.start < start and end < other.end:
            return self

        # [----self----]
        #   [--other--]
        if start <= other.start and other.end <= end:
            return other

        return None

    def add(self, other: "DateRange") -> "DateRange | None":
        """
        Merge two ranges if they overlap.

        Returns None for disjoint ranges; a single shared boundary instant
        counts as overlap.
        """
        if not self.overlaps(other):
            return None

        return DateRange(min(self.start, other.start), max(self.end, other.end))

    def subtract(self, other: "DateRange") -> List["DateRange"]:
        """
        Remove another range from this one.

        Returns the remaining pieces in order: none, one, or two (left then
        right) when ``other`` sits inside this range. Zero-length pieces are
        kept.

        Example:
        Self: 01.01 - 10.01
        Other: 03.01 - 05.01
        Result: [01.01 - 03.01, 05.01 - 10.01]
        """
        start, end = self.start, self.end

        if self.intersect(other) is None:
            return [self]

        if other.start <= start and end <= other.end:
            return []

        if other.start <= start and other.end < end and start <= other.end:
            return [DateRange(other.end, end)]

        if other.start <= end and start < other.start and end <= other.end:
            return [DateRange(start, other.start)]

        if start <= other.start and other.end <= end:
            return [DateRange(start, other.start), DateRange(other.end, end)]

        logger.warning("Unhandled subtract configuration: %s minus %s", self, other)
        return [self]

    def by(self, step: "str | DateRange | datetime.timedelta") -> Iterator[DateTime]:
        """
        Iterate over the instants of this range.

        Args:
            step: A unit keyword ("day", "weeks", ...) to walk the calendar
                one unit at a time, or a DateRange/timedelta whose length is
                used as a fixed step

        Returns:
            A lazy iterator of instants; calling ``by`` again replays it

        Raises:
            InvalidUnitError: If the unit keyword is unknown
            TypeError: If the step is of an unsupported type
        """
        if isinstance(step, str):
            return self._by_unit(normalize_unit(step))

        if isinstance(step, DateRange):
            return self._by_length(step.duration())

        if isinstance(step, datetime.timedelta):
            return self._by_length(round(step.total_seconds() * 1000))

        raise TypeError(f"Cannot iterate by {type(step).__name__}")

    def each(
        self,
        step: "str | DateRange | datetime.timedelta",
        callback: Callable[[DateTime], Any],
    ) -> "DateRange":
        """
        Call ``callback`` for every instant produced by ``by(step)``.

        Iteration stops early when the callback returns ``False``.
        Returns this range for chaining.
        """
        for instant in self.by(step):
            if callback(instant) is False:
                break
        return self

    def _by_unit(self, unit: str) -> Iterator[DateTime]:
        cursor = self.start

        while self.contains(cursor):
            yield cursor
            cursor = shift(cursor, 1, unit)

    def _by_length(self, step_ms: int) -> Iterator[DateTime]:
        # A step without length would never advance
        if step_ms <= 0:
            logger.debug("Skipping iteration over %s: step has no length", self)
            return

        count = self.duration() // step_ms

        for i in range(count + 1):
            yield self.start.add(microseconds=i * step_ms * 1000)

    def diff(self, unit: str | None = None) -> int:
        """Return end - start in whole ``unit``s, or milliseconds if no unit is given."""
        return difference(self.start, self.end, unit)

    def duration(self) -> int:
        """Return the duration in milliseconds."""
        return milliseconds_between(self.start, self.end)

    value_of = duration

    def __int__(self) -> int:
        return self.duration()

    def center(self) -> DateTime:
        """Return the instant halfway between start and end."""
        return self.start.add(microseconds=microseconds_between(self.start, self.end) // 2)

    def to_native(self) -> Tuple[datetime.datetime, datetime.datetime]:
        """Return both endpoints as plain ``datetime.datetime`` objects."""
        return to_native(self.start), to_native(self.end)

    def is_same(self, other: "DateRange") -> bool:
        """Check if both endpoints are identical to another range's."""
        return self.start == other.start and self.end == other.end

    def __str__(self) -> str:
        return f"{format_instant(self.start)}/{format_instant(self.end)}"
