"""
Factories that build a DateRange from loosely shaped input.

Shape detection lives here so the DateRange type only ever sees a pair of
endpoints.
"""

from __future__ import annotations

from typing import Any, Tuple

import pendulum
from pendulum import DateTime

from ..config import get_config
from .exceptions import InvalidRangeError, InvalidUnitError
from .instant import to_instant
from .models import DateRange

RANGE_UNITS = frozenset({"year", "month", "week", "day", "hour", "minute", "second"})


def date_range(start: Any, end: Any = None, *, tz: str | None = None) -> DateRange:
    """
    Build a range from two endpoints, a two-element sequence or a
    ``"start/end"`` string.

    Args:
        start: First endpoint, or the whole range when ``end`` is omitted
        end: Second endpoint
        tz: Timezone for naive input. Defaults to the configured timezone.

    Returns:
        DateRange with its endpoints in order

    Raises:
        InvalidRangeError: If a single argument is not a recognised shape
        InvalidInstantError: If an endpoint cannot be coerced
    """
    if end is None:
        start, end = _split_range_input(start)

    return DateRange(to_instant(start, tz), to_instant(end, tz))


def _split_range_input(value: Any) -> Tuple[Any, Any]:
    if isinstance(value, (list, tuple)):
        if len(value) != 2:
            raise InvalidRangeError(
                f"Expected a start and an end, got {len(value)} element(s)"
            )
        return value[0], value[1]

    if isinstance(value, str):
        if value.strip().lower() in RANGE_UNITS:
            raise InvalidRangeError(
                f"'{value}' is a unit keyword; use unit_range() to build unit ranges"
            )

        start_text, separator, end_text = value.partition("/")
        if not separator:
            raise InvalidRangeError(f"Expected a 'start/end' string, got {value!r}")
        return start_text, end_text

    raise InvalidRangeError(f"Cannot build a range from a single {type(value).__name__}")


def unit_range(reference: Any, unit: str, *, tz: str | None = None) -> DateRange:
    """
    Build the range covering the calendar unit that contains ``reference``.

    Example: reference 2024-03-14 10:30, unit "month"
    Result: 2024-03-01 00:00:00 - 2024-03-31 23:59:59.999999

    ``reference`` may be None for the current time. Weeks begin on the
    configured ``week_start`` weekday.
    """
    if unit not in RANGE_UNITS:
        raise InvalidUnitError(
            f"Unknown range unit: {unit!r}. Expected one of: {', '.join(sorted(RANGE_UNITS))}"
        )

    if reference is None:
        anchor = pendulum.now(tz or get_config().timezone)
    else:
        anchor = to_instant(reference, tz)

    if unit == "week":
        return _week_range(anchor, get_config().week_start)

    return DateRange(anchor.start_of(unit), anchor.end_of(unit))


def _week_range(anchor: DateTime, week_start: int) -> DateRange:
    offset = (anchor.weekday() - week_start) % 7
    first_day = anchor.start_of("day").subtract(days=offset)
    return DateRange(first_day, first_day.add(days=6).end_of("day"))


def within(instant: Any, rng: DateRange) -> bool:
    """Check if an instant falls inside ``rng``, boundaries included."""
    return rng.contains(instant)
