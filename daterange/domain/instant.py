"""
Adapter between raw endpoint-like values and pendulum instants.

Every point in time handled by the library is a ``pendulum.DateTime``. This
module is the single place where dates, datetimes, epoch milliseconds and
strings get coerced into one, and where unit keywords are mapped onto
pendulum's calendar arithmetic.
"""

from __future__ import annotations

import datetime
import logging
from typing import Any

import pendulum
from pendulum import DateTime

from ..config import get_config
from .exceptions import InvalidInstantError, InvalidUnitError

logger = logging.getLogger(__name__)

UNITS = ("year", "month", "week", "day", "hour", "minute", "second", "millisecond")

_UNIT_ALIASES = {unit: unit for unit in UNITS} | {f"{unit}s": unit for unit in UNITS}

_EPOCH = pendulum.datetime(1970, 1, 1, tz="UTC")
_NATIVE_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)

CANONICAL_FORMAT = "YYYY-MM-DD[T]HH:mm:ssZ"


def to_instant(value: Any, tz: str | None = None) -> DateTime:
    """
    Coerce an endpoint-like value into a pendulum DateTime.

    Args:
        value: DateTime, datetime, date, epoch milliseconds or a parseable string
        tz: Timezone for naive input. Defaults to the configured timezone.

    Returns:
        A pendulum DateTime

    Raises:
        InvalidInstantError: If the value cannot be interpreted as an instant
    """
    if isinstance(value, DateTime) and value.tzinfo is not None:
        return value

    zone = tz or get_config().timezone

    if isinstance(value, DateTime):
        return pendulum.datetime(
            value.year, value.month, value.day,
            value.hour, value.minute, value.second, value.microsecond,
            tz=zone,
        )

    if isinstance(value, datetime.datetime):
        return pendulum.instance(value, tz=zone)

    if isinstance(value, datetime.date):
        return pendulum.datetime(value.year, value.month, value.day, tz=zone)

    if isinstance(value, bool):
        raise InvalidInstantError(f"Cannot interpret boolean {value!r} as an instant")

    if isinstance(value, (int, float)):
        try:
            micros = value * 1000 if isinstance(value, int) else round(value * 1000)
            return _EPOCH.add(microseconds=micros).in_timezone(zone)
        except (ValueError, OverflowError) as exc:
            raise InvalidInstantError(f"Invalid epoch milliseconds: {value!r}") from exc

    if isinstance(value, str):
        return _parse_instant(value, zone)

    raise InvalidInstantError(f"Cannot interpret {type(value).__name__} as an instant: {value!r}")


def _parse_instant(text: str, zone: str) -> DateTime:
    try:
        parsed = pendulum.parse(text.strip(), tz=zone)
    except (ValueError, TypeError) as exc:
        logger.debug("Failed to parse instant %r: %s", text, exc)
        raise InvalidInstantError(f"Invalid instant: {text!r}") from exc

    if isinstance(parsed, DateTime):
        return parsed

    if isinstance(parsed, datetime.date):
        return pendulum.datetime(parsed.year, parsed.month, parsed.day, tz=zone)

    raise InvalidInstantError(f"Not a point in time: {text!r}")


def normalize_unit(unit: str) -> str:
    """Map a singular or plural unit name onto its singular form."""
    try:
        return _UNIT_ALIASES[unit.strip().lower()]
    except (KeyError, AttributeError):
        raise InvalidUnitError(
            f"Unknown unit: {unit!r}. Expected one of: {', '.join(UNITS)}"
        ) from None


def shift(instant: DateTime, amount: int, unit: str) -> DateTime:
    """Advance an instant by ``amount`` calendar or fixed units."""
    name = normalize_unit(unit)
    if name == "millisecond":
        return instant.add(microseconds=amount * 1000)
    return instant.add(**{f"{name}s": amount})


def difference(start: DateTime, end: DateTime, unit: str | None = None) -> int:
    """
    Signed difference ``end - start``.

    Whole milliseconds when no unit is given, otherwise the truncated number
    of whole units as counted by pendulum.
    """
    if unit is None:
        return milliseconds_between(start, end)

    name = normalize_unit(unit)
    if name == "millisecond":
        return milliseconds_between(start, end)

    interval = start.diff(end, abs=False)
    return getattr(interval, f"in_{name}s")()


def to_native(instant: DateTime) -> datetime.datetime:
    """Convert to a plain ``datetime.datetime`` with the same fields and tzinfo."""
    return datetime.datetime(
        instant.year,
        instant.month,
        instant.day,
        instant.hour,
        instant.minute,
        instant.second,
        instant.microsecond,
        tzinfo=instant.tzinfo,
        fold=instant.fold,
    )


def microseconds_between(start: DateTime, end: DateTime) -> int:
    """Exact signed elapsed microseconds from ``start`` to ``end``."""
    return to_microseconds(end) - to_microseconds(start)


def milliseconds_between(start: DateTime, end: DateTime) -> int:
    """Signed whole milliseconds from ``start`` to ``end``, truncated toward zero."""
    micros = microseconds_between(start, end)
    if micros < 0:
        return -(-micros // 1000)
    return micros // 1000


def to_microseconds(instant: DateTime) -> int:
    """Microseconds since the Unix epoch. Naive values are read as UTC."""
    native = to_native(instant)
    if native.tzinfo is None:
        native = native.replace(tzinfo=datetime.timezone.utc)
    # Subtracting a distinct tzinfo makes Python apply both UTC offsets
    return (native - _NATIVE_EPOCH) // datetime.timedelta(microseconds=1)


def to_milliseconds(instant: DateTime) -> int:
    """Milliseconds since the Unix epoch. Naive values are read as UTC."""
    return to_microseconds(instant) // 1000


def format_instant(instant: DateTime) -> str:
    """Canonical text form, e.g. ``2024-01-01T00:00:00+00:00``."""
    return instant.format(CANONICAL_FORMAT)
