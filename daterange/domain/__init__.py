"""
Domain layer - The date range algebra and its factories.
"""

from .exceptions import DateRangeError, InvalidInstantError, InvalidRangeError, InvalidUnitError
from .factory import RANGE_UNITS, date_range, unit_range, within
from .models import DateRange
from .operations import intersect_ranges, merge_ranges, subtract_ranges

__all__ = [
    "DateRange",
    "DateRangeError",
    "InvalidInstantError",
    "InvalidRangeError",
    "InvalidUnitError",
    "RANGE_UNITS",
    "date_range",
    "intersect_ranges",
    "merge_ranges",
    "subtract_ranges",
    "unit_range",
    "within",
]
