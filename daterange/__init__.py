"""
Closed date ranges over pendulum instants: containment, overlap,
intersection, union, difference and iteration.
"""

from .config import RangeConfig, configure, get_config
from .domain import (
    RANGE_UNITS,
    DateRange,
    DateRangeError,
    InvalidInstantError,
    InvalidRangeError,
    InvalidUnitError,
    date_range,
    intersect_ranges,
    merge_ranges,
    subtract_ranges,
    unit_range,
    within,
)

__version__ = "1.0.0"

__all__ = [
    "DateRange",
    "DateRangeError",
    "InvalidInstantError",
    "InvalidRangeError",
    "InvalidUnitError",
    "RANGE_UNITS",
    "RangeConfig",
    "configure",
    "date_range",
    "get_config",
    "intersect_ranges",
    "merge_ranges",
    "subtract_ranges",
    "unit_range",
    "within",
]
