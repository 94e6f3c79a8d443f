"""
Domain-specific exception hierarchy for the date range algebra.
"""


class DateRangeError(Exception):
    """Base class for all library-level errors."""


class InvalidInstantError(DateRangeError, ValueError):
    """Raised when an endpoint-like value cannot be turned into an instant."""


class InvalidUnitError(DateRangeError, ValueError):
    """Raised for an unknown calendar unit keyword."""


class InvalidRangeError(DateRangeError, ValueError):
    """Raised when factory input does not describe a pair of endpoints."""
