"""
Operations over collections of ranges.

These are compositions of the DateRange algebra for scheduling style
questions: which time is left once busy blocks are removed, and which time
several calendars have in common.
"""

from typing import Iterable, List

from .models import DateRange


def merge_ranges(ranges: Iterable[DateRange]) -> List[DateRange]:
    """
    Merge overlapping or touching ranges.

    Example: [09:00-10:00, 10:00-11:00, 13:00-14:00] -> [09:00-11:00, 13:00-14:00]
    """
    sorted_ranges = sorted(ranges, key=lambda r: (r.start, r.end))

    if not sorted_ranges:
        return []

    merged: List[DateRange] = [sorted_ranges[0]]

    for current in sorted_ranges[1:]:
        combined = merged[-1].add(current)
        if combined is not None:
            merged[-1] = combined
        else:
            merged.append(current)

    return merged


def subtract_ranges(base: DateRange, others: Iterable[DateRange]) -> List[DateRange]:
    """
    Remove every range in ``others`` from ``base``.

    Example:
    Base: 09:00 - 17:00
    Others: [10:00-11:00, 14:00-15:00]
    Result: [09:00-10:00, 11:00-14:00, 15:00-17:00]
    """
    remaining: List[DateRange] = [base]

    for other in others:
        remaining = [
            piece
            for current in remaining
            for piece in current.subtract(other)
        ]

        # Early exit if nothing is left
        if not remaining:
            return []

    return sorted(remaining, key=lambda r: (r.start, r.end))


def intersect_ranges(
    first: Iterable[DateRange],
    second: Iterable[DateRange]
) -> List[DateRange]:
    """
    Calculate the time covered by both collections.

    Returns all overlapping periods between any range in ``first`` and any
    range in ``second``, merged.
    """
    second_list = list(second)
    intersections: List[DateRange] = []

    for range1 in first:
        for range2 in second_list:
            intersection = range1.intersect(range2)
            if intersection is not None:
                intersections.append(intersection)

    return merge_ranges(intersections)
