"""
Primitive helpers for shifting timestamps and comparing time intervals.

Every other part of the engine is built on these. All intervals are
half-open: ``[start, end)``.
"""

from pendulum import DateTime


def add_minutes(moment: DateTime, minutes: int) -> DateTime:
    """Return a new timestamp shifted forward by ``minutes`` (may be negative)."""
    return moment.add(minutes=minutes)


def sub_minutes(moment: DateTime, minutes: int) -> DateTime:
    """Return a new timestamp shifted backward by ``minutes`` (may be negative)."""
    return moment.subtract(minutes=minutes)


def minutes_between(first: DateTime, second: DateTime) -> float:
    """Absolute distance between two instants, in minutes."""
    return abs((first - second).total_seconds()) / 60


def intervals_overlap(
    start1: DateTime,
    end1: DateTime,
    start2: DateTime,
    end2: DateTime
) -> bool:
    """
    Check whether ``[start1, end1)`` and ``[start2, end2)`` share any instant.

    The third clause also catches the case where the first interval fully
    contains the second one.
    """
    return (
        (start1 >= start2 and start1 < end2)     # start1 is within range2
        or (end1 > start2 and end1 <= end2)      # end1 is within range2
        or (start1 <= start2 and end1 >= end2)   # range1 encompasses range2
    )
