"""
Descriptive helpers: a booking's buffered footprint and opening-hours checks.
"""

from typing import Optional

from pendulum import DateTime

from .models import BookingWindow, BufferPolicy


def get_booking_window(
    start_time: DateTime,
    duration_minutes: int,
    buffer: Optional[BufferPolicy] = None
) -> BookingWindow:
    """
    Calculate a booking's window including the buffer on both sides.

    Purely arithmetic; no conflict checking is done.
    """
    policy = buffer or BufferPolicy()
    return BookingWindow.around(start_time, duration_minutes, policy.buffer_minutes)


def is_within_business_hours(
    moment: DateTime,
    start_hour: int = 9,
    end_hour: int = 20
) -> bool:
    """True iff ``start_hour <= moment.hour < end_hour``."""
    return start_hour <= moment.hour < end_hour
