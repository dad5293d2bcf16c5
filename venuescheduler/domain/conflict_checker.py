"""
Conflict detection between a requested booking and already confirmed ones.

Pure domain logic: no storage, no I/O. The caller supplies the list of
existing bookings (usually everything active on the same day and resource).
"""

import logging
from typing import Optional, Sequence

from pendulum import DateTime

from .intervals import minutes_between
from .models import (
    BufferPolicy,
    CandidateRequest,
    ConflictResult,
    ConflictType,
    ExistingBooking,
)

logger = logging.getLogger(__name__)


def format_time(moment: DateTime) -> str:
    """Format a timestamp for conflict messages, e.g. ``9:30 AM``."""
    return moment.format("h:mm A")


class ConflictChecker:
    """
    Classifies a candidate start time against existing bookings.

    Algorithm:
    1. Skip the booking being edited (``exclude_booking_id``)
    2. Measure the start-to-start distance to each remaining booking
    3. Same instant -> double booking; closer than the buffer -> buffer violation
    4. Stop at the first booking that triggers, in the order given

    The distance check compares start times only, not the full
    occupied intervals. It is accurate while bookings share similar, bounded
    durations; a long booking followed by a candidate starting more than
    ``buffer_minutes`` later but still inside it is not reported.
    """

    def __init__(self, buffer_policy: Optional[BufferPolicy] = None):
        self.buffer_policy = buffer_policy or BufferPolicy()

    @property
    def buffer_minutes(self) -> int:
        return self.buffer_policy.buffer_minutes

    def check(
        self,
        candidate: CandidateRequest,
        existing: Sequence[ExistingBooking]
    ) -> ConflictResult:
        """
        Check a candidate booking against existing bookings.

        Args:
            candidate: Requested start time, duration and optional self-exclusion
            existing: Existing bookings, in the order they should be examined

        Returns:
            ConflictResult describing the first conflict found, or no conflict
        """
        for booking in existing:
            if (
                candidate.exclude_booking_id is not None
                and booking.id == candidate.exclude_booking_id
            ):
                continue

            diff = minutes_between(candidate.start_time, booking.start_time)

            if diff == 0:
                logger.debug(
                    "Double booking: %s collides with booking %s",
                    candidate.start_time, booking.id
                )
                return ConflictResult(
                    has_conflict=True,
                    conflict_type=ConflictType.DOUBLE_BOOKING,
                    conflicting_booking_id=booking.id,
                    message=f"This time slot is already booked at {format_time(booking.start_time)}",
                )

            if diff < self.buffer_minutes:
                logger.debug(
                    "Buffer violation: %s is %.0f min from booking %s (buffer %d)",
                    candidate.start_time, diff, booking.id, self.buffer_minutes
                )
                return ConflictResult(
                    has_conflict=True,
                    conflict_type=ConflictType.BUFFER_VIOLATION,
                    conflicting_booking_id=booking.id,
                    message=(
                        "This booking is too close to an existing booking at "
                        f"{format_time(booking.start_time)}. Please allow at least "
                        f"{self.buffer_minutes} minutes between bookings."
                    ),
                )

        return ConflictResult.no_conflict()

    def check_time(
        self,
        start_time: DateTime,
        duration_minutes: int,
        existing: Sequence[ExistingBooking]
    ) -> ConflictResult:
        """Shortcut for checking a bare start time with no self-exclusion."""
        return self.check(
            CandidateRequest(start_time=start_time, duration_minutes=duration_minutes),
            existing
        )


def check_conflict(
    candidate: CandidateRequest,
    existing: Sequence[ExistingBooking],
    buffer: Optional[BufferPolicy] = None
) -> ConflictResult:
    """Check a candidate against existing bookings with the given buffer policy."""
    return ConflictChecker(buffer).check(candidate, existing)
