"""
Domain models for bookings, conflict results and opening hours.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional

from pendulum import DateTime

from .intervals import add_minutes, sub_minutes

DEFAULT_BOOKING_DURATION_MINUTES = 120
DEFAULT_BUFFER_MINUTES = 45


@dataclass(frozen=True)
class ExistingBooking:
    """
    A booking already stored for a resource, as supplied by the booking source.

    The occupied interval is ``[start_time, start_time + duration_minutes)``.
    """
    id: str
    start_time: DateTime
    duration_minutes: Optional[int] = DEFAULT_BOOKING_DURATION_MINUTES

    @property
    def effective_duration(self) -> int:
        """Duration in minutes, falling back to the default when unknown."""
        if self.duration_minutes is None:
            return DEFAULT_BOOKING_DURATION_MINUTES
        return self.duration_minutes

    @property
    def end_time(self) -> DateTime:
        return add_minutes(self.start_time, self.effective_duration)


@dataclass(frozen=True)
class CandidateRequest:
    """
    A start time the caller wants to book.

    ``exclude_booking_id`` is set when re-checking an update to an existing
    booking, so the booking being edited is not compared against itself.
    """
    start_time: DateTime
    duration_minutes: int = DEFAULT_BOOKING_DURATION_MINUTES
    exclude_booking_id: Optional[str] = None


@dataclass(frozen=True)
class BufferPolicy:
    """Minimum separation, in minutes, between the start times of two bookings."""
    buffer_minutes: int = DEFAULT_BUFFER_MINUTES


class ConflictType(str, Enum):
    """Kinds of conflict reported for a candidate booking."""
    DOUBLE_BOOKING = "double_booking"
    BUFFER_VIOLATION = "buffer_violation"
    OVERLAP = "overlap"  # declared for callers, never emitted by the checker


@dataclass(frozen=True)
class ConflictResult:
    """
    Outcome of checking a candidate against existing bookings.

    ``suggested_times`` is only ever filled in by callers of the
    alternative-time suggester, never by the conflict checker itself.
    """
    has_conflict: bool
    conflict_type: Optional[ConflictType] = None
    conflicting_booking_id: Optional[str] = None
    message: Optional[str] = None
    suggested_times: List[DateTime] = field(default_factory=list)

    @classmethod
    def no_conflict(cls) -> "ConflictResult":
        return cls(has_conflict=False)

    def with_suggestions(self, times: List[DateTime]) -> "ConflictResult":
        """Return a copy of this result carrying the given alternative times."""
        return replace(self, suggested_times=list(times))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-friendly dict, omitting absent fields."""
        data: Dict[str, Any] = {"hasConflict": self.has_conflict}
        if self.conflict_type is not None:
            data["conflictType"] = self.conflict_type.value
        if self.conflicting_booking_id is not None:
            data["conflictingBookingId"] = self.conflicting_booking_id
        if self.message is not None:
            data["message"] = self.message
        data["suggestedTimes"] = [t.to_iso8601_string() for t in self.suggested_times]
        return data


@dataclass(frozen=True)
class BusinessHours:
    """
    Opening hours of a venue, as whole hours of the day.

    Invariant (checked by the config layer, not here): 0 <= start_hour < end_hour <= 23.
    """
    start_hour: int = 9
    end_hour: int = 20

    def opening(self, day: DateTime) -> DateTime:
        """Opening instant on the calendar day of ``day``."""
        return day.set(hour=self.start_hour, minute=0, second=0, microsecond=0)

    def closing(self, day: DateTime) -> DateTime:
        """Closing instant on the calendar day of ``day``."""
        return day.set(hour=self.end_hour, minute=0, second=0, microsecond=0)

    def contains(self, moment: DateTime) -> bool:
        """Check whether ``moment`` falls inside opening hours."""
        return self.start_hour <= moment.hour < self.end_hour


@dataclass(frozen=True)
class BookingWindow:
    """
    A booking's occupied time plus the buffer on both sides.
    """
    booking_start: DateTime
    booking_end: DateTime
    window_start: DateTime
    window_end: DateTime
    total_duration: int

    @classmethod
    def around(
        cls,
        start_time: DateTime,
        duration_minutes: int,
        buffer_minutes: int
    ) -> "BookingWindow":
        booking_end = add_minutes(start_time, duration_minutes)
        return cls(
            booking_start=start_time,
            booking_end=booking_end,
            window_start=sub_minutes(start_time, buffer_minutes),
            window_end=add_minutes(booking_end, buffer_minutes),
            total_duration=duration_minutes + buffer_minutes * 2,
        )

    def __str__(self) -> str:
        return (
            f"{self.window_start.format('HH:mm')} [{self.booking_start.format('HH:mm')}"
            f" - {self.booking_end.format('HH:mm')}] {self.window_end.format('HH:mm')}"
        )
