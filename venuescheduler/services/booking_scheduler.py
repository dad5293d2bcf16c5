"""
Application service for checking and reserving bookings.

The service loads the relevant day's bookings through a booking source
adapter and delegates every decision to the domain-level conflict checker,
suggester and slot enumerator. This keeps the CLI thin and lets tests plug
in a stub source via a simple protocol.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol

from pendulum import DateTime

from ..domain.conflict_checker import ConflictChecker
from ..domain.models import (
    DEFAULT_BOOKING_DURATION_MINUTES,
    BusinessHours,
    CandidateRequest,
    ConflictResult,
    ExistingBooking,
)
from ..domain.slot_enumerator import SlotEnumerator
from ..domain.suggester import AlternativeTimeSuggester

logger = logging.getLogger(__name__)


class BookingSourceProtocol(Protocol):
    """Protocol describing the booking storage behaviour needed by the service."""

    async def list_bookings(
        self,
        resource: str,
        day_start: DateTime,
        day_end: DateTime,
    ) -> List[ExistingBooking]:
        """Return active bookings for a resource within the window."""

    async def create_booking(
        self,
        resource: str,
        start_time: DateTime,
        duration_minutes: int,
    ) -> ExistingBooking:
        """Store a new booking and return it."""


@dataclass(frozen=True)
class ReservationResult:
    """Outcome of a reservation attempt: either a booking or a conflict."""
    conflict: ConflictResult
    booking: Optional[ExistingBooking] = None

    @property
    def created(self) -> bool:
        return self.booking is not None


class BookingSchedulerService:
    """
    Orchestrates booking retrieval and scheduling decisions.

    Bookings on different resources never conflict, so every lookup is
    scoped to one resource and one calendar day.
    """

    def __init__(
        self,
        booking_source: BookingSourceProtocol,
        checker: ConflictChecker,
        business_hours: Optional[BusinessHours] = None,
        suggestion_count: int = 3,
        default_slot_duration: int = DEFAULT_BOOKING_DURATION_MINUTES,
    ) -> None:
        self._booking_source = booking_source
        self._checker = checker
        self._suggester = AlternativeTimeSuggester(checker)
        self._enumerator = SlotEnumerator(checker, business_hours)
        self._suggestion_count = suggestion_count
        self._default_slot_duration = default_slot_duration
        self._locks: Dict[str, asyncio.Lock] = {}

    async def bookings_for_day(self, resource: str, day: DateTime) -> List[ExistingBooking]:
        """Fetch active bookings for a resource on the calendar day of ``day``."""
        return await self._booking_source.list_bookings(
            resource=resource,
            day_start=day.start_of("day"),
            day_end=day.end_of("day"),
        )

    async def check_booking(
        self,
        *,
        resource: str,
        start_time: DateTime,
        duration_minutes: int = DEFAULT_BOOKING_DURATION_MINUTES,
        exclude_booking_id: Optional[str] = None,
    ) -> ConflictResult:
        """
        Check a requested start time and suggest alternatives on conflict.
        """
        existing = await self.bookings_for_day(resource, start_time)
        return self._evaluate(
            existing,
            CandidateRequest(
                start_time=start_time,
                duration_minutes=duration_minutes,
                exclude_booking_id=exclude_booking_id,
            ),
        )

    async def available_slots(
        self,
        *,
        resource: str,
        day: DateTime,
        slot_duration_minutes: Optional[int] = None,
    ) -> List[DateTime]:
        """List every bookable start time for a resource on a day."""
        existing = await self.bookings_for_day(resource, day)
        return self._enumerator.available_slots(
            day,
            existing,
            slot_duration_minutes=(
                self._default_slot_duration if slot_duration_minutes is None else slot_duration_minutes
            ),
        )

    async def reserve(
        self,
        *,
        resource: str,
        start_time: DateTime,
        duration_minutes: int = DEFAULT_BOOKING_DURATION_MINUTES,
    ) -> ReservationResult:
        """
        Check a start time and store the booking if it is free.

        Check and write run under a per-resource lock so two concurrent
        reservations cannot both pass the check against the same snapshot.
        """
        lock = self._locks.setdefault(resource.upper(), asyncio.Lock())

        async with lock:
            existing = await self.bookings_for_day(resource, start_time)
            conflict = self._evaluate(
                existing,
                CandidateRequest(start_time=start_time, duration_minutes=duration_minutes),
            )
            if conflict.has_conflict:
                return ReservationResult(conflict=conflict)

            booking = await self._booking_source.create_booking(
                resource=resource,
                start_time=start_time,
                duration_minutes=duration_minutes,
            )

        return ReservationResult(conflict=conflict, booking=booking)

    def _evaluate(
        self,
        existing: List[ExistingBooking],
        candidate: CandidateRequest,
    ) -> ConflictResult:
        conflict = self._checker.check(candidate, existing)
        if not conflict.has_conflict:
            return conflict

        suggestions = self._suggester.suggest(
            candidate.start_time,
            candidate.duration_minutes,
            existing,
            count=self._suggestion_count,
        )
        logger.info(
            "Conflict (%s) for %s against booking %s; %d alternative(s) suggested",
            conflict.conflict_type.value if conflict.conflict_type else None,
            candidate.start_time,
            conflict.conflicting_booking_id,
            len(suggestions),
        )
        return conflict.with_suggestions(suggestions)
