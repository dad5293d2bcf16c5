"""
Enumeration of every bookable start time on a single business day.
"""

from typing import List, Optional, Sequence

from pendulum import DateTime

from .conflict_checker import ConflictChecker
from .intervals import add_minutes
from .models import BusinessHours, ExistingBooking


class SlotEnumerator:
    """
    Lists conflict-free slot start times within business hours.

    Unlike the suggester this is exhaustive: the whole day is scanned in
    fixed steps so the caller gets the complete set of bookable times.
    """

    def __init__(
        self,
        checker: ConflictChecker,
        business_hours: Optional[BusinessHours] = None,
        step_minutes: int = 30
    ):
        self.checker = checker
        self.business_hours = business_hours or BusinessHours()
        self.step_minutes = step_minutes

    def available_slots(
        self,
        day: DateTime,
        existing: Sequence[ExistingBooking],
        slot_duration_minutes: int = 120
    ) -> List[DateTime]:
        """
        Find all available slot start times on the calendar day of ``day``.

        A step is only a candidate when the whole slot fits before closing.

        Args:
            day: Any instant on the day to scan (its time of day is ignored)
            existing: Existing bookings for that day
            slot_duration_minutes: Length of each slot

        Returns:
            Available start times in chronological order
        """
        day_start = self.business_hours.opening(day)
        day_end = self.business_hours.closing(day)

        slots: List[DateTime] = []
        current = day_start

        while current < day_end:
            if add_minutes(current, slot_duration_minutes) <= day_end:
                conflict = self.checker.check_time(current, slot_duration_minutes, existing)
                if not conflict.has_conflict:
                    slots.append(current)

            current = add_minutes(current, self.step_minutes)

        return slots
