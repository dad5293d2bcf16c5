"""
Forward search for alternative start times after a conflict.
"""

import logging
from typing import Dict, List, Optional, Sequence

from pendulum import DateTime

from .conflict_checker import ConflictChecker
from .intervals import add_minutes
from .models import ExistingBooking

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 20
STEP_MINUTES = 30


class AlternativeTimeSuggester:
    """
    Suggests the next available start times after a preferred one.

    Scans forward only. On a conflict the candidate jumps straight past the
    conflicting booking plus the buffer instead of stepping through it, so
    the search costs O(count + conflicts met) checks rather than a whole day.
    The number of attempts is capped at ``max_attempts``; when the cap is hit
    whatever was found so far is returned, possibly nothing.
    """

    def __init__(
        self,
        checker: ConflictChecker,
        max_attempts: int = MAX_ATTEMPTS,
        step_minutes: int = STEP_MINUTES
    ):
        self.checker = checker
        self.max_attempts = max_attempts
        self.step_minutes = step_minutes

    def suggest(
        self,
        preferred: DateTime,
        duration_minutes: int,
        existing: Sequence[ExistingBooking],
        count: int = 3
    ) -> List[DateTime]:
        """
        Find up to ``count`` conflict-free start times after ``preferred``.

        Args:
            preferred: The start time the caller originally asked for
            duration_minutes: Requested booking length
            existing: Existing bookings to avoid
            count: Maximum number of suggestions

        Returns:
            Suggested start times in chronological order
        """
        buffer_minutes = self.checker.buffer_minutes
        by_id: Dict[str, ExistingBooking] = {}
        for booking in existing:
            by_id.setdefault(booking.id, booking)

        suggestions: List[DateTime] = []
        candidate = add_minutes(preferred, duration_minutes + buffer_minutes)

        for _ in range(self.max_attempts):
            if len(suggestions) >= count:
                break

            conflict = self.checker.check_time(candidate, duration_minutes, existing)

            if not conflict.has_conflict:
                suggestions.append(candidate)
                candidate = add_minutes(candidate, self.step_minutes)
                continue

            blocking = by_id.get(conflict.conflicting_booking_id)
            if blocking is not None:
                candidate = add_minutes(blocking.end_time, buffer_minutes)
            else:
                candidate = add_minutes(candidate, self.step_minutes)
        else:
            if len(suggestions) < count:
                logger.debug(
                    "Suggestion search exhausted after %d attempts; found %d of %d",
                    self.max_attempts, len(suggestions), count
                )

        return suggestions

    def next_available(
        self,
        start: DateTime,
        duration_minutes: int,
        existing: Sequence[ExistingBooking]
    ) -> Optional[DateTime]:
        """Return the first suggested start time after ``start``, or None."""
        suggestions = self.suggest(start, duration_minutes, existing, count=1)
        return suggestions[0] if suggestions else None
