"""
Domain layer - Pure scheduling logic without external dependencies.
"""

from .booking_window import get_booking_window, is_within_business_hours
from .conflict_checker import ConflictChecker, check_conflict
from .models import (
    BookingWindow,
    BufferPolicy,
    BusinessHours,
    CandidateRequest,
    ConflictResult,
    ConflictType,
    ExistingBooking,
)
from .slot_enumerator import SlotEnumerator
from .suggester import AlternativeTimeSuggester

__all__ = [
    "AlternativeTimeSuggester",
    "BookingWindow",
    "BufferPolicy",
    "BusinessHours",
    "CandidateRequest",
    "ConflictChecker",
    "ConflictResult",
    "ConflictType",
    "ExistingBooking",
    "SlotEnumerator",
    "check_conflict",
    "get_booking_window",
    "is_within_business_hours",
]
