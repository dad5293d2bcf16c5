"""
Adapters layer - Booking storage integrations.
"""

from .json_booking_store import ACTIVE_STATUSES, JsonBookingStore

__all__ = ["ACTIVE_STATUSES", "JsonBookingStore"]
