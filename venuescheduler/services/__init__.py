"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .booking_scheduler import BookingSchedulerService, BookingSourceProtocol, ReservationResult

__all__ = ["BookingSchedulerService", "BookingSourceProtocol", "ReservationResult"]
