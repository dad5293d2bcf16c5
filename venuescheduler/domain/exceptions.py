"""
Domain-specific exception hierarchy for the venue scheduler.

The scheduling engine itself never raises for well-formed input; these are
used by the configuration, adapter and CLI layers around it.
"""


class SchedulingError(Exception):
    """Base class for all application-level errors."""


class ConfigurationError(SchedulingError):
    """Raised when scheduling settings are missing or inconsistent."""


class BookingSourceError(SchedulingError):
    """Raised when booking data cannot be read or written."""
