"""
Domain-specific exception hierarchy for the booking engine.
"""

from enum import Enum


class Reason(str, Enum):
    """Machine-readable cause attached to every rejected booking or cancellation."""

    ONE_PER_DAY = "one_per_day"
    OVERLAPPING = "overlapping"
    CLOSED_DAY = "closed_day"
    HORIZON_EXCEEDED = "horizon_exceeded"
    NOT_OWNER = "not_owner"
    PAST_APPOINTMENT = "past_appointment"
    TOO_CLOSE_TO_CANCEL = "too_close_to_cancel"
    UNKNOWN_SERVICE = "unknown_service"
    APPOINTMENT_NOT_FOUND = "appointment_not_found"


class BookingError(Exception):
    """Base class for all rule violations raised by the engine."""

    def __init__(self, reason: Reason, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message


class ConflictError(BookingError):
    """Raised when a request clashes with existing bookings or with the clock."""


class ValidationError(BookingError):
    """Raised when a request breaks a business rule independent of other bookings."""


class NotFoundError(BookingError):
    """Raised when a referenced appointment does not exist."""
