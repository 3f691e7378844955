"""
Domain layer - Pure booking rules without storage or I/O.
"""

from .cancellation import CancellationPolicy
from .conflict_evaluator import ConflictEvaluator
from .exceptions import BookingError, ConflictError, NotFoundError, Reason, ValidationError
from .models import (
    AvailableSlotsQuery,
    BookingRequest,
    BusinessHours,
    CancelRole,
    ExistingAppointment,
    ServiceType,
    TimeInterval,
)
from .slot_generator import SlotGenerator

__all__ = [
    "AvailableSlotsQuery",
    "BookingError",
    "BookingRequest",
    "BusinessHours",
    "CancelRole",
    "CancellationPolicy",
    "ConflictError",
    "ConflictEvaluator",
    "ExistingAppointment",
    "NotFoundError",
    "Reason",
    "ServiceType",
    "SlotGenerator",
    "TimeInterval",
    "ValidationError",
]
