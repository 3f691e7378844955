"""
Collaborator protocols the domain layer depends on.

Storage and the wall clock live outside the engine; any object with these
methods can be plugged in (the in-memory adapter, a database repository,
or a stub in tests).
"""

from __future__ import annotations

from datetime import date, time
from typing import List, Optional, Protocol

from pendulum import DateTime

from .models import ExistingAppointment, ServiceType


class AppointmentLookup(Protocol):
    """Read access to the appointments of a single day."""

    def list_appointments_on_date(self, day: date) -> List[ExistingAppointment]:
        """Return a consistent snapshot of every appointment on ``day``."""

    def list_appointments_for_user_on_date(
        self, user_id: str, day: date
    ) -> List[ExistingAppointment]:
        """Return the appointments ``user_id`` holds on ``day``."""


class AppointmentBook(AppointmentLookup, Protocol):
    """Lookup plus the write operations the booking service hands off to."""

    def get(self, appointment_id: int) -> Optional[ExistingAppointment]:
        """Return the appointment or None if it does not exist."""

    def list_appointments_for_user(self, user_id: str) -> List[ExistingAppointment]:
        """Return every appointment held by ``user_id``."""

    def add(
        self, day: date, start_time: time, service_type: ServiceType, owner_id: str
    ) -> ExistingAppointment:
        """Store a new appointment and return it with its assigned id."""

    def remove(self, appointment_id: int) -> None:
        """Delete an appointment."""


class Clock(Protocol):
    """Source of the current moment."""

    def now(self) -> DateTime:
        """Return the current timezone-aware datetime."""
