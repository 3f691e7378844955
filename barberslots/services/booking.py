"""
Application service for booking and cancelling appointments.

The service fetches appointments through an appointment book, delegates every
decision to the domain-level ``ConflictEvaluator``, ``SlotGenerator`` and
``CancellationPolicy``, and only then hands writes back to the book.
"""

from __future__ import annotations

import logging
import threading
from datetime import date, time
from typing import List, Optional

from ..domain.cancellation import CancellationPolicy
from ..domain.conflict_evaluator import ConflictEvaluator
from ..domain.exceptions import NotFoundError, Reason
from ..domain.models import (
    AvailableSlotsQuery,
    BookingRequest,
    BusinessHours,
    CancelRole,
    ExistingAppointment,
    ServiceType,
)
from ..domain.ports import AppointmentBook, Clock
from ..domain.slot_generator import SlotGenerator

logger = logging.getLogger(__name__)


class BookingService:
    """
    Orchestrates lookups, rule checks and writes for a single shop.

    Booking and cancelling run the read-check-write sequence under one lock,
    so two callers sharing a service cannot both take the same slot.
    """

    def __init__(
        self,
        appointment_book: AppointmentBook,
        clock: Clock,
        business_hours: Optional[BusinessHours] = None,
        booking_horizon_months: int = 1,
        cancellation_notice_hours: int = 2,
    ) -> None:
        self._book = appointment_book
        self._clock = clock
        self.business_hours = business_hours or BusinessHours()
        self.evaluator = ConflictEvaluator(
            appointments=appointment_book,
            clock=clock,
            business_hours=self.business_hours,
            booking_horizon_months=booking_horizon_months,
        )
        self.slot_generator = SlotGenerator(evaluator=self.evaluator, clock=clock)
        self.cancellation_policy = CancellationPolicy(
            clock=clock,
            timezone=self.business_hours.timezone,
            notice_hours=cancellation_notice_hours,
        )
        self._write_lock = threading.Lock()

    def available_slots(self, day: date, service_type: ServiceType) -> List[time]:
        """List bookable start times for a date and service."""
        slots = self.slot_generator.available_slots(
            AvailableSlotsQuery(date=day, service_type=service_type)
        )
        logger.debug(
            "%d available %s slots on %s", len(slots), service_type.value, day.isoformat()
        )
        return slots

    def book(self, request: BookingRequest) -> ExistingAppointment:
        """
        Validate a booking request and store it.

        Raises:
            ConflictError: The requester already has a booking that day, or the slot is taken
            ValidationError: The shop is closed, or the date is beyond the booking horizon
        """
        with self._write_lock:
            self.evaluator.validate_new_booking(request)
            appointment = self._book.add(
                request.date, request.time, request.service_type, request.requester_id
            )

        logger.info(
            "Booked appointment %s for %s: %s",
            appointment.id,
            appointment.owner_id,
            appointment.format_display(),
        )
        return appointment

    def cancel_by_user(self, appointment_id: int, requester_id: str) -> ExistingAppointment:
        """Cancel an appointment on behalf of its owner."""
        return self._cancel(appointment_id, requester_id, CancelRole.OWNER)

    def cancel_by_admin(self, appointment_id: int) -> ExistingAppointment:
        """Cancel any future appointment, ignoring ownership and notice period."""
        return self._cancel(appointment_id, None, CancelRole.ADMIN)

    def appointments_for_user(self, user_id: str) -> List[ExistingAppointment]:
        """A user's appointments, newest date first and latest time first within a day."""
        appointments = self._book.list_appointments_for_user(user_id)
        if not appointments:
            logger.debug("User %s has no appointments yet", user_id)
        return sorted(appointments, key=lambda a: (a.date, a.time), reverse=True)

    def appointments_for_date(self, day: date) -> List[ExistingAppointment]:
        """All appointments on a date in start-time order."""
        appointments = self._book.list_appointments_on_date(day)
        if not appointments:
            logger.debug("No appointments on %s", day.isoformat())
        return sorted(appointments, key=lambda a: a.time)

    def _cancel(
        self,
        appointment_id: int,
        requester_id: Optional[str],
        role: CancelRole,
    ) -> ExistingAppointment:
        with self._write_lock:
            appointment = self._book.get(appointment_id)
            if appointment is None:
                raise NotFoundError(
                    Reason.APPOINTMENT_NOT_FOUND, f"Appointment {appointment_id} not found."
                )

            self.cancellation_policy.validate_cancellation(appointment, requester_id, role)
            self._book.remove(appointment_id)

        logger.info(
            "Appointment %s canceled by %s", appointment_id, requester_id or role.value
        )
        return appointment
