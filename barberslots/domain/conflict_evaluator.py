"""
Conflict detection and booking rules.

Pure domain logic: every check reads the day's appointments through the
injected lookup, compares intervals, and either passes silently or raises a
``BookingError`` carrying the reason. Nothing here writes, logs or retries.
"""

from datetime import date, time
from typing import FrozenSet, Iterable

from .exceptions import ConflictError, Reason, ValidationError
from .models import BookingRequest, BusinessHours, ExistingAppointment, ServiceType, TimeInterval
from .ports import AppointmentLookup, Clock


# Existing appointments a new booking of each service is checked against.
# The combo occupies the chair for a HAIR half and a BEARD half.
_RELEVANT_SERVICES = {
    ServiceType.HAIR: frozenset({ServiceType.HAIR}),
    ServiceType.BEARD: frozenset({ServiceType.BEARD}),
    ServiceType.HAIR_AND_BEARD: frozenset(ServiceType),
}


class ConflictEvaluator:
    """
    Decides whether a time interval is free and whether a booking is legal.

    The shop has a single chair, so every appointment on a date competes
    with every other one regardless of staff.
    """

    def __init__(
        self,
        appointments: AppointmentLookup,
        clock: Clock,
        business_hours: BusinessHours,
        booking_horizon_months: int = 1,
    ):
        self.appointments = appointments
        self.clock = clock
        self.business_hours = business_hours
        self.booking_horizon_months = booking_horizon_months

    @staticmethod
    def overlaps(existing: TimeInterval, candidate: TimeInterval) -> bool:
        """Half-open overlap test; back-to-back intervals do not overlap."""
        return candidate.overlaps(existing)

    def is_available(self, day: date, candidate_start: time, service_type: ServiceType) -> bool:
        """Check that no appointment on ``day`` overlaps the candidate interval."""
        candidate = TimeInterval.for_booking(
            day, candidate_start, service_type, self.business_hours.timezone
        )
        existing = self.appointments.list_appointments_on_date(day)
        return not self._any_overlap(existing, candidate)

    def validate_new_booking(self, request: BookingRequest) -> None:
        """
        Run the booking rules in order; the first violation wins.

        Raises:
            ConflictError: Requester already booked that day, or the slot is taken
            ValidationError: The shop is closed that day, or the date is too far ahead
        """
        if self.appointments.list_appointments_for_user_on_date(request.requester_id, request.date):
            raise ConflictError(Reason.ONE_PER_DAY, "Only one appointment per day.")

        if self._overlaps_same_service(request):
            raise ConflictError(
                Reason.OVERLAPPING, "An overlapping appointment has already been made."
            )

        if not self.business_hours.is_open_on(request.date):
            weekday = request.date.strftime("%A")
            raise ValidationError(Reason.CLOSED_DAY, f"{weekday} is closed.")

        if request.date > self.latest_bookable_date():
            raise ValidationError(
                Reason.HORIZON_EXCEEDED,
                f"Appointments cannot be made more than {self.booking_horizon_months} "
                f"month(s) in advance.",
            )

    def latest_bookable_date(self) -> date:
        """Today plus the booking horizon, inclusive."""
        today = self.business_hours.now_in_shop(self.clock.now()).date()
        return today.add(months=self.booking_horizon_months)

    def _overlaps_same_service(self, request: BookingRequest) -> bool:
        relevant: FrozenSet[ServiceType] = _RELEVANT_SERVICES[request.service_type]
        existing = [
            appointment
            for appointment in self.appointments.list_appointments_on_date(request.date)
            if appointment.service_type in relevant
        ]
        candidate = request.interval(self.business_hours.timezone)
        return self._any_overlap(existing, candidate)

    def _any_overlap(
        self, existing: Iterable[ExistingAppointment], candidate: TimeInterval
    ) -> bool:
        tz = self.business_hours.timezone
        return any(
            self.overlaps(appointment.interval(tz), candidate)
            for appointment in existing
        )
