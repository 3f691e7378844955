"""
Rules deciding whether an appointment may be cancelled.
"""

from typing import Optional

import pendulum

from .exceptions import ConflictError, Reason, ValidationError
from .models import CancelRole, ExistingAppointment
from .ports import Clock


class CancellationPolicy:
    """
    Owners may cancel their own future appointments up to a notice period
    before the start. Admins may cancel any future appointment.
    """

    def __init__(self, clock: Clock, timezone: str, notice_hours: int = 2):
        self.clock = clock
        self.timezone = timezone
        self.notice_hours = notice_hours

    def validate_cancellation(
        self,
        appointment: ExistingAppointment,
        requester_id: Optional[str],
        role: CancelRole,
    ) -> None:
        """
        Return normally when the appointment is safe to delete.

        Raises:
            ValidationError: An owner tries to cancel someone else's appointment
            ConflictError: The appointment already started, or starts too soon
        """
        if role is CancelRole.OWNER and appointment.owner_id != requester_id:
            raise ValidationError(Reason.NOT_OWNER, "You can only cancel your own appointments.")

        starts_at = appointment.starts_at(self.timezone)
        now = pendulum.instance(self.clock.now())

        if starts_at < now:
            raise ConflictError(Reason.PAST_APPOINTMENT, "Past appointment can't be canceled.")

        if role is CancelRole.OWNER and starts_at < now.add(hours=self.notice_hours):
            raise ConflictError(
                Reason.TOO_CLOSE_TO_CANCEL,
                f"Appointments can't be canceled less than {self.notice_hours} hours in advance.",
            )
