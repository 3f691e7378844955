"""
In-memory appointment book for the CLI and for tests.
"""

import json
import logging
from datetime import date, time
from pathlib import Path
from typing import Dict, List, Optional

from ..domain.exceptions import BookingError
from ..domain.models import ExistingAppointment, ServiceType, parse_day, parse_time_of_day

logger = logging.getLogger(__name__)


class InMemoryAppointmentBook:
    """
    Dict-backed store implementing the ``AppointmentBook`` protocol.

    The book can be seeded from a JSON file holding a list of records::

        [{"id": 1, "date": "2024-06-10", "time": "09:30",
          "service": "HAIR", "owner": "alice"}]

    Nothing is written back to disk.
    """

    def __init__(self, appointments: Optional[List[ExistingAppointment]] = None):
        self._appointments: Dict[int, ExistingAppointment] = {}
        for appointment in appointments or []:
            self._appointments[appointment.id] = appointment

    @classmethod
    def load_from_json(cls, data_file: Path) -> "InMemoryAppointmentBook":
        """
        Load seed appointments from a JSON file.

        Args:
            data_file: Path to the JSON seed file

        Returns:
            InMemoryAppointmentBook instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file is not a JSON list
        """
        if not data_file.exists():
            raise FileNotFoundError(f"Appointment data file not found: {data_file}")

        try:
            with open(data_file, "r", encoding="utf-8") as f:
                records = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {data_file}: {exc}") from exc

        if not isinstance(records, list):
            raise ValueError("Appointment data file must contain a list at the root level.")

        appointments: List[ExistingAppointment] = []
        for record in records:
            try:
                appointments.append(_parse_record(record))
            except (KeyError, TypeError, ValueError, BookingError) as exc:
                logger.warning("Skipping invalid appointment record %r: %s", record, exc)

        logger.debug("Loaded %d appointments from %s", len(appointments), data_file)
        return cls(appointments)

    def get(self, appointment_id: int) -> Optional[ExistingAppointment]:
        return self._appointments.get(appointment_id)

    def list_appointments_on_date(self, day: date) -> List[ExistingAppointment]:
        return [a for a in self._appointments.values() if a.date == day]

    def list_appointments_for_user_on_date(
        self, user_id: str, day: date
    ) -> List[ExistingAppointment]:
        return [
            a for a in self._appointments.values()
            if a.date == day and a.owner_id == user_id
        ]

    def list_appointments_for_user(self, user_id: str) -> List[ExistingAppointment]:
        return [a for a in self._appointments.values() if a.owner_id == user_id]

    def add(
        self, day: date, start_time: time, service_type: ServiceType, owner_id: str
    ) -> ExistingAppointment:
        appointment = ExistingAppointment(
            id=max(self._appointments, default=0) + 1,
            date=day,
            time=start_time,
            service_type=service_type,
            owner_id=owner_id,
        )
        self._appointments[appointment.id] = appointment
        return appointment

    def remove(self, appointment_id: int) -> None:
        self._appointments.pop(appointment_id, None)


def _parse_record(record: dict) -> ExistingAppointment:
    return ExistingAppointment(
        id=int(record["id"]),
        date=parse_day(record["date"]),
        time=parse_time_of_day(record["time"]),
        service_type=ServiceType.parse(record["service"]),
        owner_id=str(record["owner"]),
    )
