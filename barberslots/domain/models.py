"""
Domain models for services, time intervals and appointments.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from types import MappingProxyType
from typing import List, Union

import pendulum
from pendulum import DateTime
from pendulum.tz.timezone import Timezone

from .exceptions import Reason, ValidationError


class ServiceType(Enum):
    """The closed set of services the shop offers."""

    HAIR = "HAIR"
    BEARD = "BEARD"
    HAIR_AND_BEARD = "HAIR_AND_BEARD"

    @property
    def duration_minutes(self) -> int:
        return SERVICE_DURATIONS[self]

    @classmethod
    def parse(cls, value: Union[str, "ServiceType"]) -> "ServiceType":
        """
        Resolve a service name (case-insensitive) to a member.

        Raises:
            ValidationError: If the name is not one of the offered services
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValidationError(
                Reason.UNKNOWN_SERVICE,
                f"Unknown service type: '{value}'. "
                f"Expected one of: {', '.join(member.value for member in cls)}",
            ) from None


SERVICE_DURATIONS = MappingProxyType({
    ServiceType.HAIR: 30,
    ServiceType.BEARD: 30,
    ServiceType.HAIR_AND_BEARD: 60,
})

if set(SERVICE_DURATIONS) != set(ServiceType):
    raise RuntimeError("Every ServiceType needs a duration")


class CancelRole(Enum):
    """Who is asking for a cancellation."""

    OWNER = "owner"
    ADMIN = "admin"


def at_time(day: date, slot: time, timezone: str) -> DateTime:
    """Combine a calendar day and a time of day into an aware datetime."""
    return pendulum.datetime(day.year, day.month, day.day, slot.hour, slot.minute, tz=timezone)


@dataclass(frozen=True)
class TimeInterval:
    """
    A half-open interval [start, start + duration).

    Invariant: duration is positive, so end is always after start.
    """
    start: DateTime
    duration_minutes: int

    def __post_init__(self):
        if self.duration_minutes <= 0:
            raise ValueError(f"Duration must be positive, got {self.duration_minutes}")

    @classmethod
    def for_booking(
        cls,
        day: date,
        start_time: time,
        service_type: ServiceType,
        timezone: str,
    ) -> "TimeInterval":
        return cls(
            start=at_time(day, start_time, timezone),
            duration_minutes=service_type.duration_minutes,
        )

    @property
    def end(self) -> DateTime:
        return self.start.add(minutes=self.duration_minutes)

    def overlaps(self, other: "TimeInterval") -> bool:
        """Check if this interval overlaps another. Shared endpoints do not count."""
        return self.start < other.end and self.end > other.start

    def __str__(self) -> str:
        return f"{self.start.format('DD.MM.YYYY HH:mm')} - {self.end.format('HH:mm')}"


@dataclass(frozen=True)
class ExistingAppointment:
    """
    Read-only view of a stored appointment.

    An appointment carries exactly one service type; its duration decides
    how long the chair is occupied.
    """
    id: int
    date: date
    time: time
    service_type: ServiceType
    owner_id: str

    def starts_at(self, timezone: str) -> DateTime:
        return at_time(self.date, self.time, timezone)

    def interval(self, timezone: str) -> TimeInterval:
        return TimeInterval.for_booking(self.date, self.time, self.service_type, timezone)

    def format_display(self) -> str:
        """Format: YYYY-MM-DD HH:MM SERVICE (owner)"""
        return (
            f"{self.date.isoformat()} {self.time.strftime('%H:%M')} "
            f"{self.service_type.value} ({self.owner_id})"
        )


@dataclass(frozen=True)
class BookingRequest:
    """A candidate booking to validate before it is stored."""
    date: date
    time: time
    service_type: ServiceType
    requester_id: str

    def interval(self, timezone: str) -> TimeInterval:
        return TimeInterval.for_booking(self.date, self.time, self.service_type, timezone)


@dataclass(frozen=True)
class AvailableSlotsQuery:
    """Input to slot generation."""
    date: date
    service_type: ServiceType


@dataclass
class BusinessHours:
    """
    Opening hours of the shop.

    Defaults describe the single location: 09:00-19:00 on a 30 minute grid,
    closed on Sunday.
    """
    opening_time: time = time(9, 0)
    closing_time: time = time(19, 0)
    slot_minutes: int = 30
    closed_weekdays: List[int] = field(default_factory=lambda: [6])  # 0=Monday, 6=Sunday
    timezone: str = "Europe/Berlin"

    def __post_init__(self):
        if self.slot_minutes <= 0:
            raise ValueError(f"Slot length must be positive, got {self.slot_minutes}")
        if self.opening_time >= self.closing_time:
            raise ValueError(
                f"Opening time {self.opening_time} must be before closing time {self.closing_time}"
            )

    @property
    def tzinfo(self) -> Timezone:
        return pendulum.timezone(self.timezone)

    def now_in_shop(self, moment: datetime) -> DateTime:
        """Express an aware moment in the shop's timezone."""
        return pendulum.instance(moment).in_timezone(self.timezone)

    def is_open_on(self, day: date) -> bool:
        """Check if the shop opens on a given day."""
        return day.weekday() not in self.closed_weekdays

    def opening_on(self, day: date) -> DateTime:
        return at_time(day, self.opening_time, self.timezone)

    def closing_on(self, day: date) -> DateTime:
        return at_time(day, self.closing_time, self.timezone)

    def last_start_on(self, day: date, service_type: ServiceType) -> DateTime:
        """Latest start that still finishes the service by closing time."""
        return self.closing_on(day).subtract(minutes=service_type.duration_minutes)


def parse_day(value: str) -> date:
    """Parse a YYYY-MM-DD string."""
    parsed = pendulum.from_format(value.strip(), "YYYY-MM-DD")
    return date(parsed.year, parsed.month, parsed.day)


def parse_time_of_day(value: str) -> time:
    """Parse an HH:mm string."""
    parsed = pendulum.from_format(value.strip(), "HH:mm")
    return time(parsed.hour, parsed.minute)
