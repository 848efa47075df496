"""Domain models for the room booking service."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_booking_id() -> str:
    """Return a fresh booking id.

    The random part is a version-4 UUID (122 random bits), so the chance of
    any collision among n ids is roughly n**2 / 2**123.
    """
    return f"booking-{uuid.uuid4().hex}"


class _CamelModel(BaseModel):
    """Base for models exchanged as camelCase JSON documents."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Core domain models
# ---------------------------------------------------------------------------


class TimeSlot(BaseModel):
    """A half-open ``[start, end)`` interval of zero-padded ``HH:MM`` times."""

    model_config = ConfigDict(frozen=True)

    start: str
    end: str


class Booking(_CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_booking_id)
    room_id: str
    date: str
    start_time: str
    end_time: str
    professor_name: str
    course: str
    notes: str = ""
    created_at: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def _end_after_start(self) -> Booking:
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self

    @property
    def slot(self) -> TimeSlot:
        return TimeSlot(start=self.start_time, end=self.end_time)


class Room(_CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str
    capacity: int = Field(gt=0)
    has_projector: bool
    building: str
    is_lab: bool = False


class ScheduleEntry(_CamelModel):
    start_time: str
    end_time: str
    course: str

    @classmethod
    def from_booking(cls, booking: Booking) -> ScheduleEntry:
        return cls(
            start_time=booking.start_time,
            end_time=booking.end_time,
            course=booking.course,
        )


class AvailableRoom(Room):
    """A catalog room annotated with its bookings for the requested day."""

    bookings_today: int
    schedule: list[ScheduleEntry] = Field(default_factory=list)


class AvailabilityResult(_CamelModel):
    total_rooms: int
    available_count: int
    rooms: list[AvailableRoom] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Request DTOs
# ---------------------------------------------------------------------------


class CreateBookingRequest(_CamelModel):
    """Raw booking payload.

    Every field is optional here so that presence checks are reported by the
    input validator with the service's own error body instead of a 422.
    """

    room_id: str | None = None
    date: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    professor_name: str | None = None
    course: str | None = None
    notes: str | None = None


class BookingFilters(_CamelModel):
    room_id: str | None = None
    date: str | None = None
    professor_name: str | None = None
