"""Input validation shared by booking creation and availability queries.

All checks run before the store is touched and fail fast in a fixed order:
presence, date format, time format, then interval order.
"""

from __future__ import annotations

import re

from roombooking.domain.errors import (
    InvalidDateError,
    InvalidTimeError,
    InvertedIntervalError,
    MissingFieldError,
    ValidationError,
)
from roombooking.domain.models import CreateBookingRequest, TimeSlot

_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_TIME_RE = re.compile(r"[0-9]{2}:[0-9]{2}")
_INT_RE = re.compile(r"[+-]?[0-9]+")

BOOKING_REQUIRED = ("roomId", "date", "startTime", "endTime", "professorName", "course")
AVAILABILITY_REQUIRED = ("date", "startTime", "endTime")


def is_valid_date(value: str) -> bool:
    return _DATE_RE.fullmatch(value) is not None


def is_valid_time(value: str) -> bool:
    return _TIME_RE.fullmatch(value) is not None


def require(fields: dict[str, str | None], message: str = "Missing required fields") -> None:
    """Raise MissingFieldError unless every value in *fields* is non-empty."""
    if not all(fields.values()):
        raise MissingFieldError(list(fields), message=message)


def validate_slot(date: str, start_time: str, end_time: str) -> TimeSlot:
    """Check formats and ordering of a date/time triple and return the slot."""
    if not is_valid_date(date):
        raise InvalidDateError()
    if not (is_valid_time(start_time) and is_valid_time(end_time)):
        raise InvalidTimeError()
    if start_time >= end_time:
        raise InvertedIntervalError()
    return TimeSlot(start=start_time, end=end_time)


def validate_booking_request(payload: CreateBookingRequest) -> TimeSlot:
    fields = {
        "roomId": payload.room_id,
        "date": payload.date,
        "startTime": payload.start_time,
        "endTime": payload.end_time,
        "professorName": payload.professor_name,
        "course": payload.course,
    }
    require(fields)
    return validate_slot(payload.date, payload.start_time, payload.end_time)


def validate_availability_query(
    date: str | None,
    start_time: str | None,
    end_time: str | None,
    min_capacity: str | None = None,
) -> tuple[TimeSlot, int | None]:
    """Validate availability parameters.

    Returns the requested slot and the parsed minimum capacity, which is
    ``None`` when no capacity filter applies (absent, zero or negative).
    """
    require(
        {"date": date, "startTime": start_time, "endTime": end_time},
        message="Missing required parameters",
    )
    slot = validate_slot(date, start_time, end_time)
    return slot, parse_min_capacity(min_capacity)


def parse_min_capacity(raw: str | None) -> int | None:
    if raw is None or raw.strip() == "":
        return None
    if _INT_RE.fullmatch(raw.strip()) is None:
        raise ValidationError("Invalid minCapacity. Use a whole number", minCapacity=raw)
    value = int(raw)
    return value if value > 0 else None


_TIME_FIELDS = frozenset({"startTime", "endTime"})


def from_request_errors(errors: list[dict]) -> ValidationError:
    """Translate framework request-parsing errors into the validator's categories.

    An unreadable body (bad JSON, not an object) counts as missing every
    field; a non-string date or time is a format error like a malformed one.
    """
    fields = {err["loc"][1] for err in errors if len(err.get("loc", ())) > 1}
    if any(len(err.get("loc", ())) < 2 or err.get("type") == "json_invalid" for err in errors):
        return MissingFieldError(list(BOOKING_REQUIRED))
    if "date" in fields:
        return InvalidDateError()
    if fields & _TIME_FIELDS:
        return InvalidTimeError()
    return ValidationError(
        "Invalid request body", invalid=sorted(str(f) for f in fields)
    )
