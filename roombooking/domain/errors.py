"""Error taxonomy raised by the booking services.

Each error knows its HTTP status and the JSON body returned to the caller;
the application translates them in a single exception handler.
"""

from __future__ import annotations

from roombooking.domain.models import Booking, ScheduleEntry

FORMATS = {"date": "YYYY-MM-DD", "time": "HH:MM"}


class BookingError(Exception):
    """Base class for domain/service errors."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict:
        return {"error": self.message}


class ValidationError(BookingError):
    """A request field is missing or malformed."""

    status_code = 400

    def __init__(self, message: str, **details) -> None:
        super().__init__(message)
        self.details = details

    def to_body(self) -> dict:
        return {"error": self.message, **self.details}


class MissingFieldError(ValidationError):
    def __init__(self, required: list[str], message: str = "Missing required fields") -> None:
        super().__init__(message, required=list(required))


class InvalidDateError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Invalid date format. Use YYYY-MM-DD", formats=FORMATS)


class InvalidTimeError(ValidationError):
    def __init__(self) -> None:
        super().__init__("Invalid time format. Use HH:MM", formats=FORMATS)


class InvertedIntervalError(ValidationError):
    def __init__(self) -> None:
        super().__init__("End time must be after start time")


class ConflictError(BookingError):
    """The candidate slot overlaps a booking of the same room and date."""

    status_code = 409

    def __init__(self, existing: list[Booking]) -> None:
        super().__init__("Conflict: room already booked for this time slot")
        self.existing = existing

    def to_body(self) -> dict:
        return {
            "error": self.message,
            "existingBookings": [
                ScheduleEntry.from_booking(b).to_document() for b in self.existing
            ],
        }


class NotFoundError(BookingError):
    status_code = 404

    def __init__(self, booking_id: str) -> None:
        super().__init__("Booking not found")
        self.booking_id = booking_id

    def to_body(self) -> dict:
        return {"error": self.message, "id": self.booking_id}


class StoreError(BookingError):
    """The persistence layer failed."""

    def __init__(self, cause: Exception | str) -> None:
        super().__init__("Internal server error")
        self.cause = str(cause)

    def to_body(self) -> dict:
        return {"error": self.message, "message": self.cause}
