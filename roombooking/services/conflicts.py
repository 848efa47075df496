"""Service for detecting scheduling conflicts between bookings."""

from __future__ import annotations

from collections.abc import Iterable

from roombooking.domain.models import Booking, TimeSlot


def overlaps(a: TimeSlot, b: TimeSlot) -> bool:
    """Return True if two slots on the same room and date overlap.

    Slots are half-open, so a booking ending exactly when another starts is
    NOT a conflict. Times are compared as strings, which is only correct for
    zero-padded ``HH:MM`` values.
    """
    return not (a.end <= b.start or a.start >= b.end)


def find_conflicts(candidate: TimeSlot, existing: Iterable[Booking]) -> list[Booking]:
    """Return the bookings in *existing* that overlap *candidate*.

    *existing* must already be narrowed to the candidate's room and date.
    """
    return [booking for booking in existing if overlaps(candidate, booking.slot)]


def has_conflict(candidate: TimeSlot, existing: Iterable[Booking]) -> bool:
    return any(overlaps(candidate, booking.slot) for booking in existing)
