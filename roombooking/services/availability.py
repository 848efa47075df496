"""Service for computing which catalog rooms are free for a requested slot."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from roombooking.domain.catalog import RoomCatalog
from roombooking.domain.models import (
    AvailabilityResult,
    AvailableRoom,
    Booking,
    ScheduleEntry,
    TimeSlot,
)
from roombooking.services.conflicts import has_conflict


def group_by_room(bookings: Iterable[Booking]) -> dict[str, list[Booking]]:
    groups: dict[str, list[Booking]] = defaultdict(list)
    for booking in bookings:
        groups[booking.room_id].append(booking)
    return groups


def day_schedule(bookings: Iterable[Booking]) -> list[ScheduleEntry]:
    """Reduce a room's bookings to schedule entries sorted by start time."""
    entries = [ScheduleEntry.from_booking(b) for b in bookings]
    entries.sort(key=lambda e: e.start_time)
    return entries


def find_available(
    date: str,
    candidate: TimeSlot,
    bookings_for_date: Iterable[Booking],
    catalog: RoomCatalog,
    min_capacity: int | None = None,
) -> AvailabilityResult:
    """Return the catalog rooms with no booking overlapping *candidate*.

    *bookings_for_date* may contain bookings of any room but must all fall on
    *date*. Rooms are kept in catalog order. When *min_capacity* is positive
    the conflict-free rooms are further narrowed to those that seat at least
    that many people. Every room returned carries its full schedule for the
    day, not only the bookings near the candidate slot.
    """
    groups = group_by_room(b for b in bookings_for_date if b.date == date)

    free = [room for room in catalog if not has_conflict(candidate, groups.get(room.id, []))]
    if min_capacity and min_capacity > 0:
        free = [room for room in free if room.capacity >= min_capacity]

    rooms: list[AvailableRoom] = []
    for room in free:
        schedule = day_schedule(groups.get(room.id, []))
        rooms.append(
            AvailableRoom(
                **room.model_dump(),
                bookings_today=len(schedule),
                schedule=schedule,
            )
        )

    return AvailabilityResult(
        total_rooms=len(catalog),
        available_count=len(rooms),
        rooms=rooms,
    )
