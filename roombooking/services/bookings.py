"""Booking use cases: create, list, delete and search availability."""

from __future__ import annotations

import logging
from typing import Protocol

from roombooking.domain.catalog import RoomCatalog
from roombooking.domain.errors import ConflictError, NotFoundError
from roombooking.domain.models import (
    AvailabilityResult,
    Booking,
    BookingFilters,
    CreateBookingRequest,
    TimeSlot,
)
from roombooking.repos.query import BookingQuery, date_query, listing_query, room_day_query
from roombooking.services.availability import find_available
from roombooking.services.conflicts import find_conflicts
from roombooking.services.validation import validate_booking_request

logger = logging.getLogger(__name__)


class BookingStore(Protocol):
    def add(self, booking: Booking) -> Booking: ...

    def get(self, booking_id: str) -> Booking | None: ...

    def query(self, query: BookingQuery) -> list[Booking]: ...

    def delete(self, room_id: str, booking_id: str) -> None: ...

    def count(self) -> int: ...


class BookingService:
    """Stateless orchestration over an injected store and room catalog."""

    def __init__(self, repo: BookingStore, catalog: RoomCatalog) -> None:
        self.repo = repo
        self.catalog = catalog

    def create_booking(self, payload: CreateBookingRequest) -> Booking:
        """Validate, check for overlaps and persist a new booking.

        Raises ConflictError carrying every booking of the room for that day
        when the requested slot overlaps any of them. The fetch/check/insert
        sequence is not serialized, so two concurrent requests for the same
        slot can both succeed.
        """
        slot = validate_booking_request(payload)

        existing = self.repo.query(room_day_query(payload.room_id, payload.date))
        if find_conflicts(slot, existing):
            logger.info(
                "Conflict for %s on %s %s-%s",
                payload.room_id,
                payload.date,
                slot.start,
                slot.end,
            )
            raise ConflictError(existing)

        booking = Booking(
            room_id=payload.room_id,
            date=payload.date,
            start_time=payload.start_time,
            end_time=payload.end_time,
            professor_name=payload.professor_name,
            course=payload.course,
            notes=payload.notes or "",
        )
        created = self.repo.add(booking)
        logger.info("Booking created: %s", created.id)
        return created

    def list_bookings(self, filters: BookingFilters) -> list[Booking]:
        query = listing_query(
            room_id=filters.room_id,
            date=filters.date,
            professor_name=filters.professor_name,
        )
        bookings = self.repo.query(query)
        logger.info("Found %d bookings", len(bookings))
        return bookings

    def delete_booking(self, booking_id: str) -> Booking:
        booking = self.repo.get(booking_id)
        if booking is None:
            raise NotFoundError(booking_id)

        self.repo.delete(booking.room_id, booking.id)
        logger.info("Booking deleted: %s", booking_id)
        return booking

    def available_rooms(
        self, date: str, slot: TimeSlot, min_capacity: int | None = None
    ) -> AvailabilityResult:
        bookings = self.repo.query(date_query(date))
        logger.info("Found %d bookings for %s", len(bookings), date)

        result = find_available(date, slot, bookings, self.catalog, min_capacity)
        logger.info("Found %d available rooms", result.available_count)
        return result
