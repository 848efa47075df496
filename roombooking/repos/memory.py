"""In-memory booking store."""

from __future__ import annotations

from threading import Lock

from roombooking.domain.errors import NotFoundError, StoreError
from roombooking.domain.models import Booking
from roombooking.repos.query import BookingQuery


class BookingRepository:
    """Dict-backed store for Booking documents, partitioned by room id.

    Like a partitioned document container, deletion is addressed by
    ``(room_id, booking_id)``; ``get`` resolves an id across partitions.
    Each operation is atomic on its own.
    """

    def __init__(self) -> None:
        self._partitions: dict[str, dict[str, Booking]] = {}
        self._lock = Lock()

    def add(self, booking: Booking) -> Booking:
        with self._lock:
            if any(booking.id in p for p in self._partitions.values()):
                raise StoreError(f"Booking id already exists: {booking.id}")
            self._partitions.setdefault(booking.room_id, {})[booking.id] = booking
        return booking

    def get(self, booking_id: str) -> Booking | None:
        with self._lock:
            for partition in self._partitions.values():
                if booking_id in partition:
                    return partition[booking_id]
        return None

    def query(self, query: BookingQuery) -> list[Booking]:
        with self._lock:
            snapshot = [b for p in self._partitions.values() for b in p.values()]
        return query.apply(snapshot)

    def delete(self, room_id: str, booking_id: str) -> None:
        with self._lock:
            partition = self._partitions.get(room_id, {})
            if booking_id not in partition:
                raise NotFoundError(booking_id)
            del partition[booking_id]
            if not partition:
                del self._partitions[room_id]

    def count(self) -> int:
        with self._lock:
            return sum(len(p) for p in self._partitions.values())
