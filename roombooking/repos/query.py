"""Composable filters for querying stored bookings.

A ``BookingQuery`` is a list of named predicates combined with AND plus an
ordering. Stores translate it into their own query facility.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Literal

from roombooking.domain.models import Booking

Op = Literal["eq", "icontains"]

# Booking attributes that may be filtered or ordered on.
FIELDS = frozenset({"id", "room_id", "date", "start_time", "end_time", "professor_name", "course"})


@dataclass(frozen=True)
class Predicate:
    field: str
    op: Op
    value: Any

    def __post_init__(self) -> None:
        if self.field not in FIELDS:
            raise ValueError(f"Unknown booking field: {self.field}")

    def matches(self, booking: Booking) -> bool:
        actual = getattr(booking, self.field)
        if self.op == "eq":
            return actual == self.value
        if self.op == "icontains":
            return str(self.value).lower() in str(actual).lower()
        raise ValueError(f"Unsupported operator: {self.op}")


@dataclass(frozen=True)
class BookingQuery:
    predicates: tuple[Predicate, ...] = ()
    order_by: tuple[str, ...] = ()

    def where(self, field_name: str, value: Any, op: Op = "eq") -> BookingQuery:
        return BookingQuery(
            predicates=self.predicates + (Predicate(field_name, op, value),),
            order_by=self.order_by,
        )

    def where_if(self, field_name: str, value: Any, op: Op = "eq") -> BookingQuery:
        """Add a predicate only when *value* is non-empty."""
        if not value:
            return self
        return self.where(field_name, value, op)

    def ordered_by(self, *fields: str) -> BookingQuery:
        unknown = [f for f in fields if f not in FIELDS]
        if unknown:
            raise ValueError(f"Unknown booking field: {unknown[0]}")
        return BookingQuery(predicates=self.predicates, order_by=tuple(fields))

    def matches(self, booking: Booking) -> bool:
        return all(p.matches(booking) for p in self.predicates)

    def apply(self, bookings: Iterable[Booking]) -> list[Booking]:
        """Evaluate the query against an in-memory collection."""
        result = [b for b in bookings if self.matches(b)]
        if self.order_by:
            result.sort(key=lambda b: tuple(getattr(b, f) for f in self.order_by))
        return result


def room_day_query(room_id: str, date: str) -> BookingQuery:
    return BookingQuery().where("room_id", room_id).where("date", date)


def date_query(date: str) -> BookingQuery:
    return BookingQuery().where("date", date)


def listing_query(
    room_id: str | None = None,
    date: str | None = None,
    professor_name: str | None = None,
) -> BookingQuery:
    return (
        BookingQuery()
        .where_if("room_id", room_id)
        .where_if("date", date)
        .where_if("professor_name", professor_name, op="icontains")
        .ordered_by("date", "start_time")
    )
