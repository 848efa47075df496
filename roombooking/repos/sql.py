"""SQLAlchemy-backed booking store: one row per booking document."""

from __future__ import annotations

import logging
from datetime import timezone

from sqlalchemy import Column, DateTime, String, Text, create_engine, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from roombooking.domain.errors import NotFoundError, StoreError
from roombooking.domain.models import Booking
from roombooking.repos.query import BookingQuery, Predicate

logger = logging.getLogger(__name__)

Base = declarative_base()


class BookingRow(Base):
    __tablename__ = "bookings"

    id = Column(String, primary_key=True)
    room_id = Column(String, nullable=False, index=True)
    date = Column(String(10), nullable=False, index=True)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    professor_name = Column(String, nullable=False)
    course = Column(String, nullable=False)
    notes = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False)

    @classmethod
    def from_booking(cls, booking: Booking) -> BookingRow:
        return cls(**booking.model_dump())

    def to_booking(self) -> Booking:
        created_at = self.created_at
        if created_at.tzinfo is None:
            # SQLite drops the offset; values are always written in UTC.
            created_at = created_at.replace(tzinfo=timezone.utc)
        return Booking(
            id=self.id,
            room_id=self.room_id,
            date=self.date,
            start_time=self.start_time,
            end_time=self.end_time,
            professor_name=self.professor_name,
            course=self.course,
            notes=self.notes,
            created_at=created_at,
        )


def get_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, pool_pre_ping=True)


def _to_clause(predicate: Predicate):
    column = getattr(BookingRow, predicate.field)
    if predicate.op == "eq":
        return column == predicate.value
    if predicate.op == "icontains":
        return func.lower(column).contains(str(predicate.value).lower(), autoescape=True)
    raise ValueError(f"Unsupported operator: {predicate.op}")


class SqlBookingRepository:
    """Booking store over any SQLAlchemy-supported database."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._session = sessionmaker(bind=engine, expire_on_commit=False)

    @classmethod
    def from_url(cls, database_url: str) -> SqlBookingRepository:
        repo = cls(get_engine(database_url))
        repo.create_schema()
        return repo

    def create_schema(self) -> None:
        Base.metadata.create_all(self.engine)

    def add(self, booking: Booking) -> Booking:
        try:
            with self._session.begin() as session:
                session.add(BookingRow.from_booking(booking))
        except SQLAlchemyError as exc:
            raise StoreError(exc) from exc
        return booking

    def get(self, booking_id: str) -> Booking | None:
        try:
            with self._session() as session:
                row = session.get(BookingRow, booking_id)
                return row.to_booking() if row is not None else None
        except SQLAlchemyError as exc:
            raise StoreError(exc) from exc

    def query(self, query: BookingQuery) -> list[Booking]:
        stmt = select(BookingRow).where(*[_to_clause(p) for p in query.predicates])
        if query.order_by:
            stmt = stmt.order_by(*[getattr(BookingRow, f) for f in query.order_by])
        logger.debug("Query: %s", stmt)
        try:
            with self._session() as session:
                return [row.to_booking() for row in session.scalars(stmt)]
        except SQLAlchemyError as exc:
            raise StoreError(exc) from exc

    def delete(self, room_id: str, booking_id: str) -> None:
        try:
            with self._session.begin() as session:
                row = session.get(BookingRow, booking_id)
                if row is None or row.room_id != room_id:
                    raise NotFoundError(booking_id)
                session.delete(row)
        except SQLAlchemyError as exc:
            raise StoreError(exc) from exc

    def count(self) -> int:
        try:
            with self._session() as session:
                return session.scalar(select(func.count()).select_from(BookingRow))
        except SQLAlchemyError as exc:
            raise StoreError(exc) from exc
