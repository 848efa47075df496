"""FastAPI application — entry point for the room booking service."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from roombooking.config import Settings, configure_logging
from roombooking.domain.catalog import RoomCatalog, default_catalog
from roombooking.domain.errors import BookingError, StoreError, ValidationError
from roombooking.domain.models import BookingFilters, CreateBookingRequest
from roombooking.repos.memory import BookingRepository
from roombooking.repos.sql import SqlBookingRepository
from roombooking.services.bookings import BookingService, BookingStore
from roombooking.services.validation import from_request_errors, validate_availability_query

logger = logging.getLogger(__name__)

SERVICE_NAME = "room-booking-service"

router = APIRouter()


def get_service(request: Request) -> BookingService:
    return request.app.state.booking_service


# ── Routes ────────────────────────────────────────────────────────────


@router.get("/health")
def health() -> dict:
    return {"status": "ok", "service": SERVICE_NAME}


@router.post("/api/bookings", status_code=201)
def create_booking(
    payload: CreateBookingRequest | None = None,
    service: BookingService = Depends(get_service),
) -> dict:
    """Create a booking unless it overlaps one in the same room and day."""
    logger.info("Booking request received")
    booking = service.create_booking(payload or CreateBookingRequest())
    return {
        "success": True,
        "message": "Booking created successfully",
        "booking": booking.to_document(),
    }


@router.get("/api/bookings")
def list_bookings(
    room_id: str | None = Query(default=None, alias="roomId"),
    date: str | None = Query(default=None),
    professor_name: str | None = Query(default=None, alias="professorName"),
    service: BookingService = Depends(get_service),
) -> dict:
    """List bookings filtered by room, date and professor (all optional)."""
    filters = BookingFilters(
        room_id=room_id or None,
        date=date or None,
        professor_name=professor_name or None,
    )
    bookings = service.list_bookings(filters)
    return {
        "count": len(bookings),
        "filters": filters.to_document(),
        "bookings": [b.to_document() for b in bookings],
    }


@router.delete("/api/bookings")
def delete_booking_without_id() -> dict:
    raise ValidationError("Missing booking ID")


@router.delete("/api/bookings/{booking_id}")
def delete_booking(
    booking_id: str, service: BookingService = Depends(get_service)
) -> dict:
    logger.info("Booking delete request: %s", booking_id)
    if not booking_id.strip():
        raise ValidationError("Missing booking ID")

    booking = service.delete_booking(booking_id)
    return {
        "success": True,
        "message": "Booking deleted successfully",
        "deletedBooking": {
            "id": booking.id,
            "roomId": booking.room_id,
            "date": booking.date,
            "course": booking.course,
        },
    }


@router.get("/api/rooms")
def list_rooms(service: BookingService = Depends(get_service)) -> dict:
    rooms = [room.to_document() for room in service.catalog]
    return {"count": len(rooms), "rooms": rooms}


@router.get("/api/rooms/available")
def available_rooms(
    date: str | None = Query(default=None),
    start_time: str | None = Query(default=None, alias="startTime"),
    end_time: str | None = Query(default=None, alias="endTime"),
    min_capacity: str | None = Query(default=None, alias="minCapacity"),
    service: BookingService = Depends(get_service),
) -> dict:
    """Return the rooms free for the requested slot with their day schedule."""
    logger.info("Available rooms request")
    slot, capacity = validate_availability_query(date, start_time, end_time, min_capacity)
    result = service.available_rooms(date, slot, capacity)
    return {
        "requestedSlot": {"date": date, "startTime": slot.start, "endTime": slot.end},
        **result.to_document(),
    }


# ── Error handling ────────────────────────────────────────────────────


async def _booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    if isinstance(exc, StoreError):
        logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc.cause)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = from_request_errors(exc.errors())
    logger.info("Rejected request to %s: %s", request.url.path, error.message)
    return JSONResponse(status_code=error.status_code, content=error.to_body())


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": str(exc)},
    )


# ── Application factory ───────────────────────────────────────────────


def build_repository(settings: Settings) -> BookingStore:
    if settings.database_url:
        return SqlBookingRepository.from_url(settings.database_url)
    return BookingRepository()


def build_catalog(settings: Settings) -> RoomCatalog:
    if settings.rooms_file:
        return RoomCatalog.from_file(settings.rooms_file)
    return default_catalog()


def create_app(
    settings: Settings | None = None,
    repo: BookingStore | None = None,
    catalog: RoomCatalog | None = None,
) -> FastAPI:
    """Build the application around an explicitly constructed store and catalog."""
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(title="Room Booking Service")
    app.state.settings = settings
    app.state.booking_service = BookingService(
        repo=repo if repo is not None else build_repository(settings),
        catalog=catalog if catalog is not None else build_catalog(settings),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_exception_handler(BookingError, _booking_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)
    app.include_router(router)
    return app


app = create_app()
