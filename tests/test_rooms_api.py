"""End-to-end tests for the room catalog and availability endpoints."""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from roombooking.config import Settings
from roombooking.domain.catalog import DEFAULT_ROOMS
from roombooking.main import create_app


@pytest.fixture()
def client():
    return TestClient(create_app(settings=Settings()))


def _book(client: TestClient, room_id: str, start: str, end: str, course: str = "Algorithms") -> None:
    resp = client.post(
        "/api/bookings",
        json={
            "roomId": room_id,
            "date": "2024-12-15",
            "startTime": start,
            "endTime": end,
            "professorName": "Mario Rossi",
            "course": course,
        },
    )
    assert resp.status_code == 201


def _available(client: TestClient, **params) -> dict:
    query = {"date": "2024-12-15", "startTime": "09:00", "endTime": "11:00"}
    query.update(params)
    resp = client.get("/api/rooms/available", params=query)
    assert resp.status_code == 200, resp.json()
    return resp.json()


# ---------------------------------------------------------------------------
# Tests: Catalog
# ---------------------------------------------------------------------------


def test_health(client: TestClient):
    assert client.get("/health").json() == {"status": "ok", "service": "room-booking-service"}


def test_list_rooms(client: TestClient):
    body = client.get("/api/rooms").json()
    assert body["count"] == len(DEFAULT_ROOMS)
    assert body["rooms"][0] == {
        "id": "A101",
        "capacity": 30,
        "hasProjector": True,
        "building": "A",
        "isLab": False,
    }


def test_catalog_loaded_from_file(tmp_path):
    rooms_file = tmp_path / "rooms.json"
    rooms_file.write_text(
        json.dumps([{"id": "Z9", "capacity": 12, "hasProjector": False, "building": "Z"}])
    )
    client = TestClient(create_app(settings=Settings(rooms_file=str(rooms_file))))

    body = _available(client)

    assert body["totalRooms"] == 1
    assert [room["id"] for room in body["rooms"]] == ["Z9"]


# ---------------------------------------------------------------------------
# Tests: Availability
# ---------------------------------------------------------------------------


def test_all_rooms_available_on_empty_day(client: TestClient):
    body = _available(client)

    assert body["requestedSlot"] == {"date": "2024-12-15", "startTime": "09:00", "endTime": "11:00"}
    assert body["totalRooms"] == len(DEFAULT_ROOMS)
    assert body["availableCount"] == len(DEFAULT_ROOMS)
    assert body["rooms"][0]["bookingsToday"] == 0
    assert body["rooms"][0]["schedule"] == []


def test_booked_room_excluded(client: TestClient):
    _book(client, "A101", "09:00", "11:00")

    body = _available(client)

    ids = [room["id"] for room in body["rooms"]]
    assert "A101" not in ids
    assert ids == [room.id for room in DEFAULT_ROOMS if room.id != "A101"]
    assert body["availableCount"] == len(ids)


def test_min_capacity(client: TestClient):
    _book(client, "A101", "09:00", "11:00")

    body = _available(client, minCapacity="50")

    assert [room["id"] for room in body["rooms"]] == ["A102", "A103", "B202", "C301"]
    assert body["availableCount"] == len(body["rooms"])
    assert body["totalRooms"] == len(DEFAULT_ROOMS)


def test_min_capacity_zero_means_no_filter(client: TestClient):
    assert _available(client, minCapacity="0")["availableCount"] == len(DEFAULT_ROOMS)


def test_schedule_attached_and_sorted(client: TestClient):
    _book(client, "B201", "15:00", "16:00", course="Late")
    _book(client, "B201", "07:00", "08:00", course="Early")
    _book(client, "B201", "11:00", "12:00", course="Noon")

    body = _available(client)

    b201 = next(room for room in body["rooms"] if room["id"] == "B201")
    assert b201["bookingsToday"] == 3
    assert b201["schedule"] == [
        {"startTime": "07:00", "endTime": "08:00", "course": "Early"},
        {"startTime": "11:00", "endTime": "12:00", "course": "Noon"},
        {"startTime": "15:00", "endTime": "16:00", "course": "Late"},
    ]


def test_repeated_query_is_identical(client: TestClient):
    _book(client, "A101", "09:00", "11:00")
    _book(client, "LAB1", "10:30", "12:00")

    assert _available(client, minCapacity="20") == _available(client, minCapacity="20")


@pytest.mark.parametrize(
    "params,error",
    [
        ({"date": "2024-12-15", "startTime": "09:00"}, "Missing required parameters"),
        ({"date": "2024-12-15", "startTime": "09:00", "endTime": ""}, "Missing required parameters"),
        ({"date": "15-12-2024", "startTime": "09:00", "endTime": "11:00"}, "Invalid date format. Use YYYY-MM-DD"),
        ({"date": "2024-12-15", "startTime": "9:00", "endTime": "11:00"}, "Invalid time format. Use HH:MM"),
        ({"date": "2024-12-15", "startTime": "11:00", "endTime": "09:00"}, "End time must be after start time"),
        (
            {"date": "2024-12-15", "startTime": "09:00", "endTime": "11:00", "minCapacity": "many"},
            "Invalid minCapacity. Use a whole number",
        ),
    ],
)
def test_invalid_parameters(client: TestClient, params: dict, error: str):
    resp = client.get("/api/rooms/available", params=params)
    assert resp.status_code == 400
    assert resp.json()["error"] == error


def test_cors_preflight_allowed(client: TestClient):
    resp = client.options(
        "/api/rooms/available",
        headers={"Origin": "http://localhost:5500", "Access-Control-Request-Method": "GET"},
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] in ("*", "http://localhost:5500")
