"""The fixed catalog of bookable rooms."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from pathlib import Path

from roombooking.domain.models import Room

DEFAULT_ROOMS = (
    Room(id="A101", capacity=30, has_projector=True, building="A"),
    Room(id="A102", capacity=50, has_projector=True, building="A"),
    Room(id="A103", capacity=80, has_projector=True, building="A"),
    Room(id="B201", capacity=40, has_projector=True, building="B"),
    Room(id="B202", capacity=60, has_projector=True, building="B"),
    Room(id="C301", capacity=100, has_projector=True, building="C"),
    Room(id="LAB1", capacity=25, has_projector=True, building="LAB", is_lab=True),
    Room(id="LAB2", capacity=25, has_projector=True, building="LAB", is_lab=True),
)


class RoomCatalog:
    """Immutable, ordered collection of rooms keyed by id."""

    def __init__(self, rooms: Iterable[Room]) -> None:
        self._rooms: tuple[Room, ...] = tuple(rooms)
        ids = [room.id for room in self._rooms]
        if len(set(ids)) != len(ids):
            raise ValueError("room ids must be unique within the catalog")

    def __iter__(self) -> Iterator[Room]:
        return iter(self._rooms)

    def __len__(self) -> int:
        return len(self._rooms)

    @classmethod
    def from_file(cls, path: str | Path) -> RoomCatalog:
        """Load a catalog from a JSON list of camelCase room documents."""
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(Room.model_validate(item) for item in raw)


def default_catalog() -> RoomCatalog:
    return RoomCatalog(DEFAULT_ROOMS)
