from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .config import BOUNDARY_BUFFER, HALLWAY_CLEARANCE, MAX_ROOMS, MAX_TRIES, WorldSettings
from .grid import Grid
from .tiles import UNUSED


@dataclass
class Room:
    """Axis-aligned room. Walls sit on columns x and x+w and rows y and y+h."""

    x: int
    y: int
    w: int
    h: int

    @property
    def left(self) -> int:
        return self.x

    @property
    def right(self) -> int:
        return self.x + self.w

    @property
    def bottom(self) -> int:
        return self.y

    @property
    def top(self) -> int:
        return self.y + self.h

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Every stamped cell, walls included, column-major."""
        for ix in range(self.left, self.right + 1):
            for iy in range(self.bottom, self.top + 1):
                yield ix, iy

    def interior(self) -> Iterator[Tuple[int, int]]:
        for ix in range(self.left + 1, self.right):
            for iy in range(self.bottom + 1, self.top):
                yield ix, iy

    def contains(self, x: int, y: int) -> bool:
        return self.left <= x <= self.right and self.bottom <= y <= self.top

    def is_border(self, x: int, y: int) -> bool:
        return self.contains(x, y) and (x in (self.left, self.right) or y in (self.bottom, self.top))

    def overlaps_buffer_of(self, other: "Room", buffer: int = BOUNDARY_BUFFER) -> bool:
        """True when this room intersects ``other`` grown by ``buffer`` on every side."""
        return (
            self.x < other.right + buffer
            and other.left - buffer < self.right
            and self.y < other.top + buffer
            and other.bottom - buffer < self.top
        )

    def to_dict(self):
        return {"x": self.x, "y": self.y, "w": self.w, "h": self.h}


def build_room(rng, min_dim: int, max_dim: int, width: int, height: int) -> Optional[Room]:
    """Draw a candidate room, or None when the drawn size leaves no room to place it."""
    h = rng.randint(min_dim, max_dim)
    w = rng.randint(min_dim, max_dim)
    inset = BOUNDARY_BUFFER + HALLWAY_CLEARANCE
    span_x = width - inset - w
    span_y = height - inset - h
    if span_x <= 0 or span_y <= 0:
        return None
    return Room(rng.randrange(span_x), rng.randrange(span_y), w, h)


def can_place(grid: Grid, room: Room, rooms: List[Room]) -> bool:
    b = BOUNDARY_BUFFER
    if room.left - b < 0 or room.bottom - b < 0:
        return False
    if room.right + b > grid.width or room.top + b > grid.height:
        return False
    if any(room.overlaps_buffer_of(other) for other in rooms):
        return False
    for ix, iy in room.cells():
        if grid.kind(ix, iy) == UNUSED:
            return False
    return True


def stamp_room(grid: Grid, room: Room, catalog, rng):
    floor = catalog.floor()
    for ix, iy in room.cells():
        if room.is_border(ix, iy):
            grid.set(ix, iy, catalog.wall(rng))
        else:
            grid.set(ix, iy, floor)


def _attempt_rooms(grid: Grid, rooms: List[Room], min_dim: int, max_dim: int, catalog, rng, stats) -> None:
    tries = 0
    while len(rooms) < MAX_ROOMS and tries < MAX_TRIES:
        stats["rooms_attempted"] += 1
        room = build_room(rng, min_dim, max_dim, grid.width, grid.height)
        if room is not None and can_place(grid, room, rooms):
            stamp_room(grid, room, catalog, rng)
            rooms.append(room)
        else:
            # a rejected candidate spends two tries
            tries += 1
        tries += 1


def place_rooms(grid: Grid, settings: WorldSettings, catalog, rng, stats=None) -> List[Room]:
    """Place rooms with the scattered or packed strategy.

    ``scattered`` runs one attempt loop. ``packed`` keeps shrinking the
    maximum room dimension by one and re-running the attempt loop until the
    room cap is reached or the maximum is no longer above min+1.
    Returns the placed rooms; an empty list is a valid outcome.
    """
    if stats is None:
        stats = {}
    stats.setdefault("rooms_attempted", 0)
    stats.setdefault("pack_rounds", 0)
    rooms: List[Room] = []
    min_dim, max_dim = settings.min_room_dim, settings.max_room_dim
    _attempt_rooms(grid, rooms, min_dim, max_dim, catalog, rng, stats)
    stats["pack_rounds"] += 1
    if settings.spread == "packed":
        while len(rooms) < MAX_ROOMS and max_dim > min_dim + 1:
            max_dim -= 1
            _attempt_rooms(grid, rooms, min_dim, max_dim, catalog, rng, stats)
            stats["pack_rounds"] += 1
    stats["rooms_placed"] = len(rooms)
    return rooms


__all__ = ["Room", "build_room", "can_place", "stamp_room", "place_rooms"]
