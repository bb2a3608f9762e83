"""Door negotiation between rooms and corridors.

A door site is a doorway cell on the water just outside a room wall plus
its bridge: the wall cell one step back toward the room, re-tiled as a
directional hallway so the wall is open. Sites are proposed before carving,
pruned with the dead ends, and finalized once the corridors are known.
"""

from dataclasses import dataclass
from typing import Iterator, List, Set

from .directions import Coord, Direction
from .grid import Grid
from .rooms import Room
from .tiles import BACKGROUND, DOOR, HALLWAY, UNUSED


@dataclass(frozen=True)
class DoorSite:
    doorway: Coord
    direction: Direction  # step from the doorway onto the bridge

    @property
    def bridge(self) -> Coord:
        return self.direction.translate(self.doorway)


def door_lines(room: Room) -> Iterator[List[DoorSite]]:
    """Yield candidate sites grouped by wall-parallel index, corners excluded.

    Each group holds the sites sharing one index: (below, above) for the
    horizontal walls, then (left of, right of) for the vertical ones.
    """
    for i in range(room.left + 2, room.right - 2):
        yield [
            DoorSite((i, room.bottom - 1), Direction.UP),
            DoorSite((i, room.top + 1), Direction.DOWN),
        ]
    for j in range(room.bottom + 2, room.top - 2):
        yield [
            DoorSite((room.left - 1, j), Direction.RIGHT),
            DoorSite((room.right + 1, j), Direction.LEFT),
        ]


def find_door_positions(grid: Grid, room: Room) -> List[DoorSite]:
    """Open doorway candidates for ``room``.

    A candidate must be water with room for a wall around it. After a wall
    index yields a candidate the next index is skipped so no two candidates
    touch.
    """
    found: List[DoorSite] = []
    skip = False
    for group in door_lines(room):
        if skip:
            skip = False
            continue
        for site in group:
            x, y = site.doorway
            if grid.kind(x, y) == BACKGROUND and grid.has_clearance(x, y, (UNUSED,)):
                found.append(site)
                skip = True
    return found


def place_doors(grid: Grid, rooms: List[Room], catalog, rng, doors_per_room: int = 1) -> int:
    """Open up to ``doors_per_room`` doors per room, at most one per side."""
    placed = 0
    for room in rooms:
        sites = find_door_positions(grid, room)
        rng.shuffle(sites)
        used: Set[Direction] = set()
        for site in sites:
            if len(used) >= doors_per_room:
                break
            if site.direction in used:
                continue
            grid.set(*site.doorway, catalog.doorway())
            grid.set(*site.bridge, catalog.bridge(site.direction))
            used.add(site.direction)
            placed += 1
    return placed


def remove_door(grid: Grid, x: int, y: int, catalog, rng) -> List[Coord]:
    """Return a doorway to water and wall up any hallway touching it.

    Returns the positions that changed, doorway first.
    """
    grid.set(x, y, catalog.background(rng))
    changed = [(x, y)]
    for direction in Direction:
        nx, ny = direction.translate((x, y))
        if grid.kind(nx, ny) == HALLWAY:
            grid.set(nx, ny, catalog.wall(rng))
            changed.append((nx, ny))
    return changed


def _reaches_corridor(grid: Grid, site: DoorSite) -> bool:
    x, y = site.doorway
    for nx, ny in grid.neighbors4(x, y):
        if (nx, ny) != site.bridge and grid.kind(nx, ny) == HALLWAY:
            return True
    return False


def finalize_doors(grid: Grid, rooms: List[Room], catalog, rng) -> dict:
    """Keep doors that open onto a corridor; wall up the rest with their bridges."""
    kept = demoted = 0
    for room in rooms:
        for group in door_lines(room):
            for site in group:
                x, y = site.doorway
                if grid.kind(x, y) != DOOR:
                    continue
                if _reaches_corridor(grid, site):
                    grid.set(x, y, catalog.doorway())
                    kept += 1
                    continue
                grid.set(x, y, catalog.wall(rng))
                bx, by = site.bridge
                if grid.kind(bx, by) == HALLWAY:
                    grid.set(bx, by, catalog.wall(rng))
                demoted += 1
    return {"doors_kept": kept, "doors_demoted": demoted}


def has_door(grid: Grid, room: Room) -> bool:
    """True when any cell just outside the room's walls, corners excluded, is a door."""
    for ix in range(room.left + 1, room.right):
        if grid.kind(ix, room.bottom - 1) == DOOR or grid.kind(ix, room.top + 1) == DOOR:
            return True
    for iy in range(room.bottom + 1, room.top):
        if grid.kind(room.left - 1, iy) == DOOR or grid.kind(room.right + 1, iy) == DOOR:
            return True
    return False


__all__ = ["DoorSite", "door_lines", "find_door_positions", "place_doors", "remove_door", "finalize_doors", "has_door"]
