"""Pruning passes of the topology refiner.

* dead ends: hallway or door cells with at most one walkable exit, to a fixpoint
* orphan rooms: rooms left without any door
* detached regions: walkable islands not connected to the main one
"""

import heapq
from typing import List, Set

from .connectivity import walkable_components
from .directions import Coord
from .doors import has_door, remove_door
from .grid import NEIGHBORS4, NEIGHBORS8, Grid
from .rooms import Room
from .tiles import BACKGROUND, DOOR, HALLWAY, WALKABLE, WALL

_PRUNABLE = (HALLWAY, DOOR)


def _is_dead_end(grid: Grid, x: int, y: int) -> bool:
    return grid.count_kind_around4(x, y, WALKABLE) <= 1


def prune_dead_ends(grid: Grid, catalog, rng) -> dict:
    """Remove dead-end hallways and doors until a full sweep changes nothing.

    Sweeps run over interior cells in column-major order and re-read each
    cell when it is reached, exactly like repeated full scans. Only cells
    whose neighbourhood changed since they were last looked at are queued,
    so a sweep costs the size of the frontier rather than the grid: a change
    ahead of the cursor is handled in the same sweep, one behind it in the
    next.
    """
    height = grid.height
    cells = grid.cells
    stats = {"dead_ends_removed": 0, "doors_removed": 0, "prune_passes": 0}
    current = [
        x * height + y
        for x in range(1, grid.width - 1)
        for y in range(1, height - 1)
        if cells[x][y].kind in _PRUNABLE
    ]
    while current:
        heapq.heapify(current)
        queued: Set[int] = set(current)
        behind: Set[int] = set()
        stats["prune_passes"] += 1
        while current:
            i = heapq.heappop(current)
            x, y = divmod(i, height)
            kind = cells[x][y].kind
            if kind not in _PRUNABLE or not _is_dead_end(grid, x, y):
                continue
            if kind == DOOR:
                changed = remove_door(grid, x, y, catalog, rng)
                stats["doors_removed"] += 1
            else:
                grid.set(x, y, catalog.background(rng))
                changed = [(x, y)]
                stats["dead_ends_removed"] += 1
            for cx, cy in changed:
                for dx, dy in NEIGHBORS4:
                    nx, ny = cx + dx, cy + dy
                    if not (0 < nx < grid.width - 1 and 0 < ny < height - 1):
                        continue
                    if cells[nx][ny].kind not in _PRUNABLE:
                        continue
                    j = nx * height + ny
                    if j > i:
                        if j not in queued:
                            queued.add(j)
                            heapq.heappush(current, j)
                    else:
                        behind.add(j)
        current = list(behind)
    return stats


def _revert_to_background(grid: Grid, x: int, y: int, catalog, rng):
    grid.set(x, y, catalog.background(rng))


def prune_orphan_rooms(grid: Grid, rooms: List[Room], catalog, rng) -> List[Room]:
    """Drop rooms without a door, returning their stamped area to water.

    ``rooms`` is updated in place; the dropped rooms are returned.
    """
    dropped = [room for room in rooms if not has_door(grid, room)]
    for room in dropped:
        for ix, iy in room.cells():
            _revert_to_background(grid, ix, iy, catalog, rng)
    if dropped:
        rooms[:] = [room for room in rooms if room not in dropped]
    return dropped


def prune_detached_regions(grid: Grid, rooms: List[Room], catalog, rng) -> dict:
    """Keep the walkable region holding the most rooms and revert every other one.

    Ties go to the larger region, then to the one found first in
    column-major order. Rooms outside the kept region are dropped, and walls
    that no longer enclose anything walkable are returned to water.
    """
    stats = {"regions_dropped": 0, "rooms_detached": 0, "cells_reverted": 0}
    components = walkable_components(grid)
    if len(components) <= 1:
        return stats
    owner = {}
    for cid, component in enumerate(components):
        for pos in component:
            owner[pos] = cid
    room_counts = [0] * len(components)
    for room in rooms:
        room_counts[owner[(room.left + 1, room.bottom + 1)]] += 1
    keeper = 0
    for cid in range(1, len(components)):
        if (room_counts[cid], len(components[cid])) > (room_counts[keeper], len(components[keeper])):
            keeper = cid

    reverted: List[Coord] = []
    for cid, component in enumerate(components):
        if cid == keeper:
            continue
        stats["regions_dropped"] += 1
        for x, y in component:
            _revert_to_background(grid, x, y, catalog, rng)
            reverted.append((x, y))
    detached = [room for room in rooms if owner[(room.left + 1, room.bottom + 1)] != keeper]
    for room in detached:
        for ix, iy in room.cells():
            if grid.kind(ix, iy) != BACKGROUND:
                _revert_to_background(grid, ix, iy, catalog, rng)
                reverted.append((ix, iy))
    if detached:
        rooms[:] = [room for room in rooms if room not in detached]
    stats["rooms_detached"] = len(detached)

    stale = set()
    for x, y in reverted:
        for dx, dy in NEIGHBORS8:
            nx, ny = x + dx, y + dy
            if grid.in_bounds(nx, ny) and grid.cells[nx][ny].kind == WALL:
                stale.add((nx, ny))
    for x, y in sorted(stale):
        if any(room.contains(x, y) for room in rooms):
            continue
        if grid.any_kind_around8(x, y, WALKABLE):
            continue
        _revert_to_background(grid, x, y, catalog, rng)
        reverted.append((x, y))
    stats["cells_reverted"] = len(reverted)
    return stats


__all__ = ["prune_dead_ends", "prune_orphan_rooms", "prune_detached_regions"]
