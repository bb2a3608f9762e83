from collections import Counter
from typing import Dict, List

from .grid import Grid
from .rooms import Room
from .tiles import FLOOR, HALLWAY, TEMP_WALL, UNUSED, WALKABLE, WALL

_EDGE_KINDS = (WALL, HALLWAY, TEMP_WALL)


def _room_mask(grid: Grid, rooms: List[Room]) -> bytearray:
    mask = bytearray(grid.width * grid.height)
    for room in rooms:
        for ix, iy in room.cells():
            mask[ix * grid.height + iy] = 1
    return mask


def infer_walls(grid: Grid, rooms: List[Room], catalog) -> int:
    """Wall in every open cell inside a room or touching a hallway (8-way).

    Cells are marked TEMP_WALL during the scan so new walls never feed back
    into the same pass, then resolved. Silhouette cells are never walled.
    Returns the number of new walls.
    """
    in_room = _room_mask(grid, rooms)
    cells = grid.cells
    height = grid.height
    temp = catalog.temp_wall()
    for x in range(1, grid.width - 1):
        column = cells[x]
        for y in range(1, height - 1):
            kind = column[y].kind
            if kind in WALKABLE or kind == UNUSED or kind == WALL:
                continue
            if in_room[x * height + y] or grid.any_kind_around8(x, y, (HALLWAY,)):
                column[y] = temp
    return grid.replace_kind(TEMP_WALL, catalog.wall(variant="1"))


def floor_variant(grid: Grid, x: int, y: int) -> str:
    def edge(nx, ny):
        return grid.in_bounds(nx, ny) and grid.cells[nx][ny].kind in _EDGE_KINDS

    top = edge(x, y + 1)
    bottom = edge(x, y - 1)
    left = edge(x - 1, y)
    right = edge(x + 1, y)
    if top and left:
        return "top_left"
    if bottom and left:
        return "bottom_left"
    if bottom and right:
        return "bottom_right"
    if top and right:
        return "top_right"
    if top:
        return "top"
    if bottom:
        return "bottom"
    if left:
        return "left"
    if right:
        return "right"
    return "center"


def classify_floor_edges(grid: Grid, catalog) -> Dict[str, int]:
    """Pick the display variant of every floor cell. Never changes a category."""
    tally: Counter = Counter()
    for x, y in grid.positions():
        if grid.cells[x][y].kind != FLOOR:
            continue
        variant = floor_variant(grid, x, y)
        grid.set(x, y, catalog.floor(variant))
        tally[variant] += 1
    return dict(tally)


__all__ = ["infer_walls", "floor_variant", "classify_floor_edges"]
