import math

from .config import BOUNDARY_BUFFER
from .grid import Grid


def _rectangular(width: int, height: int, x: int, y: int) -> bool:
    return BOUNDARY_BUFFER <= x < width - BOUNDARY_BUFFER and BOUNDARY_BUFFER <= y < height - BOUNDARY_BUFFER


def _circular(width: int, height: int, x: int, y: int) -> bool:
    radius = min(width, height) // 2 - 2
    return math.hypot(x - width / 2, y - height / 2) < radius


def _cube(width: int, height: int, x: int, y: int) -> bool:
    side = height - 6
    left = int(width / 2) - height // 2
    bottom = 4
    return left <= x < left + side and bottom <= y < bottom + side


SILHOUETTES = {
    "rectangular": _rectangular,
    "circular": _circular,
    "cube": _cube,
}


def is_usable(shape: str, width: int, height: int, x: int, y: int) -> bool:
    """True when (x, y) lies inside the named island silhouette."""
    return SILHOUETTES[shape](width, height, x, y)


def apply_shape_mask(grid: Grid, shape: str, catalog, rng) -> int:
    """Stamp UNUSED outside the silhouette and BACKGROUND inside it.

    Background art is drawn from ``rng`` per usable cell in column-major
    order. Returns the number of usable cells.
    """
    inside = SILHOUETTES[shape]
    unused = catalog.unused()
    width, height = grid.width, grid.height
    usable = 0
    for x in range(width):
        column = grid.cells[x]
        for y in range(height):
            if inside(width, height, x, y):
                column[y] = catalog.background(rng)
                usable += 1
            else:
                column[y] = unused
    return usable


__all__ = ["SILHOUETTES", "is_usable", "apply_shape_mask"]
