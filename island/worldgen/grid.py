"""Column-major tile grid.

``cells[x][y]`` holds a Tile for every position; ``x`` runs 0..width-1 and
``y`` runs 0..height-1 with ``y`` growing upward. Every accessor checks bounds
first and raises GridBoundsError instead of letting Python wrap a negative
index.
"""

from __future__ import annotations

from typing import Iterator, List, Tuple

from .directions import Coord
from .tiles import Tile

NEIGHBORS4 = ((0, 1), (0, -1), (-1, 0), (1, 0))
NEIGHBORS8 = ((-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1))


class GridBoundsError(IndexError):
    """A position outside the grid reached a cell accessor."""


class UnrenderableTileError(ValueError):
    """A grid cell holds something that is not a Tile."""


class Grid:
    def __init__(self, width: int, height: int, fill: Tile):
        self.width = width
        self.height = height
        self.cells: List[List[Tile]] = [[fill] * height for _ in range(width)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x: int, y: int):
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise GridBoundsError(f"({x}, {y}) outside {self.width}x{self.height} grid")

    def get(self, x: int, y: int) -> Tile:
        self._check(x, y)
        return self.cells[x][y]

    def kind(self, x: int, y: int) -> str:
        self._check(x, y)
        return self.cells[x][y].kind

    def set(self, x: int, y: int, tile: Tile):
        self._check(x, y)
        self.cells[x][y] = tile

    def __getitem__(self, pos: Coord) -> Tile:
        return self.get(pos[0], pos[1])

    def __setitem__(self, pos: Coord, tile: Tile):
        self.set(pos[0], pos[1], tile)

    def positions(self) -> Iterator[Coord]:
        """Every position in column-major order (x outer, y inner)."""
        for x in range(self.width):
            for y in range(self.height):
                yield x, y

    def neighbors4(self, x: int, y: int) -> Iterator[Coord]:
        for dx, dy in NEIGHBORS4:
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                yield nx, ny

    def neighbors8(self, x: int, y: int) -> Iterator[Coord]:
        for dx, dy in NEIGHBORS8:
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                yield nx, ny

    def has_clearance(self, x: int, y: int, forbidden) -> bool:
        """True when (x, y) and its 8 neighbours are inside the inner ring and none is ``forbidden``.

        The inner ring leaves one cell between any neighbour and the grid edge,
        so a wall can always be inferred around a carved cell.
        """
        if not (2 <= x < self.width - 2 and 2 <= y < self.height - 2):
            return False
        for ix in range(x - 1, x + 2):
            column = self.cells[ix]
            for iy in range(y - 1, y + 2):
                if column[iy].kind in forbidden:
                    return False
        return True

    def count_kind_around4(self, x: int, y: int, kinds) -> int:
        return sum(1 for nx, ny in self.neighbors4(x, y) if self.cells[nx][ny].kind in kinds)

    def any_kind_around8(self, x: int, y: int, kinds) -> bool:
        return any(self.cells[nx][ny].kind in kinds for nx, ny in self.neighbors8(x, y))

    def replace_kind(self, kind: str, tile: Tile) -> int:
        """Swap every cell of ``kind`` for ``tile``; returns how many changed."""
        changed = 0
        for column in self.cells:
            for y, cell in enumerate(column):
                if cell.kind == kind:
                    column[y] = tile
                    changed += 1
        return changed

    def validate(self):
        """Raise UnrenderableTileError if any cell is not a populated Tile."""
        for x, column in enumerate(self.cells):
            for y, cell in enumerate(column):
                if not isinstance(cell, Tile):
                    raise UnrenderableTileError(f"cell ({x}, {y}) holds {cell!r}")

    def copy_columns(self) -> List[List[Tile]]:
        return [list(column) for column in self.cells]

    def rows_top_down(self) -> Iterator[Tuple[int, List[Tile]]]:
        """Yield (y, row) from the top row (y = height-1) to the bottom."""
        for y in range(self.height - 1, -1, -1):
            yield y, [self.cells[x][y] for x in range(self.width)]


__all__ = ["Grid", "GridBoundsError", "UnrenderableTileError", "NEIGHBORS4", "NEIGHBORS8"]
