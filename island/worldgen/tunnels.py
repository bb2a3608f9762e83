from typing import List, Optional, Tuple

from .directions import CARDINALS, Coord, Direction
from .grid import Grid
from .tiles import BACKGROUND, DOOR, TEMP_HALLWAY, UNUSED

_TUNNELABLE = (BACKGROUND, DOOR)


class Carver:
    """Randomized stack-based backtracker over the odd lattice.

    Corridors advance two cells per step, so parallel corridors always keep
    a wall-width gap. ``visited`` lives only as long as the carve.
    """

    def __init__(self, grid: Grid, catalog, rng, continue_percentage: int):
        self.grid = grid
        self.catalog = catalog
        self.rng = rng
        self.continue_percentage = continue_percentage
        self.visited = bytearray(grid.width * grid.height)
        self.seeds_used = 0

    def _index(self, pos: Coord) -> int:
        return pos[0] * self.grid.height + pos[1]

    def can_tunnel(self, pos: Coord) -> bool:
        x, y = pos
        if not self.grid.has_clearance(x, y, (UNUSED,)):
            return False
        if self.visited[self._index(pos)]:
            return False
        return self.grid.kind(x, y) in _TUNNELABLE

    def _dig(self, pos: Coord):
        if self.grid.kind(*pos) == BACKGROUND:
            self.grid.set(pos[0], pos[1], self.catalog.temp_hallway())

    def _step(self, pos: Coord, direction: Direction, stack: List[Tuple[Coord, Optional[Direction]]]):
        target = direction.translate(pos, 2)
        if not self.can_tunnel(target):
            return
        self.visited[self._index(pos)] = 1
        self._dig(pos)
        self._dig(direction.translate(pos))
        self._dig(target)
        stack.append((target, direction))

    def tunnel(self, start: Coord) -> None:
        stack: List[Tuple[Coord, Optional[Direction]]] = [(start, None)]
        bias = False
        while stack:
            pos, last = stack.pop()
            order = list(CARDINALS)
            self.rng.shuffle(order)
            for direction in order:
                if bias and direction is last:
                    continue
                self._step(pos, direction, stack)
            # straight continuation goes on the stack last so it is explored first
            if bias and last is not None:
                self._step(pos, last, stack)
            bias = self.rng.randrange(100) < self.continue_percentage

    def carve(self) -> int:
        """Tunnel from every carve-able odd lattice cell; returns hallway cells produced."""
        for x in range(1, self.grid.width - 1, 2):
            for y in range(1, self.grid.height - 1, 2):
                if self.can_tunnel((x, y)):
                    self.seeds_used += 1
                    self.tunnel((x, y))
        return self.grid.replace_kind(TEMP_HALLWAY, self.catalog.hallway())


def carve_paths(grid: Grid, catalog, rng, continue_percentage: int) -> dict:
    carver = Carver(grid, catalog, rng, continue_percentage)
    carved = carver.carve()
    return {"hallway_cells_carved": carved, "carve_seeds": carver.seeds_used}


__all__ = ["Carver", "carve_paths"]
