from enum import Enum
from typing import Tuple

Coord = Tuple[int, int]


class Direction(Enum):
    """Cardinal step on the grid. y grows upward, so UP is +1."""

    UP = (0, 1)
    DOWN = (0, -1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    def translate(self, pos: Coord, steps: int = 1) -> Coord:
        return (pos[0] + self.dx * steps, pos[1] + self.dy * steps)


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Fixed iteration order; shuffled copies are taken from this
CARDINALS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)

__all__ = ["Coord", "Direction", "CARDINALS"]
