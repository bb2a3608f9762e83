from typing import List, Union

from .tiles import Tile


class Occupied:
    """An entity standing on a tile. Keeps the covered tile for restoring."""

    __slots__ = ("entity_id", "covered")

    def __init__(self, entity_id: str, covered: Tile):
        self.entity_id = entity_id
        self.covered = covered

    def __eq__(self, other):
        return isinstance(other, Occupied) and (self.entity_id, self.covered) == (other.entity_id, other.covered)

    def __repr__(self):
        return f"Occupied({self.entity_id!r}, {self.covered.kind}/{self.covered.variant})"

    def to_dict(self):
        return {"entity_id": self.entity_id, "covered": self.covered.to_dict()}


Cell = Union[Tile, Occupied]
Columns = List[List[Cell]]


def base_tile(cell: Cell) -> Tile:
    return cell.covered if isinstance(cell, Occupied) else cell


def occupy(cell: Cell, entity_id: str) -> Occupied:
    """Place ``entity_id`` on a cell; an already occupied cell keeps its covered tile."""
    return Occupied(entity_id, base_tile(cell))


def vacate(cell: Cell) -> Tile:
    return base_tile(cell)


def overlay(columns: Columns, occupants: dict) -> Columns:
    """Apply {entity_id: (x, y)} occupants onto a column-major copy in place."""
    for entity_id, (x, y) in occupants.items():
        columns[x][y] = occupy(columns[x][y], entity_id)
    return columns


__all__ = ["Occupied", "Cell", "Columns", "base_tile", "occupy", "vacate", "overlay"]
