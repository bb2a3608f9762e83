"""Connectivity analysis over walkable cells.

Used by the detached-region cleanup during generation and by the metrics,
tests and the seed sweep script to confirm a world is one enclosed,
dead-end free region.
"""

from collections import defaultdict
from typing import Dict, List, Tuple

from .directions import Coord
from .grid import Grid
from .tiles import TRANSIENT, VOID, WALKABLE


class UnionFind:
    def __init__(self, size: int):
        self.parent = list(range(size))
        self.size = [1] * size

    def find(self, a: int) -> int:
        parent = self.parent
        while parent[a] != a:
            parent[a] = parent[parent[a]]
            a = parent[a]
        return a

    def union(self, a: int, b: int) -> int:
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return ra
        if self.size[ra] < self.size[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        self.size[ra] += self.size[rb]
        return ra


def walkable_components(grid: Grid) -> List[List[Coord]]:
    """4-connected walkable components, ordered by their first cell in column-major order."""
    height = grid.height
    cells = grid.cells
    uf = UnionFind(grid.width * height)
    walkable: List[int] = []
    for x in range(grid.width):
        for y in range(height):
            if cells[x][y].kind not in WALKABLE:
                continue
            i = x * height + y
            walkable.append(i)
            if x > 0 and cells[x - 1][y].kind in WALKABLE:
                uf.union(i, i - height)
            if y > 0 and cells[x][y - 1].kind in WALKABLE:
                uf.union(i, i - 1)
    groups: Dict[int, List[Coord]] = defaultdict(list)
    for i in walkable:
        groups[uf.find(i)].append(divmod(i, height))
    # dicts keep insertion order, and walkable is already column-major
    return list(groups.values())


def walkable_degree(grid: Grid, x: int, y: int) -> int:
    return grid.count_kind_around4(x, y, WALKABLE)


def dead_end_cells(grid: Grid) -> List[Coord]:
    """Walkable cells with at most one walkable neighbour."""
    return [(x, y) for x, y in grid.positions() if grid.cells[x][y].kind in WALKABLE and walkable_degree(grid, x, y) <= 1]


def encapsulation_breaches(grid: Grid) -> List[Tuple[Coord, Coord]]:
    """(void cell, walkable cell) pairs that share an edge."""
    breaches = []
    for x, y in grid.positions():
        if grid.cells[x][y].kind not in WALKABLE:
            continue
        for nx, ny in grid.neighbors4(x, y):
            if grid.cells[nx][ny].kind in VOID:
                breaches.append(((nx, ny), (x, y)))
    return breaches


def transient_cells(grid: Grid) -> List[Coord]:
    return [(x, y) for x, y in grid.positions() if grid.cells[x][y].kind in TRANSIENT]


def check_invariants(grid: Grid) -> dict:
    components = walkable_components(grid)
    report = {
        "walkable_components": len(components),
        "dead_ends": len(dead_end_cells(grid)),
        "encapsulation_breaches": len(encapsulation_breaches(grid)),
        "transient_cells": len(transient_cells(grid)),
    }
    report["ok"] = (
        report["walkable_components"] <= 1
        and report["dead_ends"] == 0
        and report["encapsulation_breaches"] == 0
        and report["transient_cells"] == 0
    )
    return report


__all__ = [
    "UnionFind",
    "walkable_components",
    "walkable_degree",
    "dead_end_cells",
    "encapsulation_breaches",
    "transient_cells",
    "check_invariants",
]
