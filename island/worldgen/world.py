"""World construction: the generation pipeline.

A World owns its grid, room list, seeded RNG and resolved settings. The
whole pipeline runs inside the constructor; afterwards the only mutations
are the catalog view switch and the RNG draws of the spawn query.
"""
from __future__ import annotations

import random
import time
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

from island.logging_utils import get_logger

from .catalog import TileCatalog
from .cells import Columns, Occupied, overlay
from .config import WorldConfig, resolve_seed, resolve_settings
from .connectivity import check_invariants
from .doors import finalize_doors, place_doors
from .grid import Grid, GridBoundsError
from .metrics import init_metrics
from .pruning import prune_dead_ends, prune_detached_regions, prune_orphan_rooms
from .refine import classify_floor_edges, infer_walls
from .rooms import Room, place_rooms
from .shapes import apply_shape_mask
from .state import config_from_record, config_to_record
from .tiles import Tile
from .tunnels import carve_paths

log = get_logger("island.worldgen")

OCCUPIED_GLYPH = "@"


class World:
    def __init__(self, config: Optional[WorldConfig] = None, *, seed: Optional[int] = None, catalog: Optional[TileCatalog] = None):
        if config is None:
            config = WorldConfig(seed=seed)
        elif seed is not None:
            config = replace(config, seed=seed)
        self.seed = resolve_seed(config.seed)
        self.config = replace(config, seed=self.seed)
        self.width = config.width
        self.height = config.height
        self.catalog = catalog or TileCatalog()
        self.rng = random.Random(self.seed)
        self.metrics: Dict[str, Any] = init_metrics()
        self.settings = resolve_settings(self.config, self.rng)
        self.grid = Grid(self.width, self.height, self.catalog.unused())
        self.rooms: List[Room] = []
        self._run_pipeline()

    @classmethod
    def from_record(cls, record: str, catalog: Optional[TileCatalog] = None) -> "World":
        return cls(config_from_record(record), catalog=catalog)

    def _run_pipeline(self):
        """Execute the ordered generation phases with per-phase timing in ``metrics['phase_ms']``."""
        start = time.perf_counter()
        phase_times = {}

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter(); r = fn(*a, **k); pe = time.perf_counter()
            phase_times[label] = int((pe - ps) * 1000)
            return r

        grid, catalog, rng, s, m = self.grid, self.catalog, self.rng, self.settings, self.metrics
        m['usable_cells'] = _phase('shape_mask', apply_shape_mask, grid, s.shape, catalog, rng)
        self.rooms = _phase('place_rooms', place_rooms, grid, s, catalog, rng, m)
        m['doors_placed'] = _phase('place_doors', place_doors, grid, self.rooms, catalog, rng, s.doors_per_room)
        m.update(_phase('carve', carve_paths, grid, catalog, rng, s.continue_percentage))
        m.update(_phase('prune_dead_ends', prune_dead_ends, grid, catalog, rng))
        m.update(_phase('finalize_doors', finalize_doors, grid, self.rooms, catalog, rng))
        m['walls_inferred'] = _phase('infer_walls', infer_walls, grid, self.rooms, catalog)
        m['floor_variants'] = _phase('classify_floors', classify_floor_edges, grid, catalog)
        orphans = _phase('orphan_rooms', prune_orphan_rooms, grid, self.rooms, catalog, rng)
        m['orphan_rooms_dropped'] = len(orphans)
        m.update(_phase('detached_regions', prune_detached_regions, grid, self.rooms, catalog, rng))
        # cleanup can expose hallway edges that were room walls before
        m['walls_inferred'] += _phase('infer_walls_final', infer_walls, grid, self.rooms, catalog)
        m['rooms_final'] = len(self.rooms)
        m['runtime_ms'] = int((time.perf_counter() - start) * 1000)
        m['phase_ms'] = phase_times
        log.info(
            event="world_generated",
            seed=self.seed,
            shape=s.shape,
            spread=s.spread,
            rooms=len(self.rooms),
            rooms_placed=m['rooms_placed'],
            continue_pct=s.continue_percentage,
            runtime_ms=m['runtime_ms'],
        )

    # --- read access ----------------------------------------------------------
    @property
    def tiles(self) -> List[List[Tile]]:
        """Column-major tile array, by reference. Callers must not write to it."""
        return self.grid.cells

    @property
    def record(self) -> str:
        return config_to_record(self.config)

    def tile_at(self, x: int, y: int) -> Tile:
        return self.grid.get(x, y)

    def is_walkable(self, x: int, y: int) -> bool:
        return self.grid.in_bounds(x, y) and self.grid.cells[x][y].walkable

    def sprite_path(self, x: int, y: int) -> str:
        return self.catalog.sprite_path(self.grid.get(x, y))

    def invariants(self) -> dict:
        return check_invariants(self.grid)

    # --- gameplay ---------------------------------------------------------------
    def random_room_point(self) -> Optional[Tuple[int, int]]:
        """A floor position inside a random room, kept two cells from the walls' corners.

        Returns None when no room survived generation.
        """
        if not self.rooms:
            return None
        room = self.rooms[self.rng.randrange(len(self.rooms))]
        x = self.rng.randrange(room.left + 2, room.right - 1)
        y = self.rng.randrange(room.bottom + 2, room.top - 1)
        return (x, y)

    def switch_view(self, isometric: Optional[bool] = None) -> bool:
        return self.catalog.switch_view(isometric)

    # --- outputs ------------------------------------------------------------------
    def snapshot(self, occupants: Optional[Dict[str, Tuple[int, int]]] = None) -> Columns:
        """Copy of the tile columns with {entity_id: (x, y)} occupants overlaid."""
        columns = self.grid.copy_columns()
        for entity_id, (x, y) in (occupants or {}).items():
            if not self.grid.in_bounds(x, y):
                raise GridBoundsError(f"occupant {entity_id!r} at ({x}, {y}) is off the grid")
        return overlay(columns, occupants or {})

    def to_ascii(self, occupants: Optional[Dict[str, Tuple[int, int]]] = None) -> str:
        """Text map with the top row (y = height-1) first."""
        self.grid.validate()
        columns = self.snapshot(occupants)
        lines = []
        for y in range(self.height - 1, -1, -1):
            lines.append(
                "".join(
                    OCCUPIED_GLYPH if isinstance(columns[x][y], Occupied) else columns[x][y].glyph
                    for x in range(self.width)
                )
            )
        return "\n".join(lines)

    def to_json(self) -> Dict[str, Any]:
        self.grid.validate()
        rows = list(self.grid.rows_top_down())
        return {
            "seed": self.seed,
            "width": self.width,
            "height": self.height,
            "record": self.record,
            "settings": self.settings.to_dict(),
            "view": "isometric" if self.catalog.isometric else "orthogonal",
            "grid": ["".join(t.glyph for t in row) for _, row in rows],
            "kinds": [[t.kind for t in row] for _, row in rows],
            "variants": [[t.variant for t in row] for _, row in rows],
            "rooms": [r.to_dict() for r in self.rooms],
            "metrics": self.metrics,
        }


__all__ = ["World", "OCCUPIED_GLYPH"]
