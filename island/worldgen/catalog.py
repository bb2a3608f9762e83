"""Tile catalog: category + variant selector -> Tile value.

The catalog owns no grid state. It hands out shared immutable Tile values and
resolves sprite paths for the current view mode. Switching between the
orthogonal and isometric tile sets only changes the base path used by
``sprite_path``; the tiles already placed on a grid are untouched.
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

from .directions import Direction
from .tiles import (
    ART_VARIANTS,
    BACKGROUND,
    DOOR,
    DOORWAY_VARIANT,
    FLOOR,
    FLOOR_VARIANTS,
    HALLWAY,
    PATH_VARIANT,
    TEMP_HALLWAY,
    TEMP_WALL,
    UNUSED,
    WALL,
    Tile,
)

ORTHOGONAL_BASE = os.path.join("assets", "tiles")
ISOMETRIC_BASE = os.path.join("assets", "tilesIso")

_FLOOR_SPRITES = {
    "top_left": "floor_top_left_corner.png",
    "bottom_left": "floor_bottom_left_corner.png",
    "bottom_right": "floor_right_bottom_corner.png",
    "top_right": "floor_right_top_corner.png",
    "top": "floor_top_middle_edge.png",
    "bottom": "floor_middle_bottom_edge.png",
    "left": "floor_left_middle_edge.png",
    "right": "floor_right_middle_edge.png",
    "center": "floor_center.png",
}

# Keyed by inbound direction; a bridge entered moving UP opens the bottom wall.
_BRIDGE_ART = {
    Direction.UP: ("^", "hallDoorDown.png"),
    Direction.DOWN: ("v", "hallDoorUp.png"),
    Direction.LEFT: ("<", "hallDoorRight.png"),
    Direction.RIGHT: (">", "hallDoorLeft.png"),
}

WATER = "Water (Nothing)"
SAND_PATH = "Sand Path"


def bridge_variant(direction: Direction) -> str:
    return "bridge_" + direction.name.lower()


def _build_tiles() -> Dict[Tuple[str, str], Tile]:
    tiles = {(UNUSED, ""): Tile(UNUSED, "", "~", WATER, "background.png")}
    for k in ART_VARIANTS:
        tiles[(BACKGROUND, k)] = Tile(BACKGROUND, k, " ", WATER, f"nothing{k}.png")
        tiles[(WALL, k)] = Tile(WALL, k, "#", "Nature Wall", f"wall{k}.png")
    for v in FLOOR_VARIANTS:
        tiles[(FLOOR, v)] = Tile(FLOOR, v, ".", "Island Floor", _FLOOR_SPRITES[v])
    tiles[(HALLWAY, PATH_VARIANT)] = Tile(HALLWAY, PATH_VARIANT, "=", SAND_PATH, "hallway.png")
    for direction, (glyph, sprite) in _BRIDGE_ART.items():
        v = bridge_variant(direction)
        tiles[(HALLWAY, v)] = Tile(HALLWAY, v, glyph, "Island Entryway", sprite)
    tiles[(DOOR, DOORWAY_VARIANT)] = Tile(DOOR, DOORWAY_VARIANT, "+", SAND_PATH, "hallway.png")
    tiles[(TEMP_HALLWAY, "")] = Tile(TEMP_HALLWAY, "", ":", SAND_PATH, "hallway.png")
    tiles[(TEMP_WALL, "")] = Tile(TEMP_WALL, "", "%", "Nature Wall", "wall1.png")
    return tiles


_TILES = _build_tiles()


class TileCatalog:
    def __init__(self, isometric: bool = False):
        self.isometric = isometric

    # --- lookup -------------------------------------------------------------
    def unused(self) -> Tile:
        return _TILES[(UNUSED, "")]

    def background(self, rng=None, variant: Optional[str] = None) -> Tile:
        if rng is not None:
            variant = ART_VARIANTS[rng.randint(1, 4) - 1]
        return _TILES[(BACKGROUND, variant or "1")]

    def wall(self, rng=None, variant: Optional[str] = None) -> Tile:
        if rng is not None:
            variant = ART_VARIANTS[rng.randint(1, 4) - 1]
        return _TILES[(WALL, variant or "1")]

    def floor(self, variant: str = "center") -> Tile:
        return _TILES[(FLOOR, variant)]

    def hallway(self) -> Tile:
        return _TILES[(HALLWAY, PATH_VARIANT)]

    def bridge(self, direction: Direction) -> Tile:
        return _TILES[(HALLWAY, bridge_variant(direction))]

    def doorway(self) -> Tile:
        return _TILES[(DOOR, DOORWAY_VARIANT)]

    def temp_hallway(self) -> Tile:
        return _TILES[(TEMP_HALLWAY, "")]

    def temp_wall(self) -> Tile:
        return _TILES[(TEMP_WALL, "")]

    # --- view mode ----------------------------------------------------------
    @property
    def base_path(self) -> str:
        return ISOMETRIC_BASE if self.isometric else ORTHOGONAL_BASE

    def switch_view(self, isometric: Optional[bool] = None) -> bool:
        """Flip (or set) the view mode. Returns the new mode."""
        self.isometric = (not self.isometric) if isometric is None else bool(isometric)
        return self.isometric

    def sprite_path(self, tile: Tile) -> str:
        return os.path.join(self.base_path, tile.sprite)


__all__ = ["TileCatalog", "bridge_variant", "ORTHOGONAL_BASE", "ISOMETRIC_BASE"]
