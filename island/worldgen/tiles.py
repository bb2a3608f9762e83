# Tile categories centralized for modular imports
from typing import NamedTuple

UNUSED = "unused"  # outside the island silhouette, never carved
BACKGROUND = "background"  # open water between rooms and paths
FLOOR = "floor"
WALL = "wall"
HALLWAY = "hallway"
DOOR = "door"
TEMP_HALLWAY = "temp_hallway"  # carver output, resolved to HALLWAY
TEMP_WALL = "temp_wall"  # wall inference marker, resolved to WALL

KINDS = (UNUSED, BACKGROUND, FLOOR, WALL, HALLWAY, DOOR, TEMP_HALLWAY, TEMP_WALL)
TRANSIENT = frozenset({TEMP_HALLWAY, TEMP_WALL})
WALKABLE = frozenset({FLOOR, HALLWAY, DOOR})
# Cells that may never share an edge with a walkable cell
VOID = frozenset({UNUSED, BACKGROUND})

# Floor edge variants in classification priority order
FLOOR_VARIANTS = (
    "top_left",
    "bottom_left",
    "bottom_right",
    "top_right",
    "top",
    "bottom",
    "left",
    "right",
    "center",
)
ART_VARIANTS = ("1", "2", "3", "4")
PATH_VARIANT = "path"
DOORWAY_VARIANT = "doorway"


class Tile(NamedTuple):
    """Immutable tile value. Build these through a TileCatalog, not by hand."""

    kind: str
    variant: str
    glyph: str
    description: str
    sprite: str

    @property
    def walkable(self) -> bool:
        return self.kind in WALKABLE

    def to_dict(self):
        return {"kind": self.kind, "variant": self.variant, "glyph": self.glyph}


__all__ = [
    "UNUSED",
    "BACKGROUND",
    "FLOOR",
    "WALL",
    "HALLWAY",
    "DOOR",
    "TEMP_HALLWAY",
    "TEMP_WALL",
    "KINDS",
    "TRANSIENT",
    "WALKABLE",
    "VOID",
    "FLOOR_VARIANTS",
    "ART_VARIANTS",
    "PATH_VARIANT",
    "DOORWAY_VARIANT",
    "Tile",
]
