"""Public world generation interface."""

from .catalog import TileCatalog  # noqa: F401
from .cells import Occupied, base_tile, occupy, vacate  # noqa: F401
from .config import (  # noqa: F401
    SHAPES,
    SPREADS,
    WorldConfig,
    WorldConfigError,
    WorldSettings,
    validate_config,
)
from .directions import Direction  # noqa: F401
from .grid import Grid, GridBoundsError, UnrenderableTileError  # noqa: F401
from .rooms import Room  # noqa: F401
from .state import (  # noqa: F401
    RecordFormatError,
    SessionState,
    config_from_record,
    config_to_record,
    load_session,
    save_session,
)
from .tiles import (  # noqa: F401
    BACKGROUND,
    DOOR,
    FLOOR,
    HALLWAY,
    UNUSED,
    WALKABLE,
    WALL,
    Tile,
)
from .world import World  # noqa: F401

__all__ = [
    "World",
    "WorldConfig",
    "WorldConfigError",
    "WorldSettings",
    "validate_config",
    "SHAPES",
    "SPREADS",
    "TileCatalog",
    "Tile",
    "Grid",
    "GridBoundsError",
    "UnrenderableTileError",
    "Room",
    "Direction",
    "Occupied",
    "base_tile",
    "occupy",
    "vacate",
    "RecordFormatError",
    "SessionState",
    "config_from_record",
    "config_to_record",
    "load_session",
    "save_session",
    "UNUSED",
    "BACKGROUND",
    "FLOOR",
    "WALL",
    "HALLWAY",
    "DOOR",
    "WALKABLE",
]
