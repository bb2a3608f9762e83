import random
from dataclasses import asdict, dataclass
from typing import Optional

MAX_TRIES = 1000
MAX_ROOMS = 50
BOUNDARY_BUFFER = 4
# Extra inset on room positions so a corridor can reach any side
HALLWAY_CLEARANCE = 2
MIN_WORLD_DIM = 20
MIN_ROOM_DIM = 4

SHAPES = ("rectangular", "circular", "cube")
SPREADS = ("packed", "scattered")
CONTINUATIONS = {"straight": 90, "semi-straight": 50, "arbitrary": 10}
CUSTOM_CONTINUATION = "custom"

DEFAULT_HEIGHT = 75
DEFAULT_WIDTH = 150
SEED_BOUND = 2**63 - 1


class WorldConfigError(ValueError):
    """Malformed generation parameters from outside the core."""


@dataclass
class WorldConfig:
    """Construction input. ``None`` / ``-1`` fields are resolved from the seeded RNG."""

    seed: Optional[int] = None
    height: int = DEFAULT_HEIGHT
    width: int = DEFAULT_WIDTH
    shape: Optional[str] = None
    spread: Optional[str] = None
    min_room_dim: int = -1
    max_room_dim: int = -1
    continuation: Optional[str] = None
    continue_percentage: int = -1
    doors_per_room: int = 1

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class WorldSettings:
    """Effective settings after every open field has been decided."""

    shape: str
    spread: str
    min_room_dim: int
    max_room_dim: int
    continue_percentage: int
    doors_per_room: int

    def to_dict(self):
        return asdict(self)


def resolve_seed(seed: Optional[int]) -> int:
    if seed is None:
        return random.SystemRandom().randint(1, SEED_BOUND)
    return seed


def resolve_settings(config: WorldConfig, rng) -> WorldSettings:
    """Fill open fields from ``rng``. The draw order here is part of the seed contract."""
    spread = config.spread
    if spread is None:
        spread = "packed" if rng.random() < 0.5 else "scattered"
    shape = config.shape
    if shape is None:
        if rng.random() < 0.5:
            shape = "rectangular"
        else:
            shape = "circular" if rng.random() < 0.5 else "cube"
    min_dim = config.min_room_dim
    if min_dim == -1:
        min_dim = rng.randrange(5, 8)
    max_dim = config.max_room_dim
    if max_dim == -1:
        max_dim = min_dim + rng.randrange(4, 8)
    elif config.min_room_dim == -1:
        # a drawn minimum never exceeds an explicit maximum
        min_dim = min(min_dim, max_dim)
    if config.continuation is None:
        percentage = rng.randrange(50, 90)
    elif config.continuation == CUSTOM_CONTINUATION:
        percentage = config.continue_percentage
    else:
        percentage = CONTINUATIONS[config.continuation]
    return WorldSettings(
        shape=shape,
        spread=spread,
        min_room_dim=min_dim,
        max_room_dim=max_dim,
        continue_percentage=percentage,
        doors_per_room=config.doors_per_room,
    )


def validate_config(config: WorldConfig) -> WorldConfig:
    """Reject parameters the generator cannot work with. Returns the config unchanged."""
    if config.seed is not None and not isinstance(config.seed, int):
        raise WorldConfigError(f"seed must be an integer, got {config.seed!r}")
    for name in ("height", "width"):
        value = getattr(config, name)
        if not isinstance(value, int) or value < MIN_WORLD_DIM:
            raise WorldConfigError(f"{name} must be an integer >= {MIN_WORLD_DIM}, got {value!r}")
    if config.shape is not None and config.shape not in SHAPES:
        raise WorldConfigError(f"unknown shape {config.shape!r}; expected one of {', '.join(SHAPES)}")
    if config.spread is not None and config.spread not in SPREADS:
        raise WorldConfigError(f"unknown spread {config.spread!r}; expected one of {', '.join(SPREADS)}")
    for name in ("min_room_dim", "max_room_dim"):
        value = getattr(config, name)
        if not isinstance(value, int) or (value != -1 and value < MIN_ROOM_DIM):
            raise WorldConfigError(f"{name} must be -1 or an integer >= {MIN_ROOM_DIM}, got {value!r}")
    if config.min_room_dim != -1 and config.max_room_dim != -1 and config.min_room_dim > config.max_room_dim:
        raise WorldConfigError(
            f"min_room_dim ({config.min_room_dim}) exceeds max_room_dim ({config.max_room_dim})"
        )
    if config.continuation is not None:
        if config.continuation == CUSTOM_CONTINUATION:
            pct = config.continue_percentage
            if not isinstance(pct, int) or not 0 <= pct <= 100:
                raise WorldConfigError(f"custom continue_percentage must be within 0..100, got {pct!r}")
        elif config.continuation not in CONTINUATIONS:
            known = ", ".join(list(CONTINUATIONS) + [CUSTOM_CONTINUATION])
            raise WorldConfigError(f"unknown continuation {config.continuation!r}; expected one of {known}")
    if not isinstance(config.doors_per_room, int) or not 1 <= config.doors_per_room <= 4:
        raise WorldConfigError(f"doors_per_room must be within 1..4, got {config.doors_per_room!r}")
    return config


__all__ = [
    "MAX_TRIES",
    "MAX_ROOMS",
    "BOUNDARY_BUFFER",
    "HALLWAY_CLEARANCE",
    "SHAPES",
    "SPREADS",
    "CONTINUATIONS",
    "CUSTOM_CONTINUATION",
    "WorldConfig",
    "WorldSettings",
    "WorldConfigError",
    "resolve_seed",
    "resolve_settings",
    "validate_config",
]
