"""Persisted generation parameters and session save files.

Record format (one line, comma separated, ``null`` for open fields)::

    seed,height,width,spread,shape,minRoomDim,maxRoomDim,continuation,continuePercentage

A tenth field with the doors-per-room count follows only when it differs
from the default of one.

A session save string appends the view and entity state after a semicolon::

    <record>;<isometric>,<x>,<y>,<FACING>

The record alone is enough to rebuild the same world.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from .config import WorldConfig, WorldConfigError, validate_config
from .directions import Direction

NULL = "null"
RECORD_FIELDS = (
    "seed",
    "height",
    "width",
    "spread",
    "shape",
    "min_room_dim",
    "max_room_dim",
    "continuation",
    "continue_percentage",
)
_INT_FIELDS = {"seed", "height", "width", "min_room_dim", "max_room_dim", "continue_percentage"}
_NULLABLE_INTS = {"seed"}
DEFAULT_SAVE_FILE = "save.txt"
DEFAULT_DOORS_PER_ROOM = WorldConfig.doors_per_room


class RecordFormatError(WorldConfigError):
    """A saved record or session string could not be parsed."""


def _encode(value) -> str:
    return NULL if value is None else str(value)


def config_to_record(config: WorldConfig) -> str:
    fields = [_encode(getattr(config, name)) for name in RECORD_FIELDS]
    if config.doors_per_room != DEFAULT_DOORS_PER_ROOM:
        fields.append(str(config.doors_per_room))
    return ",".join(fields)


def _decode(name: str, raw: str):
    raw = raw.strip()
    if raw == NULL:
        if name in _INT_FIELDS and name not in _NULLABLE_INTS:
            raise RecordFormatError(f"{name} may not be {NULL}")
        return None
    if name in _INT_FIELDS:
        try:
            return int(raw)
        except ValueError:
            raise RecordFormatError(f"{name} must be an integer, got {raw!r}") from None
    return raw


def config_from_record(text: str) -> WorldConfig:
    parts = text.strip().split(",")
    if len(parts) not in (len(RECORD_FIELDS), len(RECORD_FIELDS) + 1):
        raise RecordFormatError(f"expected {len(RECORD_FIELDS)} fields, got {len(parts)}")
    values = {name: _decode(name, raw) for name, raw in zip(RECORD_FIELDS, parts)}
    if len(parts) > len(RECORD_FIELDS):
        try:
            values["doors_per_room"] = int(parts[-1])
        except ValueError:
            raise RecordFormatError(f"doors_per_room must be an integer, got {parts[-1]!r}") from None
    return validate_config(WorldConfig(**values))


@dataclass
class SessionState:
    config: WorldConfig
    isometric: bool = False
    position: Optional[Tuple[int, int]] = None
    facing: Direction = Direction.DOWN

    def to_string(self) -> str:
        x, y = self.position if self.position is not None else (None, None)
        view = "true" if self.isometric else "false"
        return f"{config_to_record(self.config)};{view},{_encode(x)},{_encode(y)},{self.facing.name}"

    @classmethod
    def from_string(cls, text: str) -> "SessionState":
        record, sep, tail = text.strip().partition(";")
        config = config_from_record(record)
        if not sep:
            return cls(config)
        parts = tail.split(",")
        if len(parts) != 4:
            raise RecordFormatError(f"expected 4 session fields, got {len(parts)}")
        view, raw_x, raw_y, facing = (p.strip() for p in parts)
        if view.lower() not in ("true", "false"):
            raise RecordFormatError(f"isometric flag must be true or false, got {view!r}")
        position = None
        if raw_x != NULL and raw_y != NULL:
            try:
                position = (int(raw_x), int(raw_y))
            except ValueError:
                raise RecordFormatError(f"bad position {raw_x!r},{raw_y!r}") from None
        try:
            direction = Direction[facing.upper()]
        except KeyError:
            raise RecordFormatError(f"unknown facing {facing!r}") from None
        return cls(config, view.lower() == "true", position, direction)


def default_save_path() -> str:
    return os.getenv("ISLAND_SAVE_FILE", DEFAULT_SAVE_FILE)


def save_session(session: SessionState, path: Optional[str] = None) -> str:
    path = path or default_save_path()
    with open(path, "w", encoding="utf-8") as f:
        f.write(session.to_string())
    return path


def load_session(path: Optional[str] = None) -> SessionState:
    """Read a save file; FileNotFoundError propagates when there is none."""
    with open(path or default_save_path(), "r", encoding="utf-8") as f:
        return SessionState.from_string(f.read())


__all__ = [
    "RECORD_FIELDS",
    "RecordFormatError",
    "SessionState",
    "config_to_record",
    "config_from_record",
    "default_save_path",
    "save_session",
    "load_session",
]
