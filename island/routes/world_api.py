"""
project: Island World Generator
module: world_api.py
License: MIT

World API routes.

Renderers fetch generated worlds read-only through these endpoints. Every
route accepts the generation parameters as query arguments (or a saved
record); malformed parameters answer 400 with an ``error`` message.
"""

import hashlib
import os
import threading

from flask import Blueprint, Response, current_app, jsonify, request

from island.logging_utils import get_logger
from island.worldgen import (
    World,
    WorldConfig,
    WorldConfigError,
    config_from_record,
    config_to_record,
    validate_config,
)

log = get_logger("island.api")

bp_world = Blueprint("world", __name__)

SEED_MAX = 2**63 - 1
SEED_MIN = -(2**63)
_INT_PARAMS = ("height", "width", "min_room_dim", "max_room_dim", "continue_percentage", "doors_per_room")
_STR_PARAMS = ("shape", "spread", "continuation")

# Simple in-process cache record -> World, shared by request threads.
_world_cache = {}
_world_cache_lock = threading.Lock()


def _check_seed_range(value: int) -> int:
    if not SEED_MIN <= value <= SEED_MAX:
        raise WorldConfigError(f"seed {value} is outside the signed 64-bit range")
    return value


def _coerce_seed(raw):
    """Convert a provided seed (int or str) into a signed 64-bit int.

    Integers and digit strings are used as-is so the API builds the same world
    as the CLI; any other text is hashed so worlds can be named ("castaway")
    and still reproduce.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise WorldConfigError("seed must be an integer or a string")
    if isinstance(raw, int):
        return _check_seed_range(raw)
    if isinstance(raw, str):
        s = raw.strip()
        if not s:
            return None
        if (s[1:] if s.startswith("-") else s).isdecimal():
            return _check_seed_range(int(s))
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % SEED_MAX
    raise WorldConfigError("seed must be an integer or a string")


def config_from_args(args) -> WorldConfig:
    """Build and validate a WorldConfig from request arguments."""
    values = {"seed": _coerce_seed(args.get("seed"))}
    for name in _INT_PARAMS:
        raw = args.get(name)
        if raw in (None, ""):
            continue
        try:
            values[name] = int(raw)
        except (TypeError, ValueError):
            raise WorldConfigError(f"{name} must be an integer, got {raw!r}") from None
    for name in _STR_PARAMS:
        raw = args.get(name)
        if raw not in (None, "", "null"):
            values[name] = str(raw)
    return validate_config(WorldConfig(**values))


def _cache_disabled() -> bool:
    return os.environ.get("ISLAND_DISABLE_CACHE") == "1" or bool(current_app.config.get("ISLAND_DISABLE_CACHE"))


def get_cached_world(config: WorldConfig) -> World:
    """Return a world for ``config``, reusing a cached one when the seed is fixed."""
    if config.seed is None or _cache_disabled():
        return World(config)
    key = config_to_record(config)
    with _world_cache_lock:
        world = _world_cache.get(key)
        if world is not None:
            return world
    world = World(config)
    limit = current_app.config.get("ISLAND_CACHE_MAX", 8)
    with _world_cache_lock:
        _world_cache[key] = world
        while len(_world_cache) > limit:
            _world_cache.pop(next(iter(_world_cache)))
    return world


def clear_cache():
    with _world_cache_lock:
        _world_cache.clear()


@bp_world.errorhandler(WorldConfigError)
def _bad_config(exc):
    log.warn(event="bad_world_config", path=request.path, error=str(exc))
    return jsonify({"error": str(exc)}), 400


@bp_world.route("/api/world")
def world_json():
    """Full world payload: settings, glyph rows (top row first), kinds, variants, rooms, metrics."""
    world = get_cached_world(config_from_args(request.args))
    return jsonify(world.to_json())


@bp_world.route("/api/world/ascii")
def world_ascii():
    world = get_cached_world(config_from_args(request.args))
    return Response(world.to_ascii() + "\n", mimetype="text/plain")


@bp_world.route("/api/world/spawn")
def world_spawn():
    """Random interior room point for placing the controllable entity. ``pos`` is null with no rooms."""
    world = get_cached_world(config_from_args(request.args))
    with _world_cache_lock:
        pos = world.random_room_point()
    return jsonify({"seed": world.seed, "pos": list(pos) if pos is not None else None})


@bp_world.route("/api/world/tile")
def world_tile():
    world = get_cached_world(config_from_args(request.args))
    try:
        x = int(request.args.get("x", ""))
        y = int(request.args.get("y", ""))
    except ValueError:
        return jsonify({"error": "x and y must be integers"}), 400
    if not world.grid.in_bounds(x, y):
        return jsonify({"error": f"({x}, {y}) is outside the {world.width}x{world.height} world"}), 400
    tile = world.tile_at(x, y)
    return jsonify(
        {
            "x": x,
            "y": y,
            "kind": tile.kind,
            "variant": tile.variant,
            "glyph": tile.glyph,
            "description": tile.description,
            "walkable": tile.walkable,
            "sprite": world.sprite_path(x, y),
        }
    )


@bp_world.route("/api/world/record", methods=["GET"])
def world_record():
    world = get_cached_world(config_from_args(request.args))
    return jsonify({"seed": world.seed, "record": world.record})


@bp_world.route("/api/world/record", methods=["POST"])
def world_from_record():
    """Rebuild a world from a saved record.

    Body JSON: { "record": "<seed,height,width,...>" }
    """
    data = request.get_json(silent=True) or {}
    record = data.get("record")
    if not isinstance(record, str) or not record.strip():
        return jsonify({"error": "record (string) required"}), 400
    world = get_cached_world(config_from_record(record))
    return jsonify(world.to_json())
