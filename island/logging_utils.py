"""Minimal structured logging helper.

Emits key=value pairs (or one JSON object per line) with a timestamp and
level on stderr, so generation runs and API calls can be grepped or parsed
without a logging configuration.

Usage:
    from island.logging_utils import get_logger
    log = get_logger("island.worldgen")
    log.info(event="world_generated", seed=42, rooms=17)

Environment:
    ISLAND_LOG_LEVEL   debug | info | warn | error   (default: info)
    ISLAND_LOG_JSON    1/true/yes/on to emit JSON lines

Reserved keys: level, ts, logger.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUTHY = ("1", "true", "TRUE", "yes", "on")


def current_level() -> int:
    return LEVELS.get(os.getenv("ISLAND_LOG_LEVEL", "info").lower(), 20)


def json_mode() -> bool:
    return os.getenv("ISLAND_LOG_JSON", "0") in _TRUTHY


def _kv_value(value) -> str:
    if isinstance(value, (int, float)):
        return str(value)
    # keep each field a single whitespace-free token
    return str(value).replace(" ", "_")


def _render(level: str, fields: dict) -> str:
    present = {k: v for k, v in fields.items() if v is not None}
    stamp = int(time.time())
    if json_mode():
        try:
            return json.dumps({**present, "level": level, "ts": stamp}, separators=(",", ":"))
        except (TypeError, ValueError):
            return json.dumps({"level": level, "ts": stamp, "error": "json_encode_failed"})
    head = f"level={level} ts={stamp}"
    return " ".join([head] + [f"{k}={_kv_value(v)}" for k, v in present.items()])


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "island"

    def _emit(self, level: str, fields: dict):
        if LEVELS[level] < current_level():
            return
        fields.setdefault("logger", self.name)
        print(_render(level, fields), file=sys.stderr)

    def debug(self, **fields):
        self._emit("debug", fields)

    def info(self, **fields):
        self._emit("info", fields)

    def warn(self, **fields):
        self._emit("warn", fields)

    def error(self, **fields):
        self._emit("error", fields)


_loggers = {}


def get_logger(name: str):
    """Return the shared logger for ``name``."""
    return _loggers.setdefault(name, _Logger(name))


log = get_logger("island")
