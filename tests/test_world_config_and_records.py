import random

import pytest

from island.worldgen import (
    Direction,
    RecordFormatError,
    SessionState,
    WorldConfig,
    WorldConfigError,
    config_from_record,
    config_to_record,
    load_session,
    save_session,
    validate_config,
)
from island.worldgen.config import resolve_settings


@pytest.mark.parametrize(
    "kwargs",
    [
        {"height": 19},
        {"width": 5},
        {"shape": "hexagon"},
        {"spread": "clumped"},
        {"min_room_dim": 3},
        {"max_room_dim": 0},
        {"min_room_dim": 9, "max_room_dim": 6},
        {"continuation": "wobbly"},
        {"continuation": "custom", "continue_percentage": 101},
        {"continuation": "custom", "continue_percentage": -1},
        {"doors_per_room": 0},
        {"doors_per_room": 5},
        {"seed": "42"},
    ],
)
def test_validate_config_rejects_bad_parameters(kwargs):
    with pytest.raises(WorldConfigError):
        validate_config(WorldConfig(**kwargs))


def test_validate_config_accepts_defaults_and_returns_same_object():
    cfg = WorldConfig(seed=1)
    assert validate_config(cfg) is cfg
    assert issubclass(WorldConfigError, ValueError)


def test_resolve_settings_keeps_explicit_values():
    cfg = WorldConfig(
        seed=1, shape="cube", spread="scattered", min_room_dim=6, max_room_dim=9,
        continuation="custom", continue_percentage=33, doors_per_room=3,
    )
    s = resolve_settings(cfg, random.Random(1))
    assert (s.shape, s.spread, s.min_room_dim, s.max_room_dim) == ("cube", "scattered", 6, 9)
    assert s.continue_percentage == 33
    assert s.doors_per_room == 3


@pytest.mark.parametrize("name,pct", [("straight", 90), ("semi-straight", 50), ("arbitrary", 10)])
def test_named_continuations(name, pct):
    s = resolve_settings(WorldConfig(continuation=name), random.Random(0))
    assert s.continue_percentage == pct


def test_resolve_settings_draws_open_fields_in_range():
    for seed in range(50):
        s = resolve_settings(WorldConfig(), random.Random(seed))
        assert 5 <= s.min_room_dim <= 7
        assert s.min_room_dim + 4 <= s.max_room_dim <= s.min_room_dim + 7
        assert 50 <= s.continue_percentage < 90
        assert s.shape in ("rectangular", "circular", "cube")
        assert s.spread in ("packed", "scattered")


def test_drawn_min_never_exceeds_explicit_max():
    for seed in range(20):
        s = resolve_settings(WorldConfig(max_room_dim=4), random.Random(seed))
        assert s.min_room_dim == s.max_room_dim == 4


def test_record_round_trip():
    cfg = WorldConfig(seed=42, shape="rectangular", spread="packed", min_room_dim=5, max_room_dim=12, continuation="straight")
    record = config_to_record(cfg)
    assert record == "42,75,150,packed,rectangular,5,12,straight,-1"
    assert config_from_record(record) == cfg


def test_record_uses_null_for_open_fields():
    record = config_to_record(WorldConfig())
    assert record == "null,75,150,null,null,-1,-1,null,-1"
    assert config_from_record(record) == WorldConfig()


def test_record_carries_door_count_only_when_not_default():
    cfg = WorldConfig(seed=3, doors_per_room=3)
    record = config_to_record(cfg)
    assert record.split(",")[-1] == "3"
    assert len(record.split(",")) == 10
    assert config_from_record(record).doors_per_room == 3


@pytest.mark.parametrize(
    "record",
    [
        "1,2",
        "abc,75,150,null,null,-1,-1,null,-1",
        "1,null,150,null,null,-1,-1,null,-1",
        "1,75,150,null,null,-1,-1,null,-1,x",
        "1,75,150,sideways,null,-1,-1,null,-1",
        "1,10,150,null,null,-1,-1,null,-1",
    ],
)
def test_bad_records_raise(record):
    # RecordFormatError is a WorldConfigError, so callers need only one handler
    with pytest.raises(WorldConfigError):
        config_from_record(record)


def test_unparseable_record_is_format_error():
    with pytest.raises(RecordFormatError):
        config_from_record("abc,75,150,null,null,-1,-1,null,-1")


def test_session_string_round_trip():
    cfg = WorldConfig(seed=8, shape="circular")
    s = SessionState(cfg, True, (12, 9), Direction.LEFT)
    text = s.to_string()
    assert text == "8,75,150,null,circular,-1,-1,null,-1;true,12,9,LEFT"
    back = SessionState.from_string(text)
    assert back == s


def test_session_without_position_and_record_only():
    s = SessionState(WorldConfig(seed=8))
    assert s.to_string().endswith(";false,null,null,DOWN")
    assert SessionState.from_string(s.to_string()).position is None
    bare = SessionState.from_string("8,75,150,null,null,-1,-1,null,-1")
    assert bare.facing is Direction.DOWN and not bare.isometric


@pytest.mark.parametrize("tail", ["maybe,1,2,UP", "true,1,2,NORTH", "true,a,2,UP", "true,1,2"])
def test_bad_session_tail_raises(tail):
    with pytest.raises(RecordFormatError):
        SessionState.from_string("8,75,150,null,null,-1,-1,null,-1;" + tail)


def test_save_and_load_session(tmp_path):
    path = tmp_path / "save.txt"
    s = SessionState(WorldConfig(seed=99, spread="scattered"), False, (30, 20), Direction.UP)
    assert save_session(s, str(path)) == str(path)
    assert load_session(str(path)) == s


def test_default_save_path_from_env(tmp_path, monkeypatch):
    path = tmp_path / "env_save.txt"
    monkeypatch.setenv("ISLAND_SAVE_FILE", str(path))
    s = SessionState(WorldConfig(seed=5))
    assert save_session(s) == str(path)
    assert load_session() == s


def test_missing_save_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_session(str(tmp_path / "nope.txt"))
