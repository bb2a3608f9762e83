import pytest

from island.worldgen import (
    GridBoundsError,
    UnrenderableTileError,
    Occupied,
    World,
    WorldConfig,
)
from island.worldgen.config import SEED_BOUND
from island.worldgen.metrics import DETERMINISTIC_KEYS
from island.worldgen.tiles import FLOOR, WALKABLE


def _small(seed=321, **kw):
    # packed rectangles reliably leave several connected rooms at this size
    params = {"shape": "rectangular", "spread": "packed"}
    params.update(kw)
    return World(WorldConfig(seed=seed, width=70, height=40, **params))


def test_same_seed_same_world_and_metrics():
    a, b = _small(), _small()
    assert a.to_ascii() == b.to_ascii()
    assert a.settings == b.settings
    for key in DETERMINISTIC_KEYS:
        assert a.metrics[key] == b.metrics[key], key


def test_different_seed_changes_world():
    assert _small(1).to_ascii() != _small(2).to_ascii()


def test_seed_keyword_and_random_seed():
    w = World(WorldConfig(width=40, height=30), seed=17)
    assert w.seed == 17 and w.config.seed == 17
    r = World(WorldConfig(width=40, height=30))
    assert isinstance(r.seed, int) and 1 <= r.seed <= SEED_BOUND
    assert r.record.startswith(f"{r.seed},")


def test_from_record_rebuilds_identical_world():
    w = _small(5, shape="circular", continuation="arbitrary")
    clone = World.from_record(w.record)
    assert clone.seed == w.seed
    assert clone.to_ascii() == w.to_ascii()


def test_tile_access_and_bounds():
    w = _small()
    with pytest.raises(GridBoundsError):
        w.tile_at(w.width, 0)
    with pytest.raises(GridBoundsError):
        w.tile_at(0, -1)
    assert w.is_walkable(-1, 0) is False
    assert w.is_walkable(0, 0) is False
    assert w.sprite_path(0, 0).endswith("background.png")


def test_random_room_point_lands_inside_room_floor():
    w = _small(11)
    assert w.rooms
    for _ in range(25):
        x, y = w.random_room_point()
        assert w.tile_at(x, y).kind == FLOOR
        assert any(r.left + 2 <= x < r.right - 1 and r.bottom + 2 <= y < r.top - 1 for r in w.rooms)


def test_random_room_point_without_rooms_is_none():
    w = _small(11)
    w.rooms = []
    assert w.random_room_point() is None


def test_snapshot_overlays_without_touching_grid():
    w = _small(11)
    pos = w.random_room_point()
    columns = w.snapshot({"player": pos})
    cell = columns[pos[0]][pos[1]]
    assert isinstance(cell, Occupied)
    assert cell.covered is w.tiles[pos[0]][pos[1]]
    assert not isinstance(w.tiles[pos[0]][pos[1]], Occupied)
    with pytest.raises(GridBoundsError):
        w.snapshot({"player": (w.width, 0)})


def test_ascii_map_is_top_row_first():
    w = _small(11)
    text = w.to_ascii()
    lines = text.split("\n")
    assert len(lines) == w.height
    assert all(len(line) == w.width for line in lines)
    top = "".join(w.tiles[x][w.height - 1].glyph for x in range(w.width))
    assert lines[0] == top
    pos = w.random_room_point()
    marked = w.to_ascii({"player": pos}).split("\n")
    assert marked[w.height - 1 - pos[1]][pos[0]] == "@"
    assert sum(line.count("@") for line in marked) == 1


def test_to_json_payload_shape():
    w = _small(11)
    data = w.to_json()
    assert set(data) >= {"seed", "width", "height", "record", "settings", "view", "grid", "kinds", "variants", "rooms", "metrics"}
    assert len(data["grid"]) == w.height and len(data["grid"][0]) == w.width
    assert data["view"] == "orthogonal"
    assert data["rooms"][0] == w.rooms[0].to_dict()
    walkable_glyphs = sum(1 for row in data["kinds"] for k in row if k in WALKABLE)
    assert walkable_glyphs > 0


def test_switch_view_does_not_change_tiles():
    w = _small(11)
    before = w.to_ascii()
    path = w.sprite_path(*w.random_room_point())
    assert w.switch_view() is True
    assert w.to_json()["view"] == "isometric"
    assert w.to_ascii() == before
    assert "tilesIso" in w.sprite_path(*w.random_room_point())
    assert "tilesIso" not in path


def test_metrics_report_pipeline_counts():
    w = _small(11)
    m = w.metrics
    assert m["usable_cells"] > 0
    assert m["rooms_placed"] >= m["rooms_final"] == len(w.rooms)
    assert m["hallway_cells_carved"] > 0
    assert m["carve_seeds"] >= 1
    assert m["prune_passes"] >= 1
    assert sum(m["floor_variants"].values()) > 0
    assert set(m["phase_ms"]) == {
        "shape_mask", "place_rooms", "place_doors", "carve", "prune_dead_ends", "finalize_doors",
        "infer_walls", "classify_floors", "orphan_rooms", "detached_regions", "infer_walls_final",
    }


def test_outputs_refuse_to_render_a_corrupted_grid():
    w = _small()
    w.grid.cells[3][3] = None
    with pytest.raises(UnrenderableTileError):
        w.to_ascii()
    with pytest.raises(UnrenderableTileError):
        w.to_json()
