import random

import pytest

from island.worldgen import Direction, Grid, GridBoundsError, TileCatalog, UnrenderableTileError
from island.worldgen.catalog import ISOMETRIC_BASE, ORTHOGONAL_BASE
from island.worldgen.cells import Occupied, base_tile, occupy, overlay, vacate
from island.worldgen.tiles import ART_VARIANTS, BACKGROUND, FLOOR, HALLWAY, UNUSED, WALL


@pytest.fixture()
def catalog():
    return TileCatalog()


def test_grid_is_column_major_and_filled(catalog):
    g = Grid(7, 4, catalog.unused())
    assert len(g.cells) == 7
    assert all(len(col) == 4 for col in g.cells)
    assert all(t.kind == UNUSED for col in g.cells for t in col)
    assert list(g.positions())[:5] == [(0, 0), (0, 1), (0, 2), (0, 3), (1, 0)]


@pytest.mark.parametrize("pos", [(-1, 0), (0, -1), (7, 0), (0, 4)])
def test_grid_accessors_reject_out_of_bounds(catalog, pos):
    g = Grid(7, 4, catalog.unused())
    with pytest.raises(GridBoundsError):
        g.get(*pos)
    with pytest.raises(IndexError):
        g.set(pos[0], pos[1], catalog.floor())


def test_grid_neighbors_are_clipped_at_edges(catalog):
    g = Grid(5, 5, catalog.unused())
    assert sorted(g.neighbors4(0, 0)) == [(0, 1), (1, 0)]
    assert len(list(g.neighbors8(0, 0))) == 3
    assert len(list(g.neighbors8(2, 2))) == 8


def test_has_clearance_respects_inner_ring_and_forbidden(catalog):
    g = Grid(9, 9, catalog.background(variant="1"))
    assert g.has_clearance(4, 4, (UNUSED,))
    assert not g.has_clearance(1, 4, (UNUSED,))
    assert not g.has_clearance(4, 7, (UNUSED,))
    g.set(5, 5, catalog.unused())
    assert not g.has_clearance(4, 4, (UNUSED,))
    assert g.has_clearance(2, 2, (UNUSED,))


def test_replace_kind_and_validate(catalog):
    g = Grid(4, 4, catalog.background(variant="2"))
    g[(1, 1)] = catalog.temp_hallway()
    g[(2, 2)] = catalog.temp_hallway()
    assert g.replace_kind("temp_hallway", catalog.hallway()) == 2
    assert g[(1, 1)].kind == HALLWAY
    g.validate()
    g.cells[3][3] = None
    with pytest.raises(UnrenderableTileError):
        g.validate()


def test_rows_top_down_starts_at_highest_y(catalog):
    g = Grid(3, 3, catalog.background(variant="1"))
    g.set(0, 2, catalog.floor())
    rows = list(g.rows_top_down())
    assert [y for y, _ in rows] == [2, 1, 0]
    assert rows[0][1][0].kind == FLOOR


def test_catalog_background_and_wall_draw_art_from_rng(catalog):
    rng = random.Random(5)
    seen = {catalog.background(rng).variant for _ in range(200)}
    assert seen == set(ART_VARIANTS)
    assert catalog.wall(variant="3").sprite == "wall3.png"
    assert catalog.background().kind == BACKGROUND
    assert catalog.wall().kind == WALL


def test_catalog_unknown_floor_variant_raises_key_error(catalog):
    with pytest.raises(KeyError):
        catalog.floor("diagonal")


def test_bridge_tiles_are_directional_hallways(catalog):
    glyphs = {}
    for d in Direction:
        t = catalog.bridge(d)
        assert t.kind == HALLWAY and t.walkable
        assert t.variant.startswith("bridge_")
        glyphs[d] = t.glyph
    assert glyphs == {Direction.UP: "^", Direction.DOWN: "v", Direction.LEFT: "<", Direction.RIGHT: ">"}
    assert catalog.bridge(Direction.UP).sprite == "hallDoorDown.png"
    assert not catalog.hallway().variant.startswith("bridge_")


def test_switch_view_changes_sprite_base_only(catalog):
    floor = catalog.floor("top_left")
    assert catalog.sprite_path(floor).startswith(ORTHOGONAL_BASE)
    assert catalog.switch_view() is True
    assert catalog.sprite_path(floor).startswith(ISOMETRIC_BASE)
    assert catalog.sprite_path(floor).endswith("floor_top_left_corner.png")
    assert catalog.switch_view(False) is False
    assert catalog.floor("top_left") is floor


def test_direction_geometry():
    assert Direction.UP.translate((3, 3)) == (3, 4)
    assert Direction.LEFT.translate((3, 3), 2) == (1, 3)
    for d in Direction:
        assert d.opposite.opposite is d
        assert d.translate(d.opposite.translate((0, 0))) == (0, 0)


def test_occupied_cell_keeps_covered_tile(catalog):
    floor = catalog.floor()
    cell = occupy(floor, "player")
    assert isinstance(cell, Occupied)
    assert base_tile(cell) is floor
    # moving a second entity onto it still remembers the floor, not the first entity
    again = occupy(cell, "npc")
    assert again.covered is floor
    assert vacate(again) is floor
    assert cell == Occupied("player", floor)
    assert cell.to_dict()["covered"]["kind"] == FLOOR


def test_overlay_places_entities_on_copy(catalog):
    g = Grid(3, 3, catalog.floor())
    columns = overlay(g.copy_columns(), {"player": (1, 2)})
    assert isinstance(columns[1][2], Occupied)
    assert g.cells[1][2].kind == FLOOR
