import pytest
from layout_test_utils import border_is_wall, floor_cells, floor_count, regions

from roomgen.generation import DungeonGenerator, DungeonSettings

SEEDS = list(range(8))


@pytest.mark.parametrize("seed", SEEDS)
@pytest.mark.parametrize("size", [(21, 21), (40, 25), (9, 30)])
def test_borders_are_wall(seed, size):
    grid = DungeonGenerator(DungeonSettings(seed=seed)).generate(*size)
    assert border_is_wall(grid)


@pytest.mark.parametrize("seed", SEEDS)
def test_single_connected_region(seed):
    gen = DungeonGenerator(DungeonSettings(seed=seed))
    grid = gen.generate(40, 30)
    assert len(regions(grid)) <= 1
    m = gen.last_metrics
    assert m["regions_discarded"] == max(0, m["regions_found"] - 1)


def test_twenty_one_square_seed_one():
    settings = DungeonSettings(seed=1, density=0.45, iterations=5, path_width=1, smooth_edges=False)
    first = DungeonGenerator(settings).generate(21, 21)
    second = DungeonGenerator(settings).generate(21, 21)
    assert first == second
    assert border_is_wall(first)
    assert len(regions(first)) <= 1


def test_full_density_yields_all_wall():
    gen = DungeonGenerator(DungeonSettings(density=1.0))
    grid = gen.generate(11, 11)
    assert floor_count(grid) == 0
    assert gen.last_metrics["regions_found"] == 0
    assert gen.last_metrics["tiles_wall"] == 121


def test_zero_density_without_iterations_is_open_room():
    grid = DungeonGenerator(DungeonSettings(density=0.0, iterations=0)).generate(10, 7)
    assert floor_count(grid) == 8 * 5
    assert border_is_wall(grid)


@pytest.mark.parametrize("seed", [1, 5, 9])
def test_widening_only_adds_floor(seed):
    narrow_gen = DungeonGenerator(DungeonSettings(seed=seed))
    wide_gen = DungeonGenerator(DungeonSettings(seed=seed, path_width=3))
    narrow = narrow_gen.generate(30, 30)
    wide = wide_gen.generate(30, 30)
    assert floor_cells(narrow) <= floor_cells(wide)
    assert border_is_wall(wide)
    assert len(regions(wide)) <= 1
    added = wide_gen.last_metrics["tiles_floor"] - narrow_gen.last_metrics["tiles_floor"]
    assert wide_gen.last_metrics["cells_widened"] == added


@pytest.mark.parametrize("path_width", [2, 3, 5])
def test_widening_stamps_block_at_every_floor_cell(path_width):
    w, h = 26, 19
    narrow = DungeonGenerator(DungeonSettings(seed=7)).generate(w, h)
    wide = DungeonGenerator(DungeonSettings(seed=7, path_width=path_width)).generate(w, h)
    wide_cells = floor_cells(wide)
    expected = set()
    for x, y in floor_cells(narrow):
        # Block anchored at the cell, clipped one short of the right/bottom border
        block = {(bx, by) for bx in range(x, min(x + path_width, w - 1)) for by in range(y, min(y + path_width, h - 1))}
        missing = block - wide_cells
        assert not missing, f"cell {(x, y)} missing {sorted(missing)}"
        expected |= block
    # Nothing besides the stamped blocks becomes floor
    assert wide_cells == expected


def test_smoothing_phase_reports_conversions():
    plain = DungeonGenerator(DungeonSettings(seed=3)).generate(30, 30)
    gen = DungeonGenerator(DungeonSettings(seed=3, smooth_edges=True))
    smoothed = gen.generate(30, 30)
    assert floor_cells(plain) <= floor_cells(smoothed)
    assert gen.last_metrics["cells_smoothed"] == floor_count(smoothed) - floor_count(plain)
    assert border_is_wall(smoothed)
    assert "smooth" in gen.last_metrics["phase_ms"]
