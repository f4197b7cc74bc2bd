"""Tests for SquareGridGeometry: conversions, distances, shapes, edges."""

import math

import pytest

from mapgeometry.engine.grid_geometry import SquareGridGeometry
from mapgeometry.models.grid import GridCoord
from mapgeometry.models.space import (
    BoundingBox,
    DiagonalRule,
    DistanceOptions,
    EdgeHit,
    EdgeSide,
    OffsetCoord,
    VisibleGridRange,
    WorldCoord,
)


@pytest.fixture
def grid():
    return SquareGridGeometry(40)


def _cells(*pairs):
    return [GridCoord(x, y) for x, y in pairs]


class TestConstruction:
    @pytest.mark.parametrize("size", [0, -5, float("nan"), float("inf")])
    def test_invalid_cell_size(self, size):
        with pytest.raises(ValueError):
            SquareGridGeometry(size)

    def test_scaled_cell_size(self, grid):
        assert grid.get_scaled_cell_size(1.5) == 60


class TestConversions:
    def test_world_to_grid_floors(self, grid):
        assert grid.world_to_grid(0, 0) == GridCoord(0, 0)
        assert grid.world_to_grid(39.9, 40) == GridCoord(0, 1)
        assert grid.world_to_grid(-0.1, 39.9) == GridCoord(-1, 0)

    def test_grid_to_world_is_top_left(self, grid):
        assert grid.grid_to_world(GridCoord(2, 3)) == WorldCoord(80, 120)

    def test_cell_center(self, grid):
        assert grid.get_cell_center(GridCoord(2, 3)) == WorldCoord(100, 140)

    def test_round_trip(self, grid):
        for x in range(-5, 6):
            for y in range(-5, 6):
                w = grid.grid_to_world(GridCoord(x, y))
                assert grid.world_to_grid(w.x, w.y) == GridCoord(x, y)
                c = grid.get_cell_center(GridCoord(x, y))
                assert grid.world_to_grid(c.x, c.y) == GridCoord(x, y)

    def test_snapping(self, grid):
        assert grid.snap_to_grid(55, 95) == WorldCoord(40, 80)
        assert grid.snap_to_cell_center(55, 95) == WorldCoord(60, 100)

    def test_offset_is_passthrough(self, grid):
        assert grid.to_offset_coords(GridCoord(-3, 7)) == OffsetCoord(-3, 7)
        assert grid.offset_to_world(2, 3) == WorldCoord(80, 120)

    def test_grid_to_screen(self, grid):
        screen = grid.grid_to_screen(GridCoord(2, 3), 10, 20, 2)
        assert (screen.x, screen.y) == (170, 260)


class TestBounds:
    def test_always_unbounded(self, grid):
        assert not grid.is_bounded()
        assert grid.get_bounds() is None

    def test_everything_in_bounds(self, grid):
        assert grid.is_within_bounds(GridCoord(-10_000, 10_000))

    def test_clamp_is_identity(self, grid):
        c = GridCoord(-7, 12)
        assert grid.clamp_to_bounds(c) == c
        assert grid.clamp_to_bounds(grid.clamp_to_bounds(c)) == c


class TestNeighbors:
    def test_four_neighbors(self, grid):
        assert grid.get_neighbors(GridCoord(0, 0)) == _cells((1, 0), (-1, 0), (0, 1), (0, -1))

    def test_eight_neighbors(self, grid):
        n = grid.get_neighbors8(GridCoord(5, 5))
        assert len(n) == 8
        assert len(set(n)) == 8
        assert set(grid.get_neighbors(GridCoord(5, 5))) < set(n)
        for c in n:
            assert grid.get_cell_distance(GridCoord(5, 5), c, DistanceOptions(DiagonalRule.EQUAL)) == 1


class TestDistances:
    def test_manhattan(self, grid):
        assert grid.get_manhattan_distance(GridCoord(0, 0), GridCoord(3, -4)) == 7

    def test_euclidean(self, grid):
        assert grid.get_euclidean_distance(GridCoord(0, 0), GridCoord(3, 4)) == pytest.approx(5.0)

    def test_alternating_is_default(self, grid):
        assert grid.get_cell_distance(GridCoord(0, 0), GridCoord(3, 1)) == 3

    @pytest.mark.parametrize("target, expected", [
        ((0, 0), 0),
        ((3, 1), 3),
        ((1, 1), 1),
        ((2, 2), 3),
        ((3, 3), 4),
        ((4, 4), 6),
        ((5, 2), 6),
        ((-3, -1), 3),
    ])
    def test_alternating(self, grid, target, expected):
        options = DistanceOptions(DiagonalRule.ALTERNATING)
        assert grid.get_cell_distance(GridCoord(0, 0), GridCoord(*target), options) == expected

    def test_equal_is_chebyshev(self, grid):
        options = DistanceOptions(DiagonalRule.EQUAL)
        assert grid.get_cell_distance(GridCoord(0, 0), GridCoord(3, 1), options) == 3
        assert grid.get_cell_distance(GridCoord(0, 0), GridCoord(-2, 2), options) == 2

    def test_euclidean_rule(self, grid):
        options = DistanceOptions(DiagonalRule.EUCLIDEAN)
        assert grid.get_cell_distance(GridCoord(1, 1), GridCoord(2, 2), options) == pytest.approx(math.sqrt(2))

    @pytest.mark.parametrize("rule", list(DiagonalRule))
    def test_symmetric_and_zero_on_self(self, grid, rule):
        options = DistanceOptions(rule)
        points = _cells((0, 0), (3, 1), (-2, 5), (7, -7))
        for a in points:
            assert grid.get_cell_distance(a, a, options) == 0
            for b in points:
                assert grid.get_cell_distance(a, b, options) == grid.get_cell_distance(b, a, options)
                assert grid.get_manhattan_distance(a, b) == grid.get_manhattan_distance(b, a)
                assert grid.get_euclidean_distance(a, b) == grid.get_euclidean_distance(b, a)


class TestRectangle:
    def test_three_by_three(self, grid):
        cells = grid.get_cells_in_rectangle(GridCoord(0, 0), GridCoord(2, 2))
        assert len(cells) == 9
        assert len(set(cells)) == 9

    def test_corners_in_any_order(self, grid):
        a = grid.get_cells_in_rectangle(GridCoord(2, -1), GridCoord(-1, 1))
        b = grid.get_cells_in_rectangle(GridCoord(-1, -1), GridCoord(2, 1))
        assert a == b
        assert len(a) == 12

    def test_single_cell(self, grid):
        assert grid.get_cells_in_rectangle(GridCoord(4, 4), GridCoord(4, 4)) == [GridCoord(4, 4)]


class TestCircle:
    def test_radius_one_uses_cell_centers(self, grid):
        cells = grid.get_cells_in_circle(GridCoord(0, 0), 1)
        assert set(cells) == set(_cells((-1, -1), (-1, 0), (0, -1), (0, 0)))

    def test_radius_zero_is_empty(self, grid):
        assert grid.get_cells_in_circle(GridCoord(3, 3), 0) == []

    def test_cells_within_radius(self, grid):
        center = GridCoord(10, -4)
        for c in grid.get_cells_in_circle(center, 3.5):
            dx = c.x + 0.5 - center.x
            dy = c.y + 0.5 - center.y
            assert dx * dx + dy * dy <= 3.5 ** 2


class TestLine:
    def test_diagonal(self, grid):
        assert grid.get_cells_in_line(GridCoord(0, 0), GridCoord(3, 3)) == _cells((0, 0), (1, 1), (2, 2), (3, 3))

    def test_shallow_line(self, grid):
        assert grid.get_cells_in_line(GridCoord(0, 0), GridCoord(3, 1)) == _cells((0, 0), (1, 0), (2, 1), (3, 1))

    def test_single_point(self, grid):
        assert grid.get_cells_in_line(GridCoord(2, 2), GridCoord(2, 2)) == [GridCoord(2, 2)]

    @pytest.mark.parametrize("end", [(5, -2), (-4, 7), (0, -6), (-8, 0), (-3, -3)])
    def test_connected_and_inclusive(self, grid, end):
        start = GridCoord(1, 1)
        stop = GridCoord(*end)
        line = grid.get_cells_in_line(start, stop)
        assert line[0] == start
        assert line[-1] == stop
        assert len(line) == max(abs(stop.x - start.x), abs(stop.y - start.y)) + 1
        for a, b in zip(line, line[1:]):
            assert max(abs(a.x - b.x), abs(a.y - b.y)) == 1


class TestScreenToEdge:
    @pytest.mark.parametrize("point, side", [
        ((20, 2), EdgeSide.TOP),
        ((20, 38), EdgeSide.BOTTOM),
        ((2, 20), EdgeSide.LEFT),
        ((38, 20), EdgeSide.RIGHT),
    ])
    def test_sides(self, grid, point, side):
        assert grid.screen_to_edge(*point) == EdgeHit(0, 0, side)

    def test_center_is_no_edge(self, grid):
        assert grid.screen_to_edge(20, 20) is None

    def test_corner_priority(self, grid):
        assert grid.screen_to_edge(2, 2).side is EdgeSide.TOP
        assert grid.screen_to_edge(38, 2).side is EdgeSide.TOP
        assert grid.screen_to_edge(2, 38).side is EdgeSide.BOTTOM
        assert grid.screen_to_edge(38, 38).side is EdgeSide.BOTTOM

    def test_negative_cells(self, grid):
        assert grid.screen_to_edge(-38, 20) == EdgeHit(-1, 0, EdgeSide.LEFT)

    def test_custom_threshold(self, grid):
        assert grid.screen_to_edge(20, 8) is None
        assert grid.screen_to_edge(20, 8, threshold=0.25) == EdgeHit(0, 0, EdgeSide.TOP)


class TestVisibleGridRange:
    def test_origin_viewport(self, grid):
        assert grid.get_visible_grid_range(0, 0, 400, 300, 1) == VisibleGridRange(0, 10, 0, 8)

    def test_panned_and_zoomed(self, grid):
        rng = grid.get_visible_grid_range(100, 0, 400, 300, 2)
        assert (rng.start_x, rng.end_x) == (-2, 4)

    @pytest.mark.parametrize("args", [
        (0, 0, 400, 300, 0),
        (0, 0, 400, 300, -1),
        (float("nan"), 0, 400, 300, 1),
        (0, 0, float("inf"), 300, 1),
    ])
    def test_invalid_input(self, grid, args, caplog):
        assert grid.get_visible_grid_range(*args) is None
        assert "Invalid viewport" in caplog.text

    @pytest.mark.parametrize("cell_size, args", [
        (40, (0, 0, 800, 600, 1e-320)),
        (40, (1.7e308, 0, 400, 300, 1e-3)),
        (40, (0, 0, 1.7e308, 300, 1e-3)),
        (0.1, (0, 0, 400, 300, 5e-324)),
    ])
    def test_overflowing_extent(self, cell_size, args, caplog):
        grid = SquareGridGeometry(cell_size)
        assert grid.get_visible_grid_range(*args) is None
        assert "overflows world space" in caplog.text


class TestBoundingBoxes:
    def test_cell_bounds(self, grid):
        assert grid.get_cell_bounds(GridCoord(1, 2)) == BoundingBox(40, 80, 80, 120)

    def test_object_bounds(self, grid):
        box = grid.get_object_bounds(GridCoord(1, 2), width=2, height=3)
        assert box == BoundingBox(40, 80, 120, 200)
        assert (box.width, box.height) == (80, 120)
