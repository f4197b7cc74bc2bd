"""Tests for the shared CoordinateSystem contract."""

import pytest

from mapgeometry.engine.base import CoordinateSystem, is_valid_viewport, require_positive
from mapgeometry.engine.grid_geometry import SquareGridGeometry
from mapgeometry.engine.hex_geometry import HexGridGeometry
from mapgeometry.models.grid import GridCoord
from mapgeometry.models.hex import HexCoord
from mapgeometry.models.space import Orientation


class _HalfDoneGeometry(CoordinateSystem[GridCoord]):
    def world_to_grid(self, world_x, world_y):
        return GridCoord(0, 0)


class TestContract:
    def test_base_is_abstract(self):
        with pytest.raises(TypeError):
            CoordinateSystem()

    def test_incomplete_geometry_cannot_be_built(self):
        with pytest.raises(TypeError):
            _HalfDoneGeometry()

    def test_both_geometries_implement_contract(self):
        assert isinstance(SquareGridGeometry(40), CoordinateSystem)
        assert isinstance(HexGridGeometry(80), CoordinateSystem)


class TestViewportTransform:
    @pytest.mark.parametrize("geo", [SquareGridGeometry(40), HexGridGeometry(80, Orientation.POINTY)])
    def test_screen_world_inverse(self, geo):
        for wx, wy in [(0, 0), (123.5, -40), (-999, 77.25)]:
            s = geo.world_to_screen(wx, wy, 35, -12, 1.75)
            w = geo.screen_to_world(s.x, s.y, 1.75, 35, -12)
            assert (w.x, w.y) == (pytest.approx(wx), pytest.approx(wy))

    def test_screen_to_world_without_offset(self):
        w = SquareGridGeometry(40).screen_to_world(100, 50, 2)
        assert (w.x, w.y) == (50, 25)

    def test_hex_grid_to_screen(self):
        geo = HexGridGeometry(80, Orientation.FLAT)
        s = geo.grid_to_screen(HexCoord(1, 0), 10, 20, 2)
        assert s.x == pytest.approx(250)
        assert s.y == pytest.approx(20 + 2 * 80 * 3 ** 0.5 / 2)

    @pytest.mark.parametrize("geo", [SquareGridGeometry(40), HexGridGeometry(80)])
    def test_snap_to_cell_center_is_idempotent(self, geo):
        c = geo.snap_to_cell_center(57.3, -81.9)
        assert geo.snap_to_cell_center(c.x, c.y) == c


class TestHelpers:
    def test_require_positive(self):
        assert require_positive("size", 3) == 3.0
        for bad in (0, -1, float("nan"), float("inf")):
            with pytest.raises(ValueError):
                require_positive("size", bad)

    def test_is_valid_viewport(self):
        assert is_valid_viewport(0, 0, 800, 600, zoom=1)
        assert not is_valid_viewport(0, 0, 800, 600, zoom=0)
        assert not is_valid_viewport(float("nan"), 0, zoom=1)
