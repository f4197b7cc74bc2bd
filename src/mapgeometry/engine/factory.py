"""Build the geometry matching a map's settings."""

from __future__ import annotations

from typing import Union

from mapgeometry.engine.grid_geometry import SquareGridGeometry
from mapgeometry.engine.hex_geometry import HexGridGeometry
from mapgeometry.loaders.map_settings_loader import MapSettings


def create_geometry(settings: MapSettings) -> Union[SquareGridGeometry, HexGridGeometry]:
    """Return a new geometry for ``settings``.

    Geometries are immutable; call this again whenever settings change.
    """
    if settings.map_type == "grid":
        return SquareGridGeometry(settings.cell_size)
    if settings.map_type == "hex":
        return HexGridGeometry(
            settings.hex_size,
            orientation=settings.orientation,
            bounds=settings.bounds,
            max_visible_hexes=settings.max_visible_hexes,
            max_render_hexes=settings.max_render_hexes,
        )
    raise ValueError(f"Unknown map type {settings.map_type!r}")
