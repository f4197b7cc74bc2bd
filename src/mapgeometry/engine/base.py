"""Coordinate system contract shared by square and hex geometries.

Coordinate spaces:
- Grid coordinates: ``GridCoord(x, y)`` on square maps, ``HexCoord(q, r)``
  (axial) on hex maps. Each geometry only accepts its own type.
- World coordinates: continuous map-space pixels. Origin and scale are
  defined by the geometry.
- Screen coordinates: canvas pixels after the viewport transform
  ``screen = offset + world * zoom``.

``CoordinateSystem`` is abstract; a geometry that leaves out any operation
cannot be instantiated (``TypeError`` at construction).
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Generic, Mapping, Optional, TypeVar, Union

from mapgeometry.models.cells import Cell
from mapgeometry.models.grid import GridCoord
from mapgeometry.models.hex import HexCoord
from mapgeometry.models.space import (
    BoundingBox,
    DistanceOptions,
    OffsetCoord,
    RectBounds,
    ScreenCoord,
    WorldCoord,
)

log = logging.getLogger(__name__)

C = TypeVar("C", GridCoord, HexCoord)


def require_positive(name: str, value: float) -> float:
    """Validate a size parameter; returns it as float."""
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be a positive finite number, got {value!r}")
    return float(value)


def is_valid_viewport(*values: float, zoom: float) -> bool:
    """True when every viewport value is finite and zoom is positive."""
    return all(math.isfinite(v) for v in values) and math.isfinite(zoom) and zoom > 0


class CoordinateSystem(ABC, Generic[C]):
    """Operations every map geometry provides."""

    # ================================================================
    # Shared transforms
    # ================================================================

    def world_to_screen(
        self,
        world_x: float,
        world_y: float,
        offset_x: float,
        offset_y: float,
        zoom: float,
    ) -> ScreenCoord:
        """Apply the viewport transform (pan, then zoom) to a world point."""
        return ScreenCoord(offset_x + world_x * zoom, offset_y + world_y * zoom)

    def screen_to_world(
        self,
        screen_x: float,
        screen_y: float,
        zoom: float,
        offset_x: float = 0.0,
        offset_y: float = 0.0,
    ) -> WorldCoord:
        """Inverse of :meth:`world_to_screen`.

        Called without an offset, ``screen_x``/``screen_y`` are taken to be
        relative to the pan origin already.
        """
        return WorldCoord((screen_x - offset_x) / zoom, (screen_y - offset_y) / zoom)

    def grid_to_screen(self, coord: C, offset_x: float, offset_y: float, zoom: float) -> ScreenCoord:
        """Screen position of a cell's anchor point."""
        world = self.grid_to_world(coord)
        return self.world_to_screen(world.x, world.y, offset_x, offset_y, zoom)

    def snap_to_cell_center(self, world_x: float, world_y: float) -> WorldCoord:
        """Center of the cell containing a world point."""
        return self.get_cell_center(self.world_to_grid(world_x, world_y))

    # ================================================================
    # Cell record adapters
    # ================================================================

    def cell_key(self, coord: C) -> str:
        """Stable lookup key for a cell, e.g. ``"3,-2"``."""
        a, b = coord.as_tuple()
        return f"{a},{b}"

    def cell_matches_coords(self, cell: Cell, coord: C) -> bool:
        return self.cell_to_coord(cell) == coord

    def cell_to_offset_coords(self, cell: Cell) -> OffsetCoord:
        return self.to_offset_coords(self.cell_to_coord(cell))

    @abstractmethod
    def create_cell(self, coord: C, color: str) -> Cell:
        """Build a persisted cell record for this geometry."""

    @abstractmethod
    def cell_to_coord(self, cell: Cell) -> C:
        """Coordinate of a persisted cell record."""

    @abstractmethod
    def parse_cell(self, raw: Union[Mapping[str, Any], Cell]) -> Cell:
        """Validate a raw persisted mapping into this geometry's record type."""

    # ================================================================
    # Conversions
    # ================================================================

    @abstractmethod
    def world_to_grid(self, world_x: float, world_y: float) -> C:
        """Cell containing a world point. Never fails, ignores bounds."""

    @abstractmethod
    def grid_to_world(self, coord: C) -> WorldCoord:
        """Anchor point of a cell (square: top-left corner, hex: center)."""

    @abstractmethod
    def get_cell_center(self, coord: C) -> WorldCoord:
        """Center of a cell in world space."""

    @abstractmethod
    def offset_to_world(self, col: int, row: int) -> WorldCoord:
        """Anchor point of the cell at offset (col, row)."""

    @abstractmethod
    def to_offset_coords(self, coord: C) -> OffsetCoord:
        """Rectangular (col, row) index of a cell."""

    @abstractmethod
    def get_scaled_cell_size(self, zoom: float) -> float:
        """Nominal cell size at a zoom level."""

    # ================================================================
    # Bounds
    # ================================================================

    @abstractmethod
    def is_bounded(self) -> bool:
        """Whether the map has a rectangular playable area."""

    @abstractmethod
    def get_bounds(self) -> Optional[RectBounds]:
        """The playable area, or None for an infinite map."""

    @abstractmethod
    def is_within_bounds(self, coord: C) -> bool:
        """True for every cell when the map is unbounded."""

    @abstractmethod
    def clamp_to_bounds(self, coord: C) -> C:
        """Nearest in-bounds cell; identity when the map is unbounded."""

    # ================================================================
    # Neighbors and distances
    # ================================================================

    @abstractmethod
    def get_neighbors(self, coord: C) -> list[C]:
        """Adjacent cells (4 on square maps, 6 on hex maps)."""

    @abstractmethod
    def get_manhattan_distance(self, a: C, b: C) -> float:
        """Sum of per-axis steps."""

    @abstractmethod
    def get_euclidean_distance(self, a: C, b: C) -> float:
        """Straight-line distance in cells."""

    @abstractmethod
    def get_cell_distance(self, a: C, b: C, options: Optional[DistanceOptions] = None) -> float:
        """Game distance in cells according to ``options``."""

    # ================================================================
    # Shape enumeration
    # ================================================================

    @abstractmethod
    def get_cells_in_rectangle(self, corner1: C, corner2: C) -> list[C]:
        """Cells inside the inclusive box spanned by two corners."""

    @abstractmethod
    def get_cells_in_circle(self, center: C, radius: float) -> list[C]:
        """Cells within ``radius`` cells of ``center``."""

    @abstractmethod
    def get_cells_in_line(self, start: C, end: C) -> list[C]:
        """Connected run of cells from ``start`` to ``end`` inclusive."""

    # ================================================================
    # Bounding boxes
    # ================================================================

    @abstractmethod
    def get_cell_bounds(self, coord: C) -> BoundingBox:
        """World-space box around a cell."""

    @abstractmethod
    def get_object_bounds(self, position: C, width: float = 1, height: float = 1) -> BoundingBox:
        """World-space box around an object ``width`` x ``height`` cells in size."""
