"""Square grid geometry.

World origin (0, 0) is the top-left corner of cell (0, 0). Square maps are
an infinite canvas: there are no bounds, every cell is in bounds and
clamping returns its input.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Optional, Union

from mapgeometry.engine.base import CoordinateSystem, is_valid_viewport, require_positive
from mapgeometry.models.cells import Cell, GridCell
from mapgeometry.models.grid import ALL_STEPS, ORTHOGONAL_STEPS, GridCoord
from mapgeometry.models.space import (
    BoundingBox,
    DiagonalRule,
    DistanceOptions,
    EdgeHit,
    EdgeSide,
    OffsetCoord,
    RectBounds,
    VisibleGridRange,
    WorldCoord,
)
from mapgeometry.util.constants import DEFAULT_EDGE_THRESHOLD

log = logging.getLogger(__name__)


class SquareGridGeometry(CoordinateSystem[GridCoord]):
    """Geometry for square-cell maps.

    Attributes:
        cell_size: Cell edge length in world pixels (before zoom).
    """

    def __init__(self, cell_size: float) -> None:
        self.cell_size = require_positive("cell_size", cell_size)
        log.debug("Square grid geometry: cell_size=%.2f", self.cell_size)

    def __repr__(self) -> str:
        return f"SquareGridGeometry(cell_size={self.cell_size:g})"

    # -- Conversions -----------------------------------------------------

    def world_to_grid(self, world_x: float, world_y: float) -> GridCoord:
        return GridCoord(
            math.floor(world_x / self.cell_size),
            math.floor(world_y / self.cell_size),
        )

    def grid_to_world(self, coord: GridCoord) -> WorldCoord:
        return WorldCoord(coord.x * self.cell_size, coord.y * self.cell_size)

    def get_cell_center(self, coord: GridCoord) -> WorldCoord:
        return WorldCoord((coord.x + 0.5) * self.cell_size, (coord.y + 0.5) * self.cell_size)

    def offset_to_world(self, col: int, row: int) -> WorldCoord:
        # Offset and grid coordinates are the same thing on square maps
        return self.grid_to_world(GridCoord(col, row))

    def to_offset_coords(self, coord: GridCoord) -> OffsetCoord:
        return OffsetCoord(col=coord.x, row=coord.y)

    def snap_to_grid(self, world_x: float, world_y: float) -> WorldCoord:
        """Top-left corner of the cell containing a world point."""
        return self.grid_to_world(self.world_to_grid(world_x, world_y))

    def get_scaled_cell_size(self, zoom: float) -> float:
        return self.cell_size * zoom

    # -- Viewport --------------------------------------------------------

    def get_visible_grid_range(
        self,
        offset_x: float,
        offset_y: float,
        width: float,
        height: float,
        zoom: float,
    ) -> Optional[VisibleGridRange]:
        """Cell range covering a ``width`` x ``height`` viewport.

        Returns None (and logs a warning) for non-finite input or zoom <= 0.
        """
        if not is_valid_viewport(offset_x, offset_y, width, height, zoom=zoom):
            log.warning(
                "Invalid viewport (offset=%r,%r size=%r,%r zoom=%r), no visible cells",
                offset_x, offset_y, width, height, zoom,
            )
            return None

        # A subnormal zoom can underflow the scaled size to 0 or push the
        # edges past the float range even though every input is finite.
        scaled = self.get_scaled_cell_size(zoom)
        edges = (math.inf,) * 4
        if scaled > 0:
            edges = (
                -offset_x / scaled,
                (width - offset_x) / scaled,
                -offset_y / scaled,
                (height - offset_y) / scaled,
            )
        if not all(math.isfinite(e) for e in edges):
            log.warning(
                "Viewport extent overflows world space (size=%r,%r zoom=%r), no visible cells",
                width, height, zoom,
            )
            return None

        left, right, top, bottom = edges
        return VisibleGridRange(
            start_x=math.floor(left),
            end_x=math.ceil(right),
            start_y=math.floor(top),
            end_y=math.ceil(bottom),
        )

    # -- Edge hit-testing ------------------------------------------------

    def screen_to_edge(
        self,
        world_x: float,
        world_y: float,
        threshold: float = DEFAULT_EDGE_THRESHOLD,
    ) -> Optional[EdgeHit]:
        """Determine which side of a cell a world point is close to.

        Args:
            world_x: World X coordinate.
            world_y: World Y coordinate.
            threshold: Fraction of the cell (0..0.5) from a side that
                still counts as a hit on that side.

        Returns:
            The containing cell and side, or None when the point is in the
            middle of the cell. Near a corner, top wins over bottom, bottom
            over left, left over right.
        """
        cell = self.world_to_grid(world_x, world_y)
        frac_x = world_x / self.cell_size - cell.x
        frac_y = world_y / self.cell_size - cell.y

        if frac_y < threshold:
            return EdgeHit(cell.x, cell.y, EdgeSide.TOP)
        if frac_y > 1 - threshold:
            return EdgeHit(cell.x, cell.y, EdgeSide.BOTTOM)
        if frac_x < threshold:
            return EdgeHit(cell.x, cell.y, EdgeSide.LEFT)
        if frac_x > 1 - threshold:
            return EdgeHit(cell.x, cell.y, EdgeSide.RIGHT)
        return None

    # -- Bounds ----------------------------------------------------------

    def is_bounded(self) -> bool:
        return False

    def get_bounds(self) -> Optional[RectBounds]:
        return None

    def is_within_bounds(self, coord: GridCoord) -> bool:
        return True

    def clamp_to_bounds(self, coord: GridCoord) -> GridCoord:
        return coord

    # -- Neighbors -------------------------------------------------------

    def get_neighbors(self, coord: GridCoord) -> list[GridCoord]:
        """Right, left, down and up neighbors."""
        return [GridCoord(coord.x + dx, coord.y + dy) for dx, dy in ORTHOGONAL_STEPS]

    def get_neighbors8(self, coord: GridCoord) -> list[GridCoord]:
        """All eight neighbors, counter-clockwise from the right."""
        return [GridCoord(coord.x + dx, coord.y + dy) for dx, dy in ALL_STEPS]

    # -- Distances -------------------------------------------------------

    def get_manhattan_distance(self, a: GridCoord, b: GridCoord) -> int:
        return abs(b.x - a.x) + abs(b.y - a.y)

    def get_euclidean_distance(self, a: GridCoord, b: GridCoord) -> float:
        return math.hypot(b.x - a.x, b.y - a.y)

    def get_cell_distance(
        self,
        a: GridCoord,
        b: GridCoord,
        options: Optional[DistanceOptions] = None,
    ) -> float:
        """Distance in cells with a configurable diagonal rule.

        - EQUAL: every diagonal step costs 1 (Chebyshev).
        - EUCLIDEAN: straight-line distance.
        - ALTERNATING: every second diagonal costs 2 (5-10-5 movement).
        """
        rule = (options or DistanceOptions()).diagonal_rule
        dx = abs(b.x - a.x)
        dy = abs(b.y - a.y)

        if rule is DiagonalRule.EQUAL:
            return max(dx, dy)
        if rule is DiagonalRule.EUCLIDEAN:
            return math.hypot(dx, dy)

        straights = abs(dx - dy)
        diagonals = min(dx, dy)
        return straights + diagonals + diagonals // 2

    # -- Shape enumeration -----------------------------------------------

    def get_cells_in_rectangle(self, corner1: GridCoord, corner2: GridCoord) -> list[GridCoord]:
        min_x, max_x = sorted((corner1.x, corner2.x))
        min_y, max_y = sorted((corner1.y, corner2.y))
        return [
            GridCoord(x, y)
            for x in range(min_x, max_x + 1)
            for y in range(min_y, max_y + 1)
        ]

    def get_cells_in_circle(self, center: GridCoord, radius: float) -> list[GridCoord]:
        """Cells whose center lies within ``radius`` cells of the center cell's origin."""
        radius_sq = radius * radius
        cells: list[GridCoord] = []
        for x in range(math.floor(center.x - radius), math.ceil(center.x + radius) + 1):
            for y in range(math.floor(center.y - radius), math.ceil(center.y + radius) + 1):
                dx = x + 0.5 - center.x
                dy = y + 0.5 - center.y
                if dx * dx + dy * dy <= radius_sq:
                    cells.append(GridCoord(x, y))
        return cells

    def get_cells_in_line(self, start: GridCoord, end: GridCoord) -> list[GridCoord]:
        """Bresenham's line, both endpoints included."""
        x, y = start.x, start.y
        dx = abs(end.x - start.x)
        dy = abs(end.y - start.y)
        sx = 1 if start.x < end.x else -1
        sy = 1 if start.y < end.y else -1
        err = dx - dy

        cells: list[GridCoord] = []
        while True:
            cells.append(GridCoord(x, y))
            if x == end.x and y == end.y:
                break
            e2 = 2 * err
            if e2 > -dy:
                err -= dy
                x += sx
            if e2 < dx:
                err += dx
                y += sy
        return cells

    # -- Bounding boxes --------------------------------------------------

    def get_cell_bounds(self, coord: GridCoord) -> BoundingBox:
        origin = self.grid_to_world(coord)
        return BoundingBox(origin.x, origin.y, origin.x + self.cell_size, origin.y + self.cell_size)

    def get_object_bounds(self, position: GridCoord, width: float = 1, height: float = 1) -> BoundingBox:
        """Objects are anchored at their top-left cell."""
        origin = self.grid_to_world(position)
        return BoundingBox(
            origin.x,
            origin.y,
            origin.x + width * self.cell_size,
            origin.y + height * self.cell_size,
        )

    # -- Cell records ----------------------------------------------------

    def create_cell(self, coord: GridCoord, color: str) -> GridCell:
        return GridCell(x=coord.x, y=coord.y, color=color)

    def cell_to_coord(self, cell: Cell) -> GridCoord:
        if not isinstance(cell, GridCell):
            raise TypeError(f"Square grid cannot use {type(cell).__name__} records")
        return GridCoord(cell.x, cell.y)

    def parse_cell(self, raw: Union[Mapping[str, Any], Cell]) -> GridCell:
        if isinstance(raw, GridCell):
            return raw
        return GridCell.model_validate(raw)
