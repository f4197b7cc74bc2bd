"""Hex grid geometry (flat-top and pointy-top).

Coordinate spaces:
- Axial (q, r): storage and hex math. Iterating it covers a parallelogram.
- Offset (col, row): rectangular re-indexing used for bounds and for
  rectangular iteration (see ``mapgeometry.util.offset_coords``).
- World (x, y): hex (0, 0) is centered on the world origin.

Bounds are expressed in offset space so the playable area is a rectangle
even though axial space is not.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Optional, Union

from mapgeometry.engine.base import CoordinateSystem, is_valid_viewport, require_positive
from mapgeometry.models.cells import Cell, HexCell
from mapgeometry.models.hex import HexCoord
from mapgeometry.models.space import (
    BoundingBox,
    DistanceOptions,
    HexRenderRange,
    OffsetCoord,
    Orientation,
    RangeStatus,
    RectBounds,
    VisibleHexRange,
    WorldCoord,
)
from mapgeometry.util.constants import (
    FLAT_ANGLE_OFFSET_DEG,
    MAX_RENDER_HEXES,
    MAX_VISIBLE_HEXES,
    POINTY_ANGLE_OFFSET_DEG,
    SQRT3,
    VISIBLE_RANGE_PADDING,
)
from mapgeometry.util.hex_math import cube_round
from mapgeometry.util.offset_coords import axial_to_offset, is_within_offset_bounds, offset_to_axial

log = logging.getLogger(__name__)


class HexGridGeometry(CoordinateSystem[HexCoord]):
    """Geometry for hex maps.

    Attributes:
        hex_size: Center-to-vertex radius in world pixels.
        orientation: Flat-top or pointy-top.
        bounds: Playable area in offset coordinates, or None if infinite.
        max_visible_hexes: Axial range size above which an unbounded render
            pass falls back to a centered subset.
        max_render_hexes: Offset range size above which a render pass is
            skipped.
        width, height: Extent of one hex in world pixels.
        horiz_spacing, vert_spacing: Distance between neighboring hex
            centers along each axis.
    """

    def __init__(
        self,
        hex_size: float,
        orientation: Union[Orientation, str] = Orientation.FLAT,
        bounds: Optional[RectBounds] = None,
        max_visible_hexes: int = MAX_VISIBLE_HEXES,
        max_render_hexes: int = MAX_RENDER_HEXES,
    ) -> None:
        self.hex_size = require_positive("hex_size", hex_size)
        self.orientation = Orientation(orientation)
        self.bounds = bounds
        if max_visible_hexes <= 0 or max_render_hexes <= 0:
            raise ValueError(
                f"Hex caps must be positive, got {max_visible_hexes}/{max_render_hexes}"
            )
        self.max_visible_hexes = max_visible_hexes
        self.max_render_hexes = max_render_hexes

        size = self.hex_size
        if self.orientation is Orientation.FLAT:
            self.width = size * 2
            self.height = size * SQRT3
            self.horiz_spacing = size * 1.5
            self.vert_spacing = size * SQRT3
        else:
            self.width = size * SQRT3
            self.height = size * 2
            self.horiz_spacing = size * SQRT3
            self.vert_spacing = size * 1.5

        log.debug(
            "Hex geometry: size=%.2f orientation=%s bounds=%s",
            size, self.orientation.value, bounds,
        )

    def __repr__(self) -> str:
        return (
            f"HexGridGeometry(hex_size={self.hex_size:g}, "
            f"orientation={self.orientation.value!r}, bounds={self.bounds!r})"
        )

    # ================================================================
    # Axial <-> world
    # ================================================================

    def _world_to_axial(self, world_x: float, world_y: float) -> tuple[float, float]:
        """Fractional axial coordinates of a world point."""
        if self.orientation is Orientation.FLAT:
            q = (world_x * (2 / 3)) / self.hex_size
            r = (-world_x / 3 + (SQRT3 / 3) * world_y) / self.hex_size
        else:
            q = ((SQRT3 / 3) * world_x - world_y / 3) / self.hex_size
            r = (world_y * (2 / 3)) / self.hex_size
        return q, r

    def world_to_hex(self, world_x: float, world_y: float) -> HexCoord:
        """Hex containing a world point."""
        return cube_round(*self._world_to_axial(world_x, world_y))

    def world_to_grid(self, world_x: float, world_y: float) -> HexCoord:
        return self.world_to_hex(world_x, world_y)

    def round_hex(self, q: float, r: float) -> HexCoord:
        """Nearest hex to fractional axial coordinates."""
        return cube_round(q, r)

    def hex_to_world(self, coord: HexCoord) -> WorldCoord:
        """Center of a hex in world coordinates."""
        size = self.hex_size
        if self.orientation is Orientation.FLAT:
            return WorldCoord(
                size * 1.5 * coord.q,
                size * (SQRT3 / 2 * coord.q + SQRT3 * coord.r),
            )
        return WorldCoord(
            size * (SQRT3 * coord.q + SQRT3 / 2 * coord.r),
            size * 1.5 * coord.r,
        )

    def grid_to_world(self, coord: HexCoord) -> WorldCoord:
        return self.hex_to_world(coord)

    def get_cell_center(self, coord: HexCoord) -> WorldCoord:
        return self.hex_to_world(coord)

    get_hex_center = get_cell_center

    def snap_to_hex_center(self, world_x: float, world_y: float) -> WorldCoord:
        return self.snap_to_cell_center(world_x, world_y)

    def offset_to_world(self, col: int, row: int) -> WorldCoord:
        return self.hex_to_world(offset_to_axial(col, row, self.orientation))

    def to_offset_coords(self, coord: HexCoord) -> OffsetCoord:
        return axial_to_offset(coord.q, coord.r, self.orientation)

    def get_hex_vertices(self, coord: HexCoord) -> list[WorldCoord]:
        """Six corners of a hex, 60 degrees apart.

        The first vertex sits at 0 degrees for flat-top hexes and at 30
        degrees for pointy-top hexes.
        """
        center = self.hex_to_world(coord)
        angle_offset = (
            FLAT_ANGLE_OFFSET_DEG if self.orientation is Orientation.FLAT
            else POINTY_ANGLE_OFFSET_DEG
        )
        vertices: list[WorldCoord] = []
        for i in range(6):
            angle = math.radians(60 * i + angle_offset)
            vertices.append(WorldCoord(
                center.x + self.hex_size * math.cos(angle),
                center.y + self.hex_size * math.sin(angle),
            ))
        return vertices

    def get_scaled_cell_size(self, zoom: float) -> float:
        return self.hex_size * zoom

    get_scaled_hex_size = get_scaled_cell_size

    # ================================================================
    # Bounds
    # ================================================================

    def is_bounded(self) -> bool:
        return self.bounds is not None

    def get_bounds(self) -> Optional[RectBounds]:
        return self.bounds

    def is_within_bounds(self, coord: HexCoord) -> bool:
        if self.bounds is None:
            return True
        offset = self.to_offset_coords(coord)
        return is_within_offset_bounds(offset.col, offset.row, self.bounds)

    def clamp_to_bounds(self, coord: HexCoord) -> HexCoord:
        """Clamp each offset axis independently into the playable area.

        With a zero-sized axis there is no valid hex; the result lands on
        index 0 of that axis and stays out of bounds.
        """
        if self.bounds is None:
            return coord
        offset = self.to_offset_coords(coord)
        col = max(0, min(self.bounds.max_col - 1, offset.col))
        row = max(0, min(self.bounds.max_row - 1, offset.row))
        return offset_to_axial(col, row, self.orientation)

    # ================================================================
    # Neighbors and distances
    # ================================================================

    def get_neighbors(self, coord: HexCoord) -> list[HexCoord]:
        return coord.neighbors()

    def get_hex_distance(self, a: HexCoord, b: HexCoord) -> int:
        return a.distance_to(b)

    # Hexes have no diagonals: every metric is the hex distance.

    def get_manhattan_distance(self, a: HexCoord, b: HexCoord) -> int:
        return self.get_hex_distance(a, b)

    def get_euclidean_distance(self, a: HexCoord, b: HexCoord) -> int:
        return self.get_hex_distance(a, b)

    def get_cell_distance(
        self,
        a: HexCoord,
        b: HexCoord,
        options: Optional[DistanceOptions] = None,
    ) -> int:
        return self.get_hex_distance(a, b)

    # ================================================================
    # Shape enumeration
    # ================================================================

    def _iter_offset_box(self, min_col: int, max_col: int, min_row: int, max_row: int):
        """Yield in-bounds axial coords of an inclusive offset rectangle."""
        for col in range(min_col, max_col + 1):
            for row in range(min_row, max_row + 1):
                coord = offset_to_axial(col, row, self.orientation)
                if self.is_within_bounds(coord):
                    yield coord

    def get_cells_in_rectangle(self, corner1: HexCoord, corner2: HexCoord) -> list[HexCoord]:
        """Hexes inside the offset-space rectangle spanned by two corners."""
        o1 = self.to_offset_coords(corner1)
        o2 = self.to_offset_coords(corner2)
        return list(self._iter_offset_box(
            min(o1.col, o2.col), max(o1.col, o2.col),
            min(o1.row, o2.row), max(o1.row, o2.row),
        ))

    def get_cells_in_circle(self, center: HexCoord, radius: float) -> list[HexCoord]:
        """In-bounds hexes at most ``radius`` steps from ``center``."""
        origin = self.to_offset_coords(center)
        candidates = self._iter_offset_box(
            math.floor(origin.col - radius), math.ceil(origin.col + radius),
            math.floor(origin.row - radius), math.ceil(origin.row + radius),
        )
        return [c for c in candidates if self.get_hex_distance(center, c) <= radius]

    def get_cells_in_line(self, start: HexCoord, end: HexCoord) -> list[HexCoord]:
        """Hexes on the cube-space line from start to end, clipped to bounds."""
        return [c for c in start.line_to(end) if self.is_within_bounds(c)]

    # ================================================================
    # Viewport culling
    # ================================================================

    def get_visible_hex_range(
        self,
        offset_x: float,
        offset_y: float,
        width: float,
        height: float,
        zoom: float,
    ) -> Optional[VisibleHexRange]:
        """Padded axial bounding box of a ``width`` x ``height`` viewport.

        The axial box of a screen rectangle is not tight, so this
        over-includes hexes near the corners. Returns None (and logs a
        warning) for non-finite input, zoom <= 0, or a viewport whose
        corners fall outside the float range in world space.
        """
        if not is_valid_viewport(offset_x, offset_y, width, height, zoom=zoom):
            log.warning(
                "Invalid viewport (offset=%r,%r size=%r,%r zoom=%r), no visible hexes",
                offset_x, offset_y, width, height, zoom,
            )
            return None

        corners = []
        for sx, sy in ((0, 0), (width, 0), (0, height), (width, height)):
            w = self.screen_to_world(sx, sy, zoom, offset_x, offset_y)
            corners.append(self._world_to_axial(w.x, w.y))
        if not all(math.isfinite(v) for corner in corners for v in corner):
            log.warning(
                "Viewport extent overflows world space (size=%r,%r zoom=%r), no visible hexes",
                width, height, zoom,
            )
            return None
        hexes = [cube_round(q, r) for q, r in corners]

        pad = VISIBLE_RANGE_PADDING
        return VisibleHexRange(
            min_q=min(h.q for h in hexes) - pad,
            max_q=max(h.q for h in hexes) + pad,
            min_r=min(h.r for h in hexes) - pad,
            max_r=max(h.r for h in hexes) + pad,
        )

    def _offset_box_of_axial_range(
        self, min_q: int, max_q: int, min_r: int, max_r: int,
    ) -> tuple[int, int, int, int]:
        # Offset col and row never decrease as q or r grow, so the extreme
        # axial corners give the extreme offset values.
        low = axial_to_offset(min_q, min_r, self.orientation)
        high = axial_to_offset(max_q, max_r, self.orientation)
        return low.col, high.col, low.row, high.row

    def get_render_range(
        self,
        offset_x: float,
        offset_y: float,
        width: float,
        height: float,
        zoom: float,
    ) -> HexRenderRange:
        """Offset rectangle of hexes a renderer should draw for a viewport.

        Bounded maps always render their full playable area. Unbounded maps
        render what is visible at any viewport rotation, reduced to a
        centered subset when the visible range exceeds
        ``max_visible_hexes``. A range larger than ``max_render_hexes`` is
        dropped (status TOO_LARGE). Input that is invalid, or whose derived
        extent overflows the float range, gives an empty INVALID_INPUT range.
        """
        if not is_valid_viewport(offset_x, offset_y, width, height, zoom=zoom):
            log.warning(
                "Invalid viewport (offset=%r,%r size=%r,%r zoom=%r), skipping render",
                offset_x, offset_y, width, height, zoom,
            )
            return HexRenderRange(RangeStatus.INVALID_INPUT, self.orientation, bounds=self.bounds)

        status = RangeStatus.OK
        if self.bounds is not None:
            min_col, max_col = 0, self.bounds.max_col - 1
            min_row, max_row = 0, self.bounds.max_row - 1
        else:
            # A square twice the viewport diagonal covers every rotation
            diagonal = math.hypot(width, height) * 2
            if not math.isfinite(diagonal):
                log.warning(
                    "Viewport diagonal overflows (size=%r,%r), skipping render", width, height,
                )
                return HexRenderRange(RangeStatus.INVALID_INPUT, self.orientation, bounds=self.bounds)
            visible = self.get_visible_hex_range(offset_x, offset_y, diagonal, diagonal, zoom)
            if visible is None:
                return HexRenderRange(RangeStatus.INVALID_INPUT, self.orientation, bounds=self.bounds)
            if visible.hex_count > self.max_visible_hexes:
                log.warning(
                    "Visible range too large (%d hexes), limiting to %d around center",
                    visible.hex_count, self.max_visible_hexes,
                )
                half = math.isqrt(self.max_visible_hexes) // 2
                center_q = (visible.min_q + visible.max_q) // 2
                center_r = (visible.min_r + visible.max_r) // 2
                min_col, max_col, min_row, max_row = self._offset_box_of_axial_range(
                    center_q - half, center_q + half, center_r - half, center_r + half,
                )
                status = RangeStatus.LIMITED
            else:
                min_col, max_col, min_row, max_row = self._offset_box_of_axial_range(
                    visible.min_q, visible.max_q, visible.min_r, visible.max_r,
                )

        total = max(0, max_col - min_col + 1) * max(0, max_row - min_row + 1)
        if total > self.max_render_hexes:
            log.warning("Too many hexes to draw (%d), skipping render", total)
            return HexRenderRange(RangeStatus.TOO_LARGE, self.orientation, bounds=self.bounds)

        return HexRenderRange(
            status,
            self.orientation,
            min_col=min_col,
            max_col=max_col,
            min_row=min_row,
            max_row=max_row,
            bounds=self.bounds,
        )

    def get_visible_hexes(
        self,
        offset_x: float,
        offset_y: float,
        width: float,
        height: float,
        zoom: float,
    ) -> list[HexCoord]:
        """All hexes of :meth:`get_render_range`, in drawing order."""
        return list(self.get_render_range(offset_x, offset_y, width, height, zoom).iter_hexes())

    # ================================================================
    # Bounding boxes
    # ================================================================

    def get_cell_bounds(self, coord: HexCoord) -> BoundingBox:
        return self.get_object_bounds(coord)

    def get_object_bounds(self, position: HexCoord, width: float = 1, height: float = 1) -> BoundingBox:
        """Objects are centered on their hex."""
        center = self.hex_to_world(position)
        half_w = self.width * width / 2
        half_h = self.height * height / 2
        return BoundingBox(center.x - half_w, center.y - half_h, center.x + half_w, center.y + half_h)

    # ================================================================
    # Cell records
    # ================================================================

    def create_cell(self, coord: HexCoord, color: str) -> HexCell:
        return HexCell(q=coord.q, r=coord.r, color=color)

    def cell_to_coord(self, cell: Cell) -> HexCoord:
        if not isinstance(cell, HexCell):
            raise TypeError(f"Hex grid cannot use {type(cell).__name__} records")
        return HexCoord(cell.q, cell.r)

    def parse_cell(self, raw: Union[Mapping[str, Any], Cell]) -> HexCell:
        if isinstance(raw, HexCell):
            return raw
        return HexCell.model_validate(raw)
