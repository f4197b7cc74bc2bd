"""Coordinate-space value types shared by every geometry.

Grid cells are indexed by ``GridCoord`` (square) or ``HexCoord`` (axial hex).
Everything else (world points, screen points, rectangular offset indices,
bounds) lives here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from mapgeometry.models.hex import HexCoord


class Orientation(Enum):
    """Hexagon orientation."""

    FLAT = "flat"
    POINTY = "pointy"


class DiagonalRule(Enum):
    """How diagonal steps are counted on a square grid."""

    ALTERNATING = "alternating"
    EQUAL = "equal"
    EUCLIDEAN = "euclidean"


class EdgeSide(Enum):
    """Side of a square cell."""

    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"


@dataclass(frozen=True)
class RectBounds:
    """Rectangular playable area in offset space.

    Upper bounds are exclusive: ``max_col=26`` means columns 0..25.
    """

    max_col: int
    max_row: int

    def __post_init__(self) -> None:
        if self.max_col < 0 or self.max_row < 0:
            raise ValueError(f"Bounds must be non-negative, got {self.max_col}x{self.max_row}")


@dataclass(frozen=True)
class OffsetCoord:
    """Rectangular (col, row) index of a hex."""

    col: int
    row: int


@dataclass(frozen=True)
class WorldCoord:
    """Continuous point in map space."""

    x: float
    y: float


@dataclass(frozen=True)
class ScreenCoord:
    """Continuous point on the canvas after pan and zoom."""

    x: float
    y: float


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box in world space."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class DistanceOptions:
    """Options for ``get_cell_distance``. Hex geometries ignore them."""

    diagonal_rule: DiagonalRule = DiagonalRule.ALTERNATING


@dataclass(frozen=True)
class EdgeHit:
    """Result of hit-testing a point against square cell edges."""

    x: int
    y: int
    side: EdgeSide


# -- Viewport ranges -----------------------------------------------------


@dataclass(frozen=True)
class VisibleGridRange:
    """Inclusive square-cell range covering a viewport."""

    start_x: int
    end_x: int
    start_y: int
    end_y: int


@dataclass(frozen=True)
class VisibleHexRange:
    """Padded axial bounding box covering a viewport."""

    min_q: int
    max_q: int
    min_r: int
    max_r: int

    @property
    def hex_count(self) -> int:
        return (self.max_q - self.min_q + 1) * (self.max_r - self.min_r + 1)


class RangeStatus(Enum):
    """Outcome of computing a hex render range."""

    OK = "ok"
    LIMITED = "limited"          # centered subset of an oversized range
    TOO_LARGE = "too_large"      # offset box over the hard cap, nothing to draw
    INVALID_INPUT = "invalid_input"


@dataclass(frozen=True)
class HexRenderRange:
    """Offset-space rectangle a renderer should iterate.

    ``min_*``/``max_*`` are inclusive. An empty range (``TOO_LARGE`` or
    ``INVALID_INPUT``) has ``min > max`` on both axes.
    """

    status: RangeStatus
    orientation: Orientation
    min_col: int = 0
    max_col: int = -1
    min_row: int = 0
    max_row: int = -1
    bounds: Optional[RectBounds] = field(default=None)

    @property
    def is_empty(self) -> bool:
        return self.min_col > self.max_col or self.min_row > self.max_row

    @property
    def hex_count(self) -> int:
        if self.is_empty:
            return 0
        return (self.max_col - self.min_col + 1) * (self.max_row - self.min_row + 1)

    def iter_hexes(self) -> Iterator[HexCoord]:
        """Yield axial coords in offset order, skipping hexes outside bounds."""
        from mapgeometry.util.offset_coords import is_within_offset_bounds, offset_to_axial

        for col in range(self.min_col, self.max_col + 1):
            for row in range(self.min_row, self.max_row + 1):
                if is_within_offset_bounds(col, row, self.bounds):
                    yield offset_to_axial(col, row, self.orientation)
