"""Hexagonal coordinate system using axial coordinates (q, r).

Axial coordinates define position on a hex grid where:
- q axis runs roughly east
- r axis runs roughly south-east (flat-top) or south (pointy-top)
- s = -q - r is the implicit third cube coordinate

Iterating q and r directly covers a parallelogram, not a rectangle; use
offset coordinates (see ``mapgeometry.util.offset_coords``) for that.

Reference: https://www.redblobgames.com/grids/hexagons/
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HexCoord:
    """Immutable axial hex coordinate.

    Attributes:
        q: Column coordinate (east axis).
        r: Row coordinate (south-east axis).
    """

    q: int
    r: int

    # -- Cube coordinate -------------------------------------------------

    @property
    def s(self) -> int:
        """Implicit cube coordinate: s = -q - r."""
        return -self.q - self.r

    # -- Geometry --------------------------------------------------------

    def distance_to(self, other: HexCoord) -> int:
        """Hex grid distance (number of steps along hex edges)."""
        dq = abs(self.q - other.q)
        dr = abs(self.r - other.r)
        ds = abs(self.s - other.s)
        return max(dq, dr, ds)

    def neighbors(self) -> list[HexCoord]:
        """Return the 6 adjacent hex coordinates.

        Axial adjacency is the same for flat-top and pointy-top layouts.
        """
        return [HexCoord(self.q + dq, self.r + dr) for dq, dr in HEX_DIRECTIONS]

    def line_to(self, other: HexCoord) -> list[HexCoord]:
        """Return a list of hex coordinates forming a line from self to other.

        Uses linear interpolation in cube space with rounding.
        """
        from mapgeometry.util.hex_math import hex_linedraw

        return hex_linedraw(self, other)

    # -- Serialization ---------------------------------------------------

    def as_tuple(self) -> tuple[int, int]:
        return (self.q, self.r)

    def __repr__(self) -> str:
        return f"Hex({self.q},{self.r})"


# The 6 axial direction vectors
HEX_DIRECTIONS: list[tuple[int, int]] = [
    (1, 0),   # E
    (1, -1),  # NE
    (0, -1),  # NW
    (-1, 0),  # W
    (-1, 1),  # SW
    (0, 1),   # SE
]
