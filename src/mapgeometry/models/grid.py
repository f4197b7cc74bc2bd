"""Square grid cell coordinate.

Origin (0, 0) is the cell whose top-left corner sits at world (0, 0);
x grows to the right, y grows downwards.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GridCoord:
    """Immutable square cell index."""

    x: int
    y: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)

    def __repr__(self) -> str:
        return f"Cell({self.x},{self.y})"


# 4-directional steps: right, left, down, up
ORTHOGONAL_STEPS: list[tuple[int, int]] = [
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
]

# 8-directional steps, counter-clockwise from right
ALL_STEPS: list[tuple[int, int]] = [
    (1, 0),    # right
    (1, -1),   # top-right
    (0, -1),   # up
    (-1, -1),  # top-left
    (-1, 0),   # left
    (-1, 1),   # bottom-left
    (0, 1),    # down
    (1, 1),    # bottom-right
]
