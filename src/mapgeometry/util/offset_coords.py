"""Offset coordinates: rectangular indexing of axial hex space.

Axial (q, r) is used for storage and hex math but covers a parallelogram
when iterated. Offset (col, row) covers a rectangle and is used for bounds
and rectangular iteration.

- Flat-top hexes use "odd-q": columns are vertical, odd columns shift down
  by half a hex.
- Pointy-top hexes use "odd-r": rows are horizontal, odd rows shift right
  by half a hex.

Python's ``&`` and ``//`` operate on negative integers the way the parity
test needs (``-3 & 1 == 1``), and ``n - (n & 1)`` is always even, so the
floor division below is exact for every integer.
"""

from __future__ import annotations

from typing import Optional

from mapgeometry.models.hex import HexCoord
from mapgeometry.models.space import OffsetCoord, Orientation, RectBounds


def axial_to_offset(q: int, r: int, orientation: Orientation = Orientation.FLAT) -> OffsetCoord:
    """Convert axial coordinates to offset coordinates."""
    if orientation is Orientation.FLAT:
        return OffsetCoord(col=q, row=r + (q - (q & 1)) // 2)
    return OffsetCoord(col=q + (r - (r & 1)) // 2, row=r)


def offset_to_axial(col: int, row: int, orientation: Orientation = Orientation.FLAT) -> HexCoord:
    """Convert offset coordinates back to axial coordinates."""
    if orientation is Orientation.FLAT:
        return HexCoord(q=col, r=row - (col - (col & 1)) // 2)
    return HexCoord(q=col - (row - (row & 1)) // 2, r=row)


def is_within_offset_bounds(col: int, row: int, bounds: Optional[RectBounds]) -> bool:
    """Check offset coordinates against exclusive rectangular bounds.

    No bounds means an infinite map.
    """
    if bounds is None:
        return True
    return 0 <= col < bounds.max_col and 0 <= row < bounds.max_row


def column_to_label(col: int) -> str:
    """Spreadsheet-style column letters: 0 -> "A", 25 -> "Z", 26 -> "AA".

    Negative columns have no label and give an empty string.
    """
    label = ""
    num = col
    while num >= 0:
        label = chr(ord("A") + num % 26) + label
        num = num // 26 - 1
    return label


def row_to_label(row: int) -> str:
    """1-based row label."""
    return str(row + 1)


def offset_label(col: int, row: int) -> str:
    """Combined cell label, e.g. ``offset_label(0, 0) == "A1"``."""
    return column_to_label(col) + row_to_label(row)
