"""Hex math utilities: cube rounding, distance and line drawing.

All functions operate on HexCoord (axial coordinates). Cube coordinates
are written (x, y, z) with x = q, z = r and y = -x - z.
Reference: https://www.redblobgames.com/grids/hexagons/
"""

from __future__ import annotations

import math

from mapgeometry.models.hex import HexCoord


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties towards +infinity.

    ``round()`` uses banker's rounding, which would resolve points lying
    exactly on a hex edge differently depending on parity.
    """
    return math.floor(value + 0.5)


def cube_round(fq: float, fr: float) -> HexCoord:
    """Round fractional axial coordinates to the nearest hex.

    Each cube component is rounded on its own; the one with the largest
    rounding error is then rebuilt from the other two so that
    x + y + z == 0 still holds.
    """
    x = fq
    z = fr
    y = -x - z

    rx = round_half_up(x)
    ry = round_half_up(y)
    rz = round_half_up(z)

    x_diff = abs(rx - x)
    y_diff = abs(ry - y)
    z_diff = abs(rz - z)

    if x_diff > y_diff and x_diff > z_diff:
        rx = -ry - rz
    elif y_diff > z_diff:
        ry = -rx - rz
    else:
        rz = -rx - ry

    return HexCoord(rx, rz)


def hex_distance(a: HexCoord, b: HexCoord) -> int:
    """Compute the hex grid distance between two coordinates."""
    return a.distance_to(b)


def hex_linedraw(a: HexCoord, b: HexCoord) -> list[HexCoord]:
    """Draw a line between two hex coordinates using linear interpolation.

    Returns distance + 1 hex coordinates from a to b (inclusive).
    Uses cube coordinate interpolation with rounding.
    """
    n = hex_distance(a, b)
    if n == 0:
        return [a]

    results: list[HexCoord] = []
    for i in range(n + 1):
        t = i / n
        # Interpolate in cube space; y follows from x and z
        fx = a.q + (b.q - a.q) * t
        fz = a.r + (b.r - a.r) * t
        results.append(cube_round(fx, fz))
    return results
