"""Geometry constants: layout factors, hit-test thresholds, iteration caps.

All magic numbers used by the geometries, centralized here.
"""

import math

# -- Layout --------------------------------------------------------------

SQRT3: float = math.sqrt(3.0)
"""Hex layout factor: edge-to-edge width of a hex is SQRT3 * hex_size."""

FLAT_ANGLE_OFFSET_DEG: float = 0.0
"""Angle of the first vertex of a flat-top hex."""

POINTY_ANGLE_OFFSET_DEG: float = 30.0
"""Angle of the first vertex of a pointy-top hex."""

# -- Defaults ------------------------------------------------------------

DEFAULT_CELL_SIZE: float = 40.0
"""Square cell size in world pixels."""

DEFAULT_HEX_SIZE: float = 80.0
"""Hex center-to-vertex radius in world pixels."""

DEFAULT_EDGE_THRESHOLD: float = 0.15
"""Fraction of a cell from a side that still counts as hitting that side."""

# -- Viewport culling ----------------------------------------------------

VISIBLE_RANGE_PADDING: int = 2
"""Extra hexes added on every side of a visible axial range."""

MAX_VISIBLE_HEXES: int = 10_000
"""Axial range size above which an unbounded render falls back to a centered subset."""

MAX_RENDER_HEXES: int = 50_000
"""Offset range size above which a render pass is skipped entirely."""
