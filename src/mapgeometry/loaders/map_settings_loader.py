"""Map settings: loads the shape-relevant settings of a map from YAML.

Provides a single ``MapSettings`` dataclass. A geometry is built from it
once per map and rebuilt whenever any field changes.

Example ``map.yaml``::

    map_type: hex
    hex_size: 80
    orientation: pointy
    bounds:
      max_col: 26
      max_row: 20
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from mapgeometry.models.space import Orientation, RectBounds
from mapgeometry.util.constants import (
    DEFAULT_CELL_SIZE,
    DEFAULT_HEX_SIZE,
    MAX_RENDER_HEXES,
    MAX_VISIBLE_HEXES,
)

log = logging.getLogger(__name__)

DEFAULT_MAP_SETTINGS_PATH = "config/map.yaml"

MAP_TYPES = ("grid", "hex")


@dataclass(frozen=True)
class MapSettings:
    """Shape-relevant settings of one map.

    Every field has a sensible default so a map can be opened even
    without a settings file.
    """

    map_type: str = "grid"

    # -- Square grid -------------------------------------------------
    cell_size: float = DEFAULT_CELL_SIZE

    # -- Hex grid ----------------------------------------------------
    hex_size: float = DEFAULT_HEX_SIZE
    orientation: Orientation = Orientation.FLAT
    bounds: Optional[RectBounds] = None

    # -- Render caps -------------------------------------------------
    max_visible_hexes: int = MAX_VISIBLE_HEXES
    max_render_hexes: int = MAX_RENDER_HEXES

    def __post_init__(self) -> None:
        if self.map_type not in MAP_TYPES:
            raise ValueError(f"Unknown map type {self.map_type!r}, expected one of {MAP_TYPES}")


def _parse_bounds(raw: Any) -> Optional[RectBounds]:
    """Parse a ``bounds`` mapping; accepts snake_case and camelCase keys."""
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise ValueError(f"bounds must be a mapping, got {type(raw).__name__}")
    max_col = raw.get("max_col", raw.get("maxCol"))
    max_row = raw.get("max_row", raw.get("maxRow"))
    if max_col is None or max_row is None:
        raise ValueError(f"bounds needs max_col and max_row, got {dict(raw)}")
    return RectBounds(max_col=int(max_col), max_row=int(max_row))


def map_settings_from_dict(raw: Mapping[str, Any]) -> MapSettings:
    """Build settings from a plain mapping. Unknown keys are ignored."""
    known = {f.name for f in fields(MapSettings)}
    values = {k: v for k, v in raw.items() if k in known}

    if "bounds" in values:
        values["bounds"] = _parse_bounds(values["bounds"])
    if "orientation" in values:
        values["orientation"] = Orientation(values["orientation"])
    for key in ("cell_size", "hex_size"):
        if key in values:
            values[key] = float(values[key])

    ignored = sorted(set(raw) - known)
    if ignored:
        log.debug("Ignoring unknown map settings keys: %s", ", ".join(ignored))
    return MapSettings(**values)


def load_map_settings(path: str | Path = DEFAULT_MAP_SETTINGS_PATH) -> MapSettings:
    """Load map settings from a YAML file.

    Missing keys fall back to dataclass defaults. If the file does not
    exist, a warning is logged and pure defaults are returned.
    """
    p = Path(path)
    if not p.exists():
        log.warning("Map settings not found at %s, using defaults", p)
        return MapSettings()

    with p.open() as f:
        raw = yaml.safe_load(f) or {}

    log.info("Loaded map settings from %s (%d keys)", p, len(raw))
    return map_settings_from_dict(raw)
