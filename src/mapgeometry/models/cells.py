"""Pydantic models for persisted cell records.

Square maps store painted cells as ``{x, y, color}``, hex maps as
``{q, r, color}``. Geometries translate between these records and their
own coordinate types so external code never has to check which shape a
record has.
"""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict


class GridCell(BaseModel):
    model_config = ConfigDict(extra="allow")

    x: int
    y: int
    color: str = ""


class HexCell(BaseModel):
    model_config = ConfigDict(extra="allow")

    q: int
    r: int
    color: str = ""


Cell = Union[GridCell, HexCell]
