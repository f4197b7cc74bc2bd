"""Hex measurement conversions and grid sizing.

``hex_size`` is always the center-to-vertex radius. Users usually think
in one of two measurements instead:

- edge-to-edge (flat side to opposite flat side) = sqrt(3) * hex_size
- corner-to-corner (vertex to opposite vertex)   = 2 * hex_size

Both hold for flat-top and pointy-top hexes. The grid helpers size a hex
grid so that it fully covers a background image.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from mapgeometry.models.space import Orientation
from mapgeometry.util.constants import SQRT3

MIN_MEASUREMENT_SIZE: float = 10.0
MAX_MEASUREMENT_SIZE: float = 500.0
MAX_FINE_TUNE_OFFSET: float = 3.0


class MeasurementMethod(Enum):
    EDGE = "edge"
    CORNER = "corner"


@dataclass(frozen=True)
class GridCalculation:
    columns: int
    rows: int
    hex_size: float


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class FineTuneRange:
    min: float
    max: float


# -- Core conversions ----------------------------------------------------


def measurement_to_hex_size(size: float, method: MeasurementMethod) -> float:
    """Convert a user measurement to hex_size."""
    if method is MeasurementMethod.EDGE:
        return size / SQRT3
    return size / 2


def hex_size_to_measurement(hex_size: float, method: MeasurementMethod) -> float:
    """Convert hex_size to a user measurement."""
    if method is MeasurementMethod.EDGE:
        return hex_size * SQRT3
    return hex_size * 2


# -- Grid calculations ---------------------------------------------------


def calculate_columns(image_width: float, hex_size: float, orientation: Orientation) -> int:
    """Columns needed to cover ``image_width``."""
    if orientation is Orientation.POINTY:
        # columns * sqrt(3) * hex_size = width
        return math.ceil(image_width / (hex_size * SQRT3))
    # hex_size * (2 + (columns - 1) * 1.5) = width
    return math.ceil((image_width / hex_size - 0.5) / 1.5)


def calculate_rows(image_height: float, hex_size: float, orientation: Orientation) -> int:
    """Rows needed to cover ``image_height``."""
    if orientation is Orientation.POINTY:
        return math.ceil((image_height / hex_size - 0.5) / 1.5)
    return math.ceil(image_height / (hex_size * SQRT3))


def calculate_hex_size_from_columns(image_width: float, columns: int, orientation: Orientation) -> float:
    """Inverse of :func:`calculate_columns`."""
    if columns <= 0:
        raise ValueError(f"columns must be positive, got {columns}")
    if orientation is Orientation.POINTY:
        return image_width / (columns * SQRT3)
    return image_width / (2 + (columns - 1) * 1.5)


def calculate_grid_from_measurement(
    image_width: float,
    image_height: float,
    size: float,
    method: MeasurementMethod,
    orientation: Orientation = Orientation.FLAT,
) -> GridCalculation:
    """Size a grid from a hex measurement chosen by the user."""
    hex_size = measurement_to_hex_size(size, method)
    return GridCalculation(
        columns=calculate_columns(image_width, hex_size, orientation),
        rows=calculate_rows(image_height, hex_size, orientation),
        hex_size=hex_size,
    )


def calculate_grid_from_columns(
    image_width: float,
    image_height: float,
    columns: int,
    orientation: Orientation = Orientation.FLAT,
) -> GridCalculation:
    """Size a grid from a desired column count."""
    hex_size = calculate_hex_size_from_columns(image_width, columns, orientation)
    return GridCalculation(
        columns=columns,
        rows=calculate_rows(image_height, hex_size, orientation),
        hex_size=hex_size,
    )


# -- Validation ----------------------------------------------------------


def validate_measurement_size(size: float) -> ValidationResult:
    if size < MIN_MEASUREMENT_SIZE:
        return ValidationResult(False, f"Hex size must be at least {MIN_MEASUREMENT_SIZE:g}px")
    if size > MAX_MEASUREMENT_SIZE:
        return ValidationResult(False, f"Hex size must be no more than {MAX_MEASUREMENT_SIZE:g}px")
    return ValidationResult(True)


def validate_fine_tune(base_hex_size: float, adjusted_hex_size: float) -> ValidationResult:
    if abs(adjusted_hex_size - base_hex_size) > MAX_FINE_TUNE_OFFSET:
        return ValidationResult(False, f"Fine-tune adjustment limited to ±{MAX_FINE_TUNE_OFFSET:g}px")
    return ValidationResult(True)


def get_fine_tune_range(base_hex_size: float) -> FineTuneRange:
    return FineTuneRange(
        min=max(MIN_MEASUREMENT_SIZE / 2, base_hex_size - MAX_FINE_TUNE_OFFSET),
        max=min(MAX_MEASUREMENT_SIZE / 2, base_hex_size + MAX_FINE_TUNE_OFFSET),
    )
