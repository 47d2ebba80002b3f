"""
Unit conversion helpers.

Positions handed to the image builders may be given in dots,
millimeters or inches; ZPL itself only knows dots.
"""

import math
from enum import Enum
from typing import Union

DEFAULT_DPI = 203
MM_PER_INCH = 25.4


class Units(str, Enum):
    """Measurement units for label coordinates."""

    DOT = "dot"
    MM = "mm"
    INCH = "in"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def mm(n: float, dpi: int = DEFAULT_DPI) -> int:
    """Convert millimeters to dots."""
    return _round_half_up(n * dpi / MM_PER_INCH)


def inch(n: float, dpi: int = DEFAULT_DPI) -> int:
    """Convert inches to dots."""
    return _round_half_up(n * dpi)


def to_dots(n: float, dpi: int = DEFAULT_DPI, units: Union[str, Units] = Units.DOT) -> int:
    """
    Convert a value in the given units to dots.

    Dot values pass through unchanged (rounded if fractional).

    Raises:
        ValueError: If units is not dot, mm or in
    """
    units = Units(units)
    if units is Units.MM:
        return mm(n, dpi)
    if units is Units.INCH:
        return inch(n, dpi)
    return _round_half_up(n) if isinstance(n, float) else n
