"""Unit conversion module — single conversion point for all calculators.

Internal (core) units:
    Length   : mm
    Angle    : radian
    Duration : s

Entry / display units:
    Length   : feet + inches
    Angle    : degree
"""

import math
from typing import NewType

# Unit aliases
Mm = NewType('Mm', float)
Inch = NewType('Inch', float)
Feet = NewType('Feet', float)
Radian = NewType('Radian', float)
Degree = NewType('Degree', float)

MM_PER_INCH = 25.4
INCHES_PER_FOOT = 12.0
MM_PER_FOOT = MM_PER_INCH * INCHES_PER_FOOT  # 304.8


# ---------------------------------------------------------------------------
# Length conversions
# ---------------------------------------------------------------------------

def mm_to_inches(mm: float) -> Inch:
    """Core (mm) → inches."""
    return Inch(mm / MM_PER_INCH)


def inches_to_mm(inches: float) -> Mm:
    """Inches → core (mm)."""
    return Mm(inches * MM_PER_INCH)


def mm_to_feet(mm: float) -> Feet:
    """Core (mm) → feet."""
    return Feet(mm / MM_PER_FOOT)


def feet_to_mm(feet: float) -> Mm:
    """Feet → core (mm)."""
    return Mm(feet * MM_PER_FOOT)


def feet_inches_to_mm(feet: float, inches: float = 0.0) -> Mm:
    """Manual focus entry (feet + inches) → core (mm).

    Args:
        feet: Whole feet.
        inches: Remaining inches.

    Returns:
        Distance [mm]. Infinite input stays infinite.
    """
    return Mm((feet * INCHES_PER_FOOT + inches) * MM_PER_INCH)


def mm_to_feet_inches(mm: float) -> tuple[int, float]:
    """Core (mm) → (whole feet, remaining inches).

    Args:
        mm: Finite distance [mm].

    Returns:
        ``(feet, inches)`` with ``0 <= inches < 12``.

    Raises:
        ValueError: If *mm* is not finite.
    """
    if not math.isfinite(mm):
        raise ValueError(f"Cannot split non-finite distance: {mm}")
    total_inches = mm / MM_PER_INCH
    feet = int(total_inches // INCHES_PER_FOOT)
    return feet, total_inches - feet * INCHES_PER_FOOT


# ---------------------------------------------------------------------------
# Angle conversions
# ---------------------------------------------------------------------------

def deg_to_rad(deg: float) -> Radian:
    """Degree → Radian."""
    return Radian(deg * (math.pi / 180.0))


def rad_to_deg(rad: float) -> Degree:
    """Radian → Degree."""
    return Degree(rad * (180.0 / math.pi))
