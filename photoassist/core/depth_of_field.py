"""Depth-of-field calculator — hyperfocal distance, near/far limits, total DoF.

All lengths in mm (core units). Focus distance may be infinite.

    c = d / 1500
    H = f² / (N·c) + f
    u ≥ H or u = ∞ :  near = H/2,  far = ∞
    otherwise      :  near = H·u / (H + u − 2f)
                      far  = H·u / (H − u + 2f)

On the finite branch u < H, so the far denominator is always > 2f.
The near denominator can only reach zero for unphysical inputs
(f < N·c and u < 2f − H); the near limit is then clamped to 0.
"""

from __future__ import annotations

import logging
import math

from photoassist.constants import COC_DIVISOR
from photoassist.models.optics import DoFResult, FocusDistance, OpticalSystem

logger = logging.getLogger(__name__)


def circle_of_confusion(sensor_diagonal_mm: float) -> float:
    """Acceptable circle of confusion: sensor diagonal / 1500 [mm]."""
    return sensor_diagonal_mm / COC_DIVISOR


def hyperfocal_distance(
    focal_length_mm: float,
    f_number: float,
    coc_mm: float,
) -> float:
    """Hyperfocal distance H = f² / (N·c) + f [mm].

    Args:
        focal_length_mm: Focal length [mm].
        f_number: Aperture f-number.
        coc_mm: Circle of confusion [mm].

    Returns:
        Hyperfocal distance [mm]; ``inf`` when N·c is not positive.
    """
    if f_number <= 0 or coc_mm <= 0:
        return math.inf
    return (focal_length_mm ** 2) / (f_number * coc_mm) + focal_length_mm


def _valid_inputs(*values: float) -> bool:
    return all(math.isfinite(v) and v > 0 for v in values)


def compute_depth_of_field(
    focal_length_mm: float,
    f_number: float,
    sensor_diagonal_mm: float,
    focus: FocusDistance,
) -> DoFResult:
    """Depth of field for a lens focused at *focus*.

    Args:
        focal_length_mm: Focal length f [mm].
        f_number: Aperture N.
        sensor_diagonal_mm: Capture plane diagonal d [mm].
        focus: Focus distance (finite mm or infinity).

    Returns:
        DoFResult. Non-positive or non-finite f, N, d, or a non-positive
        finite focus distance yield ``DoFResult.invalid()``.
    """
    if not _valid_inputs(focal_length_mm, f_number, sensor_diagonal_mm):
        logger.warning(
            "Invalid DoF input: f=%s N=%s d=%s",
            focal_length_mm, f_number, sensor_diagonal_mm,
        )
        return DoFResult.invalid()

    is_infinity = focus.is_infinite
    if not is_infinity and not focus.mm > 0:
        logger.warning("Invalid focus distance: %s mm", focus.mm)
        return DoFResult.invalid()

    f = focal_length_mm
    u = math.inf if is_infinity else focus.mm
    coc = circle_of_confusion(sensor_diagonal_mm)
    H = hyperfocal_distance(f, f_number, coc)

    if is_infinity or u >= H:
        near = H / 2.0
        far = math.inf
    else:
        denom_near = H + u - 2.0 * f
        denom_far = H - u + 2.0 * f
        if denom_near <= 0:
            logger.debug("Near-limit denominator %.6g ≤ 0, clamping to 0", denom_near)
            near = 0.0
        else:
            near = (H * u) / denom_near
        far = (H * u) / denom_far

    total = math.inf if math.isinf(far) else far - near

    return DoFResult(
        focal_length=f,
        aperture=f_number,
        focus_distance=u,
        coc=coc,
        hyperfocal=H,
        near_limit=near,
        far_limit=far,
        total_dof=total,
        is_infinity=is_infinity,
    )


def depth_of_field_for(system: OpticalSystem, focus: FocusDistance) -> DoFResult:
    """Convenience wrapper taking an OpticalSystem."""
    return compute_depth_of_field(
        system.focal_length, system.aperture, system.diagonal, focus,
    )
