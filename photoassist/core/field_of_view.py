"""Field-of-view calculator — angular and linear FOV, device FOV helpers.

Angles are computed in radians and reported in degrees on FovResult.

    angle(dim)      = 2·atan(dim / 2f)
    linear(dim, u)  = 2·u·tan(angle/2)      (∞ when u = ∞)
"""

from __future__ import annotations

import logging
import math

from photoassist.constants import (
    EQUIVALENT_REFERENCE_WIDTH_MM,
    MAX_DEVICE_FOV_DEG,
    MIN_DEVICE_FOV_DEG,
)
from photoassist.core.units import rad_to_deg
from photoassist.models.optics import FocusDistance, FovResult, OpticalSystem

logger = logging.getLogger(__name__)


def angle_of_view(dimension_mm: float, focal_length_mm: float) -> float:
    """Angle of view across *dimension_mm* [radian].

    Args:
        dimension_mm: Sensor width, height or diagonal [mm].
        focal_length_mm: Focal length [mm].

    Returns:
        Angle in (0, π) for positive inputs, 0.0 otherwise.
    """
    if dimension_mm <= 0 or focal_length_mm <= 0:
        return 0.0
    return 2.0 * math.atan(dimension_mm / (2.0 * focal_length_mm))


def linear_field_of_view(
    dimension_mm: float,
    focal_length_mm: float,
    distance_mm: float,
) -> float:
    """Extent covered by *dimension_mm* at *distance_mm* [mm].

    Returns ``inf`` for an infinite distance.
    """
    if math.isinf(distance_mm):
        return math.inf
    angle = angle_of_view(dimension_mm, focal_length_mm)
    return 2.0 * distance_mm * math.tan(angle / 2.0)


def compute_field_of_view(
    focal_length_mm: float,
    f_number: float,
    sensor_width_mm: float,
    sensor_height_mm: float,
    focus: FocusDistance,
) -> FovResult:
    """Horizontal, vertical and diagonal field of view.

    Args:
        focal_length_mm: Focal length [mm].
        f_number: Aperture (carried through for display only).
        sensor_width_mm: Capture plane width [mm].
        sensor_height_mm: Capture plane height [mm].
        focus: Distance at which linear extents are evaluated.

    Returns:
        FovResult, or ``FovResult.invalid()`` for non-positive inputs.
    """
    values = (focal_length_mm, sensor_width_mm, sensor_height_mm)
    if not all(math.isfinite(v) and v > 0 for v in values):
        logger.warning(
            "Invalid FOV input: f=%s w=%s h=%s",
            focal_length_mm, sensor_width_mm, sensor_height_mm,
        )
        return FovResult.invalid()

    u = math.inf if focus.is_infinite else focus.mm
    if not u > 0:
        logger.warning("Invalid focus distance: %s mm", u)
        return FovResult.invalid()

    diagonal = math.hypot(sensor_width_mm, sensor_height_mm)
    dims = (sensor_width_mm, sensor_height_mm, diagonal)
    angles = [angle_of_view(d, focal_length_mm) for d in dims]
    extents = [linear_field_of_view(d, focal_length_mm, u) for d in dims]

    return FovResult(
        focal_length=focal_length_mm,
        aperture=f_number,
        focus_distance=u,
        sensor_width=sensor_width_mm,
        sensor_height=sensor_height_mm,
        horizontal_angle_deg=rad_to_deg(angles[0]),
        vertical_angle_deg=rad_to_deg(angles[1]),
        diagonal_angle_deg=rad_to_deg(angles[2]),
        horizontal_fov_mm=extents[0],
        vertical_fov_mm=extents[1],
        diagonal_fov_mm=extents[2],
    )


def field_of_view_for(system: OpticalSystem, focus: FocusDistance) -> FovResult:
    """Convenience wrapper taking an OpticalSystem."""
    return compute_field_of_view(
        system.focal_length, system.aperture,
        system.sensor_width, system.sensor_height, focus,
    )


# ---------------------------------------------------------------------------
# Device field-of-view helpers
# ---------------------------------------------------------------------------

def digital_zoom_fov(base_fov_rad: float, zoom_factor: float) -> float:
    """Effective FOV after digital zoom: 2·atan(tan(FOV/2) / zoom).

    Zoom factors ≤ 1 leave the native FOV unchanged.
    """
    if zoom_factor <= 1.0:
        return base_fov_rad
    return 2.0 * math.atan(math.tan(base_fov_rad / 2.0) / zoom_factor)


def equivalent_focal_length(
    horizontal_fov_rad: float,
    reference_width_mm: float = EQUIVALENT_REFERENCE_WIDTH_MM,
) -> float:
    """Focal length giving *horizontal_fov_rad* on a reference-width frame.

    F = W / (2·tan(HFOV/2)); 0.0 for a non-positive FOV.
    """
    if horizontal_fov_rad <= 0:
        return 0.0
    return reference_width_mm / (2.0 * math.tan(horizontal_fov_rad / 2.0))


def diagonal_fov_from_intrinsics(
    width_px: float,
    height_px: float,
    fx: float,
    fy: float,
) -> float | None:
    """Diagonal FOV from camera intrinsics [radian].

    FOV = 2·atan(√(w² + h²) / (2·√(fx² + fy²)))

    Returns:
        The FOV, or *None* when the focal lengths fail the sanity bound
        (0 < fx < 2w, 0 < fy < 2h) or the FOV falls outside 10°–180°.
    """
    if not (0 < fx < width_px * 2 and 0 < fy < height_px * 2):
        return None
    diagonal_px = math.hypot(width_px, height_px)
    diagonal_focal = math.hypot(fx, fy)
    fov = 2.0 * math.atan(diagonal_px / (2.0 * diagonal_focal))
    if not MIN_DEVICE_FOV_DEG < rad_to_deg(fov) < MAX_DEVICE_FOV_DEG:
        return None
    return fov
