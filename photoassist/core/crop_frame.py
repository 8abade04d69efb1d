"""Crop-frame geometry — simulated camera field of view on a live preview.

The device reports its diagonal FOV; the simulated system's horizontal FOV
(taken across the capture plane dimension that lies along the preview
width) is mapped onto the short side of the preview by the tan ratio, then
corrected by any stored calibration for the device lens / capture plane.

    scale  = tan(simFOV/2) / tan(deviceFOV/2) · correction
    short  = previewShort · scale
    long   = short · (planeLong / planeShort)

Lengths on the capture plane in mm, preview sizes in points.
"""

from __future__ import annotations

import logging
import math

from photoassist.constants import (
    MAX_CROP_DISPLAY_RATIO,
    MIN_CROP_DISPLAY_SIZE,
    SUGGESTED_FOCAL_LENGTHS,
)
from photoassist.core.calibration_store import CalibrationStore
from photoassist.core.field_of_view import angle_of_view
from photoassist.models.optics import CropFrame, Orientation

logger = logging.getLogger(__name__)


def resolve_orientation(screen_width: float, screen_height: float) -> Orientation:
    """Portrait when the preview is taller than wide, else landscape."""
    if screen_width < screen_height:
        return Orientation.PORTRAIT
    return Orientation.LANDSCAPE


def lens_type_label(zoom_factor: float) -> str:
    """Calibration lens label for a zoom factor, rounded to the nearest 0.5.

    1.0 → "1x", 0.5 → "0.5x", 2.4 → "2.5x".
    """
    rounded = math.floor(zoom_factor * 2 + 0.5) / 2
    if rounded == int(rounded):
        return f"{int(rounded)}x"
    return f"{rounded:.1f}x"


def suggested_focal_length(
    lens_type: str,
    available_focal_lengths: list[int],
) -> int | None:
    """Available focal length closest to the one that fills the preview well.

    Ties resolve to the earlier entry. *None* for an unknown lens label or
    an empty list.
    """
    ideal = SUGGESTED_FOCAL_LENGTHS.get(lens_type)
    if ideal is None or not available_focal_lengths:
        return None
    return min(available_focal_lengths, key=lambda f: abs(f - ideal))


def field_size_at_distance(
    dimension_mm: float,
    focal_length_mm: float,
    distance: float,
) -> float:
    """Field extent covered by *dimension_mm* at *distance*.

    Same unit as *distance* (2·u·tan(atan(dim/2f)) = u·dim/f).
    """
    if dimension_mm <= 0 or focal_length_mm <= 0 or distance <= 0:
        return 0.0
    return 2.0 * distance * math.tan(angle_of_view(dimension_mm, focal_length_mm) / 2.0)


class CropFrameEngine:
    """Computes crop-frame overlays, applying stored calibrations.

    Args:
        store: Calibration store queried for device lens / capture plane
            corrections. If *None*, no correction is ever applied.
    """

    def __init__(self, store: CalibrationStore | None = None) -> None:
        self._store = store

    def calculate(
        self,
        focal_length_mm: float,
        plane_width_mm: float,
        plane_height_mm: float,
        device_diagonal_fov_rad: float,
        screen_width: float,
        screen_height: float,
        device_model: str = "",
        lens_type: str = "",
        capture_plane: str = "",
    ) -> CropFrame:
        """Crop frame for a simulated lens on a capture plane.

        Args:
            focal_length_mm: Simulated focal length [mm].
            plane_width_mm: Capture plane width [mm].
            plane_height_mm: Capture plane height [mm].
            device_diagonal_fov_rad: Device diagonal FOV [radian].
            screen_width: Preview width [points].
            screen_height: Preview height [points].
            device_model: Device name for calibration lookup.
            lens_type: Device lens label ("1x", ...) for calibration lookup.
            capture_plane: Capture plane name for calibration lookup.

        Returns:
            CropFrame with dimensions clamped to the preview. ``is_visible``
            is False when the unclamped frame is below the minimum display
            size or exceeds the preview. Invalid inputs → ``CropFrame.hidden()``.
        """
        values = (
            focal_length_mm, plane_width_mm, plane_height_mm,
            screen_width, screen_height,
        )
        if not all(math.isfinite(v) and v > 0 for v in values):
            logger.warning("Invalid crop-frame input: %s", values)
            return CropFrame.hidden()
        if not 0 < device_diagonal_fov_rad < math.pi:
            logger.warning("Invalid device FOV: %s rad", device_diagonal_fov_rad)
            return CropFrame.hidden()

        orientation = resolve_orientation(screen_width, screen_height)

        plane_short = min(plane_width_mm, plane_height_mm)
        plane_long = max(plane_width_mm, plane_height_mm)
        capture_horizontal = (
            plane_short if orientation is Orientation.PORTRAIT else plane_long
        )

        target_fov = angle_of_view(capture_horizontal, focal_length_mm)
        base_scale = math.tan(target_fov / 2.0) / math.tan(device_diagonal_fov_rad / 2.0)

        correction = 1.0
        calibrated_focal = None
        if self._store is not None:
            calibration = self._store.lookup_by_combo(device_model, lens_type, capture_plane)
            if calibration is not None:
                correction = calibration.correction_factor
                calibrated_focal = calibration.focal_length
                logger.debug(
                    "Calibration %s/%s/%s: factor %.4f (measured at %dmm)",
                    device_model, lens_type, capture_plane,
                    correction, calibrated_focal,
                )
        final_scale = base_scale * correction

        preview_short = min(screen_width, screen_height)
        preview_long = max(screen_width, screen_height)
        aspect_ratio = plane_long / plane_short

        crop_short = preview_short * final_scale
        crop_long = crop_short * aspect_ratio

        is_visible = (
            MIN_CROP_DISPLAY_SIZE <= crop_short <= preview_short * MAX_CROP_DISPLAY_RATIO
            and MIN_CROP_DISPLAY_SIZE <= crop_long <= preview_long * MAX_CROP_DISPLAY_RATIO
        )

        crop_short = min(max(crop_short, 0.0), preview_short)
        crop_long = min(max(crop_long, 0.0), preview_long)

        if orientation is Orientation.PORTRAIT:
            width, height = crop_short, crop_long
        else:
            width, height = crop_long, crop_short

        return CropFrame(
            width=width,
            height=height,
            is_visible=is_visible,
            orientation=orientation,
            base_scale=base_scale,
            correction_factor=correction,
            calibrated_focal_length=calibrated_focal,
        )
