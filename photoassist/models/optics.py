"""Optical data models.

Inputs (optical system, focus distance) and the ephemeral results returned
by the depth-of-field, field-of-view and crop-frame calculators.

All lengths in mm. Angles in degrees on result objects.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from photoassist.constants import INFINITY_FOCUS_FEET
from photoassist.core.units import feet_inches_to_mm


class Orientation(Enum):
    """Preview orientation, resolved once per crop-frame calculation."""
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


def _positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


@dataclass(frozen=True)
class OpticalSystem:
    """Simulated camera + lens.

    Attributes:
        focal_length: Lens focal length [mm].
        aperture: f-number N.
        sensor_width: Capture plane width [mm].
        sensor_height: Capture plane height [mm].
        sensor_diagonal: Capture plane diagonal [mm]. If *None*, derived
            from width and height. An explicit value is used as given, so
            a non-positive one makes the system invalid.
    """
    focal_length: float
    aperture: float
    sensor_width: float
    sensor_height: float
    sensor_diagonal: float | None = None

    @property
    def diagonal(self) -> float:
        if self.sensor_diagonal is not None:
            return self.sensor_diagonal
        return math.hypot(self.sensor_width, self.sensor_height)

    @property
    def is_valid(self) -> bool:
        return all(
            _positive(v) for v in (
                self.focal_length, self.aperture,
                self.sensor_width, self.sensor_height, self.diagonal,
            )
        )


@dataclass(frozen=True)
class FocusDistance:
    """Focus distance: a finite value or the infinity marker.

    Attributes:
        mm: Distance [mm]; ``math.inf`` when *is_infinity*.
        is_infinity: Explicit infinity flag from the distance collaborator.
    """
    mm: float
    is_infinity: bool = False

    @classmethod
    def finite(cls, mm: float) -> FocusDistance:
        return cls(mm=float(mm), is_infinity=False)

    @classmethod
    def infinity(cls) -> FocusDistance:
        return cls(mm=math.inf, is_infinity=True)

    @classmethod
    def from_feet_inches(cls, feet: int, inches: float = 0.0) -> FocusDistance:
        """Manual entry in feet + inches; ≥ 50 ft maps to infinity."""
        if feet >= INFINITY_FOCUS_FEET:
            return cls.infinity()
        return cls.finite(feet_inches_to_mm(feet, inches))

    @property
    def is_infinite(self) -> bool:
        return self.is_infinity or math.isinf(self.mm)


@dataclass
class DoFResult:
    """Depth-of-field result.

    Attributes:
        focal_length: Focal length [mm].
        aperture: f-number.
        focus_distance: Focus distance [mm] (``inf`` at infinity).
        coc: Circle of confusion [mm].
        hyperfocal: Hyperfocal distance [mm].
        near_limit: Near limit of acceptable sharpness [mm].
        far_limit: Far limit [mm] (``inf`` at/beyond hyperfocal).
        total_dof: far − near [mm] (``inf`` when far is infinite).
        is_infinity: Focus was explicitly set to infinity.
        is_valid: False for the invalid-input sentinel.
    """
    focal_length: float = 0.0
    aperture: float = 0.0
    focus_distance: float = 0.0
    coc: float = 0.0
    hyperfocal: float = 0.0
    near_limit: float = 0.0
    far_limit: float = 0.0
    total_dof: float = 0.0
    is_infinity: bool = False
    is_valid: bool = True

    @classmethod
    def invalid(cls) -> DoFResult:
        return cls(is_valid=False)


@dataclass
class FovResult:
    """Field-of-view result.

    Attributes:
        focal_length: Focal length [mm].
        aperture: f-number (carried for display).
        focus_distance: Focus distance [mm] (``inf`` at infinity).
        sensor_width: Capture plane width [mm].
        sensor_height: Capture plane height [mm].
        horizontal_angle_deg: Horizontal angle of view [degree].
        vertical_angle_deg: Vertical angle of view [degree].
        diagonal_angle_deg: Diagonal angle of view [degree].
        horizontal_fov_mm: Horizontal field extent at focus distance [mm].
        vertical_fov_mm: Vertical field extent [mm].
        diagonal_fov_mm: Diagonal field extent [mm].
        is_valid: False for the invalid-input sentinel.
    """
    focal_length: float = 0.0
    aperture: float = 0.0
    focus_distance: float = 0.0
    sensor_width: float = 0.0
    sensor_height: float = 0.0
    horizontal_angle_deg: float = 0.0
    vertical_angle_deg: float = 0.0
    diagonal_angle_deg: float = 0.0
    horizontal_fov_mm: float = 0.0
    vertical_fov_mm: float = 0.0
    diagonal_fov_mm: float = 0.0
    is_valid: bool = True

    @property
    def aspect_ratio(self) -> float:
        if self.sensor_height <= 0:
            return 0.0
        return self.sensor_width / self.sensor_height

    @classmethod
    def invalid(cls) -> FovResult:
        return cls(is_valid=False)


@dataclass
class CropFrame:
    """On-screen crop rectangle in preview points.

    Attributes:
        width: Frame width [points], clamped to the preview.
        height: Frame height [points], clamped to the preview.
        is_visible: False when the unclamped frame is smaller than the
            minimum display size or larger than the preview.
        orientation: Preview orientation used for the mapping.
        base_scale: Uncorrected tan-ratio scale factor.
        correction_factor: Calibration correction applied (1.0 if none).
        calibrated_focal_length: Focal length the applied calibration was
            measured at, or *None* when uncalibrated.
    """
    width: float = 0.0
    height: float = 0.0
    is_visible: bool = False
    orientation: Orientation = Orientation.PORTRAIT
    base_scale: float = 0.0
    correction_factor: float = 1.0
    calibrated_focal_length: int | None = None

    @classmethod
    def hidden(cls) -> CropFrame:
        return cls()
