"""Calibration data models.

A calibration record captures one empirical measurement of how far the
crop-frame overlay for a device lens + capture plane pairing is off from
reality. Object sizes and distances are in inches, as entered by the user.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class CalibrationRecord:
    """Stored calibration for a device lens on a simulated capture plane.

    Attributes:
        id: Unique identifier (uuid4 string).
        device_model: Friendly device name (e.g. "iPhone 15 Pro").
        lens_type: Device lens label ("0.5x", "1x", "2x", "3x").
        zoom_factor: Device zoom factor for *lens_type*.
        capture_plane: Simulated format name (e.g. "Medium Format 6x6cm").
        focal_length: Simulated focal length the measurement was taken at [mm].
        measured_object_size: Real size of the reference object [inch].
        measured_distance: Distance to the object [inch].
        calculated_field_size: Field size the overlay implied [inch].
        correction_factor: calculated_field_size / measured_object_size.
        calibration_date: When the measurement was taken.
        notes: Optional free text about conditions.
    """
    device_model: str
    lens_type: str
    zoom_factor: float
    capture_plane: str
    focal_length: int
    measured_object_size: float
    measured_distance: float
    calculated_field_size: float
    correction_factor: float
    calibration_date: datetime = field(default_factory=datetime.now)
    notes: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @classmethod
    def create(
        cls,
        device_model: str,
        lens_type: str,
        zoom_factor: float,
        capture_plane: str,
        focal_length: int,
        measured_object_size: float,
        measured_distance: float,
        calculated_field_size: float,
        calibration_date: datetime | None = None,
        notes: str | None = None,
    ) -> CalibrationRecord:
        """Build a record from raw measurements.

        The correction factor is ``calculated_field_size / measured_object_size``:
        if the overlay implied 45" but the object is 24", the overlay scale is
        multiplied by 45/24.

        Raises:
            ValueError: If *measured_object_size* is not positive.
        """
        if measured_object_size <= 0:
            raise ValueError(
                f"measured_object_size must be > 0, got {measured_object_size}"
            )
        return cls(
            device_model=device_model,
            lens_type=lens_type,
            zoom_factor=zoom_factor,
            capture_plane=capture_plane,
            focal_length=focal_length,
            measured_object_size=measured_object_size,
            measured_distance=measured_distance,
            calculated_field_size=calculated_field_size,
            correction_factor=calculated_field_size / measured_object_size,
            calibration_date=calibration_date or datetime.now(),
            notes=notes or None,
        )

    @property
    def key(self) -> tuple[str, str, str, int]:
        """Exact lookup key: (device, lens, capture plane, focal length)."""
        return (self.device_model, self.lens_type, self.capture_plane, self.focal_length)

    @property
    def accuracy_percentage(self) -> float:
        """Signed overlay error in percent, e.g. +87.5 for a factor of 1.875."""
        return (self.correction_factor - 1.0) * 100.0


@dataclass(frozen=True)
class CalibrationMatch:
    """Result of a focal-length-agnostic calibration lookup.

    Attributes:
        correction_factor: Factor to multiply the overlay scale by.
        focal_length: Focal length the matching record was measured at [mm].
    """
    correction_factor: float
    focal_length: int
