"""Application-wide constants.

All lengths in mm, angles in radians, durations in seconds unless the
name says otherwise.
"""

# Depth of field
COC_DIVISOR = 1500.0  # CoC = sensor diagonal / 1500
INFINITY_FOCUS_FEET = 50  # focus entries at/beyond this are treated as ∞

# Default capture planes [mm]
FULL_FRAME_WIDTH_MM = 36.0
FULL_FRAME_HEIGHT_MM = 24.0
FULL_FRAME_DIAGONAL_MM = 43.27
MEDIUM_FORMAT_6X6_DIAGONAL_MM = 84.85

# 35mm-equivalent reference width (horizontal) [mm]
EQUIVALENT_REFERENCE_WIDTH_MM = 36.0

# Crop frame overlay
MIN_CROP_DISPLAY_SIZE = 50.0  # preview points
MAX_CROP_DISPLAY_RATIO = 1.0  # crop may not exceed preview bounds

# Device FOV sanity window for intrinsics-derived values [degree]
MIN_DEVICE_FOV_DEG = 10.0
MAX_DEVICE_FOV_DEG = 180.0

# Suggested simulated focal length per device lens [mm]
SUGGESTED_FOCAL_LENGTHS = {
    "0.5x": 35,
    "1x": 80,
    "2x": 120,
    "3x": 150,
}

# Exposure
MAX_SHUTTER_SECONDS = 28_800.0  # 8 hours
FASTEST_SHUTTER_SECONDS = 1.0 / 8000.0
SHUTTER_SCALE_STEP_EV = 1.0 / 3.0
ISO_REFERENCE = 100.0

# Persistence
CALIBRATION_FILENAME = "camera_calibrations.json"
DB_FILENAME = "photoassist.db"
CALIBRATION_SCHEMA_VERSION = "1.0"
