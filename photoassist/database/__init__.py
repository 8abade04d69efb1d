"""Persistence layer — SQLite and JSON-file calibration storage."""

from photoassist.database.calibration_file import CalibrationFile
from photoassist.database.calibration_repository import SqliteCalibrationRepository
from photoassist.database.db_manager import DatabaseManager

__all__ = [
    "CalibrationFile",
    "DatabaseManager",
    "SqliteCalibrationRepository",
]
