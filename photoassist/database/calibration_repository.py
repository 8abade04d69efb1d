"""Calibration repository — SQLite persistence for the calibration store.

All SQL operates against the schema defined in ``db_manager.py``.
"""

from __future__ import annotations

import logging

from photoassist.core.serializers import calibration_to_dict, dict_to_calibration
from photoassist.database.db_manager import DatabaseManager
from photoassist.models.calibration import CalibrationRecord

logger = logging.getLogger(__name__)

_COLUMNS = (
    "id",
    "device_model",
    "lens_type",
    "zoom_factor",
    "capture_plane",
    "focal_length",
    "measured_object_size",
    "measured_distance",
    "calculated_field_size",
    "correction_factor",
    "calibration_date",
    "notes",
)


class SqliteCalibrationRepository:
    """Loads and saves the ordered calibration list in the ``calibrations`` table.

    The schema is created on construction if missing.
    """

    def __init__(self, db: DatabaseManager):
        self._db = db
        self._db.initialize_database()

    def load(self) -> list[CalibrationRecord]:
        """All stored records in list order."""
        conn = self._db.connect()
        rows = conn.execute(
            f"SELECT {', '.join(_COLUMNS)} FROM calibrations ORDER BY position"
        ).fetchall()
        return [dict_to_calibration(dict(zip(_COLUMNS, r))) for r in rows]

    def save(self, records: list[CalibrationRecord]) -> None:
        """Replace the stored list with *records* in one transaction."""
        conn = self._db.connect()
        placeholders = ", ".join("?" for _ in range(len(_COLUMNS) + 1))
        rows = []
        for position, record in enumerate(records):
            d = calibration_to_dict(record)
            rows.append((position, *(d[c] for c in _COLUMNS)))
        with conn:
            conn.execute("DELETE FROM calibrations")
            conn.executemany(
                f"INSERT INTO calibrations (position, {', '.join(_COLUMNS)}) "
                f"VALUES ({placeholders})",
                rows,
            )
        logger.debug("Saved %d calibrations to %s", len(rows), self._db.db_path.name)

    def count(self) -> int:
        conn = self._db.connect()
        return conn.execute("SELECT COUNT(*) FROM calibrations").fetchone()[0]
