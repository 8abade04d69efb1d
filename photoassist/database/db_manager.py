"""SQLite database manager — connection, schema creation, and initialization.

Creates 2 tables on first run:
  calibrations, app_settings.
"""

import sqlite3
from pathlib import Path

from photoassist.constants import CALIBRATION_SCHEMA_VERSION, DB_FILENAME

_SCHEMA_SQL = """
-- Crop-frame calibrations, list order kept in position (0 = newest)
CREATE TABLE IF NOT EXISTS calibrations (
    id TEXT PRIMARY KEY,
    position INTEGER NOT NULL,
    device_model TEXT NOT NULL,
    lens_type TEXT NOT NULL,
    zoom_factor REAL NOT NULL,
    capture_plane TEXT NOT NULL,
    focal_length INTEGER NOT NULL,
    measured_object_size REAL NOT NULL,
    measured_distance REAL NOT NULL,
    calculated_field_size REAL NOT NULL,
    correction_factor REAL NOT NULL,
    calibration_date TEXT NOT NULL,
    notes TEXT
);

CREATE INDEX IF NOT EXISTS idx_calibrations_combo
    ON calibrations (device_model, lens_type, capture_plane);

-- Application settings
CREATE TABLE IF NOT EXISTS app_settings (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""

EXPECTED_TABLES = [
    "app_settings",
    "calibrations",
]


class DatabaseManager:
    """Manages SQLite database connection and schema lifecycle."""

    def __init__(self, db_path: Path | str | None = None):
        if db_path is None:
            db_path = Path.cwd() / DB_FILENAME
        self._db_path = Path(db_path)
        self._conn: sqlite3.Connection | None = None

    @property
    def db_path(self) -> Path:
        return self._db_path

    def connect(self) -> sqlite3.Connection:
        """Open (or return existing) database connection."""
        if self._conn is None:
            self._conn = sqlite3.connect(str(self._db_path), check_same_thread=False)
            self._conn.execute("PRAGMA journal_mode=WAL")
        return self._conn

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def initialize_database(self) -> None:
        """Create all tables if they don't exist and stamp the schema version."""
        conn = self.connect()
        conn.executescript(_SCHEMA_SQL)
        conn.execute(
            "INSERT OR IGNORE INTO app_settings (key, value) VALUES ('schema_version', ?)",
            (CALIBRATION_SCHEMA_VERSION,),
        )
        conn.commit()

    def schema_version(self) -> str | None:
        """Stored schema version, or *None* before initialization."""
        conn = self.connect()
        try:
            row = conn.execute(
                "SELECT value FROM app_settings WHERE key = 'schema_version'"
            ).fetchone()
        except sqlite3.OperationalError:
            return None
        return row[0] if row else None

    def get_tables(self) -> list[str]:
        """Return list of table names in the database."""
        conn = self.connect()
        cursor = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
        )
        return [row[0] for row in cursor.fetchall()]

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
