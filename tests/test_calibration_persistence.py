"""Tests for photoassist.database — JSON file and SQLite calibration storage.

Each test uses its own temporary directory / database file.
"""

import json
from datetime import datetime, timedelta

import pytest

from photoassist.core.calibration_store import CalibrationStore
from photoassist.core.serializers import calibration_to_dict
from photoassist.database import (
    CalibrationFile,
    DatabaseManager,
    SqliteCalibrationRepository,
)
from photoassist.models.calibration import CalibrationRecord


# ── Fixtures ─────────────────────────────────────────────────────────

@pytest.fixture
def records():
    base = datetime(2025, 12, 1, 9, 0)
    return [
        CalibrationRecord.create(
            device_model="iPhone 15 Pro",
            lens_type=lens,
            zoom_factor=zoom,
            capture_plane="Medium Format 6x6cm",
            focal_length=focal,
            measured_object_size=24.0,
            measured_distance=72.0,
            calculated_field_size=calc,
            calibration_date=base - timedelta(days=i),
            notes=None if i else "first",
        )
        for i, (lens, zoom, focal, calc) in enumerate(
            [("1x", 1.0, 80, 45.0), ("2x", 2.0, 150, 30.0), ("0.5x", 0.5, 35, 20.0)]
        )
    ]


@pytest.fixture
def db(tmp_path):
    manager = DatabaseManager(tmp_path / "test.db")
    yield manager
    manager.close()


# ── JSON file ────────────────────────────────────────────────────────

class TestCalibrationFile:
    def test_missing_file_is_empty(self, tmp_path):
        assert CalibrationFile(tmp_path / "none.json").load() == []

    def test_save_and_load(self, tmp_path, records):
        store_file = CalibrationFile(tmp_path / "camera_calibrations.json")
        store_file.save(records)
        assert store_file.load() == records

    def test_envelope_layout(self, tmp_path, records):
        path = tmp_path / "camera_calibrations.json"
        CalibrationFile(path).save(records)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["schema_version"] == "1.0"
        assert [c["id"] for c in data["calibrations"]] == [r.id for r in records]
        assert not (tmp_path / "camera_calibrations.json.tmp").exists()

    def test_failed_write_keeps_previous_file(self, tmp_path, records, monkeypatch):
        path = tmp_path / "camera_calibrations.json"
        store_file = CalibrationFile(path)
        store_file.save(records)
        before = path.read_text(encoding="utf-8")

        def fail_dump(*args, **kwargs):
            raise TypeError("not serializable")

        monkeypatch.setattr("photoassist.database.calibration_file.json.dump", fail_dump)
        with pytest.raises(TypeError):
            store_file.save(records[:1])
        assert not (tmp_path / "camera_calibrations.json.tmp").exists()
        assert path.read_text(encoding="utf-8") == before

    def test_bare_array_accepted(self, tmp_path, records):
        path = tmp_path / "legacy.json"
        path.write_text(json.dumps([calibration_to_dict(r) for r in records]), encoding="utf-8")
        assert CalibrationFile(path).load() == records

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(ValueError):
            CalibrationFile(path).load()

    def test_store_survives_restart(self, tmp_path, records):
        path = tmp_path / "camera_calibrations.json"
        store = CalibrationStore(CalibrationFile(path))
        for r in records:
            store.add(r)
        reopened = CalibrationStore(CalibrationFile(path))
        assert reopened.records == store.records
        match = reopened.lookup_by_combo("iPhone 15 Pro", "1x", "Medium Format 6x6cm")
        assert match.correction_factor == pytest.approx(1.875)

    def test_corrupt_file_gives_empty_store(self, tmp_path):
        path = tmp_path / "camera_calibrations.json"
        path.write_text("not json", encoding="utf-8")
        assert len(CalibrationStore(CalibrationFile(path))) == 0


# ── SQLite ───────────────────────────────────────────────────────────

class TestDatabaseManager:
    def test_tables_created(self, db):
        db.initialize_database()
        assert set(db.get_tables()) >= {"calibrations", "app_settings"}

    def test_schema_version(self, db):
        assert db.schema_version() is None
        db.initialize_database()
        assert db.schema_version() == "1.0"

    def test_initialize_idempotent(self, db):
        db.initialize_database()
        db.initialize_database()
        assert db.schema_version() == "1.0"

    def test_connection_pragmas(self, db):
        conn = db.connect()
        assert conn.execute("PRAGMA journal_mode").fetchone()[0] == "wal"
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 0

    def test_context_manager(self, tmp_path):
        with DatabaseManager(tmp_path / "ctx.db") as manager:
            manager.initialize_database()
            assert "calibrations" in manager.get_tables()


class TestSqliteCalibrationRepository:
    def test_empty(self, db):
        assert SqliteCalibrationRepository(db).load() == []

    def test_save_and_load_keeps_order(self, db, records):
        repo = SqliteCalibrationRepository(db)
        reordered = [records[2], records[0], records[1]]
        repo.save(reordered)
        assert repo.load() == reordered

    def test_save_replaces(self, db, records):
        repo = SqliteCalibrationRepository(db)
        repo.save(records)
        repo.save(records[:1])
        assert repo.count() == 1
        assert repo.load() == records[:1]

    def test_store_survives_restart(self, tmp_path, records):
        path = tmp_path / "store.db"
        first = DatabaseManager(path)
        store = CalibrationStore(SqliteCalibrationRepository(first))
        for r in records:
            store.add(r)
        store.delete(records[1].id)
        first.close()

        second = DatabaseManager(path)
        reopened = CalibrationStore(SqliteCalibrationRepository(second))
        assert [r.id for r in reopened.records] == [records[0].id, records[2].id]
        second.close()
