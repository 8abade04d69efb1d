"""Calibration store — in-memory calibration records with injected persistence.

Records are kept newest first. ``add`` replaces any record with the same
exact key (device, lens, capture plane, focal length). All operations are
serialized through a lock; ``add`` is a read-modify-write.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Protocol

from photoassist.models.calibration import CalibrationMatch, CalibrationRecord

logger = logging.getLogger(__name__)


def _utc_date(record: CalibrationRecord) -> datetime:
    """Sort key: naive dates are taken as local time, then all go to UTC."""
    return record.calibration_date.astimezone(timezone.utc)


class CalibrationPersistence(Protocol):
    """Load/save contract for calibration records (ordered, newest first)."""

    def load(self) -> list[CalibrationRecord]: ...

    def save(self, records: list[CalibrationRecord]) -> None: ...


class CalibrationStore:
    """Keyed collection of calibration records.

    Args:
        persistence: Optional load/save collaborator. Records are loaded on
            construction and saved after every mutation.
    """

    def __init__(self, persistence: CalibrationPersistence | None = None) -> None:
        self._persistence = persistence
        self._records: list[CalibrationRecord] = []
        self._lock = threading.RLock()
        self.reload()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def records(self) -> list[CalibrationRecord]:
        """Snapshot of all records, newest first."""
        with self._lock:
            return list(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def add(self, record: CalibrationRecord) -> None:
        """Insert *record*, superseding any record with the same exact key."""
        with self._lock:
            records = [r for r in self._records if r.key != record.key]
            records.append(record)
            records.sort(key=_utc_date, reverse=True)
            self._records = records
            self._save()
        logger.info(
            "Added calibration %s (factor %.4f, %+.1f%%)",
            "_".join(str(k) for k in record.key),
            record.correction_factor,
            record.accuracy_percentage,
        )

    def delete(self, record_id: str) -> bool:
        """Remove the record with *record_id*. Returns True if one was removed."""
        with self._lock:
            before = len(self._records)
            self._records = [r for r in self._records if r.id != record_id]
            removed = len(self._records) != before
            if removed:
                self._save()
        return removed

    def delete_all(self) -> None:
        """Remove every record."""
        with self._lock:
            self._records = []
            self._save()
        logger.info("Deleted all calibrations")

    def get(self, record_id: str) -> CalibrationRecord | None:
        with self._lock:
            return next((r for r in self._records if r.id == record_id), None)

    def lookup_exact(
        self,
        device_model: str,
        lens_type: str,
        capture_plane: str,
        focal_length: int,
    ) -> CalibrationRecord | None:
        """Record matching the full key, or *None*."""
        key = (device_model, lens_type, capture_plane, focal_length)
        with self._lock:
            return next((r for r in self._records if r.key == key), None)

    def lookup_by_combo(
        self,
        device_model: str,
        lens_type: str,
        capture_plane: str,
    ) -> CalibrationMatch | None:
        """Most recent record for device + lens + plane, any focal length.

        The correction characterises the device lens / capture plane pairing,
        so it applies to every simulated focal length on that pairing.
        """
        with self._lock:
            for r in self._records:
                if (
                    r.device_model == device_model
                    and r.lens_type == lens_type
                    and r.capture_plane == capture_plane
                ):
                    return CalibrationMatch(r.correction_factor, r.focal_length)
        return None

    def for_device(self, device_model: str) -> list[CalibrationRecord]:
        with self._lock:
            return [r for r in self._records if r.device_model == device_model]

    def for_lens(self, lens_type: str) -> list[CalibrationRecord]:
        with self._lock:
            return [r for r in self._records if r.lens_type == lens_type]

    def reload(self) -> None:
        """Replace in-memory records with the persisted ones.

        A load failure is logged and the current records are kept.
        """
        if self._persistence is None:
            return
        try:
            loaded = self._persistence.load()
        except Exception:
            logger.exception("Failed to load calibrations, keeping %d in memory", len(self))
            return
        with self._lock:
            self._records = list(loaded)
        logger.info("Loaded %d calibrations", len(loaded))

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _save(self) -> None:
        if self._persistence is None:
            return
        try:
            self._persistence.save(list(self._records))
        except Exception:
            logger.exception("Failed to save %d calibrations", len(self._records))
