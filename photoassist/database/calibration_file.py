"""Calibration file — JSON-file persistence for the calibration store.

The file holds a versioned envelope:

    {"schema_version": "1.0", "calibrations": [{...}, ...]}

with records in list order (newest first) and ISO-8601 dates.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from photoassist.constants import CALIBRATION_FILENAME, CALIBRATION_SCHEMA_VERSION
from photoassist.core.serializers import calibration_to_dict, dict_to_calibration
from photoassist.models.calibration import CalibrationRecord

logger = logging.getLogger(__name__)


class CalibrationFile:
    """Calibration persistence backed by a single JSON file.

    Args:
        path: File location. Defaults to ``camera_calibrations.json`` in the
            current directory.
    """

    def __init__(self, path: Path | str | None = None):
        if path is None:
            path = Path.cwd() / CALIBRATION_FILENAME
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[CalibrationRecord]:
        """Records from the file; empty list when the file does not exist.

        Raises:
            ValueError: If the file is not valid calibration JSON.
        """
        if not self._path.exists():
            logger.debug("No calibration file at %s", self._path)
            return []
        with open(self._path, encoding="utf-8") as f:
            data = json.load(f)

        # Bare arrays are accepted as unversioned files
        if isinstance(data, list):
            entries = data
        elif isinstance(data, dict):
            entries = data.get("calibrations", [])
        else:
            raise ValueError(f"Unexpected calibration file layout in {self._path}")
        return [dict_to_calibration(e) for e in entries]

    def save(self, records: list[CalibrationRecord]) -> None:
        """Write *records* atomically (temp file + replace)."""
        payload = {
            "schema_version": CALIBRATION_SCHEMA_VERSION,
            "calibrations": [calibration_to_dict(r) for r in records],
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self._path)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise
