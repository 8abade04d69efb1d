"""Serialization utilities — dataclass ↔ JSON-safe dict conversion.

Calibration records use snake_case keys with ISO-8601 dates. Reciprocity
models and films use the film database layout: a ``type`` discriminator
("powerLaw", "lookupTable", "stopCorrection", "none") with camelCase fields.

Used by CalibrationFile, SqliteCalibrationRepository and FilmDatabase.
"""

from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Any

from photoassist.models.calibration import CalibrationRecord
from photoassist.models.exposure import (
    FilmReciprocity,
    LookupTable,
    NoReciprocity,
    PowerLaw,
    ReciprocityModel,
    ReciprocityModelType,
    StopCorrection,
)


# =====================================================================
# Generic helpers
# =====================================================================


def _serialize_value(val: Any) -> Any:
    """Convert a value to a JSON-safe type."""
    if val is None:
        return None
    if isinstance(val, datetime):
        return val.isoformat()
    if isinstance(val, (int, float, str, bool)):
        return val
    return str(val)


def _dataclass_to_dict(obj: Any) -> dict:
    """Convert a flat dataclass to a JSON-safe dict."""
    result = {}
    for f in dataclasses.fields(obj):
        val = getattr(obj, f.name)
        result[f.name] = _serialize_value(val)
    return result


# =====================================================================
# Calibration serialization
# =====================================================================


def calibration_to_dict(record: CalibrationRecord) -> dict:
    """Serialize a CalibrationRecord; the date becomes an ISO-8601 string."""
    return _dataclass_to_dict(record)


def dict_to_calibration(data: dict) -> CalibrationRecord:
    """Deserialize a dict to CalibrationRecord.

    The stored correction factor is used as is, never recomputed.

    Raises:
        KeyError: If a required field is missing.
        ValueError: If the date is not ISO-8601.
    """
    return CalibrationRecord(
        id=str(data["id"]),
        device_model=data["device_model"],
        lens_type=data["lens_type"],
        zoom_factor=float(data["zoom_factor"]),
        capture_plane=data["capture_plane"],
        focal_length=int(data["focal_length"]),
        measured_object_size=float(data["measured_object_size"]),
        measured_distance=float(data["measured_distance"]),
        calculated_field_size=float(data["calculated_field_size"]),
        correction_factor=float(data["correction_factor"]),
        calibration_date=_parse_date(data["calibration_date"]),
        notes=data.get("notes"),
    )


def _parse_date(text: str) -> datetime:
    """Parse an ISO-8601 date; a trailing ``Z`` means UTC."""
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


# =====================================================================
# Reciprocity serialization
# =====================================================================


def reciprocity_model_to_dict(model: ReciprocityModel) -> dict:
    """Serialize a reciprocity model to the tagged film database layout.

    Raises:
        ValueError: If *model* is not a reciprocity model variant.
    """
    match model:
        case NoReciprocity():
            return {
                "type": ReciprocityModelType.NONE.value,
                "cutoffTime": model.cutoff,
            }
        case PowerLaw():
            return {
                "type": ReciprocityModelType.POWER_LAW.value,
                "factor": model.exponent,
                "cutoffTime": model.cutoff,
            }
        case LookupTable():
            return {
                "type": ReciprocityModelType.LOOKUP_TABLE.value,
                "dataPoints": [
                    {"metered": m, "corrected": c} for m, c in model.points
                ],
                "colorFilterSuggestion": model.color_filter_suggestion,
                "cutoffTime": model.cutoff,
            }
        case StopCorrection():
            return {
                "type": ReciprocityModelType.STOP_CORRECTION.value,
                "dataPoints": [
                    {"metered": m, "stopAdjustment": s} for m, s in model.points
                ],
                "colorFilterSuggestion": model.color_filter_suggestion,
                "cutoffTime": model.cutoff,
            }
    raise ValueError(f"Unknown reciprocity model: {type(model).__name__}")


def dict_to_reciprocity_model(data: dict) -> ReciprocityModel:
    """Deserialize a tagged dict to a reciprocity model.

    Table points are sorted by metered time on construction.

    Raises:
        ValueError: If ``type`` is missing or unknown.
        KeyError: If a field required by the type is missing.
    """
    try:
        model_type = ReciprocityModelType(data.get("type"))
    except ValueError:
        raise ValueError(f"Unknown reciprocity model type: {data.get('type')!r}") from None

    cutoff = float(data["cutoffTime"])

    if model_type == ReciprocityModelType.NONE:
        return NoReciprocity(cutoff=cutoff)
    if model_type == ReciprocityModelType.POWER_LAW:
        return PowerLaw(cutoff=cutoff, exponent=float(data["factor"]))
    if model_type == ReciprocityModelType.LOOKUP_TABLE:
        return LookupTable(
            cutoff=cutoff,
            points=tuple(
                (float(p["metered"]), float(p["corrected"]))
                for p in data["dataPoints"]
            ),
            color_filter_suggestion=data.get("colorFilterSuggestion"),
        )
    return StopCorrection(
        cutoff=cutoff,
        points=tuple(
            (float(p["metered"]), float(p["stopAdjustment"]))
            for p in data["dataPoints"]
        ),
        color_filter_suggestion=data.get("colorFilterSuggestion"),
    )


def film_to_dict(film: FilmReciprocity) -> dict:
    """Serialize a FilmReciprocity with its tagged model."""
    return {
        "id": film.id,
        "name": film.name,
        "iso": film.iso,
        "model": reciprocity_model_to_dict(film.model),
    }


def dict_to_film(data: dict) -> FilmReciprocity:
    """Deserialize a film database entry.

    Raises:
        KeyError: If a required field is missing.
        ValueError: If the model type is unknown.
    """
    return FilmReciprocity(
        id=str(data["id"]),
        name=data["name"],
        iso=int(data["iso"]),
        model=dict_to_reciprocity_model(data["model"]),
    )
