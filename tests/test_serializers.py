"""Tests for photoassist.core.serializers — calibration, reciprocity and film dicts."""

import json
from datetime import datetime, timezone

import pytest

from photoassist.core.serializers import (
    calibration_to_dict,
    dict_to_calibration,
    dict_to_film,
    dict_to_reciprocity_model,
    film_to_dict,
    reciprocity_model_to_dict,
)
from photoassist.models.calibration import CalibrationRecord
from photoassist.models.exposure import (
    FilmReciprocity,
    LookupTable,
    NoReciprocity,
    PowerLaw,
    StopCorrection,
)


def _make_record() -> CalibrationRecord:
    return CalibrationRecord.create(
        device_model="iPhone 15 Pro",
        lens_type="1x",
        zoom_factor=1.0,
        capture_plane="Medium Format 6x6cm",
        focal_length=80,
        measured_object_size=24.0,
        measured_distance=72.0,
        calculated_field_size=45.0,
        calibration_date=datetime(2025, 12, 1, 14, 30, 5),
        notes="overcast, tripod",
    )


class TestCalibration:
    def test_dict_is_json_safe(self):
        d = calibration_to_dict(_make_record())
        json.dumps(d)
        assert d["calibration_date"] == "2025-12-01T14:30:05"
        assert d["correction_factor"] == pytest.approx(1.875)

    def test_field_types(self):
        d = calibration_to_dict(_make_record())
        assert set(d) == {
            "id", "device_model", "lens_type", "zoom_factor", "capture_plane",
            "focal_length", "measured_object_size", "measured_distance",
            "calculated_field_size", "correction_factor", "calibration_date", "notes",
        }
        assert all(isinstance(v, (str, int, float)) for v in d.values())
        d = calibration_to_dict(CalibrationRecord.create(
            "iPhone", "1x", 1.0, "35mm", 50, 24.0, 60.0, 24.0,
        ))
        assert d["notes"] is None

    def test_restores_record(self):
        record = _make_record()
        assert dict_to_calibration(calibration_to_dict(record)) == record

    def test_utc_suffix_parsed_as_aware(self):
        d = calibration_to_dict(_make_record())
        d["calibration_date"] = "2025-12-01T14:30:05Z"
        restored = dict_to_calibration(d)
        assert restored.calibration_date == datetime(2025, 12, 1, 14, 30, 5, tzinfo=timezone.utc)

    def test_offset_date_round_trip(self):
        record = CalibrationRecord.create(
            "iPhone", "1x", 1.0, "35mm", 50, 24.0, 60.0, 24.0,
            calibration_date=datetime(2025, 12, 1, 9, 0, tzinfo=timezone.utc),
        )
        d = calibration_to_dict(record)
        assert d["calibration_date"] == "2025-12-01T09:00:00+00:00"
        assert dict_to_calibration(d) == record

    def test_stored_factor_not_recomputed(self):
        d = calibration_to_dict(_make_record())
        d["correction_factor"] = 1.5
        assert dict_to_calibration(d).correction_factor == 1.5

    def test_missing_notes(self):
        d = calibration_to_dict(_make_record())
        del d["notes"]
        assert dict_to_calibration(d).notes is None

    def test_missing_field(self):
        d = calibration_to_dict(_make_record())
        del d["focal_length"]
        with pytest.raises(KeyError):
            dict_to_calibration(d)


class TestReciprocityModel:
    def test_power_law_layout(self):
        d = reciprocity_model_to_dict(PowerLaw(cutoff=1.0, exponent=1.31))
        assert d == {"type": "powerLaw", "factor": 1.31, "cutoffTime": 1.0}

    def test_none_layout(self):
        assert reciprocity_model_to_dict(NoReciprocity(120.0)) == {
            "type": "none",
            "cutoffTime": 120.0,
        }

    def test_lookup_table_layout(self):
        d = reciprocity_model_to_dict(LookupTable(1.0, ((1.0, 2.0), (10.0, 50.0))))
        assert d["type"] == "lookupTable"
        assert d["dataPoints"] == [
            {"metered": 1.0, "corrected": 2.0},
            {"metered": 10.0, "corrected": 50.0},
        ]
        assert d["colorFilterSuggestion"] is None

    @pytest.mark.parametrize(
        "model",
        [
            NoReciprocity(120.0),
            PowerLaw(1.0, 1.26),
            LookupTable(1.0, ((1.0, 2.0), (10.0, 50.0), (100.0, 1200.0))),
            StopCorrection(128.0, ((128.0, 0.33), (480.0, 0.67)), "CC2.5G"),
        ],
    )
    def test_restores_model(self, model):
        assert dict_to_reciprocity_model(reciprocity_model_to_dict(model)) == model

    def test_unsorted_points_sorted_on_load(self):
        model = dict_to_reciprocity_model({
            "type": "stopCorrection",
            "cutoffTime": 1.0,
            "dataPoints": [
                {"metered": 100.0, "stopAdjustment": 1.5},
                {"metered": 10.0, "stopAdjustment": 0.5},
            ],
        })
        assert model.points == ((10.0, 0.5), (100.0, 1.5))

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="Unknown reciprocity model type"):
            dict_to_reciprocity_model({"type": "exotic", "cutoffTime": 1.0})

    def test_missing_type(self):
        with pytest.raises(ValueError):
            dict_to_reciprocity_model({"cutoffTime": 1.0})

    def test_missing_factor(self):
        with pytest.raises(KeyError):
            dict_to_reciprocity_model({"type": "powerLaw", "cutoffTime": 1.0})

    def test_unknown_model_object(self):
        with pytest.raises(ValueError):
            reciprocity_model_to_dict("powerLaw")


class TestFilm:
    def test_film_dict(self):
        film = FilmReciprocity("ilford_hp5_plus", "Ilford HP5 Plus", 400, PowerLaw(1.0, 1.31))
        d = film_to_dict(film)
        assert d["model"]["type"] == "powerLaw"
        assert dict_to_film(d) == film

    def test_film_missing_model(self):
        with pytest.raises(KeyError):
            dict_to_film({"id": "x", "name": "X", "iso": 100})
