"""Reciprocity-failure correction tests — all four model variants."""

import pytest

from photoassist.core.reciprocity import (
    apply_reciprocity,
    interpolate_lookup_table,
    interpolate_stop_correction,
)
from photoassist.models.exposure import (
    LookupTable,
    NoReciprocity,
    PowerLaw,
    StopCorrection,
)


class TestNoReciprocity:
    @pytest.mark.parametrize("metered", [0.5, 1.0, 120.0, 3600.0])
    def test_unchanged_either_side_of_cutoff(self, metered):
        r = apply_reciprocity(NoReciprocity(cutoff=1.0), metered)
        assert r.corrected_seconds == metered
        assert not r.correction_applied
        assert not r.beyond_documented_range


class TestPowerLaw:
    def test_sixty_seconds(self):
        r = apply_reciprocity(PowerLaw(cutoff=1.0, exponent=1.3), 60.0)
        assert r.corrected_seconds == pytest.approx(60.0 ** 1.3)
        assert r.corrected_seconds == pytest.approx(204.9, rel=1e-3)
        assert r.correction_applied
        assert not r.beyond_documented_range

    def test_below_cutoff(self):
        r = apply_reciprocity(PowerLaw(cutoff=1.0, exponent=1.31), 0.5)
        assert r.corrected_seconds == 0.5
        assert not r.correction_applied

    def test_at_cutoff_applies(self):
        r = apply_reciprocity(PowerLaw(cutoff=1.0, exponent=1.31), 1.0)
        assert r.correction_applied
        assert r.corrected_seconds == pytest.approx(1.0)

    def test_never_beyond_range(self):
        r = apply_reciprocity(PowerLaw(cutoff=1.0, exponent=1.31), 10_000.0)
        assert not r.beyond_documented_range


class TestLookupTable:
    TABLE = LookupTable(cutoff=0.5, points=((1.0, 1.0), (10.0, 15.0)))

    def test_interpolation(self):
        r = apply_reciprocity(self.TABLE, 5.5)
        assert r.corrected_seconds == pytest.approx(8.0)
        assert r.correction_applied
        assert not r.beyond_documented_range

    def test_below_first_point(self):
        r = apply_reciprocity(self.TABLE, 0.8)
        assert r.corrected_seconds == pytest.approx(1.0)

    def test_at_last_point(self):
        r = apply_reciprocity(self.TABLE, 10.0)
        assert r.corrected_seconds == pytest.approx(15.0)
        assert not r.beyond_documented_range

    def test_extrapolates_last_segment(self):
        r = apply_reciprocity(self.TABLE, 20.0)
        assert r.corrected_seconds == pytest.approx(15.0 + 10.0 * 14.0 / 9.0)
        assert r.beyond_documented_range

    def test_below_cutoff(self):
        r = apply_reciprocity(self.TABLE, 0.25)
        assert r.corrected_seconds == 0.25
        assert not r.correction_applied

    def test_single_point(self):
        table = LookupTable(cutoff=1.0, points=((2.0, 4.0),))
        assert apply_reciprocity(table, 1.5).corrected_seconds == pytest.approx(4.0)
        r = apply_reciprocity(table, 5.0)
        assert r.corrected_seconds == pytest.approx(4.0)
        assert r.beyond_documented_range

    def test_empty_table(self):
        r = apply_reciprocity(LookupTable(cutoff=1.0), 5.0)
        assert r.corrected_seconds == 5.0
        assert r.correction_applied
        assert r.beyond_documented_range

    def test_unsorted_points_sorted(self):
        table = LookupTable(cutoff=0.5, points=((10.0, 15.0), (1.0, 1.0)))
        assert table.points == ((1.0, 1.0), (10.0, 15.0))
        assert apply_reciprocity(table, 5.5).corrected_seconds == pytest.approx(8.0)

    def test_duplicate_metered_values(self):
        points = ((1.0, 1.0), (5.0, 4.0), (5.0, 6.0), (10.0, 10.0))
        assert interpolate_lookup_table(5.0, points) == pytest.approx(4.0)
        assert interpolate_lookup_table(7.5, points) == pytest.approx(8.0)

    def test_duplicate_last_metered_no_extrapolation(self):
        points = ((1.0, 1.0), (10.0, 15.0), (10.0, 20.0))
        assert interpolate_lookup_table(12.0, points) == pytest.approx(20.0)

    def test_monotonic_table_gives_monotonic_output(self):
        table = LookupTable(cutoff=1.0, points=((1.0, 2.0), (10.0, 50.0), (100.0, 1200.0)))
        outputs = [apply_reciprocity(table, t).corrected_seconds for t in (1, 2, 5, 10, 30, 100, 200)]
        assert outputs == sorted(outputs)


class TestStopCorrection:
    TABLE = StopCorrection(cutoff=1.0, points=((10.0, 0.5), (100.0, 1.5)))

    def test_clamped_below_table(self):
        r = apply_reciprocity(self.TABLE, 2.0)
        assert r.corrected_seconds == pytest.approx(2.0 * 2 ** 0.5)
        assert r.correction_applied

    def test_interpolated(self):
        r = apply_reciprocity(self.TABLE, 55.0)
        assert r.corrected_seconds == pytest.approx(110.0)
        assert not r.beyond_documented_range

    def test_clamped_above_table(self):
        r = apply_reciprocity(self.TABLE, 200.0)
        assert r.corrected_seconds == pytest.approx(200.0 * 2 ** 1.5)
        assert r.beyond_documented_range

    def test_below_cutoff(self):
        r = apply_reciprocity(self.TABLE, 0.5)
        assert r.corrected_seconds == 0.5
        assert not r.correction_applied

    def test_empty_table_zero_stops(self):
        assert interpolate_stop_correction(42.0, ()) == 0.0
        r = apply_reciprocity(StopCorrection(cutoff=1.0), 42.0)
        assert r.corrected_seconds == pytest.approx(42.0)
        assert r.beyond_documented_range

    def test_color_filter_suggestion_kept(self):
        table = StopCorrection(points=((128.0, 0.33),), color_filter_suggestion="CC2.5G")
        assert table.color_filter_suggestion == "CC2.5G"


class TestUnknownModel:
    def test_raises_type_error(self):
        with pytest.raises(TypeError):
            apply_reciprocity(object(), 10.0)
