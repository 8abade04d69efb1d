"""Exposure calculator — EV arithmetic, filter compensation, shutter snapping.

EV offsets are relative to f/1, 1 s and ISO 100:

    apertureEV = log2(N²)      shutterEV = −log2(t)      isoEV = log2(S/100)

    baseEV            = apertureEV + shutterEV + isoEV + compensation − Σ filter stops
    requiredShutterEV = baseEV − targetApertureEV − targetIsoEV
    requiredSeconds   = 2^(−requiredShutterEV)

The required time is then corrected for film reciprocity (if a film is
given) and snapped to the nearest entry of a shutter-speed scale.
"""

from __future__ import annotations

import logging
import math
from functools import lru_cache
from typing import Iterable, Sequence

import numpy as np

from photoassist.constants import (
    FASTEST_SHUTTER_SECONDS,
    ISO_REFERENCE,
    MAX_SHUTTER_SECONDS,
    SHUTTER_SCALE_STEP_EV,
)
from photoassist.core.reciprocity import apply_reciprocity
from photoassist.models.exposure import (
    AttachedFilter,
    ExposureResult,
    FilmReciprocity,
    ShutterSpeed,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# EV offsets
# ---------------------------------------------------------------------------

def aperture_ev(f_number: float) -> float:
    """EV offset of an f-number: log2(N²)."""
    return math.log2(f_number * f_number)


def shutter_ev(seconds: float) -> float:
    """EV offset of a shutter time: −log2(t)."""
    return -math.log2(seconds)


def iso_ev(iso: float) -> float:
    """EV offset of a film/sensor speed relative to ISO 100."""
    return math.log2(iso / ISO_REFERENCE)


def total_ev(aperture: float, shutter: float, iso: float) -> float:
    """Sum of the three EV offsets."""
    return aperture + shutter + iso


def total_filter_stops(filters: Iterable[AttachedFilter]) -> float:
    """Combined light loss of a filter stack [stops]."""
    return sum((f.stops for f in filters), 0.0)


def required_shutter_seconds(
    aperture_ev: float,
    shutter_ev: float,
    iso_ev: float,
    ev_compensation: float = 0.0,
    filter_stops: float = 0.0,
    target_aperture_ev: float | None = None,
    target_iso_ev: float | None = None,
) -> float:
    """Shutter time that keeps the metered exposure [s].

    Args:
        aperture_ev: Metered aperture EV offset.
        shutter_ev: Metered shutter EV offset.
        iso_ev: Metered ISO EV offset.
        ev_compensation: Exposure compensation [EV]; positive brightens.
        filter_stops: Total filter light loss [stops].
        target_aperture_ev: Aperture to shoot at (defaults to metered).
        target_iso_ev: ISO to shoot at (defaults to metered).
    """
    if target_aperture_ev is None:
        target_aperture_ev = aperture_ev
    if target_iso_ev is None:
        target_iso_ev = iso_ev
    base = total_ev(aperture_ev, shutter_ev, iso_ev) + ev_compensation - filter_stops
    return 2.0 ** -(base - target_aperture_ev - target_iso_ev)


# ---------------------------------------------------------------------------
# Shutter scale
# ---------------------------------------------------------------------------

@lru_cache(maxsize=1)
def third_stop_shutter_scale() -> tuple[ShutterSpeed, ...]:
    """1/3-stop shutter scale from 1/8000 s towards 8 hours, fastest first.

    Steps are exact thirds of a stop from 1/8000 s; the slowest entry is the
    last step that does not exceed 8 hours.
    """
    fastest_ev = -math.log2(FASTEST_SHUTTER_SECONDS)
    slowest_ev = -math.log2(MAX_SHUTTER_SECONDS)
    steps = int(math.floor((fastest_ev - slowest_ev) / SHUTTER_SCALE_STEP_EV + 1e-9))
    evs = fastest_ev - SHUTTER_SCALE_STEP_EV * np.arange(steps + 1)
    return tuple(ShutterSpeed(float(s)) for s in np.power(2.0, -evs))


def nearest_shutter_speed(
    seconds: float,
    scale: Sequence[ShutterSpeed],
) -> ShutterSpeed:
    """Scale entry closest to *seconds*. Ties resolve to the earlier entry.

    Raises:
        ValueError: If *scale* is empty.
    """
    if not scale:
        raise ValueError("Shutter speed scale is empty")
    values = np.array([s.seconds for s in scale], dtype=float)
    return scale[int(np.argmin(np.abs(values - seconds)))]


def is_out_of_range(seconds: float) -> bool:
    """True when *seconds* exceeds the 8-hour display limit."""
    return seconds > MAX_SHUTTER_SECONDS


# ---------------------------------------------------------------------------
# Full calculation
# ---------------------------------------------------------------------------

def compute_exposure(
    aperture_ev: float,
    shutter_ev: float,
    iso_ev: float,
    ev_compensation: float = 0.0,
    filters: Sequence[AttachedFilter] = (),
    film: FilmReciprocity | None = None,
    scale: Sequence[ShutterSpeed] | None = None,
    target_aperture_ev: float | None = None,
    target_iso_ev: float | None = None,
) -> ExposureResult:
    """Required shutter time after compensation, filters and reciprocity.

    Args:
        aperture_ev: Metered aperture EV offset.
        shutter_ev: Metered shutter EV offset.
        iso_ev: Metered ISO EV offset.
        ev_compensation: Exposure compensation [EV].
        filters: Filters on the lens.
        film: Film whose reciprocity model corrects the time. *None* for
            digital capture.
        scale: Shutter scale to snap to. Defaults to the 1/3-stop scale.
        target_aperture_ev: Aperture to shoot at (defaults to metered).
        target_iso_ev: ISO to shoot at (defaults to metered).

    Returns:
        ExposureResult. ``reciprocity`` is set only when the film's model
        actually changed the time.
    """
    if scale is None:
        scale = third_stop_shutter_scale()
    if target_aperture_ev is None:
        target_aperture_ev = aperture_ev
    if target_iso_ev is None:
        target_iso_ev = iso_ev

    stops = total_filter_stops(filters)
    base = total_ev(aperture_ev, shutter_ev, iso_ev) + ev_compensation - stops
    required_ev = base - target_aperture_ev - target_iso_ev
    seconds = 2.0 ** -required_ev
    calculated_speed = nearest_shutter_speed(seconds, scale)

    corrected = seconds
    final_speed = calculated_speed
    reciprocity = None
    if film is not None:
        outcome = apply_reciprocity(film.model, seconds)
        corrected = outcome.corrected_seconds
        final_speed = nearest_shutter_speed(corrected, scale)
        if outcome.correction_applied:
            reciprocity = outcome
            logger.debug(
                "%s reciprocity: %.3gs → %.3gs%s",
                film.name, seconds, corrected,
                " (beyond documented range)" if outcome.beyond_documented_range else "",
            )

    out_of_range = is_out_of_range(corrected)
    if out_of_range:
        logger.info("Exposure %.0fs exceeds %.0fs limit", corrected, MAX_SHUTTER_SECONDS)

    return ExposureResult(
        aperture_ev=target_aperture_ev,
        iso_ev=target_iso_ev,
        base_ev=base,
        required_shutter_ev=required_ev,
        calculated_seconds=seconds,
        corrected_seconds=corrected,
        calculated_speed=calculated_speed,
        final_speed=final_speed,
        reciprocity=reciprocity,
        film_name=film.name if film is not None else None,
        is_out_of_range=out_of_range,
        filters=list(filters),
    )
