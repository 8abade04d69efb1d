"""Film reciprocity-failure correction.

Dispatches on the ReciprocityModel variant:

    NoReciprocity   metered unchanged (either side of the cutoff)
    PowerLaw        Tc = Tm ** p                     Tm ≥ cutoff
    LookupTable     linear interpolation of Tc,      Tm ≥ cutoff
                    last-segment extrapolation above the table
    StopCorrection  Tc = Tm · 2^stops, stops interpolated and clamped
                    to the table ends,               Tm ≥ cutoff

Tables are sorted ascending by metered time when the model is built.
All durations in seconds.
"""

from __future__ import annotations

import numpy as np

from photoassist.models.exposure import (
    LookupTable,
    NoReciprocity,
    PowerLaw,
    ReciprocityModel,
    ReciprocityResult,
    StopCorrection,
)


def apply_reciprocity(model: ReciprocityModel, metered_seconds: float) -> ReciprocityResult:
    """Correct a metered exposure time for reciprocity failure.

    Args:
        model: Film reciprocity model.
        metered_seconds: Metered exposure time [s].

    Returns:
        ReciprocityResult. ``beyond_documented_range`` is set for tabulated
        models when the metered time exceeds the largest tabulated time.

    Raises:
        TypeError: If *model* is not a reciprocity model variant.
    """
    unchanged = ReciprocityResult(metered_seconds, metered_seconds)

    match model:
        case NoReciprocity():
            return unchanged

        case PowerLaw(cutoff=cutoff, exponent=exponent):
            if metered_seconds < cutoff:
                return unchanged
            return ReciprocityResult(
                metered_seconds,
                metered_seconds ** exponent,
                correction_applied=True,
                beyond_documented_range=False,
            )

        case LookupTable(cutoff=cutoff, points=points):
            if metered_seconds < cutoff:
                return unchanged
            return ReciprocityResult(
                metered_seconds,
                interpolate_lookup_table(metered_seconds, points),
                correction_applied=True,
                beyond_documented_range=metered_seconds > model.max_metered,
            )

        case StopCorrection(cutoff=cutoff, points=points):
            if metered_seconds < cutoff:
                return unchanged
            stops = interpolate_stop_correction(metered_seconds, points)
            return ReciprocityResult(
                metered_seconds,
                metered_seconds * 2.0 ** stops,
                correction_applied=True,
                beyond_documented_range=metered_seconds > model.max_metered,
            )

    raise TypeError(f"Unknown reciprocity model: {type(model).__name__}")


def interpolate_lookup_table(
    metered: float,
    points: tuple[tuple[float, float], ...],
) -> float:
    """Corrected time from (metered, corrected) pairs.

    Below the table → first corrected value. Above → extrapolated with the
    slope of the last segment (last value when fewer than two points).
    Empty table → *metered* unchanged.
    """
    if not points:
        return metered
    return _interpolate(metered, points, extrapolate=True)


def interpolate_stop_correction(
    metered: float,
    points: tuple[tuple[float, float], ...],
) -> float:
    """Stop adjustment from (metered, stops) pairs, clamped to the table ends.

    Empty table → 0 stops.
    """
    if not points:
        return 0.0
    return _interpolate(metered, points, extrapolate=False)


def _interpolate(
    x: float,
    points: tuple[tuple[float, float], ...],
    extrapolate: bool,
) -> float:
    xs = np.array([p[0] for p in points], dtype=float)
    ys = np.array([p[1] for p in points], dtype=float)

    if x <= xs[0]:
        return float(ys[0])

    if x >= xs[-1]:
        if extrapolate and len(xs) >= 2:
            dx = xs[-1] - xs[-2]
            if dx > 0:
                slope = (ys[-1] - ys[-2]) / dx
                return float(ys[-1] + slope * (x - xs[-1]))
        return float(ys[-1])

    # xs[i-1] < x <= xs[i]; zero-width segments are never selected
    i = int(np.searchsorted(xs, x, side="left"))
    x0, x1 = xs[i - 1], xs[i]
    y0, y1 = ys[i - 1], ys[i]
    ratio = (x - x0) / (x1 - x0)
    return float(y0 + ratio * (y1 - y0))
