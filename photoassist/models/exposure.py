"""Exposure and film reciprocity data models.

Reciprocity model variants:
  - NoReciprocity: film needs no correction.
  - PowerLaw: corrected = metered ** exponent above the cutoff.
  - LookupTable: (metered, corrected) pairs, interpolated / extrapolated.
  - StopCorrection: (metered, stop adjustment) pairs, interpolated / clamped.

All durations in seconds.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class ReciprocityModelType(Enum):
    """Discriminator used in the film database JSON."""
    NONE = "none"
    POWER_LAW = "powerLaw"
    LOOKUP_TABLE = "lookupTable"
    STOP_CORRECTION = "stopCorrection"


def _sorted_points(
    points: tuple[tuple[float, float], ...],
) -> tuple[tuple[float, float], ...]:
    return tuple(
        sorted(((float(m), float(v)) for m, v in points), key=lambda p: p[0])
    )


@dataclass(frozen=True)
class NoReciprocity:
    """Film with no documented reciprocity failure.

    Attributes:
        cutoff: Time below which no correction is needed [s].
    """
    cutoff: float = 1.0


@dataclass(frozen=True)
class PowerLaw:
    """Power-law model: Tc = Tm ** exponent for Tm ≥ cutoff.

    Attributes:
        cutoff: Metered time from which correction starts [s].
        exponent: Power-law exponent (e.g. 1.31 for Ilford HP5 Plus).
    """
    cutoff: float = 1.0
    exponent: float = 1.0


@dataclass(frozen=True)
class LookupTable:
    """Tabulated corrected times.

    Points are stored sorted ascending by metered time.

    Attributes:
        cutoff: Metered time from which correction starts [s].
        points: ((metered, corrected), ...) [s].
        color_filter_suggestion: Optional filter note for colour films.
    """
    cutoff: float = 1.0
    points: tuple[tuple[float, float], ...] = ()
    color_filter_suggestion: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "points", _sorted_points(self.points))

    @property
    def max_metered(self) -> float:
        return self.points[-1][0] if self.points else 0.0


@dataclass(frozen=True)
class StopCorrection:
    """Tabulated exposure increase in stops.

    Points are stored sorted ascending by metered time.

    Attributes:
        cutoff: Metered time from which correction starts [s].
        points: ((metered, stop_adjustment), ...) [s, stops].
        color_filter_suggestion: Optional filter note for colour films.
    """
    cutoff: float = 1.0
    points: tuple[tuple[float, float], ...] = ()
    color_filter_suggestion: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "points", _sorted_points(self.points))

    @property
    def max_metered(self) -> float:
        return self.points[-1][0] if self.points else 0.0


# Union type for any reciprocity model
ReciprocityModel = Union[NoReciprocity, PowerLaw, LookupTable, StopCorrection]


@dataclass(frozen=True)
class FilmReciprocity:
    """Film stock with its reciprocity model.

    Attributes:
        id: Stable identifier from the film database.
        name: Display name.
        iso: Box speed.
        model: Reciprocity correction model.
    """
    id: str
    name: str
    iso: int
    model: ReciprocityModel


@dataclass
class ReciprocityResult:
    """Outcome of applying a reciprocity model.

    Attributes:
        metered_seconds: Input metered time [s].
        corrected_seconds: Time to actually expose [s].
        correction_applied: Whether the model changed anything.
        beyond_documented_range: Metered time exceeds the film's table.
    """
    metered_seconds: float
    corrected_seconds: float
    correction_applied: bool = False
    beyond_documented_range: bool = False


@dataclass(frozen=True)
class AttachedFilter:
    """Filter on the lens. Only *stops* enters the calculation.

    Attributes:
        name: Display name (e.g. "ND8").
        stops: Light loss [stops].
    """
    name: str
    stops: float


@dataclass(frozen=True)
class ShutterSpeed:
    """Discrete shutter speed on a scale.

    Attributes:
        seconds: Duration [s].
    """
    seconds: float

    @property
    def ev_offset(self) -> float:
        """EV relative to 1 second: −log2(t)."""
        return -math.log2(self.seconds)


@dataclass
class ExposureResult:
    """Required shutter time after compensation, filters and reciprocity.

    Attributes:
        aperture_ev: Target aperture EV offset.
        iso_ev: Target ISO EV offset.
        base_ev: Metered EV after compensation and filters.
        required_shutter_ev: Shutter EV that keeps *base_ev*.
        calculated_seconds: 2^(−required_shutter_ev) before reciprocity [s].
        corrected_seconds: After reciprocity (== calculated when none) [s].
        calculated_speed: Nearest scale entry to *calculated_seconds*.
        final_speed: Nearest scale entry to *corrected_seconds*.
        reciprocity: Reciprocity outcome when a film was given and a
            correction was applied, else *None*.
        film_name: Name of the film used, if any.
        is_out_of_range: *corrected_seconds* exceeds the 8 h display limit.
        filters: Filters that entered the calculation.
    """
    aperture_ev: float = 0.0
    iso_ev: float = 0.0
    base_ev: float = 0.0
    required_shutter_ev: float = 0.0
    calculated_seconds: float = 0.0
    corrected_seconds: float = 0.0
    calculated_speed: ShutterSpeed | None = None
    final_speed: ShutterSpeed | None = None
    reciprocity: ReciprocityResult | None = None
    film_name: str | None = None
    is_out_of_range: bool = False
    filters: list[AttachedFilter] = field(default_factory=list)
