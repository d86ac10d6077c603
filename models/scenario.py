"""
Release scenario data model.

A ReleaseScenario captures everything the dispersion engine needs about a
single point-source release and the weather it is released into.  It is
immutable: every parameter change builds a new scenario and every derived
quantity (zones, footprints, touchdown) is recomputed from it.

Convention:
  - Wind direction uses METEOROLOGICAL convention (direction wind comes FROM).
  - Distances in meters, emission rate in kg/s, temperatures in degC.
"""

import logging
import math
from dataclasses import dataclass, fields
from typing import NamedTuple, Optional

from config import (
    MIN_WIND_SPEED_MS,
    NEUTRAL_STABILITY_CLASS,
    STABILITY_CLASSES,
)

logger = logging.getLogger(__name__)


class GeoPoint(NamedTuple):
    """A geographic coordinate in decimal degrees."""

    lat: float
    lng: float


def normalize_stability_class(stability_class) -> str:
    """
    Map a stability class symbol onto one of A-F.

    Lower-case and padded symbols are accepted.  Anything else falls back to
    the neutral class D; this is a defined fallback, not an error.
    """
    sc = str(stability_class).strip().upper()
    if sc not in STABILITY_CLASSES:
        logger.debug(
            "Unknown stability class %r, using neutral class %s",
            stability_class, NEUTRAL_STABILITY_CLASS,
        )
        return NEUTRAL_STABILITY_CLASS
    return sc


@dataclass(frozen=True)
class ReleaseScenario:
    """A continuous point-source release under steady weather.

    Args:
        emission_rate: Source emission rate (kg/s).
        release_height: Physical release / stack height above ground (m).
        wind_speed: Wind speed at release height (m/s).
        wind_direction: Meteorological wind direction (degrees, 0=N, 90=E).
        stability_class: Pasquill-Gifford class A-F.
        ambient_temperature: Ambient air temperature (degC).
        release_temperature: Temperature of the released gas (degC).
        source: Geographic location of the release.
        chemical: Chemical identifier used for threshold lookups.
        stack_diameter: Stack inner diameter (m), None for the configured default.
        exit_velocity: Stack exit velocity (m/s), None for the configured default.
        humidity: Relative humidity (%), informational.
        ambient_pressure: Ambient pressure (Pa), informational.
    """

    emission_rate: float
    release_height: float
    wind_speed: float
    wind_direction: float
    stability_class: str
    ambient_temperature: float
    release_temperature: float
    source: GeoPoint
    chemical: str
    stack_diameter: Optional[float] = None
    exit_velocity: Optional[float] = None
    humidity: Optional[float] = None
    ambient_pressure: Optional[float] = None

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                if not math.isfinite(value):
                    raise ValueError(f"{f.name} must be finite, got {value}")
        object.__setattr__(
            self, "stability_class", normalize_stability_class(self.stability_class)
        )
        object.__setattr__(self, "source", GeoPoint(*self.source))

    @property
    def effective_wind_speed(self) -> float:
        """Wind speed floored at the configured minimum, safe to divide by."""
        return max(MIN_WIND_SPEED_MS, self.wind_speed)

    @classmethod
    def from_model_parameters(
        cls,
        chemical: str,
        release_rate_kg_min: float,
        wind_speed: float,
        wind_direction: float,
        stability_class: str,
        temperature: float,
        release_temperature: float,
        source_height: float,
        source: GeoPoint,
        humidity: Optional[float] = None,
        ambient_pressure: Optional[float] = None,
    ) -> "ReleaseScenario":
        """Build a scenario from UI model parameters (release rate in kg/min)."""
        return cls(
            emission_rate=release_rate_kg_min / 60.0,
            release_height=source_height,
            wind_speed=wind_speed,
            wind_direction=wind_direction,
            stability_class=stability_class,
            ambient_temperature=temperature,
            release_temperature=release_temperature,
            source=source,
            chemical=chemical,
            humidity=humidity,
            ambient_pressure=ambient_pressure,
        )
