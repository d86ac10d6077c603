"""
Plume Footprint Projector.

Turns a scalar hazard distance and the current wind into map geometry:

  - footprint_polygon: an ellipse elongated downwind, with the release point
    near its upwind edge rather than at its centre, slightly wider at the
    far end.
  - wind_arrow_polygon: a fixed-size arrow pointing downwind at the source.
  - ground_touchdown: where an elevated or buoyant plume's centerline
    reaches the ground, on the plume axis.

Polygons are (N, 2) arrays of [lat, lng].  The ring is closed implicitly:
the last vertex connects back to the first, which is not repeated.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from config import (
    FOOTPRINT_NUM_POINTS,
    ASPECT_RATIO_MIN,
    ASPECT_RATIO_MAX,
    ASPECT_RATIO_WIND_SLOPE,
    ASPECT_RATIO_BASE,
    FOOTPRINT_AXIS_SCALE,
    LOW_WIND_THRESHOLD_MS,
    HIGH_WIND_THRESHOLD_MS,
    LOW_WIND_WIDTH_FACTOR,
    HIGH_WIND_WIDTH_FACTOR,
    UPWIND_OFFSET_FRACTION,
    DOWNWIND_SPREAD_FACTOR,
    WIND_ARROW_LENGTH_M,
    WIND_ARROW_WIDTH_M,
    ZONE_COLORS,
    TOUCHDOWN_BASE_MULTIPLIER,
    TOUCHDOWN_WIND_SLOPE,
    TOUCHDOWN_MAX_FRACTION,
)
from geometry.projection import offset_to_coordinate, plume_bearing, rotate_to_bearing
from models.hazard_zones import HazardZones
from models.plume_rise import buoyancy_rise
from models.scenario import GeoPoint, ReleaseScenario


@dataclass(frozen=True)
class PlumeFootprint:
    """Map polygon approximating the area inside one hazard zone."""

    zone: str
    distance: int
    ring: np.ndarray   # (N, 2) [lat, lng], read-only
    color: str


@dataclass(frozen=True)
class TouchdownPoint:
    """Estimated ground contact point of the plume centerline."""

    location: GeoPoint
    downwind_distance: float   # m
    effective_height: float    # m


def plume_aspect_ratio(wind_speed: float) -> float:
    """Downwind/crosswind elongation; grows with wind speed within fixed bounds."""
    u = max(1.0, wind_speed)
    return max(ASPECT_RATIO_MIN, min(ASPECT_RATIO_MAX, u * ASPECT_RATIO_WIND_SLOPE + ASPECT_RATIO_BASE))


def stability_width_factor(wind_speed: float) -> float:
    """Crosswind scaling: light winds meander wide, strong winds stay narrow."""
    if wind_speed < LOW_WIND_THRESHOLD_MS:
        return LOW_WIND_WIDTH_FACTOR
    if wind_speed > HIGH_WIND_THRESHOLD_MS:
        return HIGH_WIND_WIDTH_FACTOR
    return 1.0


def footprint_offsets(
    hazard_distance: float,
    wind_speed: float,
    num_points: int = FOOTPRINT_NUM_POINTS,
):
    """
    Footprint ellipse in the plume frame, before rotation and projection.

    Returns:
        (along, cross) arrays in meters; along > 0 is downwind of the source.
    """
    semi_major = hazard_distance * plume_aspect_ratio(wind_speed) * FOOTPRINT_AXIS_SCALE
    semi_minor = hazard_distance * FOOTPRINT_AXIS_SCALE * stability_width_factor(wind_speed)

    angles = 2.0 * np.pi * np.arange(num_points) / num_points
    along = semi_major * np.cos(angles) + semi_major * UPWIND_OFFSET_FRACTION
    cross = semi_minor * np.sin(angles)

    if semi_major > 0:
        downwind = along > 0
        cross[downwind] *= 1.0 + along[downwind] / (semi_major * 2.0) * DOWNWIND_SPREAD_FACTOR
    return along, cross


def footprint_polygon(
    source: GeoPoint,
    hazard_distance: float,
    wind_direction: float,
    wind_speed: float,
    num_points: int = FOOTPRINT_NUM_POINTS,
) -> np.ndarray:
    """
    Geographic polygon for one hazard zone.

    Args:
        source: Release location.
        hazard_distance: Zone distance from the source (m).
        wind_direction: Meteorological wind direction (degrees, FROM).
        wind_speed: Wind speed (m/s).
        num_points: Vertices sampled around the ellipse.

    Returns:
        (num_points, 2) array of [lat, lng].
    """
    along, cross = footprint_offsets(hazard_distance, wind_speed, num_points)
    east, north = rotate_to_bearing(along, cross, plume_bearing(wind_direction))
    return offset_to_coordinate(source, east, north)


def wind_arrow_polygon(
    source: GeoPoint,
    wind_direction: float,
    length: float = WIND_ARROW_LENGTH_M,
    width: float = WIND_ARROW_WIDTH_M,
) -> np.ndarray:
    """
    Arrow (shaft plus double-notched head) with its tip at the source,
    pointing downwind.  Independent of hazard distance.

    Returns:
        (6, 2) array of [lat, lng].
    """
    along = np.array([
        -length * 1.5,   # tail of shaft
        -length * 0.3,   # shaft edge
        -length * 0.3,   # notch
        0.0,             # tip
        -length * 0.3,   # notch
        -length * 0.3,   # shaft edge
    ])
    cross = np.array([
        0.0,
        -width * 0.3,
        -width * 0.6,
        0.0,
        width * 0.6,
        width * 0.3,
    ])
    east, north = rotate_to_bearing(along, cross, plume_bearing(wind_direction))
    return offset_to_coordinate(source, east, north)


def ground_touchdown(scenario: ReleaseScenario, yellow_distance: float) -> TouchdownPoint:
    """
    Estimate where the plume centerline first reaches the ground.

    Effective height is the physical release height plus buoyant rise; the
    touchdown distance grows with it and with wind speed, and is kept within
    90% of the yellow zone.

    Args:
        scenario: Release scenario.
        yellow_distance: Yellow zone distance for the same scenario (m).

    Returns:
        TouchdownPoint on the plume axis (no crosswind offset).
    """
    u = scenario.effective_wind_speed
    effective_height = max(0.0, scenario.release_height) + buoyancy_rise(scenario)

    unclamped = effective_height * (TOUCHDOWN_BASE_MULTIPLIER + u * TOUCHDOWN_WIND_SLOPE)
    distance = max(0.0, min(unclamped, yellow_distance * TOUCHDOWN_MAX_FRACTION))

    east, north = rotate_to_bearing(distance, 0.0, plume_bearing(scenario.wind_direction))
    lat, lng = offset_to_coordinate(scenario.source, east, north)
    return TouchdownPoint(
        location=GeoPoint(float(lat), float(lng)),
        downwind_distance=distance,
        effective_height=effective_height,
    )


def zone_footprints(
    scenario: ReleaseScenario,
    zones: HazardZones,
    num_points: int = FOOTPRINT_NUM_POINTS,
) -> Tuple[PlumeFootprint, ...]:
    """One footprint per hazard zone, red first, each with its map colour."""
    footprints = []
    for zone in zones:
        ring = footprint_polygon(
            scenario.source,
            zone.distance,
            scenario.wind_direction,
            scenario.wind_speed,
            num_points,
        )
        ring.setflags(write=False)
        footprints.append(
            PlumeFootprint(
                zone=zone.name,
                distance=zone.distance,
                ring=ring,
                color=ZONE_COLORS[zone.name],
            )
        )
    return tuple(footprints)
