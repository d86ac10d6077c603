"""
Flat-Earth projection between local metric offsets and geographic coordinates.

Valid at the scales hazard zones reach (tens of kilometers).  Footprints,
the wind arrow and the touchdown marker all go through these functions so
they line up on a map.

Bearings are geographic: 0 = North, 90 = East, clockwise.
"""

import numpy as np

from config import METERS_PER_DEGREE_LAT
from models.scenario import GeoPoint


def plume_bearing(wind_direction: float) -> float:
    """Bearing the plume travels toward, given the meteorological wind direction."""
    return (wind_direction + 180.0) % 360.0


def rotate_to_bearing(along, cross, bearing: float):
    """
    Rotate plume-frame offsets onto East/North axes.

    Args:
        along: Offsets along the bearing (m), scalar or array.
        cross: Offsets perpendicular to it (m), positive to the left.
        bearing: Geographic bearing of the along axis (degrees).

    Returns:
        (east, north) offsets in meters.
    """
    rad = np.radians(bearing)
    along = np.asarray(along, dtype=float)
    cross = np.asarray(cross, dtype=float)
    east = along * np.sin(rad) - cross * np.cos(rad)
    north = along * np.cos(rad) + cross * np.sin(rad)
    return east, north


def offset_to_coordinate(origin: GeoPoint, east, north) -> np.ndarray:
    """
    Project East/North offsets around an origin to latitude/longitude.

    Args:
        origin: Reference coordinate.
        east, north: Offsets in meters, scalars or arrays of equal shape.

    Returns:
        (..., 2) array of [lat, lng].
    """
    lat0, lng0 = origin
    dlat = np.asarray(north, dtype=float) / METERS_PER_DEGREE_LAT
    dlng = np.asarray(east, dtype=float) / (
        METERS_PER_DEGREE_LAT * np.cos(np.radians(lat0))
    )
    return np.stack([lat0 + dlat, lng0 + dlng], axis=-1)


def coordinate_to_offset(origin: GeoPoint, coords) -> tuple:
    """
    Inverse of offset_to_coordinate.

    Args:
        origin: Reference coordinate.
        coords: (..., 2) array of [lat, lng].

    Returns:
        (east, north) offsets in meters.
    """
    lat0, lng0 = origin
    coords = np.asarray(coords, dtype=float)
    north = (coords[..., 0] - lat0) * METERS_PER_DEGREE_LAT
    east = (coords[..., 1] - lng0) * METERS_PER_DEGREE_LAT * np.cos(np.radians(lat0))
    return east, north
