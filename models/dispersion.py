"""
Pasquill-Gifford Dispersion Coefficients.

Lateral (sigma_y) and vertical (sigma_z) plume spread as power-law functions
of downwind distance, one coefficient set per stability class:

    sigma_y = a_y * x_km^0.894          * 1000
    sigma_z = a_z * x_km^p(class)       * 1000

with p = 0.92 for A-B, 0.78 for C-D and 0.67 for E-F.  Distances go in and
come out in meters; the fits themselves are expressed in kilometers.

Unknown class symbols use the neutral class D (coefficient and exponent).
"""

import numpy as np

from config import (
    SIGMA_Y_COEFFICIENTS,
    SIGMA_Y_EXPONENT,
    SIGMA_Z_COEFFICIENTS,
    SIGMA_Z_EXPONENTS,
    METERS_PER_KM,
)
from models.scenario import normalize_stability_class


def _distance_km(distance):
    # Upwind distances have no plume; clamp so the power law stays real
    return np.maximum(np.asarray(distance, dtype=float), 0.0) / METERS_PER_KM


def _as_output(value, distance):
    """Return a plain float for scalar input, an array otherwise."""
    if np.ndim(distance) == 0:
        return float(value)
    return value


def sigma_y(distance, stability_class: str):
    """
    Horizontal dispersion coefficient.

    Args:
        distance: Downwind distance(s) in meters (scalar or array).
        stability_class: Pasquill-Gifford class A-F.

    Returns:
        sigma_y in meters, same shape as distance.
    """
    sc = normalize_stability_class(stability_class)
    a = SIGMA_Y_COEFFICIENTS[sc]
    value = a * np.power(_distance_km(distance), SIGMA_Y_EXPONENT) * METERS_PER_KM
    return _as_output(value, distance)


def sigma_z(distance, stability_class: str):
    """
    Vertical dispersion coefficient.

    Args:
        distance: Downwind distance(s) in meters (scalar or array).
        stability_class: Pasquill-Gifford class A-F.

    Returns:
        sigma_z in meters, same shape as distance.
    """
    sc = normalize_stability_class(stability_class)
    a = SIGMA_Z_COEFFICIENTS[sc]
    p = SIGMA_Z_EXPONENTS[sc]
    value = a * np.power(_distance_km(distance), p) * METERS_PER_KM
    return _as_output(value, distance)


def compute_sigma(distance, stability_class: str):
    """
    Compute lateral and vertical dispersion parameters together.

    Args:
        distance: Downwind distance(s) in meters.
        stability_class: Pasquill-Gifford class A-F.

    Returns:
        (sigma_y, sigma_z) in meters.
    """
    return sigma_y(distance, stability_class), sigma_z(distance, stability_class)
