"""
Gaussian Plume Dispersion Model.

Implements the standard Gaussian plume equation for a continuous elevated
point source with total ground reflection, using Pasquill-Gifford
dispersion coefficients and Briggs plume rise.

Convention:
  - Coordinates are plume-relative: downwind distance along the plume axis,
    crosswind offset from the centerline, height above ground.
  - Emission rate in kg/s, distances in meters, concentrations in mg/m^3.
"""

from typing import List, NamedTuple

import numpy as np

from config import (
    KG_TO_G,
    G_M3_TO_MG_M3,
    PROFILE_NUM_POINTS,
    PROFILE_START_M,
    PROFILE_MAX_DISTANCE_M,
)
from models.dispersion import compute_sigma
from models.plume_rise import effective_release_height
from models.scenario import ReleaseScenario


class ConcentrationSample(NamedTuple):
    """Concentration at one plume-relative receptor position."""

    distance: float
    crosswind_offset: float
    height: float
    concentration: float


def concentration_field(
    scenario: ReleaseScenario,
    downwind: np.ndarray,
    crosswind: np.ndarray,
    height: float = 0.0,
) -> np.ndarray:
    """
    Calculate concentration at many plume-relative receptor points.

    Uses the Gaussian plume equation with ground reflection:
        C = (Q / (2*pi*u*sigma_y*sigma_z)) *
            exp(-0.5*(y/sigma_y)^2) *
            [exp(-0.5*((z-H)/sigma_z)^2) + exp(-0.5*((z+H)/sigma_z)^2)]

    where H is the effective release height (physical height + plume rise).

    Args:
        scenario: Release scenario.
        downwind: Downwind distances in meters (any shape).
        crosswind: Crosswind offsets in meters, broadcastable to downwind.
        height: Receptor height above ground (meters), scalar.

    Returns:
        Concentrations in mg/m^3, broadcast shape of downwind and crosswind.
        Exactly zero wherever downwind <= 0.
    """
    downwind, crosswind = np.broadcast_arrays(
        np.asarray(downwind, dtype=float), np.asarray(crosswind, dtype=float)
    )
    concentration = np.zeros(downwind.shape, dtype=float)

    sigma_y, sigma_z = compute_sigma(downwind, scenario.stability_class)
    sigma_y = np.asarray(sigma_y)
    sigma_z = np.asarray(sigma_z)

    # No upwind dispersion; degenerate sigmas carry no plume either
    mask = (downwind > 0) & (sigma_y > 0) & (sigma_z > 0)
    if not np.any(mask):
        return concentration

    sy = sigma_y[mask]
    sz = sigma_z[mask]
    cw = crosswind[mask]
    u = scenario.effective_wind_speed
    q = scenario.emission_rate * KG_TO_G
    H = effective_release_height(scenario)
    z = height

    norm = q / (2.0 * np.pi * u * sy * sz)
    lateral = np.exp(-0.5 * (cw / sy) ** 2)
    # Image source at -H enforces zero flux through the ground
    vertical = np.exp(-0.5 * ((z - H) / sz) ** 2) + np.exp(
        -0.5 * ((z + H) / sz) ** 2
    )

    concentration[mask] = norm * lateral * vertical * G_M3_TO_MG_M3
    return np.maximum(concentration, 0.0)


def concentration(
    scenario: ReleaseScenario,
    downwind_distance: float,
    crosswind_offset: float = 0.0,
    height: float = 0.0,
) -> float:
    """
    Concentration at a single receptor.

    Args:
        scenario: Release scenario.
        downwind_distance: Distance along the plume axis (m).
        crosswind_offset: Distance from the centerline (m).
        height: Receptor height above ground (m), 0 for ground level.

    Returns:
        Concentration in mg/m^3 (0 for receptors at or upwind of the source).
    """
    if downwind_distance <= 0:
        return 0.0
    value = concentration_field(
        scenario, np.array([downwind_distance]), np.array([crosswind_offset]), height
    )
    return float(value[0])


def concentration_profile(
    scenario: ReleaseScenario,
    num_points: int = PROFILE_NUM_POINTS,
    max_distance: float = PROFILE_MAX_DISTANCE_M,
    start_distance: float = PROFILE_START_M,
) -> List[ConcentrationSample]:
    """
    Ground-level centerline concentration on a log-spaced distance axis.

    Args:
        scenario: Release scenario.
        num_points: Number of samples.
        max_distance: Last sampled distance (m).
        start_distance: First sampled distance (m).

    Returns:
        List of ConcentrationSample, distances rounded to whole meters.
    """
    distances = np.logspace(np.log10(start_distance), np.log10(max_distance), num_points)
    values = concentration_field(scenario, distances, np.zeros_like(distances))
    return [
        ConcentrationSample(
            distance=float(round(x)),
            crosswind_offset=0.0,
            height=0.0,
            concentration=float(c),
        )
        for x, c in zip(distances, values)
    ]
