"""
Maximum Concentration and Threshold Distance Search.

The maximum ground-level centerline concentration is located with a coarse
geometric grid scan (10 m to 50 km, ratio 1.1).  The grid is pinned in
config: threshold distances downstream depend on the exact sample points.

Threshold distances are found by bisection on the falling branch of the
centerline curve, between the distance of maximum concentration and 100 km.
Concentration is monotone non-increasing there, so bisection is valid; the
rising branch between the source and the maximum is deliberately ignored.
"""

import logging
import math
from functools import lru_cache
from typing import Tuple

import numpy as np
from scipy.optimize import minimize_scalar

from config import (
    MAX_SEARCH_START_M,
    MAX_SEARCH_END_M,
    MAX_SEARCH_RATIO,
    MAX_SEARCH_DEFAULT_DISTANCE_M,
    THRESHOLD_SEARCH_MAX_M,
    THRESHOLD_SEARCH_TOLERANCE_M,
)
from models.gaussian_plume import concentration, concentration_field
from models.scenario import ReleaseScenario

logger = logging.getLogger(__name__)


@lru_cache(maxsize=8)
def scan_distances(
    start: float = MAX_SEARCH_START_M,
    end: float = MAX_SEARCH_END_M,
    ratio: float = MAX_SEARCH_RATIO,
) -> Tuple[float, ...]:
    """
    Geometric sequence of downwind distances scanned for the maximum.

    Built by repeated multiplication so the sample points are reproducible.
    """
    if ratio <= 1.0:
        raise ValueError("Grid ratio must be > 1")
    distances = []
    x = start
    while x <= end:
        distances.append(x)
        x *= ratio
    return tuple(distances)


def _refine_maximum(scenario: ReleaseScenario, distance: float, ratio: float) -> Tuple[float, float]:
    """Polish a grid maximum with a bounded scalar optimizer in its neighbouring cells."""
    result = minimize_scalar(
        lambda x: -concentration(scenario, x, 0.0, 0.0),
        bounds=(distance / ratio, distance * ratio),
        method="bounded",
    )
    return -float(result.fun), float(result.x)


def max_concentration(
    scenario: ReleaseScenario,
    refine: bool = False,
    start: float = MAX_SEARCH_START_M,
    end: float = MAX_SEARCH_END_M,
    ratio: float = MAX_SEARCH_RATIO,
) -> Tuple[float, float]:
    """
    Maximum ground-level centerline concentration and where it occurs.

    Args:
        scenario: Release scenario.
        refine: Polish the grid maximum with scipy's bounded minimizer.
                Off by default; the pinned grid result is the reference.
        start, end, ratio: Grid bounds and geometric step.

    Returns:
        (max_concentration in mg/m^3, distance_of_max in meters).
        (0.0, MAX_SEARCH_DEFAULT_DISTANCE_M) if no sample is positive.
    """
    distances = np.array(scan_distances(start, end, ratio))
    values = concentration_field(scenario, distances, np.zeros_like(distances))

    max_conc = 0.0
    max_dist = MAX_SEARCH_DEFAULT_DISTANCE_M
    # First strictly greater sample wins, as in a sequential scan
    idx = int(np.argmax(values))
    if values[idx] > max_conc:
        max_conc = float(values[idx])
        max_dist = float(distances[idx])

    if refine and max_conc > 0:
        refined_conc, refined_dist = _refine_maximum(scenario, max_dist, ratio)
        if refined_conc > max_conc:
            max_conc, max_dist = refined_conc, refined_dist

    logger.debug(
        "Max concentration %.4g mg/m3 at %.1f m (class %s, u=%.2f m/s)",
        max_conc, max_dist, scenario.stability_class, scenario.effective_wind_speed,
    )
    return max_conc, max_dist


def threshold_distance(
    scenario: ReleaseScenario,
    threshold: float,
    upper_bound: float = THRESHOLD_SEARCH_MAX_M,
    tolerance: float = THRESHOLD_SEARCH_TOLERANCE_M,
) -> int:
    """
    Downwind distance at which centerline concentration falls to a threshold.

    Args:
        scenario: Release scenario.
        threshold: Concentration threshold in mg/m^3.
        upper_bound: Far edge of the bisection bracket (m).
        tolerance: Bracket width at which the search stops (m).

    Returns:
        Distance in whole meters (upper bracket edge, rounded half up).
        0 if the maximum concentration never reaches the threshold.
    """
    max_conc, distance_of_max = max_concentration(scenario)
    if max_conc < threshold:
        return 0

    low = distance_of_max
    high = upper_bound
    while high - low > tolerance:
        mid = (low + high) / 2.0
        if concentration(scenario, mid, 0.0, 0.0) > threshold:
            low = mid
        else:
            high = mid

    distance = int(math.floor(high + 0.5))
    logger.debug("Threshold %.4g mg/m3 reached out to %d m", threshold, distance)
    return distance
