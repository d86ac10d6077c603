"""
End-to-end hazard assessment for a single release.

Runs the full data flow for one scenario:

    scenario -> max concentration -> hazard zones -> footprints
             -> wind arrow -> ground touchdown

and bundles the results for the map and chart layers.  Every stage is
recomputed on each call.  Pass a PerformanceMonitor to time the stages.
"""

import logging
from contextlib import nullcontext
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from data.chemicals import ChemicalLookup
from geometry.footprint import (
    PlumeFootprint,
    TouchdownPoint,
    ground_touchdown,
    wind_arrow_polygon,
    zone_footprints,
)
from models.hazard_zones import HazardZones, hazard_zones
from models.plume_rise import plume_rise
from models.scenario import ReleaseScenario
from models.search import max_concentration
from monitoring.performance import PerformanceMonitor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HazardAssessment:
    """Everything the visualization layer needs for one release."""

    scenario: ReleaseScenario
    plume_rise: float               # m
    max_concentration: float        # mg/m^3
    distance_of_max: float          # m
    zones: HazardZones
    footprints: Tuple[PlumeFootprint, ...]
    wind_arrow: np.ndarray          # (6, 2) [lat, lng], read-only
    touchdown: TouchdownPoint


def assess_release(
    scenario: ReleaseScenario,
    lookup: Optional[ChemicalLookup] = None,
    monitor: Optional[PerformanceMonitor] = None,
) -> HazardAssessment:
    """
    Compute zones, footprints and touchdown for a release.

    Args:
        scenario: Release scenario.
        lookup: Chemical property source; the bundled table if None.
        monitor: Optional monitor; each stage is measured under its own name.

    Returns:
        HazardAssessment.
    """
    def stage(name):
        if monitor is None:
            return nullcontext()
        return monitor.measure(name, chemical=scenario.chemical)

    with stage("max_concentration"):
        max_conc, distance_of_max = max_concentration(scenario)
    with stage("hazard_zones"):
        zones = hazard_zones(scenario, lookup)
    with stage("footprints"):
        footprints = zone_footprints(scenario, zones)
        arrow = wind_arrow_polygon(scenario.source, scenario.wind_direction)
        arrow.setflags(write=False)
    with stage("touchdown"):
        touchdown = ground_touchdown(scenario, zones.yellow.distance)

    logger.info(
        "%s release %.3g kg/s: red %d m, orange %d m, yellow %d m",
        scenario.chemical, scenario.emission_rate,
        zones.red.distance, zones.orange.distance, zones.yellow.distance,
    )
    return HazardAssessment(
        scenario=scenario,
        plume_rise=plume_rise(scenario),
        max_concentration=max_conc,
        distance_of_max=distance_of_max,
        zones=zones,
        footprints=footprints,
        wind_arrow=arrow,
        touchdown=touchdown,
    )
