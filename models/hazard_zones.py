"""
Hazard Zone Model.

Maps chemical exposure guidelines onto three nested hazard zones:

    red     AEGL-3  life-threatening
    orange  AEGL-2  irreversible / serious effects
    yellow  AEGL-1  notable discomfort

Each zone is the downwind distance at which ground-level centerline
concentration falls to the tier's threshold.  Because concentration falls
with distance, the weakest threshold reaches farthest:

    red.distance <= orange.distance <= yellow.distance
"""

import logging
from dataclasses import asdict, dataclass
from typing import Dict, Iterator, NamedTuple, Optional, Tuple

from config import (
    DEFAULT_ZONE_THRESHOLDS,
    DOSE_SEVERITY_BANDS,
    IDLH_TIER_RATIOS,
    ZONE_NAMES,
)
from data.chemicals import BuiltinChemicalLookup, ChemicalLookup, mg_per_ppm
from models.dispersion import compute_sigma
from models.scenario import ReleaseScenario
from models.search import threshold_distance

logger = logging.getLogger(__name__)

_TIER_FIELDS = {"red": "aegl3", "orange": "aegl2", "yellow": "aegl1"}


@dataclass(frozen=True)
class HazardZone:
    """One hazard zone: how far a threshold concentration reaches downwind."""

    name: str
    distance: int        # m
    threshold: float     # mg/m^3
    sigma_y: float       # m, at the zone distance
    sigma_z: float       # m, at the zone distance


@dataclass(frozen=True)
class HazardZones:
    """The red/orange/yellow zones for one scenario."""

    red: HazardZone
    orange: HazardZone
    yellow: HazardZone

    def __iter__(self) -> Iterator[HazardZone]:
        return iter((self.red, self.orange, self.yellow))

    def as_dict(self) -> Dict[str, dict]:
        return {zone.name: asdict(zone) for zone in self}


def zone_thresholds(
    chemical: str,
    lookup: Optional[ChemicalLookup] = None,
) -> Tuple[float, float, float]:
    """
    Threshold concentrations for the red, orange and yellow zones.

    Unknown chemicals get DEFAULT_ZONE_THRESHOLDS (mg/m^3).  For a known
    chemical each tier is taken from its AEGL value (ppm); a missing tier
    (None or 0) is derived from IDLH via IDLH_TIER_RATIOS, and if IDLH is
    missing too, from the default value read as ppm.  Thresholds are then
    forced non-increasing from red to yellow.

    Args:
        chemical: Case-insensitive chemical identifier.
        lookup: Chemical property source; the bundled table if None.

    Returns:
        (red, orange, yellow) thresholds in mg/m^3.
    """
    record = (lookup or BuiltinChemicalLookup()).get(chemical)
    if record is None:
        logger.debug("No record for chemical %r, using default thresholds", chemical)
        return tuple(DEFAULT_ZONE_THRESHOLDS[name] for name in ZONE_NAMES)

    factor = mg_per_ppm(record.molecular_weight)
    thresholds = []
    for name in ZONE_NAMES:
        ppm = getattr(record, _TIER_FIELDS[name])
        if not ppm:
            ppm = (record.idlh or 0) * IDLH_TIER_RATIOS[name]
        if not ppm:
            ppm = DEFAULT_ZONE_THRESHOLDS[name]
        thresholds.append(ppm * factor)

    red, orange, yellow = thresholds
    if not (red >= orange >= yellow):
        logger.warning(
            "Exposure tiers for %s are not ordered (%.4g, %.4g, %.4g mg/m3); "
            "capping weaker tiers at the stronger ones",
            record.name, red, orange, yellow,
        )
        orange = min(orange, red)
        yellow = min(yellow, orange)
    return red, orange, yellow


def _zone(name: str, distance: int, threshold: float, stability_class: str) -> HazardZone:
    sy, sz = compute_sigma(distance, stability_class)
    return HazardZone(
        name=name,
        distance=distance,
        threshold=threshold,
        sigma_y=sy,
        sigma_z=sz,
    )


def hazard_zones(
    scenario: ReleaseScenario,
    lookup: Optional[ChemicalLookup] = None,
) -> HazardZones:
    """
    Compute the three hazard zones for a release.

    Args:
        scenario: Release scenario; its chemical selects the thresholds.
        lookup: Chemical property source; the bundled table if None.

    Returns:
        HazardZones with distance, threshold and sigmas for each zone.
        A zone whose threshold is never reached has distance 0.
    """
    thresholds = zone_thresholds(scenario.chemical, lookup)
    zones = {}
    for name, threshold in zip(ZONE_NAMES, thresholds):
        distance = threshold_distance(scenario, threshold)
        zones[name] = _zone(name, distance, threshold, scenario.stability_class)
    return HazardZones(**zones)


class HealthImpact(NamedTuple):
    """Severity rating for one exposure."""

    severity: str       # "low", "medium", "high" or "fatal"
    description: str


# Most to least severe, each with the AEGL tier that triggers it
_IMPACT_TIERS = (
    ("fatal", "aegl3", "AEGL-3", "Life-threatening health effects or death possible"),
    ("high", "aegl2", "AEGL-2", "Long-lasting adverse health effects possible"),
    ("medium", "aegl1", "AEGL-1", "Notable discomfort, irritation, or non-disabling effects"),
)

_DOSE_DESCRIPTIONS = {
    "fatal": "Potentially fatal exposure",
    "high": "Serious health effects",
    "medium": "Moderate health effects",
    "low": "Minor irritation possible",
}


def health_impact(
    concentration: float,
    exposure_minutes: float,
    chemical: str,
    lookup: Optional[ChemicalLookup] = None,
) -> HealthImpact:
    """
    Rate an exposure against the chemical's AEGL tiers.

    The concentration is converted to ppm and compared with AEGL-3, AEGL-2
    and AEGL-1 in turn; a tier that is not established (None or 0) is
    skipped.  Chemicals without a record are rated on dose instead
    (concentration times exposure time) using DOSE_SEVERITY_BANDS.

    Args:
        concentration: Exposure concentration in mg/m^3.
        exposure_minutes: Exposure duration in minutes.
        chemical: Case-insensitive chemical identifier.
        lookup: Chemical property source; the bundled table if None.

    Returns:
        HealthImpact with severity and a plain-language description.
    """
    record = (lookup or BuiltinChemicalLookup()).get(chemical)
    if record is not None:
        ppm = concentration / mg_per_ppm(record.molecular_weight)
        for severity, field_name, label, effect in _IMPACT_TIERS:
            limit = getattr(record, field_name)
            if limit and ppm > limit:
                return HealthImpact(severity, f"Exceeds {label} ({limit:g} ppm): {effect}")
        return HealthImpact("low", "Below all applicable exposure guidelines")

    dose = concentration * exposure_minutes
    for limit, severity in DOSE_SEVERITY_BANDS:
        if dose > limit:
            return HealthImpact(severity, _DOSE_DESCRIPTIONS[severity])
    return HealthImpact("low", _DOSE_DESCRIPTIONS["low"])
