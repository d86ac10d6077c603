"""
Reference release scenarios for validation.

Each scenario function returns a ReleaseScenario plus, through its
docstring, the behaviour it is meant to exercise.  They double as fixtures
for the test suite.
"""

from typing import Dict

from models.scenario import GeoPoint, ReleaseScenario

NEW_YORK = GeoPoint(40.7128, -74.006)


def scenario_neutral_stack() -> ReleaseScenario:
    """Scenario A: 1 kg/s ammonia from a 10 m stack, 5 m/s south wind, class D.

    Release at ambient temperature, so plume rise is momentum-only.
    """
    return ReleaseScenario(
        emission_rate=1.0,
        release_height=10.0,
        wind_speed=5.0,
        wind_direction=180.0,
        stability_class="D",
        ambient_temperature=20.0,
        release_temperature=20.0,
        source=NEW_YORK,
        chemical="ammonia",
    )


def scenario_hot_stack() -> ReleaseScenario:
    """Scenario B: hot (150 degC) sulfur dioxide stack, 3 m/s west wind, class C.

    Buoyancy-dominated rise pushes the ground touchdown downwind.
    """
    return ReleaseScenario(
        emission_rate=2.0,
        release_height=30.0,
        wind_speed=3.0,
        wind_direction=270.0,
        stability_class="C",
        ambient_temperature=15.0,
        release_temperature=150.0,
        source=GeoPoint(51.5074, -0.1278),
        chemical="sulfur dioxide",
        stack_diameter=2.0,
        exit_velocity=15.0,
    )


def scenario_ground_chlorine() -> ReleaseScenario:
    """Scenario C: ground-level chlorine leak at night, 1.5 m/s, class F.

    Toxic chemical in stable air: long hazard zones, no touchdown offset.
    """
    return ReleaseScenario(
        emission_rate=0.5,
        release_height=0.0,
        wind_speed=1.5,
        wind_direction=45.0,
        stability_class="F",
        ambient_temperature=10.0,
        release_temperature=10.0,
        source=GeoPoint(29.7604, -95.3698),
        chemical="chlorine",
        exit_velocity=0.0,
    )


def scenario_unknown_chemical() -> ReleaseScenario:
    """Scenario D: unlisted chemical in strong wind, class A.

    Default thresholds apply; high wind gives the narrowest footprint.
    """
    return ReleaseScenario(
        emission_rate=0.2,
        release_height=5.0,
        wind_speed=9.0,
        wind_direction=0.0,
        stability_class="A",
        ambient_temperature=30.0,
        release_temperature=30.0,
        source=GeoPoint(-33.8688, 151.2093),
        chemical="unobtainium",
    )


def all_scenarios() -> Dict[str, ReleaseScenario]:
    """Every reference scenario keyed by a short name."""
    return {
        "neutral_stack": scenario_neutral_stack(),
        "hot_stack": scenario_hot_stack(),
        "ground_chlorine": scenario_ground_chlorine(),
        "unknown_chemical": scenario_unknown_chemical(),
    }
