"""
Plume Rise Model.

Effective release height gain from buoyancy and momentum, following the
Briggs (1975) plume rise equations:

    Fb = g * vs * d^2 * (Ts - Ta) / (4 * Ts)      buoyancy flux  (m^4/s^3)
    Fm = vs^2 * d^2 * Ta / (4 * Ts)               momentum flux  (m^4/s^2)

Warm releases with positive buoyancy flux rise buoyantly; everything else is
treated as a momentum jet.  Stack diameter and exit velocity default to the
values in config when the scenario does not give them.
"""

from config import (
    GRAVITY,
    KELVIN_OFFSET,
    DEFAULT_STACK_DIAMETER_M,
    DEFAULT_EXIT_VELOCITY_MS,
    BUOYANT_RISE_COEFF,
    BUOYANT_RISE_DISTANCE_M,
    STABLE_RISE_COEFF,
    STABLE_STABILITY_PARAM,
    STABLE_CLASSES,
    MOMENTUM_RISE_COEFF,
)
from models.scenario import ReleaseScenario


def _stack_geometry(scenario: ReleaseScenario):
    d = scenario.stack_diameter if scenario.stack_diameter is not None else DEFAULT_STACK_DIAMETER_M
    vs = scenario.exit_velocity if scenario.exit_velocity is not None else DEFAULT_EXIT_VELOCITY_MS
    return d, vs


def _temperatures_k(scenario: ReleaseScenario):
    return (
        scenario.release_temperature + KELVIN_OFFSET,
        scenario.ambient_temperature + KELVIN_OFFSET,
    )


def buoyancy_flux(scenario: ReleaseScenario) -> float:
    """Buoyancy flux Fb in m^4/s^3 (negative for releases colder than ambient)."""
    d, vs = _stack_geometry(scenario)
    ts, ta = _temperatures_k(scenario)
    return GRAVITY * vs * d * d * (ts - ta) / (4.0 * ts)


def momentum_flux(scenario: ReleaseScenario) -> float:
    """Momentum flux Fm in m^4/s^2."""
    d, vs = _stack_geometry(scenario)
    ts, ta = _temperatures_k(scenario)
    return vs * vs * d * d * ta / (4.0 * ts)


def buoyancy_rise(scenario: ReleaseScenario) -> float:
    """
    Buoyancy-driven plume rise in meters.

    Zero unless the release is warmer than ambient with positive buoyancy
    flux.  Neutral/unstable classes (A-D) use the 1/3-power rise scaled by
    wind speed; stable classes (E-F) use the 1/3-power rise with a fixed
    stability parameter.
    """
    delta_t = scenario.release_temperature - scenario.ambient_temperature
    fb = buoyancy_flux(scenario)
    if delta_t <= 0 or fb <= 0:
        return 0.0

    u = scenario.effective_wind_speed
    if scenario.stability_class in STABLE_CLASSES:
        rise = STABLE_RISE_COEFF * (fb / (u * STABLE_STABILITY_PARAM)) ** (1.0 / 3.0)
    else:
        rise = (
            BUOYANT_RISE_COEFF
            * fb ** (1.0 / 3.0)
            * BUOYANT_RISE_DISTANCE_M ** (2.0 / 3.0)
            / u
        )
    return max(0.0, rise)


def momentum_rise(scenario: ReleaseScenario) -> float:
    """Momentum-dominated plume rise (3 * d * vs / u) in meters."""
    d, vs = _stack_geometry(scenario)
    return max(0.0, MOMENTUM_RISE_COEFF * d * vs / scenario.effective_wind_speed)


def plume_rise(scenario: ReleaseScenario) -> float:
    """
    Plume rise above the physical release height.

    Args:
        scenario: The release scenario.

    Returns:
        Rise in meters, always >= 0.
    """
    rise = buoyancy_rise(scenario)
    if rise > 0:
        return rise
    return momentum_rise(scenario)


def effective_release_height(scenario: ReleaseScenario) -> float:
    """Physical release height plus plume rise (m)."""
    return scenario.release_height + plume_rise(scenario)
