"""Tests for Briggs plume rise."""

import dataclasses

import pytest

from config import DEFAULT_EXIT_VELOCITY_MS, DEFAULT_STACK_DIAMETER_M
from models.plume_rise import (
    buoyancy_flux,
    buoyancy_rise,
    effective_release_height,
    momentum_flux,
    momentum_rise,
    plume_rise,
)


class TestFluxes:
    def test_no_buoyancy_at_ambient_temperature(self, neutral_scenario):
        assert buoyancy_flux(neutral_scenario) == 0.0

    def test_buoyancy_flux_value(self, neutral_scenario):
        hot = dataclasses.replace(neutral_scenario, release_temperature=100.0)
        ts = 100.0 + 273.15
        expected = 9.81 * 10.0 * 1.0 * 80.0 / (4 * ts)
        assert buoyancy_flux(hot) == pytest.approx(expected)

    def test_cold_release_has_negative_buoyancy(self, neutral_scenario):
        cold = dataclasses.replace(neutral_scenario, release_temperature=-30.0)
        assert buoyancy_flux(cold) < 0

    def test_momentum_flux_at_ambient_temperature(self, neutral_scenario):
        # Ta / Ts == 1, so Fm = vs^2 d^2 / 4
        assert momentum_flux(neutral_scenario) == pytest.approx(10.0 ** 2 / 4)


class TestPlumeRise:
    def test_ambient_release_is_momentum_only(self, neutral_scenario):
        """No temperature excess: rise is the small momentum term 3*d*vs/u."""
        assert buoyancy_rise(neutral_scenario) == 0.0
        expected = 3.0 * DEFAULT_STACK_DIAMETER_M * DEFAULT_EXIT_VELOCITY_MS / 5.0
        assert plume_rise(neutral_scenario) == pytest.approx(expected)
        assert plume_rise(neutral_scenario) < neutral_scenario.release_height

    def test_buoyant_plume_rises_higher(self, neutral_scenario):
        hot = dataclasses.replace(neutral_scenario, release_temperature=100.0)
        assert plume_rise(hot) > plume_rise(neutral_scenario)

    def test_higher_wind_reduces_rise(self, neutral_scenario):
        low = dataclasses.replace(neutral_scenario, release_temperature=100.0, wind_speed=2.0)
        high = dataclasses.replace(neutral_scenario, release_temperature=100.0, wind_speed=10.0)
        assert plume_rise(low) > plume_rise(high)

    def test_neutral_buoyant_formula(self, neutral_scenario):
        hot = dataclasses.replace(neutral_scenario, release_temperature=100.0)
        fb = buoyancy_flux(hot)
        expected = 1.6 * fb ** (1 / 3) * 100 ** (2 / 3) / 5.0
        assert buoyancy_rise(hot) == pytest.approx(expected)

    def test_stable_buoyant_formula(self, neutral_scenario):
        for cls in ("E", "F"):
            hot = dataclasses.replace(
                neutral_scenario, release_temperature=100.0, stability_class=cls
            )
            fb = buoyancy_flux(hot)
            expected = 2.6 * (fb / (5.0 * 0.02)) ** (1 / 3)
            assert buoyancy_rise(hot) == pytest.approx(expected)

    def test_cold_release_uses_momentum(self, neutral_scenario):
        cold = dataclasses.replace(neutral_scenario, release_temperature=-30.0)
        assert buoyancy_rise(cold) == 0.0
        assert plume_rise(cold) == pytest.approx(momentum_rise(cold))

    def test_stack_geometry_overrides_defaults(self, neutral_scenario):
        s = dataclasses.replace(neutral_scenario, stack_diameter=2.0, exit_velocity=5.0)
        assert plume_rise(s) == pytest.approx(3.0 * 2.0 * 5.0 / 5.0)

    def test_calm_wind_is_floored(self, neutral_scenario):
        calm = dataclasses.replace(neutral_scenario, wind_speed=0.0)
        floor = dataclasses.replace(neutral_scenario, wind_speed=0.5)
        assert plume_rise(calm) == pytest.approx(plume_rise(floor))
        assert plume_rise(calm) == pytest.approx(60.0)

    def test_rise_is_never_negative(self, neutral_scenario):
        s = dataclasses.replace(neutral_scenario, exit_velocity=-4.0)
        assert plume_rise(s) == 0.0
        for scenario in (neutral_scenario, dataclasses.replace(neutral_scenario, exit_velocity=0.0)):
            assert plume_rise(scenario) >= 0.0

    def test_effective_height(self, neutral_scenario):
        assert effective_release_height(neutral_scenario) == pytest.approx(10.0 + 6.0)
