"""Shared fixtures for the Chemical Release Hazard Geometry test suite."""

import sys
import os
import pytest

# Ensure project root is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


@pytest.fixture
def neutral_scenario():
    """1 kg/s ammonia, 10 m stack, 5 m/s, class D, release at ambient temperature."""
    from validation.scenarios import scenario_neutral_stack
    return scenario_neutral_stack()


@pytest.fixture
def hot_scenario():
    """Buoyant sulfur dioxide stack release."""
    from validation.scenarios import scenario_hot_stack
    return scenario_hot_stack()


@pytest.fixture
def ground_scenario():
    """Ground-level chlorine leak with no momentum or buoyancy."""
    from validation.scenarios import scenario_ground_chlorine
    return scenario_ground_chlorine()


@pytest.fixture
def reference_scenarios():
    """Every reference release scenario."""
    from validation.scenarios import all_scenarios
    return all_scenarios()


@pytest.fixture
def source():
    """A mid-latitude release location."""
    from models.scenario import GeoPoint
    return GeoPoint(40.7128, -74.006)
