"""Tests for the maximum-concentration scan and threshold bisection."""

import dataclasses

import pytest

from config import MAX_SEARCH_DEFAULT_DISTANCE_M, THRESHOLD_SEARCH_MAX_M
from models.gaussian_plume import concentration
from models.search import max_concentration, scan_distances, threshold_distance


class TestScanDistances:
    """The pinned geometric distance grid."""

    def test_grid_bounds_and_length(self):
        distances = scan_distances()
        assert len(distances) == 90
        assert distances[0] == 10.0
        assert distances[-1] <= 50000.0
        assert distances[-1] * 1.1 > 50000.0

    def test_grid_is_geometric(self):
        distances = scan_distances()
        for a, b in zip(distances, distances[1:]):
            assert b / a == pytest.approx(1.1)

    def test_grid_is_reproducible(self):
        assert scan_distances() == scan_distances(10.0, 50000.0, 1.1)

    def test_invalid_ratio_raises(self):
        with pytest.raises(ValueError, match="ratio"):
            scan_distances(10.0, 100.0, 1.0)


class TestMaxConcentration:
    """Grid search for the peak centerline concentration."""

    def test_neutral_stack_reference(self, neutral_scenario):
        """16 m effective height in class D peaks roughly 110 m downwind."""
        max_conc, distance = max_concentration(neutral_scenario)
        assert 150.0 < max_conc < 200.0
        assert 80.0 <= distance <= 150.0

    def test_distance_is_a_grid_point(self, reference_scenarios):
        grid = scan_distances()
        for scenario in reference_scenarios.values():
            _, distance = max_concentration(scenario)
            assert distance in grid

    def test_max_dominates_grid_samples(self, neutral_scenario):
        max_conc, _ = max_concentration(neutral_scenario)
        for x in scan_distances():
            assert concentration(neutral_scenario, x) <= max_conc

    def test_ground_release_peaks_at_first_sample(self, ground_scenario):
        """With no effective height the centerline falls from the source outward."""
        _, distance = max_concentration(ground_scenario)
        assert distance == 10.0

    def test_higher_release_peaks_farther(self, neutral_scenario):
        tall = dataclasses.replace(neutral_scenario, release_height=60.0)
        _, near = max_concentration(neutral_scenario)
        _, far = max_concentration(tall)
        assert far > near

    def test_no_emission_gives_default(self, neutral_scenario):
        s = dataclasses.replace(neutral_scenario, emission_rate=0.0)
        assert max_concentration(s) == (0.0, MAX_SEARCH_DEFAULT_DISTANCE_M)

    def test_refine_never_worse_than_grid(self, reference_scenarios):
        for scenario in reference_scenarios.values():
            grid_conc, grid_dist = max_concentration(scenario)
            refined_conc, refined_dist = max_concentration(scenario, refine=True)
            assert refined_conc >= grid_conc
            assert grid_dist / 1.1 <= refined_dist <= grid_dist * 1.1


class TestThresholdDistance:
    """Bisection for where the centerline falls to a threshold."""

    def test_unreachable_threshold_gives_zero(self, neutral_scenario):
        max_conc, _ = max_concentration(neutral_scenario)
        assert threshold_distance(neutral_scenario, max_conc * 2) == 0

    def test_returns_whole_meters(self, neutral_scenario):
        assert isinstance(threshold_distance(neutral_scenario, 5.0), int)

    def test_brackets_the_crossing(self, neutral_scenario):
        """Within the bisection tolerance of where the curve crosses the threshold."""
        threshold = 1.0
        d = threshold_distance(neutral_scenario, threshold)
        assert d > 0
        assert concentration(neutral_scenario, d + 1) < threshold
        assert concentration(neutral_scenario, d - 11) > threshold

    def test_lower_threshold_reaches_farther(self, neutral_scenario):
        distances = [threshold_distance(neutral_scenario, t) for t in (100.0, 20.0, 5.0, 1.0)]
        assert all(a <= b for a, b in zip(distances, distances[1:]))
        assert distances[-1] > distances[0]

    def test_threshold_beyond_search_range(self, neutral_scenario):
        """A threshold still exceeded at 100 km reports the bracket edge."""
        assert threshold_distance(neutral_scenario, 1e-9) == int(THRESHOLD_SEARCH_MAX_M)

    def test_not_before_distance_of_max(self, reference_scenarios):
        for scenario in reference_scenarios.values():
            max_conc, distance_of_max = max_concentration(scenario)
            d = threshold_distance(scenario, max_conc * 0.5)
            assert d >= distance_of_max - 0.5
