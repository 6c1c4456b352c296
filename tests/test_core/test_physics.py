# Tests for race formulas

import math

import pytest
import numpy as np
from race_formulas.core.errors import InvalidInputError
from race_formulas.core.math_utils import sigmoid
from race_formulas.core.physics import (
    tire_grip_level,
    lap_time_impact,
    fuel_save_required,
    aero_speeds,
    overtaking_probability,
    average_pace,
)


class TestLapTimeImpact:

    def test_reference_case(self):
        """1.0 grip, 1% wear over 5 laps: 90 / 1.475."""
        result = lap_time_impact(
            base_grip=1.0,
            tire_wear_rate=0.01,
            laps_completed=5,
            degradation_exponent=1.0,
            reference_lap_time=90.0,
            grip_coefficient=0.5,
        )
        assert result == pytest.approx(90.0 / 1.475)
        assert result == pytest.approx(61.017, abs=1e-3)

    def test_grip_level(self):
        assert tire_grip_level(1.0, 0.01, 5, 1.0) == pytest.approx(0.95)
        assert tire_grip_level(0.95, 0.012, 0, 1.8) == pytest.approx(0.95)

    def test_fresh_tires(self):
        """No laps: grip equals base grip."""
        result = lap_time_impact(0.95, 0.012, 0, 1.8, 78.5, 0.85)
        assert result == pytest.approx(78.5 / (1 + 0.85 * 0.95))

    @pytest.mark.parametrize("exponent", [0.5, 1.0, 1.8, 3.0])
    def test_monotonic_in_laps(self, exponent):
        """More wear never reduces the lap time impact."""
        results = [
            lap_time_impact(1.0, 0.012, laps, exponent, 78.5, 0.85)
            for laps in range(0, 84)
        ]
        assert np.all(np.diff(results) >= 0)

    def test_fully_worn(self):
        """Zero tread: no grip, full reference lap time."""
        result = lap_time_impact(1.0, 0.1, 10, 1.8, 80.0, 0.5)
        assert result == pytest.approx(80.0)

    def test_worn_past_zero_rejected(self):
        with pytest.raises(InvalidInputError):
            lap_time_impact(1.0, 0.1, 11, 1.8, 80.0, 0.5)

    def test_negative_laps_rejected(self):
        with pytest.raises(InvalidInputError):
            tire_grip_level(1.0, 0.01, -1, 1.0)


class TestFuelSaveRequired:

    def test_enough_fuel(self):
        """Fuel covers the remaining laps: nothing to save."""
        assert fuel_save_required(2.0, 0.0, 100.0, 10) == 0.0

    def test_exactly_enough_fuel(self):
        assert fuel_save_required(2.0, 0.0, 20.0, 10) == 0.0

    def test_fuel_short(self):
        """Shortfall is spread over the remaining laps."""
        # per lap 2.2 + 0.0003 * 108.5 = 2.23255, need 2.23255 * 68 = 151.8134
        fuel_per_lap = 2.2 + 0.0003 * 108.5
        shortfall = fuel_per_lap * 68 - 108.5
        result = fuel_save_required(2.2, 0.0003, 108.5, 68)
        assert result > 0
        assert result == pytest.approx(shortfall / 68)

    @pytest.mark.parametrize("laps", [0, -3])
    def test_non_positive_laps_rejected(self, laps):
        with pytest.raises(InvalidInputError):
            fuel_save_required(2.2, 0.0003, 108.5, laps)


class TestAeroSpeeds:

    def test_straight_line_speed(self):
        straight, _ = aero_speeds(0.28, 0.15, 850.0, 1.0, 300.0, 65.0)
        assert straight == pytest.approx(300.0 * (1 - (0.28 + 0.015) * 1.0))

    @pytest.mark.parametrize("damage", [0.0, 0.15, 1.0, 5.0])
    def test_cornering_speed_ignores_damage(self, damage):
        """Downforce loss is a fixed 10% regardless of damage."""
        _, cornering = aero_speeds(0.28, damage, 850.0, 1.0, 300.0, 65.0)
        assert cornering == pytest.approx(65.0 * math.sqrt(0.9))

    def test_damage_slows_straights(self):
        clean, _ = aero_speeds(0.28, 0.0, 850.0, 1.0, 300.0, 65.0)
        damaged, _ = aero_speeds(0.28, 1.0, 850.0, 1.0, 300.0, 65.0)
        assert damaged < clean

    def test_zero_downforce_rejected(self):
        with pytest.raises(InvalidInputError):
            aero_speeds(0.28, 0.15, 0.0, 1.0, 300.0, 65.0)


class TestOvertakingProbability:

    def test_outside_slipstream(self):
        result = overtaking_probability(230.0, 229.0, 80.0, 50, 0.08, 0.7)
        assert result == pytest.approx(sigmoid(1.0 - 0.7))

    def test_inside_slipstream(self):
        result = overtaking_probability(230.0, 229.0, 20.0, 50, 0.08, 0.7)
        assert result == pytest.approx(sigmoid(1.0 + 0.08 - 0.7))

    def test_at_range_boundary_no_slipstream(self):
        result = overtaking_probability(230.0, 229.0, 50.0, 50, 0.08, 0.7)
        assert result == pytest.approx(sigmoid(0.3))

    def test_slipstream_helps(self):
        far = overtaking_probability(220.0, 225.0, 100.0, 50, 0.08, 0.7)
        near = overtaking_probability(220.0, 225.0, 10.0, 50, 0.08, 0.7)
        assert near > far

    @pytest.mark.parametrize("own,other", [
        (200.0, 230.0), (220.0, 220.0), (240.0, 215.0),
        (300.0, 260.0), (260.0, 300.0), (1220.0, 220.0), (220.0, 1220.0),
    ])
    def test_open_interval(self, own, other):
        result = overtaking_probability(own, other, 30.0, 50, 0.08, 0.7)
        assert 0.0 < result < 1.0


class TestAveragePace:

    def test_mean(self):
        assert average_pace([200.0, 210.0, 190.0]) == pytest.approx(200.0)

    def test_single_lap(self):
        assert average_pace([187.5]) == 187.5

    def test_empty_rejected(self):
        with pytest.raises(InvalidInputError):
            average_pace([])


class TestSigmoid:

    def test_midpoint(self):
        assert sigmoid(0.0) == 0.5

    def test_symmetry(self):
        assert sigmoid(2.0) + sigmoid(-2.0) == pytest.approx(1.0)

    def test_matches_logistic(self):
        x = 0.38
        assert sigmoid(x) == pytest.approx(math.exp(x) / (1 + math.exp(x)))

    @pytest.mark.parametrize("x", [-1000.0, -745.0, 37.0, 40.0, 1000.0, 1e300])
    def test_strictly_inside_unit_interval(self, x):
        result = sigmoid(x)
        assert 0.0 < result < 1.0
        assert not math.isnan(result)

    def test_saturation_keeps_order(self):
        assert sigmoid(-1000.0) < sigmoid(0.0) < sigmoid(1000.0)
