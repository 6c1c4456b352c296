# Race formulas
# FORBIDDEN: logging, any I/O
# Simplified strategy models, not a vehicle simulation

from typing import Sequence, Tuple

import numpy as np

from .errors import InvalidInputError
from .math_utils import sigmoid
from .types import FormulaConstants

_CONSTANTS = FormulaConstants()


def tire_grip_level(
    base_grip: float,
    tire_wear_rate: float,
    laps_completed: int,
    degradation_exponent: float,
) -> float:
    """Calculate current tire grip level.

    grip = base_grip * (1 - wear_rate * laps) ^ degradation_exponent

    Args:
        base_grip: Grip of a fresh tire
        tire_wear_rate: Fraction of tread lost per lap
        laps_completed: Laps run on this set
        degradation_exponent: Steepness of the degradation curve

    Returns:
        Dimensionless grip level

    Raises:
        InvalidInputError: If laps are negative or the tread is worn past zero
    """
    if laps_completed < 0:
        raise InvalidInputError(f"laps_completed must be >= 0, got {laps_completed}")

    remaining_tread = 1.0 - tire_wear_rate * laps_completed
    if remaining_tread < 0:
        raise InvalidInputError(
            f"Tire worn past zero tread: 1 - {tire_wear_rate} * {laps_completed} "
            f"= {remaining_tread:.4f}"
        )

    return base_grip * remaining_tread ** degradation_exponent


def lap_time_impact(
    base_grip: float,
    tire_wear_rate: float,
    laps_completed: int,
    degradation_exponent: float,
    reference_lap_time: float,
    grip_coefficient: float,
) -> float:
    """Calculate lap time under the current tire grip.

    lap_time = reference_lap_time / (1 + grip_coefficient * grip_level)

    Args:
        base_grip: Grip of a fresh tire
        tire_wear_rate: Fraction of tread lost per lap
        laps_completed: Laps run on this set
        degradation_exponent: Steepness of the degradation curve
        reference_lap_time: Reference lap time in seconds
        grip_coefficient: Grip to lap time conversion

    Returns:
        Lap time impact in seconds
    """
    grip_level = tire_grip_level(
        base_grip, tire_wear_rate, laps_completed, degradation_exponent
    )
    return reference_lap_time / (1.0 + grip_coefficient * grip_level)


def fuel_save_required(
    base_consumption: float,
    weight_penalty: float,
    current_fuel_load: float,
    remaining_laps: int,
) -> float:
    """Calculate fuel that must be saved per lap to reach the finish.

    Consumption per lap grows with the fuel carried. Returns 0 when the
    current load covers the remaining laps.

    Args:
        base_consumption: Base fuel consumption in kg/lap
        weight_penalty: Extra consumption per kg carried
        current_fuel_load: Fuel on board in kg
        remaining_laps: Laps left in the race

    Returns:
        Fuel to save per lap in kg

    Raises:
        InvalidInputError: If remaining_laps is not positive
    """
    if remaining_laps <= 0:
        raise InvalidInputError(f"remaining_laps must be positive, got {remaining_laps}")

    fuel_per_lap = base_consumption + weight_penalty * current_fuel_load
    remaining_fuel = current_fuel_load - fuel_per_lap * remaining_laps

    if remaining_fuel < 0.0:
        return abs(remaining_fuel) / remaining_laps
    return 0.0


def aero_speeds(
    base_drag: float,
    damage_factor: float,
    base_downforce: float,
    air_density_factor: float,
    max_speed: float,
    base_corner_speed: float,
) -> Tuple[float, float]:
    """Calculate straight-line and cornering speed limits.

    Damage adds drag. Downforce always loses a fixed 10%, whatever the
    damage, so cornering speed is base_corner_speed * sqrt(0.9).

    Args:
        base_drag: Base drag coefficient
        damage_factor: Aero damage impact
        base_downforce: Base downforce in N
        air_density_factor: Air density correction
        max_speed: Top speed in km/h
        base_corner_speed: Base cornering speed in km/h

    Returns:
        (straight_line_speed, cornering_speed)

    Raises:
        InvalidInputError: If base_downforce is zero
    """
    if base_downforce == 0:
        raise InvalidInputError("base_downforce must be non-zero")

    drag_coefficient = base_drag + damage_factor * _CONSTANTS.damage_drag_scale
    downforce = base_downforce * (1.0 - _CONSTANTS.downforce_loss)

    straight_line_speed = max_speed * (1.0 - drag_coefficient * air_density_factor)
    cornering_speed = base_corner_speed * float(np.sqrt(downforce / base_downforce))

    return straight_line_speed, cornering_speed


def overtaking_probability(
    own_speed: float,
    competitor_speed: float,
    distance: float,
    slipstream_range: float,
    slipstream_factor: float,
    track_difficulty: float,
) -> float:
    """Estimate the probability of passing a competitor.

    Slipstream benefit applies only inside the slipstream range.

    Args:
        own_speed: Own average speed
        competitor_speed: Competitor speed
        distance: Distance to competitor in meters
        slipstream_range: Slipstream effective range in meters
        slipstream_factor: Slipstream benefit
        track_difficulty: Overtaking difficulty of the circuit

    Returns:
        Probability in (0, 1)
    """
    speed_delta = own_speed - competitor_speed
    slipstream_benefit = slipstream_factor if distance < slipstream_range else 0.0
    return sigmoid(speed_delta + slipstream_benefit - track_difficulty)


def average_pace(lap_speeds: Sequence[float]) -> float:
    """Arithmetic mean of per-lap top speeds.

    Args:
        lap_speeds: Top speeds of the laps in the window

    Returns:
        Mean speed

    Raises:
        InvalidInputError: If no laps are given
    """
    if len(lap_speeds) == 0:
        raise InvalidInputError("Cannot average an empty pace window")
    return float(np.mean(np.asarray(lap_speeds, dtype=np.float64)))
