# Race evaluation - maps the parameter table onto the formulas

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..core.math_utils import kmh_to_ms
from ..core.physics import (
    aero_speeds,
    fuel_save_required,
    lap_time_impact,
    overtaking_probability,
)
from ..core.types import CompetitorSnapshot
from ..data.parameters import RaceParameterTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OwnCar:
    """State of our own car, which is absent from the competitor file."""
    car_number: int = 10
    gap_to_leader: float = 12.0     # seconds
    laps_completed: int = 0
    remaining_laps: Optional[int] = None  # None -> total_laps - laps_completed

    @classmethod
    def from_config(cls, section: Dict[str, Any]) -> "OwnCar":
        remaining = section.get("remaining_laps")
        return cls(
            car_number=int(section.get("car_number", 10)),
            gap_to_leader=float(section.get("gap_to_leader", 12.0)),
            laps_completed=int(section.get("laps_completed", 0)),
            remaining_laps=None if remaining is None else int(remaining),
        )


@dataclass(frozen=True)
class OvertakingChance:
    car_number: int
    position: int
    distance: float       # meters
    probability: float


@dataclass
class RaceEvaluation:
    """Results of every formula for one race snapshot."""
    lap_time_impact: float
    fuel_save_required: float
    remaining_laps: int
    straight_line_speed: float
    cornering_speed: float
    average_pace: float
    overtaking: List[OvertakingChance] = field(default_factory=list)

    @property
    def best_overtake(self) -> Optional[OvertakingChance]:
        if not self.overtaking:
            return None
        return max(self.overtaking, key=lambda chance: chance.probability)

    def as_dict(self) -> Dict[str, float]:
        """Flatten scalar results for metrics logging."""
        result = {
            "lap_time_impact": self.lap_time_impact,
            "fuel_save_required": self.fuel_save_required,
            "remaining_laps": float(self.remaining_laps),
            "straight_line_speed": self.straight_line_speed,
            "cornering_speed": self.cornering_speed,
            "average_pace": self.average_pace,
        }
        best = self.best_overtake
        if best is not None:
            result["best_overtake_car"] = float(best.car_number)
            result["best_overtake_probability"] = best.probability
        return result


def evaluate_overtaking(
    parameters: RaceParameterTable,
    competitors: Sequence[CompetitorSnapshot],
    own_car: OwnCar,
    pace: float,
) -> List[OvertakingChance]:
    """Overtaking probability against every competitor ahead.

    The distance to a car ahead is its time gap covered at our pace.

    Args:
        parameters: Race parameter table
        competitors: Competitor snapshots
        own_car: Our car
        pace: Our rolling average pace in km/h

    Returns:
        One chance per car ahead, nearest first
    """
    slipstream_range = parameters.value("slipstream_range")
    slipstream_factor = parameters.value("slipstream_factor")
    track_difficulty = parameters.value("track_difficulty")

    ahead = [c for c in competitors if c.gap_to_leader < own_car.gap_to_leader]
    ahead.sort(key=lambda c: own_car.gap_to_leader - c.gap_to_leader)

    chances = []
    for competitor in ahead:
        distance = (own_car.gap_to_leader - competitor.gap_to_leader) * kmh_to_ms(pace)
        probability = overtaking_probability(
            own_speed=pace,
            competitor_speed=competitor.estimated_speed,
            distance=distance,
            slipstream_range=slipstream_range,
            slipstream_factor=slipstream_factor,
            track_difficulty=track_difficulty,
        )
        chances.append(OvertakingChance(
            car_number=competitor.car_number,
            position=competitor.position,
            distance=distance,
            probability=probability,
        ))

    return chances


def evaluate_race(
    parameters: RaceParameterTable,
    competitors: Sequence[CompetitorSnapshot],
    own_car: OwnCar,
    pace: float,
    max_speed: float,
) -> RaceEvaluation:
    """Evaluate all race formulas.

    Args:
        parameters: Race parameter table
        competitors: Competitor snapshots
        own_car: Our car
        pace: Rolling average pace in km/h
        max_speed: Top speed observed in telemetry, km/h

    Returns:
        RaceEvaluation

    Raises:
        ParameterNotFoundError: If a required parameter is missing
        InvalidInputError: If a formula input is out of domain
    """
    impact = lap_time_impact(
        base_grip=parameters.value("base_grip"),
        tire_wear_rate=parameters.value("tire_wear_rate"),
        laps_completed=own_car.laps_completed,
        degradation_exponent=parameters.value("degradation_factor"),
        reference_lap_time=parameters.value("reference_lap_time"),
        grip_coefficient=parameters.value("grip_coefficient"),
    )

    remaining_laps = own_car.remaining_laps
    if remaining_laps is None:
        remaining_laps = int(parameters.value("total_laps")) - own_car.laps_completed

    fuel_save = fuel_save_required(
        base_consumption=parameters.value("base_consumption"),
        weight_penalty=parameters.value("weight_penalty"),
        current_fuel_load=parameters.value("current_fuel"),
        remaining_laps=remaining_laps,
    )

    straight_line_speed, cornering_speed = aero_speeds(
        base_drag=parameters.value("base_drag"),
        damage_factor=parameters.value("damage_factor"),
        base_downforce=parameters.value("base_downforce"),
        air_density_factor=parameters.value("air_density_factor"),
        max_speed=max_speed,
        base_corner_speed=parameters.value("base_corner_speed"),
    )

    overtaking = evaluate_overtaking(parameters, competitors, own_car, pace)

    logger.info(
        "Lap time impact %.3f s | fuel save %.3f kg/lap over %d laps",
        impact, fuel_save, remaining_laps,
    )
    logger.info(
        "Straight-line %.1f km/h | cornering %.1f km/h | %d cars ahead",
        straight_line_speed, cornering_speed, len(overtaking),
    )

    return RaceEvaluation(
        lap_time_impact=impact,
        fuel_save_required=fuel_save,
        remaining_laps=remaining_laps,
        straight_line_speed=straight_line_speed,
        cornering_speed=cornering_speed,
        average_pace=pace,
        overtaking=overtaking,
    )
