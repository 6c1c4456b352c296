# Synthetic Monaco race data
# IMPURE - Has side effects (file I/O)

import csv
import logging
from pathlib import Path
from typing import Dict, List, Tuple, Union

import numpy as np

from ..core.types import CompetitorSnapshot, RaceParameter, TelemetrySample
from .loader import COMPETITOR_COLUMNS, PARAMETER_COLUMNS, TELEMETRY_COLUMNS

logger = logging.getLogger(__name__)

TRACK_LENGTH_KM = 3.337
BASE_LAP_TIME = 78.5       # seconds
SAMPLE_RATE_HZ = 10.0
OWN_CAR_NUMBER = 10
TIRE_COMPOUNDS = ("Soft", "Medium", "Hard")

BRAKING_ZONES = (0.15, 0.45, 0.55, 0.85)
MAJOR_CORNERS = (0.1, 0.2, 0.4, 0.55, 0.8)

COMPETITORS_FILE = "competitor_data.csv"
PARAMETERS_FILE = "race_parameters.csv"
TELEMETRY_FILE = "telemetry_data.csv"

# (name, value, unit, description)
MONACO_PARAMETERS: List[Tuple[str, Union[float, str], str, str]] = [
    ("track_name", "Monaco", "", "Circuit name"),
    ("track_length", 3.337, "km", "Track length"),
    ("total_laps", 78, "laps", "Total race laps"),
    ("base_grip", 0.95, "coefficient", "Base tire grip level"),
    ("tire_wear_rate", 0.012, "per_lap", "Tire degradation rate"),
    ("degradation_factor", 1.8, "factor", "Degradation curve steepness"),
    ("grip_coefficient", 0.85, "coefficient", "Grip to lap time conversion"),
    ("reference_lap_time", 78.5, "seconds", "Reference lap time"),
    ("base_consumption", 2.2, "kg/lap", "Base fuel consumption"),
    ("weight_penalty", 0.0003, "factor", "Fuel weight penalty"),
    ("base_drag", 0.28, "coefficient", "Base drag coefficient"),
    ("damage_factor", 0.15, "factor", "Aero damage impact"),
    ("base_downforce", 850, "N", "Base downforce"),
    ("air_density_factor", 1.0, "factor", "Air density correction"),
    ("base_corner_speed", 65, "km/h", "Base cornering speed"),
    ("slipstream_range", 50, "meters", "Slipstream effective range"),
    ("slipstream_factor", 0.08, "factor", "Slipstream benefit"),
    ("track_difficulty", 0.7, "factor", "Overtaking difficulty"),
    ("pit_lane_time", 22.5, "seconds", "Pit lane transit time"),
    ("tire_change_time", 2.8, "seconds", "Tire change duration"),
    ("pit_lane_penalty", 0.5, "seconds", "Additional pit penalty"),
    ("average_gap_per_position", 0.8, "seconds", "Time gap per position"),
    ("ambient_temp", 24, "celsius", "Ambient temperature"),
    ("track_temp", 42, "celsius", "Track temperature"),
    ("humidity", 65, "percent", "Relative humidity"),
    ("wind_speed", 5, "km/h", "Wind speed"),
    ("tire_compound", "Medium", "", "Current tire compound"),
    ("fuel_capacity", 110, "kg", "Maximum fuel capacity"),
    ("current_fuel", 108.5, "kg", "Current fuel load"),
]


def race_parameters() -> List[RaceParameter]:
    return [
        RaceParameter(name, float(value) if not isinstance(value, str) else value, unit, desc)
        for name, value, unit, desc in MONACO_PARAMETERS
    ]


def generate_competitors(rng: np.random.Generator, num_cars: int = 20) -> List[CompetitorSnapshot]:
    """Competitor grid without our own car.

    Args:
        rng: Random generator
        num_cars: Grid size including our car

    Returns:
        Competitor snapshots in car number order
    """
    competitors = []
    for car in range(1, num_cars + 1):
        if car == OWN_CAR_NUMBER:
            continue
        position = car if car < OWN_CAR_NUMBER else car - 1
        competitors.append(CompetitorSnapshot(
            car_number=car,
            position=position,
            gap_to_leader=round(car * 1.2 + rng.uniform(-0.5, 0.5), 2),
            last_lap_time=round(BASE_LAP_TIME + rng.uniform(-1.5, 3.0), 3),
            tire_compound=str(rng.choice(TIRE_COMPOUNDS)),
            pit_stops=int(rng.integers(0, 2)),
            estimated_speed=round(220 + rng.uniform(-20, 30), 1),
            fuel_load_estimate=round(rng.uniform(95, 110), 1),
            tire_age=int(rng.integers(5, 26)),
        ))
    return competitors


def _base_speed(progress: float) -> float:
    """Monaco speed profile by lap progress [0, 1)."""
    if progress < 0.15:    # Casino Square
        return 45 + 30 * np.sin(progress * 10)
    if progress < 0.3:     # Uphill to Massenet
        return 60 + 40 * progress
    if progress < 0.45:    # Casino to Mirabeau
        return 50 + 25 * np.sin(progress * 8)
    if progress < 0.55:    # Hairpin
        return 25 + 15 * np.sin(progress * 20)
    if progress < 0.75:    # Portier to Tunnel
        return 80 + 50 * progress
    if progress < 0.85:    # Swimming Pool
        return 60 + 20 * np.sin(progress * 15)
    return 90 + 60 * (1 - progress)  # Back straight


def _near(progress: float, points: Tuple[float, ...], tolerance: float = 0.02) -> bool:
    return any(abs(progress - p) < tolerance for p in points)


def generate_telemetry(rng: np.random.Generator, laps: int = 10) -> List[TelemetrySample]:
    """10 Hz telemetry over the given number of laps.

    Args:
        rng: Random generator
        laps: Number of laps

    Returns:
        Telemetry samples in time order
    """
    samples_per_lap = int(BASE_LAP_TIME * SAMPLE_RATE_HZ)
    samples = []

    for lap in range(1, laps + 1):
        tire_deg = 1.0 + (lap - 1) * 0.008
        fuel_remaining = 110.0 - (lap - 1) * 2.2
        fuel_effect = 1.0 - (fuel_remaining - 20.0) * 0.0003
        base_tire_temp = 85.0 + lap * 3.0

        for i in range(samples_per_lap):
            progress = i / samples_per_lap
            time = (lap - 1) * BASE_LAP_TIME + i / SAMPLE_RATE_HZ
            distance = (lap - 1 + progress) * TRACK_LENGTH_KM

            speed = _base_speed(progress) * fuel_effect / tire_deg + rng.normal(0, 2)
            speed = float(np.clip(speed, 20, 320))

            if _near(progress, BRAKING_ZONES):
                throttle = rng.uniform(0, 30)
                brake = rng.uniform(80, 150)
            elif speed > 200:
                throttle = rng.uniform(85, 100)
                brake = 0.0
            else:
                throttle = rng.uniform(40, 80)
                brake = rng.uniform(0, 20)

            fuel_flow = float(np.clip(20.0 + throttle * 0.8 + rng.normal(0, 3), 0, 110))

            rpm = 6000 + speed * 40 if speed < 50 else 8000 + (speed - 50) * 30
            rpm = int(np.clip(rpm + rng.normal(0, 100), 4000, 15000))

            drs = 1 if progress > 0.75 and speed > 150 and brake < 5 else 0
            battery = rng.uniform(60, 100) if throttle > 70 else rng.uniform(0, 40)

            if speed < 60:
                gear = int(max(1, min(3, speed // 25 + 1)))
            else:
                gear = int(max(3, min(8, speed // 40 + 2)))

            if _near(progress, MAJOR_CORNERS):
                steering = rng.uniform(-45, 45)
            else:
                steering = rng.uniform(-10, 10)

            samples.append(TelemetrySample(
                time=round(time, 1),
                lap=float(lap),
                distance=round(distance, 3),
                speed=round(speed, 1),
                throttle=round(float(throttle), 1),
                brake_pressure=round(float(brake), 1),
                tire_temp_fl=round(base_tire_temp + rng.normal(0, 5) + throttle * 0.2, 1),
                tire_temp_fr=round(base_tire_temp + rng.normal(0, 5) + throttle * 0.15, 1),
                tire_temp_rl=round(base_tire_temp + rng.normal(0, 4) + throttle * 0.25, 1),
                tire_temp_rr=round(base_tire_temp + rng.normal(0, 4) + throttle * 0.2, 1),
                fuel_flow=round(fuel_flow, 1),
                engine_rpm=float(rpm),
                drs_active=float(drs),
                battery_deployment=round(float(battery), 1),
                gear=float(gear),
                steering_angle=round(float(steering), 1),
            ))

    return samples


def _format(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _write_csv(path: Path, header: Tuple[str, ...], rows: List[List]) -> None:
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for row in rows:
            writer.writerow([_format(v) for v in row])


def write_race_data(output_dir: Path, laps: int = 10, seed: int = 42) -> Dict[str, Path]:
    """Write competitor, parameter and telemetry CSV files.

    Args:
        output_dir: Target directory (created if missing)
        laps: Telemetry laps to generate
        seed: Random seed

    Returns:
        Dict of file role -> path, keyed like the config data section
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    rng = np.random.default_rng(seed)

    paths = {
        "competitors": output_dir / COMPETITORS_FILE,
        "parameters": output_dir / PARAMETERS_FILE,
        "telemetry": output_dir / TELEMETRY_FILE,
    }

    competitors = generate_competitors(rng)
    _write_csv(
        paths["competitors"],
        COMPETITOR_COLUMNS,
        [[getattr(c, col) for col in COMPETITOR_COLUMNS] for c in competitors],
    )

    params = race_parameters()
    _write_csv(
        paths["parameters"],
        PARAMETER_COLUMNS,
        [[p.name, p.value, p.unit, p.description] for p in params],
    )

    telemetry = generate_telemetry(rng, laps)
    _write_csv(paths["telemetry"], TELEMETRY_COLUMNS, [list(s.to_array()) for s in telemetry])

    logger.info(
        "Generated %d competitors, %d parameters, %d telemetry samples in %s",
        len(competitors), len(params), len(telemetry), output_dir,
    )
    return paths
