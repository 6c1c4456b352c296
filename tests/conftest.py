# Pytest configuration and fixtures

import pytest
import numpy as np
from pathlib import Path
import tempfile
import yaml

from race_formulas.core.types import TelemetrySample
from race_formulas.data.generator import MONACO_PARAMETERS


@pytest.fixture
def seed():
    """Fixed seed for reproducibility."""
    return 42


@pytest.fixture
def rng(seed):
    return np.random.default_rng(seed)


@pytest.fixture
def temp_dir():
    """Create temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def make_sample(lap: float, speed: float, time: float = 0.0) -> TelemetrySample:
    """Telemetry sample with only lap / speed / time set."""
    values = dict.fromkeys(TelemetrySample.field_names(), 0.0)
    values.update(time=time, lap=lap, speed=speed)
    return TelemetrySample(**values)


@pytest.fixture
def sample_factory():
    return make_sample


@pytest.fixture
def competitors_csv(temp_dir):
    """Three competitors, two of them ahead of a car at 5.0 s."""
    path = temp_dir / "competitor_data.csv"
    path.write_text(
        "car_number,position,gap_to_leader,last_lap_time,tire_compound,"
        "pit_stops,estimated_speed,fuel_load_estimate,tire_age\n"
        "1,1,0.00,78.912,Soft,0,221.5,101.2,7\n"
        "2,2,4.90,79.250,Medium,1,219.0,98.4,12\n"
        "3,3,7.30,80.105,Hard,0,215.3,106.0,20\n"
    )
    return path


@pytest.fixture
def parameters_csv(temp_dir):
    """Full Monaco parameter table."""
    path = temp_dir / "race_parameters.csv"
    lines = ["parameter,value,unit,description"]
    for name, value, unit, description in MONACO_PARAMETERS:
        lines.append(f"{name},{value},{unit},{description}")
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def telemetry_csv(temp_dir):
    """Three laps; lap top speeds 150, 160, 170."""
    path = temp_dir / "telemetry_data.csv"
    header = ",".join(TelemetrySample.field_names())
    rows = []
    speeds = {1: [100.0, 150.0, 120.0], 2: [110.0, 160.0, 90.0], 3: [170.0, 80.0]}
    t = 0.0
    for lap, lap_speeds in speeds.items():
        for speed in lap_speeds:
            sample = make_sample(lap, speed, time=t)
            rows.append(",".join(str(v) for v in sample.to_array()))
            t += 0.1
    path.write_text(header + "\n" + "\n".join(rows) + "\n")
    return path


@pytest.fixture
def config(competitors_csv, parameters_csv, telemetry_csv):
    """Standard test configuration."""
    return {
        "data": {
            "competitors": str(competitors_csv),
            "parameters": str(parameters_csv),
            "telemetry": str(telemetry_csv),
        },
        "pace": {
            "window_size": 5,
        },
        "own_car": {
            "car_number": 10,
            "gap_to_leader": 5.0,
            "laps_completed": 10,
            "remaining_laps": None,
        },
        "logging": {
            "level": "WARNING",
            "file": None,
        },
    }


@pytest.fixture
def config_file(config, temp_dir):
    """Create temporary config file."""
    config_path = temp_dir / "config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(config, f)
    return config_path
