# Core type definitions
# FORBIDDEN: logging, any I/O

from dataclasses import dataclass, fields
from typing import Tuple, Union
import numpy as np


ParameterValue = Union[float, str]


@dataclass(frozen=True)
class FormulaConstants:
    """Fixed constants baked into the race formulas."""
    damage_drag_scale: float = 0.1     # drag added per unit of damage
    downforce_loss: float = 0.1        # fixed fraction of downforce lost
    pace_window_size: int = 5          # laps in the rolling pace window


@dataclass(frozen=True)
class CompetitorSnapshot:
    """One competitor row, immutable per read."""
    car_number: int
    position: int
    gap_to_leader: float      # seconds
    last_lap_time: float      # seconds
    tire_compound: str        # Soft / Medium / Hard
    pit_stops: int
    estimated_speed: float    # km/h
    fuel_load_estimate: float  # kg
    tire_age: int             # laps


@dataclass(frozen=True)
class RaceParameter:
    """Named race scalar with its unit and description.

    The value is parsed once at load time: numeric text becomes a float,
    anything else (track name, compound) is kept as text.
    """
    name: str
    value: ParameterValue
    unit: str = ""
    description: str = ""

    @property
    def is_numeric(self) -> bool:
        return isinstance(self.value, float)


@dataclass(frozen=True)
class TelemetrySample:
    """Car telemetry for a single timestep."""
    time: float                # s
    lap: float
    distance: float            # km
    speed: float               # km/h
    throttle: float            # %
    brake_pressure: float      # bar
    tire_temp_fl: float        # °C
    tire_temp_fr: float
    tire_temp_rl: float
    tire_temp_rr: float
    fuel_flow: float           # kg/h
    engine_rpm: float
    drs_active: float          # 0 / 1
    battery_deployment: float  # %
    gear: float
    steering_angle: float      # degrees

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        """Column order of the telemetry CSV."""
        return tuple(f.name for f in fields(cls))

    def to_array(self) -> np.ndarray:
        """Flatten to numpy array in column order."""
        return np.array(
            [getattr(self, name) for name in self.field_names()],
            dtype=np.float64,
        )

