# Core module - Pure functions, no side effects
# FORBIDDEN: logging, pathlib, any I/O

from .errors import RaceFormulaError, InvalidInputError, ParameterNotFoundError, DataLoadError
from .types import CompetitorSnapshot, RaceParameter, TelemetrySample, FormulaConstants
from .math_utils import sigmoid
from .physics import (
    tire_grip_level,
    lap_time_impact,
    fuel_save_required,
    aero_speeds,
    overtaking_probability,
    average_pace,
)
