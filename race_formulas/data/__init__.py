# Data module - CSV ingestion
# IMPURE - Has side effects (file I/O)

from .parameters import RaceParameterTable, parse_parameter_value
from .loader import read_competitors, read_race_parameters, iter_telemetry, load_race_inputs
from .generator import write_race_data, generate_competitors, generate_telemetry, race_parameters
