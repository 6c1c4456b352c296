# Analysis module - Logging, evaluation, session runs
# IMPURE - Has side effects (file I/O, logging)

from .logger import setup_logging, LapMetricsLogger
from .evaluation import OwnCar, OvertakingChance, RaceEvaluation, evaluate_race, evaluate_overtaking
from .session import SessionReport, analyse_session
