# Session analysis - load, track pace, evaluate
# IMPURE - Has side effects (file I/O, logging)

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..data.loader import iter_telemetry, load_race_inputs
from ..telemetry.lap_tracker import LapPaceTracker
from ..telemetry.pace_window import RollingPaceWindow
from .evaluation import OwnCar, RaceEvaluation, evaluate_race
from .logger import LapMetricsLogger

logger = logging.getLogger(__name__)


@dataclass
class SessionReport:
    samples: int
    laps: List[float]
    pace_window: List[float]
    top_speed: float
    evaluation: RaceEvaluation


def analyse_session(
    config: Dict[str, Any],
    output_dir: Optional[Path] = None,
) -> SessionReport:
    """Run a full analysis pass over the configured data files.

    Competitor and parameter files load concurrently; telemetry is then
    streamed lap by lap through the rolling pace window.

    Args:
        config: Configuration dict (see configs/default.yaml)
        output_dir: Optional directory for lap metrics CSV / JSON summary

    Returns:
        SessionReport
    """
    data_cfg = config["data"]
    competitors, parameters = load_race_inputs(
        data_cfg["competitors"], data_cfg["parameters"]
    )

    window = RollingPaceWindow(int(config.get("pace", {}).get("window_size", 5)))
    tracker = LapPaceTracker(window)
    metrics = LapMetricsLogger(output_dir) if output_dir is not None else None

    samples = 0
    for sample in iter_telemetry(data_cfg["telemetry"]):
        finished_lap = tracker.current_lap
        lap_max = tracker.observe(sample)
        samples += 1
        if lap_max is not None:
            _record_lap(finished_lap, lap_max, window, metrics)

    finished_lap = tracker.current_lap
    lap_max = tracker.flush()
    if lap_max is not None:
        _record_lap(finished_lap, lap_max, window, metrics)

    logger.info("Processed %d telemetry samples over %d laps", samples, len(tracker.completed_laps))

    own_car = OwnCar.from_config(config.get("own_car", {}))
    evaluation = evaluate_race(
        parameters,
        competitors,
        own_car,
        pace=window.mean(),
        max_speed=tracker.top_speed,
    )

    report = SessionReport(
        samples=samples,
        laps=list(tracker.completed_laps),
        pace_window=window.values(),
        top_speed=tracker.top_speed,
        evaluation=evaluation,
    )

    if metrics is not None:
        path = metrics.save_summary(evaluation.as_dict())
        logger.info("Summary written to %s", path)

    return report


def _record_lap(
    lap: float,
    lap_max: float,
    window: RollingPaceWindow,
    metrics: Optional[LapMetricsLogger],
) -> None:
    pace = window.mean()
    logger.info("Lap %g | top speed %.1f km/h | rolling pace %.2f km/h", lap, lap_max, pace)
    if metrics is not None:
        metrics.log(lap, {"top_speed": lap_max, "rolling_pace": pace, "window_laps": len(window)})
