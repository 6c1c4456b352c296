# Per-lap top speed tracking
# FORBIDDEN: data.*, analysis.*, file I/O

import logging
from typing import Iterable, List, Optional

from ..core.types import TelemetrySample
from .pace_window import RollingPaceWindow

logger = logging.getLogger(__name__)


class LapPaceTracker:
    """Feed telemetry samples, maintain the rolling pace window.

    On a new lap number the finished lap's top speed is pushed into the
    window and the per-lap maximum restarts from 0.
    """

    def __init__(self, window: Optional[RollingPaceWindow] = None):
        self.window = window if window is not None else RollingPaceWindow()
        self.current_lap: Optional[float] = None
        self.current_lap_max = 0.0
        self.top_speed = 0.0
        self.completed_laps: List[float] = []

    def observe(self, sample: TelemetrySample) -> Optional[float]:
        """Process one telemetry sample.

        Args:
            sample: Telemetry for one timestep

        Returns:
            Top speed of the lap that just finished, or None
        """
        finished = None

        # First ever sample
        if self.current_lap is None:
            self.current_lap = sample.lap

        elif sample.lap > self.current_lap:
            finished = self._finish_lap()
            self.current_lap = sample.lap

        elif sample.lap < self.current_lap:
            logger.warning(
                "Lap counter went backwards (%s -> %s), discarding lap in progress",
                self.current_lap, sample.lap,
            )
            self.current_lap = sample.lap
            self.current_lap_max = 0.0

        self.current_lap_max = max(self.current_lap_max, sample.speed)
        self.top_speed = max(self.top_speed, sample.speed)
        return finished

    def observe_all(self, samples: Iterable[TelemetrySample]) -> int:
        """Consume a telemetry stream and flush the last lap.

        Returns:
            Number of samples processed
        """
        count = 0
        for sample in samples:
            self.observe(sample)
            count += 1
        self.flush()
        return count

    def flush(self) -> Optional[float]:
        """Push the lap in progress, e.g. at end of stream."""
        if self.current_lap is None:
            return None
        finished = self._finish_lap()
        self.current_lap = None
        return finished

    def _finish_lap(self) -> float:
        lap_max = self.current_lap_max
        self.window.push(lap_max)
        self.completed_laps.append(self.current_lap)
        logger.debug("Lap %s top speed %.1f", self.current_lap, lap_max)
        self.current_lap_max = 0.0
        return lap_max
