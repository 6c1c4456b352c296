# Logging utilities

import logging
import json
import csv
from pathlib import Path
from typing import Dict, List, Any, Optional
from datetime import datetime

LOGGER_NAME = "race_formulas"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """Setup logging configuration.

    Handlers are attached to the package logger, so every module logger
    (race_formulas.*) propagates to them. Calling again replaces the
    previous handlers.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file path for logging

    Returns:
        Configured logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file is not None else getattr(logging, level.upper()))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper()))
    console_format = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    # File handler
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    return logger


class LapMetricsLogger:
    """Per-lap metrics log written as CSV, summarised as JSON."""

    def __init__(self, log_dir: Path):
        """Initialize metrics logger.

        Args:
            log_dir: Directory for log files
        """
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.csv_path = self.log_dir / "lap_metrics.csv"
        self.json_path = self.log_dir / "summary.json"

        self._history: List[Dict[str, Any]] = []
        self._csv_initialized = False
        self._fieldnames: List[str] = []

    def log(self, lap: float, metrics: Dict[str, float]) -> None:
        """Log metrics for a completed lap.

        Args:
            lap: Lap number
            metrics: Dict of metric values
        """
        record = {
            "lap": lap,
            "timestamp": datetime.now().isoformat(),
            **metrics,
        }
        self._history.append(record)

        # Initialize CSV with fieldnames from first record
        if not self._csv_initialized:
            self._fieldnames = list(record.keys())
            with open(self.csv_path, "w", newline="") as f:
                writer = csv.DictWriter(f, fieldnames=self._fieldnames)
                writer.writeheader()
            self._csv_initialized = True

        # Append to CSV
        with open(self.csv_path, "a", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=self._fieldnames, extrasaction="ignore")
            writer.writerow(record)

    def save_summary(self, summary: Optional[Dict[str, Any]] = None) -> Path:
        """Save lap history plus an optional run summary as JSON.

        Returns:
            Path of the JSON file
        """
        payload = {
            "laps": self._history,
            "summary": summary or {},
        }
        with open(self.json_path, "w") as f:
            json.dump(payload, f, indent=2)
        return self.json_path

