# Tests for logging utilities

import csv
import json
import logging

from race_formulas.analysis.logger import LapMetricsLogger, setup_logging


class TestSetupLogging:

    def test_console_handler(self):
        logger = setup_logging("WARNING")
        assert logger.name == "race_formulas"
        assert len(logger.handlers) == 1

    def test_repeated_setup_replaces_handlers(self, temp_dir):
        setup_logging("INFO")
        logger = setup_logging("INFO", log_file=temp_dir / "logs" / "run.log")
        assert len(logger.handlers) == 2

        logging.getLogger("race_formulas.data.loader").debug("debug line")
        for handler in logger.handlers:
            handler.flush()
        assert "debug line" in (temp_dir / "logs" / "run.log").read_text()

        # Release the file handle
        setup_logging("WARNING")


class TestLapMetricsLogger:

    def test_csv_rows(self, temp_dir):
        metrics = LapMetricsLogger(temp_dir)
        metrics.log(1, {"top_speed": 150.0, "rolling_pace": 150.0})
        metrics.log(2, {"top_speed": 160.0, "rolling_pace": 155.0})

        with open(metrics.csv_path, newline="") as f:
            rows = list(csv.DictReader(f))

        assert len(rows) == 2
        assert rows[1]["lap"] == "2"
        assert float(rows[1]["rolling_pace"]) == 155.0

    def test_summary(self, temp_dir):
        metrics = LapMetricsLogger(temp_dir)
        metrics.log(1, {"top_speed": 150.0})
        path = metrics.save_summary({"average_pace": 150.0})

        payload = json.loads(path.read_text())
        assert payload["summary"]["average_pace"] == 150.0
        assert len(payload["laps"]) == 1
