# Tests for a full session analysis

import json

import pytest
from race_formulas.analysis.session import analyse_session
from race_formulas.core.errors import DataLoadError, InvalidInputError


class TestAnalyseSession:

    def test_report(self, config):
        report = analyse_session(config)

        assert report.samples == 8
        assert report.laps == [1.0, 2.0, 3.0]
        assert report.pace_window == [150.0, 160.0, 170.0]
        assert report.top_speed == 170.0
        assert report.evaluation.average_pace == pytest.approx(160.0)
        assert report.evaluation.remaining_laps == 68

    def test_window_size_from_config(self, config):
        config["pace"]["window_size"] = 2
        report = analyse_session(config)
        assert report.pace_window == [160.0, 170.0]
        assert report.evaluation.average_pace == pytest.approx(165.0)

    def test_output_files(self, config, temp_dir):
        out = temp_dir / "run"
        analyse_session(config, output_dir=out)

        lines = (out / "lap_metrics.csv").read_text().strip().splitlines()
        assert len(lines) == 4  # header + 3 laps

        summary = json.loads((out / "summary.json").read_text())
        assert summary["summary"]["average_pace"] == pytest.approx(160.0)
        assert [lap["rolling_pace"] for lap in summary["laps"]] == [150.0, 155.0, 160.0]

    def test_empty_telemetry(self, config, telemetry_csv):
        header = telemetry_csv.read_text().splitlines()[0]
        telemetry_csv.write_text(header + "\n")
        with pytest.raises(InvalidInputError):
            analyse_session(config)

    def test_missing_file(self, config, temp_dir):
        config["data"]["telemetry"] = str(temp_dir / "missing.csv")
        with pytest.raises(DataLoadError):
            analyse_session(config)
