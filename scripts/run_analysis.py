#!/usr/bin/env python3
"""Run the race formulas over a set of race CSV files.

Usage:
    python scripts/run_analysis.py --config configs/default.yaml

    # Write per-lap metrics and a JSON summary
    python scripts/run_analysis.py --config configs/default.yaml --output runs/monaco

    # Override config values
    python scripts/run_analysis.py --override own_car.laps_completed=20 --override pace.window_size=3

Relative data.* paths in the config are resolved against the project root,
not the current working directory.
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from race_formulas.analysis import SessionReport, analyse_session, setup_logging
from race_formulas.config import (
    DEFAULT_CONFIG_PATH,
    apply_overrides,
    load_config,
    resolve_data_paths,
    validate_config,
)
from race_formulas.core.errors import RaceFormulaError


def print_report(report: SessionReport) -> None:
    evaluation = report.evaluation

    print(f"Telemetry samples : {report.samples}")
    print(f"Laps              : {len(report.laps)}")
    print(f"Pace window       : {', '.join(f'{v:.1f}' for v in report.pace_window)}")
    print(f"Rolling pace      : {evaluation.average_pace:.2f} km/h")
    print(f"Top speed         : {report.top_speed:.1f} km/h")
    print(f"Lap time impact   : {evaluation.lap_time_impact:.3f} s")
    print(f"Fuel save         : {evaluation.fuel_save_required:.3f} kg/lap "
          f"({evaluation.remaining_laps} laps left)")
    print(f"Straight-line     : {evaluation.straight_line_speed:.1f} km/h")
    print(f"Cornering         : {evaluation.cornering_speed:.1f} km/h")

    if evaluation.overtaking:
        print("Overtaking:")
        for chance in evaluation.overtaking:
            print(f"  #{chance.car_number:<3d} P{chance.position:<3d} "
                  f"{chance.distance:8.1f} m  {chance.probability:6.1%}")


def main():
    parser = argparse.ArgumentParser(description="Evaluate race formulas over race CSV data")
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Path to configuration file",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Directory for lap metrics CSV and JSON summary",
    )
    parser.add_argument(
        "--override",
        action="append",
        default=[],
        help="Config overrides in format key.subkey=value",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (overrides config)",
    )

    args = parser.parse_args()

    config = load_config(args.config)
    if args.override and isinstance(config, dict):
        config = apply_overrides(config, args.override)

    errors = validate_config(config)
    if errors:
        print("Configuration validation failed:")
        for error in errors:
            print(f"  - {error}")
        sys.exit(1)

    config = resolve_data_paths(config)

    log_cfg = config.get("logging", {})
    log_file = log_cfg.get("file")
    setup_logging(
        level=args.log_level or log_cfg.get("level", "INFO"),
        log_file=Path(log_file) if log_file else None,
    )
    logger = logging.getLogger("race_formulas")

    try:
        report = analyse_session(config, output_dir=args.output)
    except RaceFormulaError as exc:
        logger.error("Analysis failed: %s", exc)
        sys.exit(1)

    print_report(report)


if __name__ == "__main__":
    main()
