#!/usr/bin/env python3
"""Generate synthetic Monaco GP race data.

Writes competitor_data.csv, race_parameters.csv and telemetry_data.csv
(10 Hz) into the output directory. The default output directory is
data/ under the project root, where configs/default.yaml looks for it.

Usage:
    python scripts/generate_data.py --output-dir data --laps 10 --seed 42
"""

import argparse
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from race_formulas.analysis import setup_logging
from race_formulas.config import ROOT_DIR
from race_formulas.data.generator import write_race_data


def main():
    parser = argparse.ArgumentParser(description="Generate synthetic race CSV data")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=ROOT_DIR / "data",
        help="Directory for generated CSV files",
    )
    parser.add_argument("--laps", type=int, default=10, help="Telemetry laps to generate")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")

    args = parser.parse_args()

    if args.laps <= 0:
        parser.error(f"--laps must be positive, got {args.laps}")

    setup_logging("INFO")

    start = time.time()
    paths = write_race_data(args.output_dir, laps=args.laps, seed=args.seed)

    print("Generated files:")
    for role, path in paths.items():
        print(f"  - {role}: {path}")
    print(f"Generation completed in {time.time() - start:.2f}s")


if __name__ == "__main__":
    main()
