# CSV ingestion for competitor, race parameter and telemetry files
# IMPURE - Has side effects (file I/O, logging)

import concurrent.futures
import csv
import logging
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Sequence, Tuple, TypeVar, Union

from ..core.errors import DataLoadError
from ..core.types import CompetitorSnapshot, RaceParameter, TelemetrySample
from .parameters import RaceParameterTable, parse_parameter_value

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
T = TypeVar("T")

COMPETITOR_COLUMNS = (
    "car_number", "position", "gap_to_leader", "last_lap_time",
    "tire_compound", "pit_stops", "estimated_speed", "fuel_load_estimate", "tire_age",
)
PARAMETER_COLUMNS = ("parameter", "value", "unit", "description")
TELEMETRY_COLUMNS = TelemetrySample.field_names()


def _iter_rows(
    path: PathLike,
    required: Sequence[str],
    convert: Callable[[Dict[str, str]], T],
) -> Iterator[T]:
    """Yield converted rows of a CSV file.

    Args:
        path: CSV file path
        required: Columns that must be present in the header
        convert: Row dict -> record

    Raises:
        DataLoadError: On a missing file, missing columns or a bad cell
    """
    path = Path(path)
    if not path.exists():
        raise DataLoadError(f"CSV file not found: {path}")

    with open(path, newline="") as f:
        reader = csv.DictReader(f)
        missing = [col for col in required if col not in (reader.fieldnames or [])]
        if missing:
            raise DataLoadError(f"{path}: missing columns {missing}")

        for row in reader:
            try:
                yield convert(row)
            except (AttributeError, TypeError, ValueError) as exc:
                raise DataLoadError(f"{path}:{reader.line_num}: {exc}") from exc


def _to_competitor(row: Dict[str, str]) -> CompetitorSnapshot:
    return CompetitorSnapshot(
        car_number=int(row["car_number"]),
        position=int(row["position"]),
        gap_to_leader=float(row["gap_to_leader"]),
        last_lap_time=float(row["last_lap_time"]),
        tire_compound=row["tire_compound"].strip(),
        pit_stops=int(row["pit_stops"]),
        estimated_speed=float(row["estimated_speed"]),
        fuel_load_estimate=float(row["fuel_load_estimate"]),
        tire_age=int(row["tire_age"]),
    )


def _to_parameter(row: Dict[str, str]) -> RaceParameter:
    return RaceParameter(
        name=row["parameter"].strip(),
        value=parse_parameter_value(row["value"]),
        unit=(row.get("unit") or "").strip(),
        description=(row.get("description") or "").strip(),
    )


def _to_telemetry(row: Dict[str, str]) -> TelemetrySample:
    return TelemetrySample(*(float(row[name]) for name in TELEMETRY_COLUMNS))


def read_competitors(path: PathLike) -> List[CompetitorSnapshot]:
    """Load all competitor snapshots."""
    competitors = list(_iter_rows(path, COMPETITOR_COLUMNS, _to_competitor))
    logger.info("Loaded %d competitors from %s", len(competitors), path)
    return competitors


def read_race_parameters(path: PathLike) -> RaceParameterTable:
    """Load the race parameter table.

    Later rows override earlier rows with the same name.
    """
    table = RaceParameterTable(_iter_rows(path, PARAMETER_COLUMNS, _to_parameter))
    logger.info("Loaded %d race parameters from %s", len(table), path)
    return table


def iter_telemetry(path: PathLike) -> Iterator[TelemetrySample]:
    """Stream telemetry samples one at a time."""
    logger.info("Streaming telemetry from %s", path)
    return _iter_rows(path, TELEMETRY_COLUMNS, _to_telemetry)


def load_race_inputs(
    competitors_path: PathLike,
    parameters_path: PathLike,
) -> Tuple[List[CompetitorSnapshot], RaceParameterTable]:
    """Load competitor and parameter files concurrently.

    Both loads are independent and are joined before returning.

    Returns:
        (competitors, parameters)
    """
    with concurrent.futures.ThreadPoolExecutor(max_workers=2) as executor:
        competitor_future = executor.submit(read_competitors, competitors_path)
        parameter_future = executor.submit(read_race_parameters, parameters_path)
        return competitor_future.result(), parameter_future.result()
