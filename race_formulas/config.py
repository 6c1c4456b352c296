"""
Configuration loading, overrides and validation for race-formulas.
"""

import copy
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

# Root directory (project root)
ROOT_DIR = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = ROOT_DIR / "configs" / "default.yaml"

REQUIRED_SECTIONS = ["data", "pace", "own_car"]
DATA_FILES = ["competitors", "parameters", "telemetry"]
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def load_config(config_path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> dict:
    """Load YAML configuration file.

    Args:
        config_path: Path to config file

    Returns:
        Parsed configuration dictionary

    Raises:
        FileNotFoundError: If the file does not exist
    """
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_file}")

    with open(config_file, "r") as f:
        config = yaml.safe_load(f)

    return config or {}


def _infer_value(value: str) -> Any:
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        pass
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.lower() in ("null", "none"):
        return None
    return value


def apply_overrides(config: dict, overrides: List[str]) -> dict:
    """Apply command-line overrides to config.

    Args:
        config: Base configuration (not modified)
        overrides: List of "key.subkey=value" strings

    Returns:
        New configuration with overrides applied
    """
    config = copy.deepcopy(config)

    for override in overrides:
        if "=" not in override:
            raise ValueError(f"Invalid override format: {override}. Expected key=value")

        key, value = override.split("=", 1)
        keys = key.split(".")

        # Navigate to nested key
        d = config
        for k in keys[:-1]:
            if k not in d or not isinstance(d[k], dict):
                d[k] = {}
            d = d[k]

        d[keys[-1]] = _infer_value(value)

    return config


def resolve_data_paths(config: dict, base_dir: Union[str, Path] = ROOT_DIR) -> dict:
    """Anchor relative data.* paths to base_dir.

    Args:
        config: Configuration (not modified)
        base_dir: Directory relative paths are resolved against

    Returns:
        New configuration with absolute data paths
    """
    config = copy.deepcopy(config)
    data = config.get("data")
    if not isinstance(data, dict):
        return config

    for name in DATA_FILES:
        value = data.get(name)
        if value and not Path(value).is_absolute():
            data[name] = str(Path(base_dir) / value)

    return config


def _is_section(config: Dict[str, Any], name: str) -> bool:
    return isinstance(config.get(name), dict)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """Validate configuration.

    Args:
        config: Configuration dictionary

    Returns:
        List of validation errors (empty if valid)
    """
    if not isinstance(config, dict):
        return [f"Configuration must be a mapping, got {type(config).__name__}"]

    errors = []

    for section in REQUIRED_SECTIONS:
        if section not in config:
            errors.append(f"Missing required section: {section}")

    # An empty YAML section ("pace:") loads as None
    for section in REQUIRED_SECTIONS + ["logging"]:
        if section in config and not isinstance(config[section], dict):
            errors.append(f"{section} must be a mapping, got {config[section]!r}")

    if _is_section(config, "data"):
        for name in DATA_FILES:
            if not config["data"].get(name):
                errors.append(f"data.{name} is required")

    if _is_section(config, "pace"):
        size = config["pace"].get("window_size", 0)
        if not isinstance(size, int) or size <= 0:
            errors.append(f"pace.window_size must be a positive integer, got {size}")

    if _is_section(config, "own_car"):
        own_car = config["own_car"]
        laps = own_car.get("laps_completed", 0)
        if not isinstance(laps, int) or laps < 0:
            errors.append(f"own_car.laps_completed must be a non-negative integer, got {laps}")

        remaining = own_car.get("remaining_laps")
        if remaining is not None and (not isinstance(remaining, int) or remaining <= 0):
            errors.append(f"own_car.remaining_laps must be positive or null, got {remaining}")

        gap = own_car.get("gap_to_leader", 0.0)
        if not isinstance(gap, (int, float)) or gap < 0:
            errors.append(f"own_car.gap_to_leader must be >= 0, got {gap}")

    if _is_section(config, "logging"):
        level = str(config["logging"].get("level", "INFO")).upper()
        if level not in LOG_LEVELS:
            errors.append(f"logging.level must be one of {LOG_LEVELS}, got '{level}'")

    return errors
