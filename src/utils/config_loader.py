# src/utils/config_loader.py

"""
Centralized configuration loader for the ITO project.

Responsibilities:
- Load YAML configuration
- Validate mandatory sections
- Enforce type checks per section
- Provide a single, safe config object

Design Principles:
------------------
- Fail-fast validation
- Strict type checking
- No silent defaults for required keys
"""

from pathlib import Path
from typing import Dict, Any
import yaml
import logging


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = "config/config.yaml"

REQUIRED_SECTIONS = {
    "project",
    "paths",
    "logging",
    "ingestion",
    "thresholds",
    "charts",
    "visualization",
    "export",
}


class ConfigError(Exception):
    """Raised when configuration validation fails."""
    pass


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(
            f"Configuration file not found at path: {path.resolve()}"
        )

    if not path.is_file():
        raise ConfigError(
            f"Configuration path is not a file: {path.resolve()}"
        )

    if path.suffix not in {".yaml", ".yml"}:
        raise ConfigError(
            f"Invalid config file format: {path.name}. Expected a YAML file."
        )

    try:
        with path.open("r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(
            f"Failed to read configuration file: {path.resolve()} ({exc})"
        ) from exc
    except yaml.YAMLError as exc:
        raise ConfigError(
            f"Failed to parse YAML configuration: {exc}"
        ) from exc

    if config is None:
        raise ConfigError(
            "Configuration file is empty or contains no valid YAML content."
        )

    if not isinstance(config, dict):
        raise ConfigError(
            "Top-level configuration must be a dictionary."
        )

    validate_config(config)

    logger.info("Configuration loaded and validated successfully.")

    return dict(config)


def validate_config(config: Dict[str, Any]) -> None:
    missing = REQUIRED_SECTIONS - config.keys()
    if missing:
        raise ConfigError(
            f"Missing required config sections: {sorted(missing)}"
        )

    extra_sections = set(config.keys()) - REQUIRED_SECTIONS
    if extra_sections:
        raise ConfigError(
            f"Unknown top-level config sections detected: {sorted(extra_sections)}"
        )

    for section in REQUIRED_SECTIONS:
        if not isinstance(config.get(section), dict):
            raise ConfigError(
                f"Config section '{section}' must be a dictionary."
            )

    _validate_paths(config)
    _validate_logging(config)
    _validate_ingestion(config)
    _validate_thresholds(config)
    _validate_charts(config)
    _validate_export(config)


def _validate_paths(config: Dict[str, Any]) -> None:
    paths_cfg = config["paths"]

    if not isinstance(paths_cfg.get("logs"), str):
        raise ConfigError("paths.logs must be string.")

    data_cfg = paths_cfg.get("data")
    if not isinstance(data_cfg, dict) or not isinstance(data_cfg.get("raw"), str):
        raise ConfigError("paths.data.raw must be string.")

    output_cfg = paths_cfg.get("output")
    if not isinstance(output_cfg, dict):
        raise ConfigError("paths.output must be a dictionary.")

    for key in ("reports", "plots"):
        if not isinstance(output_cfg.get(key), str):
            raise ConfigError(f"paths.output.{key} must be string.")


def _validate_logging(config: Dict[str, Any]) -> None:
    logging_cfg = config["logging"]

    required = {"level", "log_to_file", "filename"}
    missing = required - logging_cfg.keys()
    if missing:
        raise ConfigError(
            f"Missing required logging config keys: {sorted(missing)}"
        )

    if not isinstance(logging_cfg["log_to_file"], bool):
        raise ConfigError("logging.log_to_file must be boolean.")


def _validate_ingestion(config: Dict[str, Any]) -> None:
    ingestion_cfg = config["ingestion"]

    file_name = ingestion_cfg.get("file")
    if not isinstance(file_name, str) or not file_name:
        raise ConfigError("ingestion.file must be a non-empty string.")

    if not isinstance(ingestion_cfg.get("encoding", "utf-8"), str):
        raise ConfigError("ingestion.encoding must be string.")

    if not isinstance(ingestion_cfg.get("skip_validation", False), bool):
        raise ConfigError("ingestion.skip_validation must be boolean.")


def _validate_thresholds(config: Dict[str, Any]) -> None:
    thresholds_cfg = config["thresholds"]

    lead_time = thresholds_cfg.get("lead_time_days")
    if isinstance(lead_time, bool) or not isinstance(lead_time, int) or lead_time < 1:
        raise ConfigError("thresholds.lead_time_days must be positive integer.")

    required_numeric = ("safety_stock_percent", "service_level_z")
    optional_numeric = ("average_daily_sales", "demand_std_dev")

    for key in required_numeric + optional_numeric:

        if key not in thresholds_cfg:
            if key in required_numeric:
                raise ConfigError(f"Missing 'thresholds.{key}' configuration.")
            continue

        value = thresholds_cfg[key]

        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"thresholds.{key} must be numeric.")

        if value < 0:
            raise ConfigError(f"thresholds.{key} must be non-negative.")


def _validate_charts(config: Dict[str, Any]) -> None:
    charts_cfg = config["charts"]

    for key in ("max_time_series_points", "max_products_to_show", "max_top_products"):
        value = charts_cfg.get(key)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigError(f"charts.{key} must be positive integer.")

    if not isinstance(config["visualization"].get("enabled"), bool):
        raise ConfigError("visualization.enabled must be boolean.")


def _validate_export(config: Dict[str, Any]) -> None:
    export_cfg = config["export"]

    if not isinstance(export_cfg.get("enabled"), bool):
        raise ConfigError("export.enabled must be boolean.")

    filename = export_cfg.get("filename")
    if not isinstance(filename, str) or not filename.strip():
        raise ConfigError("export.filename must be a non-empty string.")

    style = export_cfg.get("style", "text")
    if style not in {"text", "table"}:
        raise ConfigError(
            f"Invalid export.style '{style}'. Allowed values are: ['table', 'text']"
        )
