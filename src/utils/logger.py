# src/utils/logger.py

"""
Project Logging Setup
=====================

One call to get_logger(config) wires console (and optionally file)
output for the whole ITO tree:

- the "ITO" logger used by pipelines and main.py
- the package loggers ("ingestion01", "inventory04", ...) that library
  modules reach through logging.getLogger(__name__)

All of them share the same handlers and level and never propagate to
the root logger. Calling get_logger again returns the configured
"ITO" logger untouched.
"""

import os
import logging
from typing import Dict, List


LOGGER_NAME = "ITO"

PACKAGE_LOGGERS = (
    "ingestion01",
    "inventory04",
    "visualization06",
    "pipelines",
    "utils",
)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

VALID_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


# ---------------------------------------------------------------------
# Config lookups
# ---------------------------------------------------------------------

def _resolve_level(logging_cfg: Dict) -> int:

    if "level" not in logging_cfg:
        raise ValueError("Missing 'logging.level' in configuration.")

    name = str(logging_cfg["level"]).upper()

    if name not in VALID_LEVELS:
        raise ValueError(
            f"Invalid log level '{name}'. "
            f"Valid options: {sorted(VALID_LEVELS)}"
        )

    return VALID_LEVELS[name]


def _log_file_path(config: Dict) -> str:
    """Target of the file handler; creates paths.logs on demand."""

    filename = config["logging"].get("filename")

    if not isinstance(filename, str) or not filename.strip():
        raise ValueError("logging.filename must be a non-empty string.")

    log_dir = config["paths"]["logs"]
    os.makedirs(log_dir, exist_ok=True)

    return os.path.join(log_dir, filename)


def _build_handlers(config: Dict) -> List[logging.Handler]:

    formatter = logging.Formatter(LOG_FORMAT)

    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if config["logging"].get("log_to_file", False):
        handlers.append(logging.FileHandler(_log_file_path(config), encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)

    return handlers


# ---------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------

def get_logger(config: Dict) -> logging.Logger:
    """
    Configure project logging from the 'logging' config section.

    Parameters
    ----------
    config : Dict
        Loaded project configuration; needs 'logging' and 'paths.logs'.

    Returns
    -------
    logging.Logger
        The "ITO" logger.

    Raises
    ------
    ValueError
        On a missing section, unknown level or empty log filename.
    """

    if not isinstance(config, dict):
        raise ValueError("config must be a dictionary.")

    if "logging" not in config:
        raise ValueError("Missing 'logging' section in configuration.")

    if "logs" not in config.get("paths", {}):
        raise ValueError("Missing 'paths.logs' configuration.")

    project_logger = logging.getLogger(LOGGER_NAME)

    if project_logger.handlers:
        return project_logger

    level = _resolve_level(config["logging"])
    handlers = _build_handlers(config)

    for name in (LOGGER_NAME,) + PACKAGE_LOGGERS:
        target = logging.getLogger(name)
        target.setLevel(level)
        target.propagate = False
        for handler in handlers:
            target.addHandler(handler)

    return project_logger
