# src/utils/helpers.py

"""
Reusable Helper Utilities
==========================

Small, generic utility functions used across pipelines.

Design Principles:
------------------
- No project-specific assumptions
- No hardcoded paths
- Lightweight and dependency-safe
"""

import os
import pandas as pd
from datetime import datetime


# ==========================================================
# Filesystem Utilities
# ==========================================================

def ensure_directory(path: str) -> None:
    """
    Ensure that a directory exists.

    Notes
    -----
    - Safe to call multiple times.
    - Used in pipelines before writing artifacts.
    """
    os.makedirs(path, exist_ok=True)


def write_text_file(path: str, content: str) -> None:
    """
    Write text content as UTF-8, creating the parent directory.
    """

    parent = os.path.dirname(path)
    if parent:
        ensure_directory(parent)

    with open(path, "w", encoding="utf-8") as handle:
        handle.write(content)


# ==========================================================
# Timestamp Utilities
# ==========================================================

def generate_timestamp(fmt: str = "%Y%m%d_%H%M") -> str:
    """
    Generate formatted timestamp string.

    Default format:
        YYYYMMDD_HHMM

    Used for versioned report and plot filenames.
    """
    return datetime.now().strftime(fmt)


# ==========================================================
# Validation Utilities
# ==========================================================

def validate_dataframe_not_empty(df: pd.DataFrame, name: str) -> None:
    """
    Raise an error if a dataframe is empty.

    Raises
    ------
    ValueError
        If dataframe is empty.
    """
    if df.empty:
        raise ValueError(f"{name} dataframe is empty.")
