"""
Header validation utilities for ITO.

Responsibilities:
- Clean raw CSV header names
- Detect header integrity violations
- Report missing required columns

Execution order (enforced by the ingestor, not this module):
    1. clean_header_names
    2. detect_duplicate_columns
    3. missing_required_headers

Headers are matched by exact name after whitespace trimming.
No case folding or renaming is applied.
"""

from typing import Iterable, List, Optional
import logging


logger = logging.getLogger(__name__)


class SchemaValidationError(Exception):
    """
    Raised when the header row violates expected schema rules.

    The CSV ingestor converts this into an ingestion failure.
    """
    pass


# ---------------------------------------------------------------------
# Header Cleaning
# ---------------------------------------------------------------------
def clean_header_names(columns: Iterable) -> List[str]:
    """
    Trim surrounding whitespace from header names.

    Parameters
    ----------
    columns : Iterable
        Raw header values as read from the first CSV line

    Returns
    -------
    List[str]
        Trimmed header names
    """

    cleaned = []

    for col in columns:
        if not isinstance(col, str):
            raise SchemaValidationError(
                f"Column name must be a string. Found type: {type(col).__name__}"
            )
        cleaned.append(col.strip())

    return cleaned


# ---------------------------------------------------------------------
# Duplicate Detection
# ---------------------------------------------------------------------
def detect_duplicate_columns(
    columns: Iterable[str], watched: Optional[Iterable[str]] = None
) -> None:
    """
    Detect duplicate header names after cleaning.

    Blank names never count as duplicates. When watched is given,
    only repeats of those names are reported; other repeats are
    tolerated.

    Raises
    ------
    SchemaValidationError
        If duplicate column names are found
    """

    watched_names = set(watched) if watched is not None else None

    seen = set()
    duplicates = set()

    for col in columns:
        if not col:
            continue
        if col in seen and (watched_names is None or col in watched_names):
            duplicates.add(col)
        seen.add(col)

    if duplicates:
        raise SchemaValidationError(
            f"Duplicate columns detected in header row: {sorted(duplicates)}"
        )

    logger.debug("No duplicate columns detected.")


# ---------------------------------------------------------------------
# Required Column Validation
# ---------------------------------------------------------------------
def missing_required_headers(
    columns: Iterable[str], required_columns: Iterable[str]
) -> List[str]:
    """
    Return the required column names absent from the header row,
    in the order they are declared in required_columns.
    """

    available = set(columns)
    return [col for col in required_columns if col not in available]

