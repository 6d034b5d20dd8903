# src/ingestion01/csv_ingestion.py

"""
CSV ingestion module for the ITO project.

Responsibilities
----------------
- Split raw CSV text into a header and field maps (one per row)
- Validate rows against the inventory record schema
- Strict mode: validate the whole batch, all-or-nothing
- Lenient mode: validate row by row, drop and report bad rows
- Convert every failure into an IngestionResult value

Failure kinds
-------------
ingestion     : content unreadable, empty, or without data rows
validation    : strict mode found at least one invalid row
partial_data  : lenient mode dropped every row

Nothing in this module raises across its public boundary; callers
inspect IngestionResult.ok / error / error_type instead.
"""

from dataclasses import dataclass, field
from io import StringIO
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union
import logging

import pandas as pd

from ingestion01.record_schema import (
    REQUIRED_COLUMNS,
    InventoryRecord,
    RecordValidationError,
    collect_record_issues,
    validate_batch,
    validate_record,
)
from utils.errors import (
    IngestionError,
    InventoryAnalyticsError,
    PartialDataError,
    ValidationError,
)
from utils.schema_utils import (
    SchemaValidationError,
    clean_header_names,
    detect_duplicate_columns,
    missing_required_headers,
)


logger = logging.getLogger(__name__)


NO_VALID_ROWS_MESSAGE = "No valid rows found in file"


# =========================================================
# Result Types
# =========================================================

@dataclass(frozen=True)
class SkippedRow:
    """A row dropped in lenient mode, with the reasons."""
    row_index: int
    messages: Tuple[str, ...]


@dataclass(frozen=True)
class IngestionResult:
    """Outcome of one ingestion call: records or an error, never both."""
    records: List[InventoryRecord] = field(default_factory=list)
    error: Optional[str] = None
    error_type: Optional[str] = None
    skipped_rows: List[SkippedRow] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def skipped_count(self) -> int:
        return len(self.skipped_rows)

    @classmethod
    def failure(cls, exc: InventoryAnalyticsError) -> "IngestionResult":
        return cls(records=[], error=str(exc), error_type=exc.error_type)


# =========================================================
# Text -> Field Maps
# =========================================================

def split_rows(content: str) -> Tuple[List[str], List[Dict[str, Optional[str]]]]:
    """
    Split CSV text into cleaned headers and one field map per data row.

    - The first line is the header row
    - Blank lines after the header are ignored
    - Values are trimmed and matched to headers by position
    - Missing trailing values are absent (None); extra values are ignored
    - Columns with a blank header are dropped; a repeated non-required
      header keeps its last value

    Raises
    ------
    IngestionError
        If the content is empty or the header row is unusable.
    """

    if not isinstance(content, str):
        raise IngestionError(
            f"CSV content must be text, got {type(content).__name__}"
        )

    lines = content.lstrip("\ufeff").splitlines()

    if not lines or not lines[0].strip():
        raise IngestionError("CSV file is empty or missing a header row")

    try:
        headers = clean_header_names(lines[0].split(","))
        detect_duplicate_columns(headers, watched=REQUIRED_COLUMNS)
    except SchemaValidationError as exc:
        raise IngestionError(f"Invalid header row: {exc}") from exc

    data_lines = [line for line in lines[1:] if line.strip()]

    if not data_lines:
        raise IngestionError("CSV file contains no data rows")

    width = len(headers)

    try:
        frame = pd.read_csv(
            StringIO("\n".join(data_lines)),
            header=None,
            names=list(range(width)),
            index_col=False,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            engine="python",
            on_bad_lines=lambda bad_line: bad_line[:width],
        )
    except (pd.errors.ParserError, ValueError) as exc:
        raise IngestionError(f"Failed to parse CSV file: {exc}") from exc

    rows: List[Dict[str, Optional[str]]] = []

    for raw in frame.itertuples(index=False, name=None):
        row = {}
        for header, value in zip(headers, raw):
            if not header:
                continue
            row[header] = value.strip() if isinstance(value, str) else None
        rows.append(row)

    return headers, rows


# =========================================================
# Validation Strategies
# =========================================================

def _validate_strict(rows: List[Dict[str, Optional[str]]]) -> List[InventoryRecord]:
    try:
        return validate_batch(rows)
    except RecordValidationError as exc:
        raise ValidationError(f"Validation failed: {exc}") from exc


def _validate_lenient(
    rows: List[Dict[str, Optional[str]]]
) -> Tuple[List[InventoryRecord], List[SkippedRow]]:

    records: List[InventoryRecord] = []
    skipped: List[SkippedRow] = []

    for index, row in enumerate(rows):
        issues = collect_record_issues(row)

        if issues:
            skipped.append(
                SkippedRow(
                    row_index=index,
                    messages=tuple(str(issue) for issue in issues),
                )
            )
            continue

        records.append(validate_record(row))

    if not records:
        raise PartialDataError(NO_VALID_ROWS_MESSAGE)

    return records, skipped


# =========================================================
# Public Entry Points
# =========================================================

def parse_inventory_csv(
    content: str,
    skip_validation: bool = False
) -> IngestionResult:
    """
    Parse raw CSV text into validated inventory records.

    Parameters
    ----------
    content : str
        Full CSV file content, header row first.
    skip_validation : bool, default False
        False -> strict, all-or-nothing batch validation.
        True  -> lenient, invalid rows are dropped and reported.

    Returns
    -------
    IngestionResult
        records on success; error / error_type on failure.
    """

    try:
        headers, rows = split_rows(content)

        missing = missing_required_headers(headers, REQUIRED_COLUMNS)
        if missing:
            logger.warning(f"[CSV INGESTION] Header row is missing columns: {missing}")

        if skip_validation:
            records, skipped = _validate_lenient(rows)
        else:
            records, skipped = _validate_strict(rows), []

    except InventoryAnalyticsError as exc:
        logger.error(f"[CSV INGESTION] {exc}")
        return IngestionResult.failure(exc)

    if skipped:
        logger.warning(
            f"[CSV INGESTION] Skipped {len(skipped)} invalid row(s) "
            f"out of {len(rows)}"
        )

    logger.info(f"[CSV INGESTION] Loaded {len(records)} record(s)")

    return IngestionResult(records=records, skipped_rows=skipped)


def read_inventory_file(
    path: Union[str, Path],
    skip_validation: bool = False,
    encoding: str = "utf-8",
) -> IngestionResult:
    """
    Read a CSV file in a single scoped read and parse it.

    Unreadable or undecodable files are reported as ingestion
    failures, distinct from validation failures.
    """

    file_path = Path(path)

    logger.info(f"[CSV INGESTION] Reading inventory file {file_path}")

    try:
        with file_path.open("r", encoding=encoding) as handle:
            content = handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        error = IngestionError(f"Failed to read file {file_path}: {exc}")
        logger.error(f"[CSV INGESTION] {error}")
        return IngestionResult.failure(error)

    return parse_inventory_csv(content, skip_validation=skip_validation)
