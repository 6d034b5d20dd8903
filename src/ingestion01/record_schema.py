# src/ingestion01/record_schema.py

"""
Inventory Record Schema
=======================

Defines the row shape accepted by the analytics core and the
coercion / range rules applied to each field.

Row shape:
----------
product_id       : non-empty string
product_name     : non-empty string
date             : ISO calendar date, YYYY-MM-DD
inventory_level  : number >= 0
orders           : number >= 0
lead_time_days   : number >= 0

Rules:
------
- A row either satisfies every rule or is rejected in full
- Every failing field is reported, not only the first
- Blank numeric cells coerce to 0; absent cells fail as "Required"
- Issues carry a field path and a human-readable message
"""

import math
import re
from dataclasses import dataclass, asdict
from datetime import date as Date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd


REQUIRED_COLUMNS = (
    "product_id",
    "product_name",
    "date",
    "inventory_level",
    "orders",
    "lead_time_days",
)

TEXT_FIELDS = ("product_id", "product_name")
NUMERIC_FIELDS = ("inventory_level", "orders", "lead_time_days")

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
DATE_FORMAT_MESSAGE = "Invalid date format. Use YYYY-MM-DD"


# =========================================================
# Data Model
# =========================================================

@dataclass(frozen=True)
class InventoryRecord:
    """One observation for one product on one date - immutable."""
    product_id: str
    product_name: str
    date: str
    inventory_level: float
    orders: float
    lead_time_days: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FieldIssue:
    """A single failed rule: where it failed and why."""
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class RecordValidationError(ValueError):
    """
    Raised when one row (or a batch of rows) violates the schema.

    Carries every FieldIssue found, so callers can aggregate
    or report them individually.
    """

    def __init__(self, issues: Sequence[FieldIssue]):
        self.issues = list(issues)
        super().__init__("; ".join(str(issue) for issue in self.issues))


# =========================================================
# Field Coercion
# =========================================================

def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def _coerce_text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        text = value.strip()
        return text or None
    return None


def _coerce_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        # blank cell -> 0
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None

    return number


def _check_date(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None

    text = value.strip()

    if not DATE_PATTERN.match(text):
        return None

    try:
        Date.fromisoformat(text)
    except ValueError:
        return None

    return text


# =========================================================
# Row Validation
# =========================================================

def collect_record_issues(
    row: Mapping[str, Any],
    path_prefix: str = ""
) -> List[FieldIssue]:
    """
    Check one row against every rule and return all issues found.

    Parameters
    ----------
    row : Mapping[str, Any]
        Column name -> raw value (usually a string from the CSV).
    path_prefix : str
        Prepended to each field path, e.g. "3." for batch row 3.

    Returns
    -------
    List[FieldIssue]
        Empty when the row is valid.
    """

    issues: List[FieldIssue] = []

    for field_name in REQUIRED_COLUMNS:

        path = f"{path_prefix}{field_name}"
        value = row.get(field_name)

        if _is_missing(value):
            issues.append(FieldIssue(path, "Required"))
            continue

        if field_name in TEXT_FIELDS:
            if _coerce_text(value) is None:
                issues.append(FieldIssue(path, "must be a non-empty string"))

        elif field_name == "date":
            if _check_date(value) is None:
                issues.append(FieldIssue(path, DATE_FORMAT_MESSAGE))

        else:
            number = _coerce_number(value)
            if number is None:
                issues.append(FieldIssue(path, "Expected number"))
            elif number < 0:
                issues.append(FieldIssue(path, "must be ≥ 0"))

    return issues


def validate_record(row: Mapping[str, Any]) -> InventoryRecord:
    """
    Coerce one field map into an InventoryRecord.

    Raises
    ------
    RecordValidationError
        If any field fails its rule. No partial record is produced.
    """

    issues = collect_record_issues(row)

    if issues:
        raise RecordValidationError(issues)

    return InventoryRecord(
        product_id=_coerce_text(row["product_id"]),
        product_name=_coerce_text(row["product_name"]),
        date=_check_date(row["date"]),
        inventory_level=_coerce_number(row["inventory_level"]),
        orders=_coerce_number(row["orders"]),
        lead_time_days=_coerce_number(row["lead_time_days"]),
    )


def validate_batch(rows: Sequence[Mapping[str, Any]]) -> List[InventoryRecord]:
    """
    Validate a batch of rows as one unit.

    Every row is checked; if any fails, a single RecordValidationError
    lists every issue with paths of the form "<row index>.<field>".
    Nothing is returned unless the whole batch is valid.
    """

    issues: List[FieldIssue] = []

    for index, row in enumerate(rows):
        issues.extend(collect_record_issues(row, path_prefix=f"{index}."))

    if issues:
        raise RecordValidationError(issues)

    return [validate_record(row) for row in rows]


# =========================================================
# DataFrame Bridge
# =========================================================

def records_to_frame(records: Iterable[InventoryRecord]) -> pd.DataFrame:
    """
    Build a DataFrame with one row per record, columns in schema order.
    """

    rows = [record.to_dict() for record in records]
    return pd.DataFrame(rows, columns=list(REQUIRED_COLUMNS))
