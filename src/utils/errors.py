# src/utils/errors.py

"""
Domain Exception Hierarchy
==========================

Raised inside the analytics core and converted into result values
at the ingestion and calculation boundaries.

Taxonomy:
---------
- IngestionError    : file content unreadable / empty / headerless
- ValidationError   : strict-mode batch validation failed
- PartialDataError  : lenient mode dropped every row
- PreconditionError : empty dataset passed to statistics / thresholds
"""


class InventoryAnalyticsError(Exception):
    """Base class for all analytics-core failures."""

    error_type = "analytics"


class IngestionError(InventoryAnalyticsError):
    """Raised when raw file content cannot be read or parsed."""

    error_type = "ingestion"


class ValidationError(InventoryAnalyticsError):
    """Raised when a strict-mode batch contains invalid rows."""

    error_type = "validation"


class PartialDataError(InventoryAnalyticsError):
    """Raised when lenient mode leaves zero valid rows."""

    error_type = "partial_data"


class PreconditionError(InventoryAnalyticsError):
    """Raised when a calculation is invoked on an empty dataset."""

    error_type = "precondition"
