# src/inventory04/session.py

"""
Analysis Session
================

Explicit context object holding what the calling layer keeps
between steps: the uploaded dataset, the user's parameters and the
last calculation.

The analytics core stays stateless; this object only passes its
snapshot into core functions and stores what they return.

User parameters and recomputed statistics are kept apart, so a
derived average / standard deviation never becomes the input of the
next calculation.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple, Union
import logging

from ingestion01.csv_ingestion import (
    IngestionResult,
    parse_inventory_csv,
    read_inventory_file,
)
from ingestion01.record_schema import InventoryRecord
from inventory04.calculation import (
    CalculationRequest,
    CalculationResponse,
    run_threshold_calculation,
)
from inventory04.demand_statistics import NO_DATA_MESSAGE
from inventory04.stockout_zones import StockoutZone, identify_stockout_zones
from inventory04.threshold_engine import ThresholdParameters
from inventory04.threshold_report import format_threshold_report
from utils.errors import InventoryAnalyticsError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculationOutcome:
    """A calculation response or an error message, never both."""
    response: Optional[CalculationResponse] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class AnalysisSession:
    """
    Per-user analysis context.

    Typical flow:
        session = AnalysisSession()
        session.load_csv(text)
        outcome = session.calculate(max_points=100)
        zones = session.stockout_zones()
        report = session.export_report()
    """

    def __init__(self, params: Optional[ThresholdParameters] = None):
        self._default_params = params or ThresholdParameters()
        self.reset()

    # -----------------------------------------------------
    # State
    # -----------------------------------------------------

    def reset(self) -> None:
        self.records: Tuple[InventoryRecord, ...] = ()
        self.params: ThresholdParameters = self._default_params
        self.last_response: Optional[CalculationResponse] = None
        self.last_ingestion: Optional[IngestionResult] = None
        self.error: Optional[str] = None

    @property
    def has_data(self) -> bool:
        return len(self.records) > 0

    # -----------------------------------------------------
    # Upload
    # -----------------------------------------------------

    def _apply_ingestion(self, result: IngestionResult) -> IngestionResult:
        self.last_ingestion = result
        self.last_response = None

        if result.ok:
            self.records = tuple(result.records)
            self.error = None
        else:
            self.records = ()
            self.error = result.error

        return result

    def load_csv(self, content: str, skip_validation: bool = False) -> IngestionResult:
        return self._apply_ingestion(
            parse_inventory_csv(content, skip_validation=skip_validation)
        )

    def load_file(
        self,
        path: Union[str, Path],
        skip_validation: bool = False,
        encoding: str = "utf-8"
    ) -> IngestionResult:
        return self._apply_ingestion(
            read_inventory_file(path, skip_validation=skip_validation, encoding=encoding)
        )

    # -----------------------------------------------------
    # Parameters
    # -----------------------------------------------------

    def update_parameters(self, **changes) -> ThresholdParameters:
        """
        Replace selected parameters. Raises ValueError on invalid values
        and leaves the current parameters untouched.
        """

        candidate = replace(self.params, **changes)
        candidate.validate()
        self.params = candidate

        return self.params

    def display_parameters(self) -> ThresholdParameters:
        """
        Parameters with the statistics actually used by the last
        calculation filled in, for display only.
        """

        if self.last_response is None:
            return self.params

        stats = self.last_response.recomputed_stats

        return replace(
            self.params,
            average_daily_sales=stats.average_demand,
            demand_std_dev=stats.demand_std_dev,
        )

    # -----------------------------------------------------
    # Calculation
    # -----------------------------------------------------

    def calculate(self, max_points: Optional[int] = None) -> CalculationOutcome:
        """
        Run the threshold calculation on the current snapshot.
        Failures come back as CalculationOutcome.error.
        """

        if not self.has_data:
            self.error = NO_DATA_MESSAGE
            return CalculationOutcome(error=self.error)

        try:
            self.params.validate()
            request = CalculationRequest.from_parameters(self.records, self.params)
            response = run_threshold_calculation(request, max_points=max_points)
        except (InventoryAnalyticsError, ValueError) as exc:
            logger.error(f"Error calculating thresholds: {exc}")
            self.error = str(exc)
            return CalculationOutcome(error=self.error)

        self.last_response = response
        self.error = None

        return CalculationOutcome(response=response)

    def stockout_zones(self) -> List[StockoutZone]:
        if self.last_response is None:
            return []
        return identify_stockout_zones(self.records, self.last_response.thresholds)

    def export_report(
        self,
        style: str = "text",
        exported_at: Optional[datetime] = None
    ) -> Optional[str]:
        """
        Threshold report for the last calculation; None before one ran.
        """

        if self.last_response is None:
            return None

        return format_threshold_report(
            self.last_response.thresholds,
            self.params,
            self.last_response.metrics,
            exported_at=exported_at,
            style=style,
        )
