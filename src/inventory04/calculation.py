# src/inventory04/calculation.py

"""
Threshold Calculation Workflow
==============================

Single entry point the calling layer uses to turn a dataset plus
parameters into everything the results view needs:

1. Demand statistics (recomputed or precomputed)
2. Threshold levels
3. Chart data with per-row zone flags
4. Orders series
5. Display metrics

Optionally downsamples chart payloads before returning them.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple
import logging

import pandas as pd

from ingestion01.record_schema import InventoryRecord, records_to_frame
from inventory04.demand_statistics import NO_DATA_MESSAGE, DemandStatistics
from inventory04.safety_stock import DEFAULT_Z_SCORE
from inventory04.threshold_engine import (
    InventoryMetrics,
    ThresholdLevels,
    ThresholdParameters,
    calculate_metrics,
    calculate_threshold_levels,
    resolve_demand_statistics,
)
from utils.errors import PreconditionError
from visualization06.chart_data import build_orders_series, tag_threshold_zones
from visualization06.downsampling import downsample_time_series


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculationRequest:
    records: Tuple[InventoryRecord, ...]
    lead_time_days: int
    safety_stock_percent: float
    service_level_z: float = DEFAULT_Z_SCORE
    average_daily_sales: float = 0.0
    demand_std_dev: float = 0.0

    @classmethod
    def from_parameters(
        cls,
        records: Sequence[InventoryRecord],
        params: ThresholdParameters
    ) -> "CalculationRequest":
        return cls(
            records=tuple(records),
            lead_time_days=params.lead_time_days,
            safety_stock_percent=params.safety_stock_percent,
            service_level_z=params.service_level_z,
            average_daily_sales=params.average_daily_sales,
            demand_std_dev=params.demand_std_dev,
        )


@dataclass(frozen=True)
class CalculationResponse:
    thresholds: ThresholdLevels
    chart_data: pd.DataFrame
    orders_series: pd.DataFrame
    recomputed_stats: DemandStatistics
    metrics: InventoryMetrics


def run_threshold_calculation(
    request: CalculationRequest,
    max_points: Optional[int] = None
) -> CalculationResponse:
    """
    Execute one threshold calculation.

    Parameters
    ----------
    request : CalculationRequest
        Dataset snapshot and parameters.
    max_points : int, optional
        When given, chart_data and orders_series are downsampled to
        at most this many points.

    Returns
    -------
    CalculationResponse

    Raises
    ------
    PreconditionError
        If the request carries no records.
    """

    if not request.records:
        raise PreconditionError(NO_DATA_MESSAGE)

    statistics = resolve_demand_statistics(
        request.records,
        average_daily_sales=request.average_daily_sales,
        demand_std_dev=request.demand_std_dev,
    )

    thresholds = calculate_threshold_levels(
        statistics,
        lead_time_days=request.lead_time_days,
        safety_stock_percent=request.safety_stock_percent,
        service_level_z=request.service_level_z,
    )

    frame = records_to_frame(request.records)

    chart_data = tag_threshold_zones(frame, thresholds)
    orders_series = build_orders_series(frame)

    if max_points is not None:
        chart_data = downsample_time_series(chart_data, "date", max_points)
        orders_series = downsample_time_series(orders_series, "date", max_points)

    logger.info(
        f"Thresholds calculated over {len(request.records)} record(s): "
        f"low={thresholds.low:.2f}, medium={thresholds.medium:.2f}, "
        f"high={thresholds.high:.2f}"
    )

    return CalculationResponse(
        thresholds=thresholds,
        chart_data=chart_data,
        orders_series=orders_series,
        recomputed_stats=statistics,
        metrics=calculate_metrics(statistics, request.service_level_z),
    )
