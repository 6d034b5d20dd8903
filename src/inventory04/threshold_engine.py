# src/inventory04/threshold_engine.py

"""
Threshold Engine
================

Converts demand statistics and user parameters into reorder
thresholds:

- Lead Time Demand
- Safety Stock
- Reorder Point
- Low / Medium / High threshold bands

Bands:
------
low    = reorder point
medium = low × 1.1
high   = low × 1.2

Statistics are supplied in one of two modes (see
resolve_demand_statistics): computed from the records, or accepted
as precomputed values. No value is ever cached between calls.
"""

from dataclasses import dataclass
from typing import Dict, Sequence
import logging

from ingestion01.record_schema import InventoryRecord
from inventory04.demand_statistics import DemandStatistics, compute_demand_statistics
from inventory04.safety_stock import (
    DEFAULT_Z_SCORE,
    calculate_safety_stock,
    service_level_from_z,
)


logger = logging.getLogger(__name__)


MEDIUM_BAND_FACTOR = 1.1
HIGH_BAND_FACTOR = 1.2


# =========================================================
# Data Model
# =========================================================

@dataclass(frozen=True)
class ThresholdParameters:
    """User-tunable threshold configuration."""
    lead_time_days: int = 5
    safety_stock_percent: float = 20.0
    average_daily_sales: float = 0.0
    demand_std_dev: float = 0.0
    service_level_z: float = DEFAULT_Z_SCORE

    @classmethod
    def from_config(cls, config: Dict) -> "ThresholdParameters":
        """
        Build parameters from the 'thresholds' config section.
        """

        if "thresholds" not in config:
            raise ValueError("Missing 'thresholds' configuration.")

        thresholds_cfg = config["thresholds"]

        params = cls(
            lead_time_days=thresholds_cfg["lead_time_days"],
            safety_stock_percent=thresholds_cfg["safety_stock_percent"],
            average_daily_sales=thresholds_cfg.get("average_daily_sales", 0.0),
            demand_std_dev=thresholds_cfg.get("demand_std_dev", 0.0),
            service_level_z=thresholds_cfg.get("service_level_z", DEFAULT_Z_SCORE),
        )
        params.validate()

        return params

    def validate(self) -> None:
        """
        Fail-fast parameter guardrails.

        Raises
        ------
        ValueError
            If any parameter is out of range.
        """

        if isinstance(self.lead_time_days, bool) or not isinstance(self.lead_time_days, int):
            raise ValueError("lead_time_days must be an integer.")

        if self.lead_time_days < 1:
            raise ValueError("lead_time_days must be at least 1.")

        for name in ("safety_stock_percent", "average_daily_sales",
                     "demand_std_dev", "service_level_z"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be numeric.")
            if value < 0:
                raise ValueError(f"{name} must be non-negative.")


@dataclass(frozen=True)
class ThresholdLevels:
    lead_time_demand: float
    safety_stock: float
    reorder_point: float
    low: float
    medium: float
    high: float

    def band(self, level: str) -> float:
        """Threshold value for 'low', 'medium' or 'high'."""
        if level not in ("low", "medium", "high"):
            raise ValueError(f"Unknown threshold level '{level}'.")
        return getattr(self, level)


@dataclass(frozen=True)
class InventoryMetrics:
    average_demand: float
    demand_std_dev: float
    service_level: float
    stockout_risk: float


# =========================================================
# Statistics Resolution (two explicit modes)
# =========================================================

def resolve_demand_statistics(
    records: Sequence[InventoryRecord],
    average_daily_sales: float = 0.0,
    demand_std_dev: float = 0.0
) -> DemandStatistics:
    """
    Return the demand statistics the engine should use.

    Modes
    -----
    - Compute from data : either supplied value is 0 (or unset).
      Statistics are recomputed from the full record set.
    - Precomputed       : both supplied values are non-zero and are
      used as given.

    Raises
    ------
    PreconditionError
        If statistics must be computed and records is empty.
    """

    if not average_daily_sales or not demand_std_dev:
        logger.debug("Recomputing demand statistics from raw records.")
        return compute_demand_statistics(records)

    return DemandStatistics(
        average_demand=float(average_daily_sales),
        demand_std_dev=float(demand_std_dev),
    )


# =========================================================
# Threshold Calculation
# =========================================================

def calculate_threshold_levels(
    statistics: DemandStatistics,
    lead_time_days: float,
    safety_stock_percent: float,
    service_level_z: float = DEFAULT_Z_SCORE
) -> ThresholdLevels:
    """
    Compute lead time demand, safety stock, reorder point and bands.

    Parameters
    ----------
    statistics : DemandStatistics
        Average demand and demand standard deviation.
    lead_time_days : float
        Lead time in days. 0 collapses every threshold to 0.
    safety_stock_percent : float
        Percentage added on top of the statistical safety stock.
    service_level_z : float
        Service level factor.

    Returns
    -------
    ThresholdLevels
        Unrounded values; rounding is a display concern.
    """

    if lead_time_days < 0:
        raise ValueError("lead_time_days must be non-negative.")

    if statistics.average_demand < 0:
        raise ValueError("average_demand must be non-negative.")

    lead_time_demand = statistics.average_demand * lead_time_days

    safety_stock = calculate_safety_stock(
        demand_std_dev=statistics.demand_std_dev,
        service_level_z=service_level_z,
        lead_time_days=lead_time_days,
        safety_stock_percent=safety_stock_percent,
    )

    reorder_point = lead_time_demand + safety_stock

    low = reorder_point

    return ThresholdLevels(
        lead_time_demand=lead_time_demand,
        safety_stock=safety_stock,
        reorder_point=reorder_point,
        low=low,
        medium=low * MEDIUM_BAND_FACTOR,
        high=low * HIGH_BAND_FACTOR,
    )


def calculate_metrics(
    statistics: DemandStatistics,
    service_level_z: float = DEFAULT_Z_SCORE
) -> InventoryMetrics:
    """
    Display metrics: demand statistics plus service level and
    stockout risk derived from the fixed z-score table.
    """

    service_level = service_level_from_z(service_level_z)

    return InventoryMetrics(
        average_demand=statistics.average_demand,
        demand_std_dev=statistics.demand_std_dev,
        service_level=service_level,
        stockout_risk=1 - service_level,
    )
