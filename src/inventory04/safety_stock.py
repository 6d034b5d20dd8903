# src/inventory04/safety_stock.py

"""
Safety Stock Calculation Module
================================

Safety stock with a percentage adjustment on top of the
statistical base.

Formula:
--------
SafetyStockBase = Z × σ_d × √LeadTime
SafetyStock     = SafetyStockBase × (1 + SafetyStockPercent / 100)

Where:
- Z = service level factor (z-score)
- σ_d = demand standard deviation
- LeadTime = lead time in days

Service level lookup:
---------------------
Z-scores map to service levels through a fixed table.
Unrecognized z-scores map to 95%.
"""

import math


SERVICE_LEVEL_BY_Z = {
    1.28: 0.90,
    1.64: 0.95,
    1.96: 0.975,
    2.33: 0.99,
    2.58: 0.995,
}

DEFAULT_SERVICE_LEVEL = 0.95
DEFAULT_Z_SCORE = 1.64


def service_level_from_z(z_score: float) -> float:
    """
    Map a z-score to its service level (fraction, e.g. 0.95).
    """
    return SERVICE_LEVEL_BY_Z.get(z_score, DEFAULT_SERVICE_LEVEL)


def calculate_safety_stock_base(
    demand_std_dev: float,
    service_level_z: float,
    lead_time_days: float
) -> float:
    """
    Statistical safety stock: Z × σ_d × √LeadTime.
    """

    if demand_std_dev < 0:
        raise ValueError("demand_std_dev must be non-negative.")

    if service_level_z < 0:
        raise ValueError("service_level_z must be non-negative.")

    if lead_time_days < 0:
        raise ValueError("lead_time_days must be non-negative.")

    return service_level_z * demand_std_dev * math.sqrt(lead_time_days)


def calculate_safety_stock(
    demand_std_dev: float,
    service_level_z: float,
    lead_time_days: float,
    safety_stock_percent: float
) -> float:
    """
    Calculate safety stock scaled by the safety stock percentage.

    Parameters
    ----------
    demand_std_dev : float
        Population standard deviation of daily demand.
    service_level_z : float
        Service level factor (e.g., 1.64 for 95%).
    lead_time_days : float
        Supplier lead time in days. 0 yields 0.
    safety_stock_percent : float
        Extra buffer as a percentage of the statistical base.

    Returns
    -------
    float
        Safety stock quantity (unrounded).
    """

    if safety_stock_percent < 0:
        raise ValueError("safety_stock_percent must be non-negative.")

    base = calculate_safety_stock_base(
        demand_std_dev,
        service_level_z,
        lead_time_days
    )

    return base * (1 + safety_stock_percent / 100)
