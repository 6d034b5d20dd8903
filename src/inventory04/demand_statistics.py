# src/inventory04/demand_statistics.py

"""
Demand Statistics Module
========================

Computes demand statistics over the full provided dataset:

- average_demand : arithmetic mean of orders
- demand_std_dev : population standard deviation of orders

Formula:
--------
σ = sqrt( Σ (x - μ)² / N )

Statistics are always recomputed from raw records, never carried
over from a previous calculation.
"""

from dataclasses import dataclass
from typing import Sequence
import logging

import numpy as np

from ingestion01.record_schema import InventoryRecord
from utils.errors import PreconditionError


logger = logging.getLogger(__name__)


NO_DATA_MESSAGE = "No data available for calculation"


@dataclass(frozen=True)
class DemandStatistics:
    average_demand: float
    demand_std_dev: float


def compute_demand_statistics(records: Sequence[InventoryRecord]) -> DemandStatistics:
    """
    Compute mean and population standard deviation of orders.

    Parameters
    ----------
    records : Sequence[InventoryRecord]
        Full dataset. Must be non-empty.

    Returns
    -------
    DemandStatistics

    Raises
    ------
    PreconditionError
        If records is empty.
    """

    if not records:
        raise PreconditionError(NO_DATA_MESSAGE)

    orders = np.array([record.orders for record in records], dtype=float)

    average_demand = float(orders.mean())

    # Population standard deviation (ddof=0), not the sample estimate
    if np.all(orders == orders[0]):
        demand_std_dev = 0.0
    else:
        demand_std_dev = float(np.std(orders, ddof=0))

    logger.debug(
        f"Demand statistics recomputed over {len(orders)} record(s): "
        f"mean={average_demand:.4f}, std={demand_std_dev:.4f}"
    )

    return DemandStatistics(
        average_demand=average_demand,
        demand_std_dev=demand_std_dev,
    )
