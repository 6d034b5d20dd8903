# src/inventory04/stockout_zones.py

"""
Stockout Zone Detection
=======================

Segments a chronologically sorted inventory series into contiguous
runs where inventory sits at or below a threshold band.

Classification (first match wins):
----------------------------------
low    : inventory <= low
medium : inventory <= medium
high   : inventory <= high
none   : above high

A run of equal classifications forms one zone; "none" closes the
current zone without opening a new one.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence
import logging

from ingestion01.record_schema import InventoryRecord
from inventory04.threshold_engine import ThresholdLevels


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockoutZone:
    start_date: str
    end_date: str
    level: str
    min_inventory_level: float
    threshold: float


def classify_inventory_level(inventory_level: float, levels: ThresholdLevels) -> Optional[str]:
    """
    Return 'low', 'medium', 'high' or None for one inventory level.
    Boundary values fall into the lower band.
    """

    if inventory_level <= levels.low:
        return "low"
    if inventory_level <= levels.medium:
        return "medium"
    if inventory_level <= levels.high:
        return "high"
    return None


def identify_stockout_zones(
    records: Sequence[InventoryRecord],
    levels: ThresholdLevels
) -> List[StockoutZone]:
    """
    Detect contiguous threshold zones in date order.

    Parameters
    ----------
    records : Sequence[InventoryRecord]
        Dataset in any order. Sorted by date here (stable: records
        sharing a date keep their input order).
    levels : ThresholdLevels
        Thresholds to classify against.

    Returns
    -------
    List[StockoutZone]
        Non-overlapping zones ordered by start date.
    """

    # ISO YYYY-MM-DD strings sort chronologically; sorted() is stable
    ordered = sorted(records, key=lambda record: record.date)

    zones: List[StockoutZone] = []
    current: Optional[StockoutZone] = None

    for record in ordered:

        level = classify_inventory_level(record.inventory_level, levels)

        if current is not None and level == current.level:
            current = StockoutZone(
                start_date=current.start_date,
                end_date=record.date,
                level=current.level,
                min_inventory_level=min(current.min_inventory_level, record.inventory_level),
                threshold=current.threshold,
            )
            continue

        if current is not None:
            zones.append(current)
            current = None

        if level is not None:
            current = StockoutZone(
                start_date=record.date,
                end_date=record.date,
                level=level,
                min_inventory_level=record.inventory_level,
                threshold=levels.band(level),
            )

    if current is not None:
        zones.append(current)

    logger.debug(f"Identified {len(zones)} stockout zone(s) over {len(ordered)} record(s)")

    return zones
