# src/visualization06/chart_data.py

"""
Chart Data Preparation Module
=============================

Builds visualization-ready aggregates from inventory records.
Renderers consume these frames as-is.

Outputs:
--------
1. Threshold zone tagging (per-row danger / warning / caution flags)
2. Orders time series
3. Lead time categories and monthly lead time variation
4. Orders by product (totals, top-N distribution with "Others")
5. Seasonal product demand (product x calendar month share)
6. Stock-to-sales ratio series

Design Principles:
------------------
- Pure data preparation, no plotting
- Input frames are never mutated
- Fail-fast on missing columns
"""

from typing import Dict, Iterable, Optional

import numpy as np
import pandas as pd

from inventory04.threshold_engine import ThresholdLevels
from visualization06.downsampling import downsample_time_series


MONTH_NAMES = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

OTHERS_LABEL = "Others"


def _require_columns(frame: pd.DataFrame, columns: Iterable[str], name: str) -> None:
    missing = [col for col in columns if col not in frame.columns]
    if missing:
        raise ValueError(f"{name} is missing required columns: {missing}")


# ==========================================================
# Threshold Zone Tagging
# ==========================================================

def tag_threshold_zones(frame: pd.DataFrame, levels: ThresholdLevels) -> pd.DataFrame:
    """
    Add threshold columns and zone flags to every row.

    Flags:
    ------
    danger_zone  : inventory <  low
    warning_zone : low    <= inventory < medium
    caution_zone : medium <= inventory < high

    Row order is preserved.
    """

    _require_columns(frame, ["inventory_level"], "chart data")

    tagged = frame.copy()
    inventory = tagged["inventory_level"]

    tagged["low_threshold"] = levels.low
    tagged["medium_threshold"] = levels.medium
    tagged["high_threshold"] = levels.high

    tagged["danger_zone"] = inventory < levels.low
    tagged["warning_zone"] = (inventory >= levels.low) & (inventory < levels.medium)
    tagged["caution_zone"] = (inventory >= levels.medium) & (inventory < levels.high)

    return tagged


def build_orders_series(frame: pd.DataFrame) -> pd.DataFrame:
    """
    Project records onto (date, orders), keeping row order.
    """

    _require_columns(frame, ["date", "orders"], "orders data")

    return frame[["date", "orders"]].reset_index(drop=True)


# ==========================================================
# Lead Time
# ==========================================================

def categorize_lead_time(lead_time_days: float) -> str:
    """
    Bucket a lead time: fast (<=2), standard (<=5), slow (<=10),
    very_slow otherwise.
    """

    if lead_time_days <= 2:
        return "fast"
    if lead_time_days <= 5:
        return "standard"
    if lead_time_days <= 10:
        return "slow"
    return "very_slow"


def add_lead_time_category(frame: pd.DataFrame) -> pd.DataFrame:

    _require_columns(frame, ["lead_time_days"], "chart data")

    categorized = frame.copy()
    categorized["lead_time_category"] = categorized["lead_time_days"].map(categorize_lead_time)

    return categorized


def lead_time_variation_by_month(frame: pd.DataFrame) -> pd.DataFrame:
    """
    Monthly lead time statistics.

    Columns: month (YYYY-MM), mean, std_dev (population), min, max,
    q1 (mean - std), q3 (mean + std). Rows with a zero lead time are
    ignored. Sorted by month.
    """

    _require_columns(frame, ["date", "lead_time_days"], "lead time data")

    columns = ["month", "mean", "std_dev", "min", "max", "q1", "q3"]

    data = frame.loc[frame["lead_time_days"] > 0, ["date", "lead_time_days"]].copy()

    if data.empty:
        return pd.DataFrame(columns=columns)

    data["month"] = pd.to_datetime(data["date"]).dt.strftime("%Y-%m")

    grouped = data.groupby("month")["lead_time_days"]

    summary = pd.DataFrame({
        "mean": grouped.mean(),
        "std_dev": grouped.std(ddof=0),
        "min": grouped.min(),
        "max": grouped.max(),
    }).reset_index()

    summary["q1"] = summary["mean"] - summary["std_dev"]
    summary["q3"] = summary["mean"] + summary["std_dev"]

    return summary[columns].sort_values("month").reset_index(drop=True)


# ==========================================================
# Orders by Product
# ==========================================================

def aggregate_orders_by_product(frame: pd.DataFrame, top_n: Optional[int] = None) -> pd.DataFrame:
    """
    Total orders per product_id, sorted descending.

    product_name and lead_time_days are taken from the first row seen
    for each product.
    """

    _require_columns(
        frame,
        ["product_id", "product_name", "orders", "lead_time_days"],
        "product data",
    )

    totals = (
        frame
        .groupby("product_id", sort=False)
        .agg(
            product_name=("product_name", "first"),
            orders=("orders", "sum"),
            lead_time_days=("lead_time_days", "first"),
        )
        .reset_index()
        .sort_values("orders", ascending=False, kind="mergesort")
        .reset_index(drop=True)
    )

    if top_n is not None:
        totals = totals.head(top_n)

    return totals


def product_order_distribution(frame: pd.DataFrame, max_products: int = 7) -> pd.DataFrame:
    """
    Orders per product name, descending. Products beyond
    max_products are folded into a single "Others" row.

    Columns: product_name, orders, share (percent of total).
    """

    _require_columns(frame, ["product_name", "orders"], "product data")

    if max_products < 1:
        raise ValueError("max_products must be at least 1.")

    totals = (
        frame
        .groupby("product_name", sort=False)["orders"]
        .sum()
        .sort_values(ascending=False, kind="mergesort")
        .reset_index()
    )

    if len(totals) > max_products:
        others_value = totals["orders"].iloc[max_products:].sum()
        totals = pd.concat(
            [
                totals.head(max_products),
                pd.DataFrame([{"product_name": OTHERS_LABEL, "orders": others_value}]),
            ],
            ignore_index=True,
        )

    grand_total = totals["orders"].sum()
    totals["share"] = (totals["orders"] / grand_total * 100) if grand_total > 0 else 0.0

    return totals


# ==========================================================
# Seasonal Product Demand
# ==========================================================

def seasonal_product_demand(frame: pd.DataFrame, max_products: int = 10) -> pd.DataFrame:
    """
    Product x calendar-month demand for the top products.

    For each of the top max_products products (by total orders) and
    each of the 12 calendar months: volume and percentage of that
    month's total orders across all products.

    Columns: product_name, product_index, month, month_index,
    volume, percentage.
    """

    _require_columns(frame, ["product_name", "date", "orders"], "seasonal data")

    columns = ["product_name", "product_index", "month", "month_index", "volume", "percentage"]

    data = frame.loc[frame["orders"] > 0, ["product_name", "date", "orders"]].copy()

    if data.empty:
        return pd.DataFrame(columns=columns)

    data["month_index"] = pd.to_datetime(data["date"]).dt.month - 1

    product_totals = (
        data.groupby("product_name", sort=False)["orders"]
        .sum()
        .sort_values(ascending=False, kind="mergesort")
    )
    top_products = list(product_totals.index[:max_products])

    monthly_totals = data.groupby("month_index")["orders"].sum()
    volumes = data.groupby(["product_name", "month_index"])["orders"].sum()

    rows = []

    for product_index, product in enumerate(top_products):
        for month_index in range(12):
            volume = float(volumes.get((product, month_index), 0.0))
            month_total = float(monthly_totals.get(month_index, 0.0)) or 1.0
            rows.append({
                "product_name": product,
                "product_index": product_index,
                "month": MONTH_NAMES[month_index],
                "month_index": month_index,
                "volume": volume,
                "percentage": volume / month_total * 100,
            })

    return pd.DataFrame(rows, columns=columns)


# ==========================================================
# Stock-to-Sales Ratio
# ==========================================================

def ratio_status(ratio: float) -> str:
    """Label a stock-to-sales ratio."""

    if ratio <= 1:
        return "Critical - Risk of stockout"
    if ratio <= 2:
        return "Low - Need to reorder"
    if ratio <= 4:
        return "Healthy - Optimal balance"
    return "High - Potential overstocking"


def stock_to_sales_ratio(frame: pd.DataFrame, max_points: Optional[int] = None) -> pd.DataFrame:
    """
    Per-row inventory / orders ratio (inventory itself when orders is 0).

    Rows with zero inventory are dropped. Sorted by date and,
    when max_points is given, downsampled.

    Columns: date, orders, inventory_level, ratio.
    """

    _require_columns(frame, ["date", "orders", "inventory_level"], "ratio data")

    data = frame.loc[frame["inventory_level"] > 0, ["date", "orders", "inventory_level"]].copy()

    data["ratio"] = np.where(
        data["orders"] > 0,
        data["inventory_level"] / data["orders"].where(data["orders"] > 0, 1),
        data["inventory_level"],
    )

    data = data.sort_values("date", key=pd.to_datetime, kind="mergesort").reset_index(drop=True)

    if max_points is not None:
        data = downsample_time_series(data, date_column="date", max_points=max_points)

    return data


def average_ratio(ratio_frame: pd.DataFrame) -> float:
    """Mean of the ratio column; 0 for an empty frame."""

    if ratio_frame.empty:
        return 0.0

    return float(ratio_frame["ratio"].mean())


def summarize_ratio(ratio_frame: pd.DataFrame) -> Dict[str, object]:
    """Average ratio and its status label, for reference lines."""

    value = average_ratio(ratio_frame)

    return {
        "average_ratio": value,
        "status": ratio_status(value),
    }
