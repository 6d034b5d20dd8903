"""
Tests for chart data preparation.

Covers:
1. Threshold zone flags
2. Lead time categories and monthly variation
3. Orders by product / distribution with "Others"
4. Seasonal product demand
5. Stock-to-sales ratio
"""

import pandas as pd
import pytest

from ingestion01.record_schema import records_to_frame
from inventory04.threshold_engine import ThresholdLevels
from visualization06.chart_data import (
    OTHERS_LABEL,
    add_lead_time_category,
    aggregate_orders_by_product,
    build_orders_series,
    categorize_lead_time,
    lead_time_variation_by_month,
    product_order_distribution,
    ratio_status,
    seasonal_product_demand,
    stock_to_sales_ratio,
    summarize_ratio,
    tag_threshold_zones,
)

from conftest import make_record


@pytest.fixture
def levels():
    return ThresholdLevels(80.0, 20.0, 100.0, 100.0, 110.0, 120.0)


@pytest.fixture
def product_frame():
    records = [
        make_record("2024-01-05", orders=10, product_id="A", product_name="Alpha", lead_time_days=2),
        make_record("2024-01-06", orders=30, product_id="B", product_name="Beta", lead_time_days=4),
        make_record("2024-02-05", orders=5, product_id="A", product_name="Alpha", lead_time_days=6),
        make_record("2024-02-06", orders=50, product_id="C", product_name="Gamma", lead_time_days=12),
        make_record("2024-02-07", orders=0, product_id="D", product_name="Delta", lead_time_days=0),
    ]
    return records_to_frame(records)


# ---------------------------------------------------------------------
# 1. Zone flags
# ---------------------------------------------------------------------

def test_zone_flags_are_strict_at_boundaries(levels):
    frame = records_to_frame([
        make_record("2024-01-01", inventory_level=99.9),
        make_record("2024-01-02", inventory_level=100),
        make_record("2024-01-03", inventory_level=110),
        make_record("2024-01-04", inventory_level=120),
    ])

    tagged = tag_threshold_zones(frame, levels)

    assert list(tagged["danger_zone"]) == [True, False, False, False]
    assert list(tagged["warning_zone"]) == [False, True, False, False]
    assert list(tagged["caution_zone"]) == [False, False, True, False]
    assert set(tagged["low_threshold"]) == {100.0}
    assert "danger_zone" not in frame.columns


def test_orders_series_keeps_row_order(product_frame):
    series = build_orders_series(product_frame)

    assert list(series.columns) == ["date", "orders"]
    assert list(series["orders"]) == [10.0, 30.0, 5.0, 50.0, 0.0]


# ---------------------------------------------------------------------
# 2. Lead time
# ---------------------------------------------------------------------

@pytest.mark.parametrize(
    "days, category",
    [(0, "fast"), (2, "fast"), (3, "standard"), (5, "standard"),
     (10, "slow"), (10.5, "very_slow")],
)
def test_categorize_lead_time(days, category):
    assert categorize_lead_time(days) == category


def test_add_lead_time_category(product_frame):
    categorized = add_lead_time_category(product_frame)

    assert list(categorized["lead_time_category"]) == [
        "fast", "standard", "slow", "very_slow", "fast"
    ]


def test_lead_time_variation_by_month(product_frame):
    summary = lead_time_variation_by_month(product_frame)

    assert list(summary["month"]) == ["2024-01", "2024-02"]

    january = summary.iloc[0]
    assert january["mean"] == pytest.approx(3.0)
    assert january["std_dev"] == pytest.approx(1.0)
    assert (january["min"], january["max"]) == (2.0, 4.0)
    assert january["q1"] == pytest.approx(2.0)
    assert january["q3"] == pytest.approx(4.0)

    # zero lead time row is ignored
    assert summary.iloc[1]["mean"] == pytest.approx(9.0)


# ---------------------------------------------------------------------
# 3. Products
# ---------------------------------------------------------------------

def test_aggregate_orders_by_product(product_frame):
    totals = aggregate_orders_by_product(product_frame)

    assert list(totals["product_id"]) == ["C", "B", "A", "D"]
    alpha = totals.set_index("product_id").loc["A"]
    assert alpha["orders"] == 15.0
    assert alpha["lead_time_days"] == 2.0


def test_aggregate_orders_top_n(product_frame):
    assert len(aggregate_orders_by_product(product_frame, top_n=2)) == 2


def test_distribution_folds_tail_into_others(product_frame):
    distribution = product_order_distribution(product_frame, max_products=2)

    assert list(distribution["product_name"]) == ["Gamma", "Beta", OTHERS_LABEL]
    assert list(distribution["orders"]) == [50.0, 30.0, 15.0]
    assert distribution["share"].sum() == pytest.approx(100.0)


def test_distribution_without_tail(product_frame):
    distribution = product_order_distribution(product_frame, max_products=7)

    assert OTHERS_LABEL not in set(distribution["product_name"])


# ---------------------------------------------------------------------
# 4. Seasonal demand
# ---------------------------------------------------------------------

def test_seasonal_product_demand(product_frame):
    seasonal = seasonal_product_demand(product_frame, max_products=2)

    assert len(seasonal) == 24
    assert list(seasonal["product_name"].unique()) == ["Gamma", "Beta"]

    gamma_feb = seasonal[
        (seasonal["product_name"] == "Gamma") & (seasonal["month"] == "Feb")
    ].iloc[0]
    assert gamma_feb["volume"] == 50.0
    assert gamma_feb["percentage"] == pytest.approx(50 / 55 * 100)

    beta_mar = seasonal[
        (seasonal["product_name"] == "Beta") & (seasonal["month_index"] == 2)
    ].iloc[0]
    assert beta_mar["volume"] == 0.0
    assert beta_mar["percentage"] == 0.0


def test_seasonal_demand_empty_when_no_orders():
    frame = records_to_frame([make_record("2024-01-01", orders=0)])

    assert seasonal_product_demand(frame).empty


# ---------------------------------------------------------------------
# 5. Stock-to-sales ratio
# ---------------------------------------------------------------------

@pytest.mark.parametrize(
    "ratio, prefix",
    [(0.5, "Critical"), (1, "Critical"), (1.5, "Low"), (3, "Healthy"), (4.5, "High")],
)
def test_ratio_status(ratio, prefix):
    assert ratio_status(ratio).startswith(prefix)


def test_stock_to_sales_ratio():
    frame = records_to_frame([
        make_record("2024-01-03", inventory_level=40, orders=20),
        make_record("2024-01-01", inventory_level=30, orders=0),
        make_record("2024-01-02", inventory_level=0, orders=5),
    ])

    ratios = stock_to_sales_ratio(frame)

    assert list(ratios["date"]) == ["2024-01-01", "2024-01-03"]
    assert list(ratios["ratio"]) == pytest.approx([30.0, 2.0])

    summary = summarize_ratio(ratios)
    assert summary["average_ratio"] == pytest.approx(16.0)
    assert summary["status"].startswith("High")


def test_stock_to_sales_ratio_downsampled():
    frame = records_to_frame([
        make_record(f"2024-01-{d:02d}", inventory_level=10 * d, orders=10)
        for d in range(1, 21)
    ])

    ratios = stock_to_sales_ratio(frame, max_points=5)

    assert len(ratios) == 5


def test_summarize_empty_ratio_frame():
    empty = pd.DataFrame(columns=["date", "orders", "inventory_level", "ratio"])

    assert summarize_ratio(empty)["average_ratio"] == 0.0


def test_missing_columns_rejected():
    with pytest.raises(ValueError):
        tag_threshold_zones(pd.DataFrame({"date": ["2024-01-01"]}), None)
