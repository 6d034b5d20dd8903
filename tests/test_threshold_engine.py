"""
Tests for safety stock, threshold levels and display metrics.
"""

import math

import pytest

from inventory04.demand_statistics import DemandStatistics
from inventory04.safety_stock import (
    calculate_safety_stock,
    calculate_safety_stock_base,
    service_level_from_z,
)
from inventory04.threshold_engine import (
    ThresholdParameters,
    calculate_metrics,
    calculate_threshold_levels,
    resolve_demand_statistics,
)
from utils.errors import PreconditionError

from conftest import make_record


# ---------------------------------------------------------------------
# Safety stock
# ---------------------------------------------------------------------

def test_safety_stock_base_formula():
    assert calculate_safety_stock_base(10, 1.64, 4) == pytest.approx(32.8)


def test_safety_stock_percentage_adjustment():
    assert calculate_safety_stock(10, 1.64, 4, 25) == pytest.approx(41.0)


@pytest.mark.parametrize("args", [(-1, 1.64, 4), (10, -1.0, 4), (10, 1.64, -1)])
def test_safety_stock_base_rejects_negative_inputs(args):
    with pytest.raises(ValueError):
        calculate_safety_stock_base(*args)


@pytest.mark.parametrize(
    "z, expected",
    [(1.28, 0.90), (1.64, 0.95), (1.96, 0.975), (2.33, 0.99), (2.58, 0.995), (1.5, 0.95)],
)
def test_service_level_lookup(z, expected):
    assert service_level_from_z(z) == expected


# ---------------------------------------------------------------------
# Threshold levels
# ---------------------------------------------------------------------

def test_reference_example():
    stats = DemandStatistics(average_demand=20, demand_std_dev=8.165)

    levels = calculate_threshold_levels(stats, 5, 20, 1.64)

    expected_safety = 1.64 * 8.165 * math.sqrt(5) * 1.2

    assert levels.lead_time_demand == pytest.approx(100.0)
    assert levels.safety_stock == pytest.approx(expected_safety)
    assert levels.safety_stock == pytest.approx(35.93, abs=0.01)
    assert levels.reorder_point == pytest.approx(100.0 + expected_safety)
    assert levels.low == levels.reorder_point
    assert levels.medium == pytest.approx(levels.low * 1.1)
    assert levels.high == pytest.approx(levels.low * 1.2)
    assert levels.medium == pytest.approx(149.5, abs=0.1)
    assert levels.high == pytest.approx(163.1, abs=0.1)


def test_zero_std_gives_zero_safety_stock():
    levels = calculate_threshold_levels(DemandStatistics(10, 0), 7, 50)

    assert levels.safety_stock == 0.0
    assert levels.low == pytest.approx(70.0)


def test_zero_lead_time_collapses_thresholds():
    levels = calculate_threshold_levels(DemandStatistics(10, 4), 0, 20)

    assert (levels.low, levels.medium, levels.high) == (0.0, 0.0, 0.0)


def test_bands_are_ordered():
    levels = calculate_threshold_levels(DemandStatistics(3.5, 1.2), 9, 10, 2.33)

    assert levels.low <= levels.medium <= levels.high


def test_negative_lead_time_rejected():
    with pytest.raises(ValueError):
        calculate_threshold_levels(DemandStatistics(10, 4), -1, 20)


def test_band_lookup():
    levels = calculate_threshold_levels(DemandStatistics(10, 0), 1, 0)

    assert levels.band("medium") == levels.medium
    with pytest.raises(ValueError):
        levels.band("critical")


# ---------------------------------------------------------------------
# Statistics modes
# ---------------------------------------------------------------------

def test_precomputed_statistics_used_as_given(sample_records):
    stats = resolve_demand_statistics(sample_records, 50, 5)

    assert (stats.average_demand, stats.demand_std_dev) == (50.0, 5.0)


@pytest.mark.parametrize("avg, std", [(0, 0), (50, 0), (0, 5)])
def test_zero_value_triggers_recompute(sample_records, avg, std):
    stats = resolve_demand_statistics(sample_records, avg, std)

    assert stats.average_demand == pytest.approx(20.0)


def test_recompute_on_empty_records_fails():
    with pytest.raises(PreconditionError):
        resolve_demand_statistics([], 0, 0)


def test_precomputed_mode_ignores_records():
    stats = resolve_demand_statistics([make_record("2024-01-01", orders=999)], 12, 3)

    assert stats.average_demand == 12.0


# ---------------------------------------------------------------------
# Metrics and parameters
# ---------------------------------------------------------------------

def test_stockout_risk_is_complement_of_service_level():
    metrics = calculate_metrics(DemandStatistics(20, 8), 1.96)

    assert metrics.service_level == 0.975
    assert metrics.stockout_risk == pytest.approx(0.025)


def test_parameters_from_config(base_config):
    params = ThresholdParameters.from_config(base_config)

    assert params.lead_time_days == 5
    assert params.safety_stock_percent == 20
    assert params.service_level_z == 1.64


@pytest.mark.parametrize(
    "changes",
    [
        {"lead_time_days": 0},
        {"lead_time_days": 2.5},
        {"safety_stock_percent": -1},
        {"service_level_z": "1.64"},
        {"average_daily_sales": True},
    ],
)
def test_parameter_validation(changes):
    params = ThresholdParameters(**changes)

    with pytest.raises(ValueError):
        params.validate()
