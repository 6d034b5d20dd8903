"""
Tests for chunked time-series downsampling.
"""

import pandas as pd
import pytest

from visualization06.downsampling import downsample_time_series


def _series(n):
    dates = pd.date_range("2023-01-01", periods=n, freq="D").strftime("%Y-%m-%d")
    return pd.DataFrame({
        "date": dates,
        "orders": [float(i) for i in range(n)],
        "product_id": [f"P{i}" for i in range(n)],
        "danger_zone": [i % 2 == 0 for i in range(n)],
    })


def test_short_series_returned_unchanged():
    frame = _series(10).iloc[::-1]

    result = downsample_time_series(frame, "date", 100)

    assert result is frame


def test_output_length_bounded():
    result = downsample_time_series(_series(250), "date", 100)

    # chunk size ceil(250 / 100) = 3 -> ceil(250 / 3) points
    assert len(result) == 84
    assert len(result) <= 100


def test_chunk_values():
    result = downsample_time_series(_series(250), "date", 100)

    first = result.iloc[0]
    assert first["date"] == "2023-01-02"
    assert first["orders"] == pytest.approx(1.0)
    assert first["product_id"] == "P1"
    assert first["danger_zone"] in (False, 0)

    last = result.iloc[-1]
    # final chunk holds the single row 249
    assert last["orders"] == pytest.approx(249.0)


def test_unsorted_input_is_sorted_by_date():
    frame = _series(9).sample(frac=1, random_state=7)

    result = downsample_time_series(frame, "date", 3)

    assert list(result["date"]) == ["2023-01-02", "2023-01-05", "2023-01-08"]
    assert list(result["orders"]) == pytest.approx([1.0, 4.0, 7.0])


def test_missing_numeric_values_count_as_zero():
    frame = pd.DataFrame({
        "date": ["2024-01-01", "2024-01-02", "2024-01-03", "2024-01-04"],
        "orders": [4.0, None, 2.0, 2.0],
    })

    result = downsample_time_series(frame, "date", 2)

    assert list(result["orders"]) == pytest.approx([2.0, 2.0])


def test_list_of_dicts_input():
    rows = [{"date": f"2024-01-{d:02d}", "value": d} for d in range(1, 11)]

    result = downsample_time_series(rows, "date", 5)

    assert isinstance(result, list)
    assert len(result) == 5
    assert result[0] == {"date": "2024-01-02", "value": 1.5}


@pytest.mark.parametrize("max_points", [0, -3, 2.5, True])
def test_invalid_max_points(max_points):
    with pytest.raises(ValueError):
        downsample_time_series(_series(5), "date", max_points)


def test_missing_date_column():
    with pytest.raises(ValueError):
        downsample_time_series(_series(20).drop(columns="date"), "date", 5)


def test_series_of_exactly_max_points_returned_unchanged():
    frame = _series(5).iloc[::-1]

    result = downsample_time_series(frame, "date", 5)

    assert result is frame
    assert list(result["date"]) == list(frame["date"])


def test_rows_sharing_a_date_keep_input_order():
    frame = pd.DataFrame({
        "date": ["2024-01-02", "2024-01-01", "2024-01-01", "2024-01-02"],
        "label": ["a", "b", "c", "d"],
        "orders": [1.0, 2.0, 3.0, 4.0],
    })

    result = downsample_time_series(frame, "date", 2)

    # stable order: b, c | a, d -> middle row of each chunk
    assert list(result["label"]) == ["c", "d"]
    assert list(result["orders"]) == pytest.approx([2.5, 2.5])
