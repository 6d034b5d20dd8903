# src/visualization06/downsampling.py

"""
Time-Series Downsampling
========================

Reduces an arbitrarily long series to at most `max_points` points
by chunked averaging, so chart payloads stay bounded.

Algorithm:
----------
1. len <= max_points      -> input returned unchanged (no sort)
2. stable sort by date
3. chunk_size = ceil(len / max_points)
4. one point per consecutive chunk:
   - date               : middle row of the chunk (floor(n / 2))
   - numeric columns    : chunk mean (missing values count as 0)
   - everything else    : middle row of the chunk

Output length is ceil(len / chunk_size) <= max_points.
Lossy and non-invertible: for display only.
"""

import math
from typing import Any, Dict, List, Mapping, Sequence, Union

import pandas as pd


DEFAULT_MAX_POINTS = 100


def _is_averaged_column(series: pd.Series) -> bool:
    return (
        pd.api.types.is_numeric_dtype(series)
        and not pd.api.types.is_bool_dtype(series)
    )


def _downsample_frame(frame: pd.DataFrame, date_column: str, max_points: int) -> pd.DataFrame:

    ordered = frame.sort_values(
        by=date_column,
        key=pd.to_datetime,
        kind="mergesort",
    ).reset_index(drop=True)

    chunk_size = math.ceil(len(ordered) / max_points)

    averaged_columns = [
        col for col in ordered.columns
        if col != date_column and _is_averaged_column(ordered[col])
    ]

    points = []

    for start in range(0, len(ordered), chunk_size):

        chunk = ordered.iloc[start:start + chunk_size]
        middle = chunk.iloc[len(chunk) // 2]

        point = middle.to_dict()

        for col in averaged_columns:
            point[col] = float(chunk[col].fillna(0).sum()) / len(chunk)

        points.append(point)

    return pd.DataFrame(points, columns=list(ordered.columns))


def downsample_time_series(
    data: Union[pd.DataFrame, Sequence[Mapping[str, Any]]],
    date_column: str = "date",
    max_points: int = DEFAULT_MAX_POINTS
) -> Union[pd.DataFrame, List[Dict[str, Any]]]:
    """
    Downsample a time series to at most max_points points.

    Parameters
    ----------
    data : pd.DataFrame or sequence of mappings
        Series rows; any shape as long as date_column is present.
    date_column : str
        Column holding the date (ISO strings or datetimes).
    max_points : int
        Upper bound on output length. Must be >= 1.

    Returns
    -------
    Same kind as the input: the input itself when it is already
    short enough, otherwise a new DataFrame / list of dicts.

    Raises
    ------
    ValueError
        If max_points < 1 or date_column is missing.
    """

    if isinstance(max_points, bool) or not isinstance(max_points, int) or max_points < 1:
        raise ValueError("max_points must be a positive integer.")

    if len(data) <= max_points:
        return data

    if isinstance(data, pd.DataFrame):
        if date_column not in data.columns:
            raise ValueError(f"{date_column} not found in dataframe.")
        return _downsample_frame(data, date_column, max_points)

    frame = pd.DataFrame(list(data))

    if date_column not in frame.columns:
        raise ValueError(f"{date_column} not found in records.")

    return _downsample_frame(frame, date_column, max_points).to_dict(orient="records")
