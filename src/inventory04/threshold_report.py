# src/inventory04/threshold_report.py

"""
Threshold Report Export
=======================

Pure formatting over threshold levels, metrics and parameters.
Writing the report anywhere is the caller's job.

Styles:
-------
text  : plain "Label: value" sections
table : the same sections rendered as tabulate grids
"""

from datetime import datetime
from typing import List, Optional, Tuple

from tabulate import tabulate

from inventory04.threshold_engine import (
    InventoryMetrics,
    ThresholdLevels,
    ThresholdParameters,
)


REPORT_TITLE = "Inventory Threshold Analysis Results"
REPORT_STYLES = {"text", "table"}


def _fmt(value: float) -> str:
    return f"{value:.2f}"


def _fmt_percent(fraction: float) -> str:
    return f"{fraction * 100:g}%"


def _sections(
    levels: ThresholdLevels,
    params: ThresholdParameters,
    metrics: InventoryMetrics
) -> List[Tuple[str, List[Tuple[str, str]]]]:

    return [
        ("Threshold Levels", [
            ("Low Threshold", _fmt(levels.low)),
            ("Medium Threshold", _fmt(levels.medium)),
            ("High Threshold", _fmt(levels.high)),
        ]),
        ("Calculated Values", [
            ("Lead Time Demand", _fmt(levels.lead_time_demand)),
            ("Safety Stock", _fmt(levels.safety_stock)),
            ("Reorder Point", _fmt(levels.reorder_point)),
        ]),
        ("Parameters", [
            ("Lead Time", f"{params.lead_time_days} days"),
            ("Safety Stock", f"{params.safety_stock_percent:g}%"),
            ("Average Daily Sales", _fmt(metrics.average_demand)),
            ("Demand Standard Deviation", _fmt(metrics.demand_std_dev)),
            ("Service Level",
             f"{_fmt_percent(metrics.service_level)} (Z-Score: {params.service_level_z})"),
            ("Stockout Risk", f"{metrics.stockout_risk * 100:.1f}%"),
        ]),
    ]


def format_threshold_report(
    levels: ThresholdLevels,
    params: ThresholdParameters,
    metrics: InventoryMetrics,
    exported_at: Optional[datetime] = None,
    style: str = "text"
) -> str:
    """
    Render the threshold report.

    Parameters
    ----------
    levels : ThresholdLevels
        Engine output.
    params : ThresholdParameters
        Parameters as supplied by the user.
    metrics : InventoryMetrics
        Statistics actually used, plus service level and stockout risk.
    exported_at : datetime, optional
        Export timestamp line; omitted when None.
    style : str
        "text" or "table".

    Returns
    -------
    str
    """

    if style not in REPORT_STYLES:
        raise ValueError(
            f"Invalid report style '{style}'. "
            f"Allowed values: {sorted(REPORT_STYLES)}"
        )

    blocks = [REPORT_TITLE]

    for title, rows in _sections(levels, params, metrics):

        if style == "table":
            body = tabulate(rows, headers=["Metric", "Value"], tablefmt="github")
        else:
            body = "\n".join(f"{label}: {value}" for label, value in rows)

        blocks.append(f"{title}:\n{body}")

    if exported_at is not None:
        blocks.append(f"Export Date: {exported_at.strftime('%Y-%m-%d %H:%M:%S')}")

    return "\n\n".join(blocks) + "\n"
