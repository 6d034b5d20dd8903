# src/visualization06/inventory_plots.py

"""
Inventory Visualization Module
==============================

Renders the inventory threshold chart.

Plots:
------
1. Inventory level line (downsampled chart data)
2. Low / medium / high threshold lines
3. Shaded danger rows (inventory below the low threshold)

Design Principles:
------------------
- Pure visualization only
- No business logic (thresholds and flags come precomputed)
- Fully config-driven
- Fail-fast validation
"""

import os
import pandas as pd
import matplotlib.pyplot as plt
from typing import Dict

from inventory04.threshold_engine import ThresholdLevels
from utils.helpers import ensure_directory, validate_dataframe_not_empty


# ==========================================================
# Inventory Threshold Plot
# ==========================================================

def plot_inventory_thresholds(
    chart_data: pd.DataFrame,
    levels: ThresholdLevels,
    config: Dict,
    logger,
    filename: str = "inventory_thresholds.png"
) -> str:
    """
    Visualize inventory levels against threshold bands.

    Parameters
    ----------
    chart_data : pd.DataFrame
        Tagged (and usually downsampled) chart data.
    levels : ThresholdLevels
        Threshold levels drawn as horizontal lines.
    config : Dict
        Project configuration dictionary.
    logger : logging.Logger
        Logger instance.
    filename : str
        Output file name under paths.output.plots.

    Returns
    -------
    str
        Path of the saved image.
    """

    validate_dataframe_not_empty(chart_data, "chart_data")

    for col in ("date", "inventory_level"):
        if col not in chart_data.columns:
            raise ValueError(f"{col} not found in chart data.")

    output_dir = config["paths"]["output"]["plots"]
    ensure_directory(output_dir)

    dates = pd.to_datetime(chart_data["date"])

    fig, ax = plt.subplots(figsize=(14, 7))

    # ------------------------------------------------------
    # Inventory Level Line
    # ------------------------------------------------------
    ax.plot(
        dates,
        chart_data["inventory_level"],
        label="Inventory Level"
    )

    # ------------------------------------------------------
    # Threshold Lines
    # ------------------------------------------------------
    ax.axhline(y=levels.low, linestyle="-.", color="tab:red", label="Low Threshold")
    ax.axhline(y=levels.medium, linestyle="--", color="tab:orange", label="Medium Threshold")
    ax.axhline(y=levels.high, linestyle=":", color="tab:olive", label="High Threshold")

    # ------------------------------------------------------
    # Danger Rows
    # ------------------------------------------------------
    if "danger_zone" in chart_data.columns:
        danger = chart_data["danger_zone"].astype(bool)
        ax.scatter(
            dates[danger],
            chart_data.loc[danger, "inventory_level"],
            color="tab:red",
            zorder=3,
            label="Below Reorder Point"
        )

    ax.set_title("Inventory Levels vs Reorder Thresholds")
    ax.set_xlabel("Date")
    ax.set_ylabel("Units")
    ax.legend()
    fig.tight_layout()

    output_path = os.path.join(output_dir, filename)

    fig.savefig(output_path)
    plt.close(fig)

    logger.info(f"Inventory visualization saved: {output_path}")

    return output_path
