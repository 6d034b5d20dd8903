# src/pipelines/run_analysis.py

"""
Inventory Analysis Pipeline Orchestrator
========================================

Batch counterpart of the interactive upload -> configure -> results
flow. Plays the role of the calling layer around the analytics core.

Steps:
------
1. Load and validate configuration
2. Ingest the inventory CSV (strict or lenient per config)
3. Calculate thresholds and chart payloads
4. Detect stockout zones
5. Log chart aggregates (products, seasonality, lead time, ratio)
6. Export the threshold report (optional)
7. Render the inventory chart (optional)

Design Principles:
------------------
- Fully config-driven
- Strict logging (no print statements)
- Fail-fast: failures are logged and re-raised
"""

import os
from typing import Any, Dict

from tabulate import tabulate

from ingestion01.record_schema import records_to_frame
from inventory04.session import AnalysisSession
from inventory04.threshold_engine import ThresholdParameters
from utils.config_loader import DEFAULT_CONFIG_PATH, load_config
from utils.helpers import generate_timestamp, write_text_file
from utils.logger import get_logger
from visualization06.chart_data import (
    add_lead_time_category,
    aggregate_orders_by_product,
    lead_time_variation_by_month,
    product_order_distribution,
    seasonal_product_demand,
    stock_to_sales_ratio,
    summarize_ratio,
)
from visualization06.inventory_plots import plot_inventory_thresholds


def _log_table(logger, title: str, rows, headers) -> None:
    logger.info(f"\n========== {title} ==========")
    logger.info("\n" + tabulate(rows, headers=headers, tablefmt="grid"))


# ==========================================================
# Main Analysis Pipeline
# ==========================================================

def run_analysis(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """
    Execute the full inventory analysis workflow.

    Returns
    -------
    Dict[str, Any]
        session, ingestion result, calculation response, zones and the
        paths of written artifacts (None when disabled).
    """

    config = load_config(config_path)
    logger = get_logger(config)

    logger.info("========== INVENTORY ANALYSIS PIPELINE STARTED ==========")

    try:

        # ------------------------------------------------------
        # 1. Ingestion
        # ------------------------------------------------------

        ingestion_cfg = config["ingestion"]

        input_path = os.path.join(
            config["paths"]["data"]["raw"],
            ingestion_cfg["file"]
        )

        session = AnalysisSession(ThresholdParameters.from_config(config))

        ingestion = session.load_file(
            input_path,
            skip_validation=ingestion_cfg.get("skip_validation", False),
            encoding=ingestion_cfg.get("encoding", "utf-8"),
        )

        if not ingestion.ok:
            raise ValueError(
                f"Ingestion failed ({ingestion.error_type}): {ingestion.error}"
            )

        logger.info(f"Loaded {len(ingestion.records)} record(s) from {input_path}")

        if ingestion.skipped_rows:
            _log_table(
                logger,
                "SKIPPED ROWS",
                [(row.row_index, "; ".join(row.messages)) for row in ingestion.skipped_rows],
                ["Row", "Reasons"],
            )

        # ------------------------------------------------------
        # 2. Threshold Calculation
        # ------------------------------------------------------

        max_points = config["charts"]["max_time_series_points"]

        outcome = session.calculate(max_points=max_points)

        if not outcome.ok:
            raise ValueError(f"Threshold calculation failed: {outcome.error}")

        response = outcome.response
        levels = response.thresholds

        _log_table(
            logger,
            "THRESHOLD LEVELS",
            [
                ("Lead Time Demand", levels.lead_time_demand),
                ("Safety Stock", levels.safety_stock),
                ("Reorder Point", levels.reorder_point),
                ("Low", levels.low),
                ("Medium", levels.medium),
                ("High", levels.high),
            ],
            ["Metric", "Value"],
        )

        # ------------------------------------------------------
        # 3. Stockout Zones
        # ------------------------------------------------------

        zones = session.stockout_zones()

        if zones:
            _log_table(
                logger,
                "STOCKOUT ZONES",
                [
                    (z.start_date, z.end_date, z.level, z.min_inventory_level, z.threshold)
                    for z in zones
                ],
                ["Start", "End", "Level", "Min Inventory", "Threshold"],
            )
        else:
            logger.info("No stockout zones detected.")

        # ------------------------------------------------------
        # 4. Aggregates
        # ------------------------------------------------------

        frame = records_to_frame(session.records)

        top_products = aggregate_orders_by_product(
            frame,
            top_n=config["charts"]["max_top_products"]
        )
        _log_table(
            logger,
            "ORDERS BY PRODUCT",
            top_products.values.tolist(),
            list(top_products.columns),
        )

        distribution = product_order_distribution(
            frame,
            max_products=config["charts"]["max_products_to_show"]
        )
        _log_table(
            logger,
            "ORDER DISTRIBUTION",
            distribution.round(2).values.tolist(),
            list(distribution.columns),
        )

        seasonal = seasonal_product_demand(
            frame,
            max_products=config["charts"]["max_top_products"]
        )
        if not seasonal.empty:
            peaks = seasonal.loc[seasonal.groupby("product_name", sort=False)["volume"].idxmax()]
            _log_table(
                logger,
                "PEAK MONTH BY PRODUCT",
                peaks[["product_name", "month", "volume"]].values.tolist(),
                ["Product", "Peak Month", "Orders"],
            )

        categories = (
            add_lead_time_category(frame)["lead_time_category"]
            .value_counts()
            .reset_index()
        )
        _log_table(
            logger,
            "LEAD TIME CATEGORIES",
            categories.values.tolist(),
            ["Category", "Rows"],
        )

        lead_time_summary = lead_time_variation_by_month(frame)
        if not lead_time_summary.empty:
            _log_table(
                logger,
                "LEAD TIME VARIATION BY MONTH",
                lead_time_summary.round(2).values.tolist(),
                list(lead_time_summary.columns),
            )

        ratio_summary = summarize_ratio(stock_to_sales_ratio(frame))
        logger.info(
            f"Average stock-to-sales ratio: {ratio_summary['average_ratio']:.2f} "
            f"({ratio_summary['status']})"
        )

        # ------------------------------------------------------
        # 5. Report Export
        # ------------------------------------------------------

        report_path = None
        export_cfg = config["export"]

        if export_cfg["enabled"]:

            report = session.export_report(style=export_cfg.get("style", "text"))

            stem, ext = os.path.splitext(export_cfg["filename"])
            report_path = os.path.join(
                config["paths"]["output"]["reports"],
                f"{stem}_{generate_timestamp()}{ext}"
            )

            write_text_file(report_path, report)
            logger.info(f"Threshold report saved to: {report_path}")

        # ------------------------------------------------------
        # 6. Visualization
        # ------------------------------------------------------

        plot_path = None

        if config["visualization"]["enabled"]:
            plot_path = plot_inventory_thresholds(
                response.chart_data,
                levels,
                config,
                logger
            )
        else:
            logger.info("Visualization disabled via config.")

    except Exception:
        logger.exception("Inventory analysis pipeline failed due to an error.")
        raise

    logger.info("========== INVENTORY ANALYSIS PIPELINE COMPLETED ==========")

    return {
        "session": session,
        "ingestion": ingestion,
        "response": response,
        "zones": zones,
        "report_path": report_path,
        "plot_path": plot_path,
    }


if __name__ == "__main__":
    run_analysis()
