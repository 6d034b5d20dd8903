"""
Shared fixtures for the ITO test suite.
"""

import matplotlib

matplotlib.use("Agg")

import pytest
import yaml

from ingestion01.record_schema import InventoryRecord


SAMPLE_HEADER = "product_id,product_name,date,inventory_level,orders,lead_time_days"


def make_record(date, inventory_level=100.0, orders=10.0, lead_time_days=3.0,
                product_id="P001", product_name="Widget A"):
    return InventoryRecord(
        product_id=product_id,
        product_name=product_name,
        date=date,
        inventory_level=float(inventory_level),
        orders=float(orders),
        lead_time_days=float(lead_time_days),
    )


@pytest.fixture
def sample_csv():
    return "\n".join([
        SAMPLE_HEADER,
        "P001,Widget A,2024-01-01,150,10,3",
        "P002,Widget B,2024-01-01,80,20,6",
        "",
        "P001,Widget A,2024-01-02,120,30,3",
    ]) + "\n"


@pytest.fixture
def sample_records():
    return [
        make_record("2024-01-01", inventory_level=150, orders=10),
        make_record("2024-01-02", inventory_level=120, orders=20),
        make_record("2024-01-03", inventory_level=90, orders=30),
    ]


@pytest.fixture
def base_config(tmp_path):
    return {
        "project": {"name": "ito-test"},
        "paths": {
            "data": {"raw": str(tmp_path / "raw")},
            "output": {
                "reports": str(tmp_path / "reports"),
                "plots": str(tmp_path / "plots"),
            },
            "logs": str(tmp_path / "logs"),
        },
        "logging": {"level": "INFO", "log_to_file": False, "filename": "ito.log"},
        "ingestion": {"file": "inventory.csv", "encoding": "utf-8", "skip_validation": False},
        "thresholds": {
            "lead_time_days": 5,
            "safety_stock_percent": 20,
            "service_level_z": 1.64,
            "average_daily_sales": 0,
            "demand_std_dev": 0,
        },
        "charts": {
            "max_time_series_points": 100,
            "max_products_to_show": 7,
            "max_top_products": 10,
        },
        "visualization": {"enabled": False},
        "export": {"enabled": True, "filename": "inventory-thresholds.txt", "style": "text"},
    }


@pytest.fixture
def write_config(tmp_path):
    def _write(config, name="config.yaml"):
        path = tmp_path / name
        path.write_text(yaml.safe_dump(config), encoding="utf-8")
        return str(path)
    return _write
