"""
Shared pytest fixtures
"""

import datetime as dt

import pandas as pd
import pytest

from src.data.records import normalize_rows

WAREHOUSE_ENV = {
    "GCP_PROJECT_ID": "acme-analytics",
    "BIGQUERY_DATASET": "ops",
    "BIGQUERY_TABLE": "load_log",
    "BIGQUERY_LOCATION": "EU",
}


@pytest.fixture
def two_rows() -> pd.DataFrame:
    """The A/B pair: one dated successful load, one undated failed load"""
    return normalize_rows(
        [
            {"load_date": "2024-01-01", "source": "A", "record_count": 10, "load_status": True},
            {"load_date": None, "source": "B", "record_count": 5, "load_status": False},
        ]
    )


@pytest.fixture
def load_log() -> pd.DataFrame:
    """Mixed rows with a null in every column"""
    return normalize_rows(
        [
            {"load_date": dt.date(2024, 3, 15), "source": "crm_export", "record_count": 1200, "load_status": True},
            {"load_date": dt.date(2024, 3, 14), "source": "CRM_Export", "record_count": 980, "load_status": False},
            {"load_date": None, "source": "billing", "record_count": 0, "load_status": True},
            {"load_date": dt.date(2024, 2, 29), "source": None, "record_count": 35, "load_status": None},
            {"load_date": dt.date(2024, 3, 1), "source": "Élan feed", "record_count": None, "load_status": True},
            {"load_date": dt.date(2023, 12, 31), "source": "billing", "record_count": 10, "load_status": False},
        ]
    )


@pytest.fixture
def warehouse_env(monkeypatch):
    """Complete BigQuery settings in the environment, default credentials"""
    for name, value in WAREHOUSE_ENV.items():
        monkeypatch.setenv(name, value)
    monkeypatch.delenv("GOOGLE_APPLICATION_CREDENTIALS", raising=False)
    return dict(WAREHOUSE_ENV)
