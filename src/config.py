"""
Application-wide configuration constants and warehouse settings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import streamlit as st

PAGE_TITLE = "BigQuery Load Data"
ROW_LIMIT = 100

REQUIRED_ENV_VARS = (
    "GCP_PROJECT_ID",
    "BIGQUERY_DATASET",
    "BIGQUERY_TABLE",
    "BIGQUERY_LOCATION",
)


class ConfigurationError(RuntimeError):
    """Raised when the warehouse connection settings are incomplete."""


def get_secret(name: str, default: Optional[str] = None) -> Optional[str]:
    """Try env first, then st.secrets (if available)."""
    val = os.getenv(name)
    if val:
        return val
    try:
        sec = getattr(st, "secrets", None)
        if sec:
            v = sec.get(name)  # type: ignore[index]
            return str(v) if v is not None else default
    except Exception:
        # st.secrets raises when no secrets.toml exists
        pass
    return default


@dataclass(frozen=True)
class WarehouseSettings:
    project_id: str
    dataset: str
    table: str
    location: str
    credentials_path: Optional[str] = None
    row_limit: int = ROW_LIMIT

    @property
    def table_ref(self) -> str:
        return f"{self.project_id}.{self.dataset}.{self.table}"

    @classmethod
    def from_env(cls) -> "WarehouseSettings":
        values = {name: get_secret(name) for name in REQUIRED_ENV_VARS}
        if not all(values.values()):
            missing = [name for name, value in values.items() if not value]
            raise ConfigurationError(
                "Missing required environment variables for BigQuery connection "
                f"({', '.join(REQUIRED_ENV_VARS)}). Missing: {', '.join(missing)}"
            )
        return cls(
            project_id=values["GCP_PROJECT_ID"],
            dataset=values["BIGQUERY_DATASET"],
            table=values["BIGQUERY_TABLE"],
            location=values["BIGQUERY_LOCATION"],
            credentials_path=get_secret("GOOGLE_APPLICATION_CREDENTIALS"),
        )
