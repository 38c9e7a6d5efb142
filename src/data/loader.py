import os
import json
import re
import logging
import streamlit as st
import pandas as pd
from google.cloud import bigquery
from google.oauth2.service_account import Credentials
from typing import Any, List, Optional

from src.config import ConfigurationError, WarehouseSettings
from src.data.records import COLUMN_KEYS, normalize_rows

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/bigquery.readonly",
    "https://www.googleapis.com/auth/cloud-platform.read-only",
]

QUERY_TEMPLATE = """
SELECT
    {columns}
FROM
    `{table_ref}`
ORDER BY
    load_date DESC
LIMIT {limit}
"""


class DataLoadError(RuntimeError):
    """Raised when the warehouse query fails; wraps the underlying message."""


def build_query(settings: WarehouseSettings) -> str:
    return QUERY_TEMPLATE.format(
        columns=",\n    ".join(COLUMN_KEYS),
        table_ref=settings.table_ref,
        limit=int(settings.row_limit),
    ).strip()


def _repair_json_private_key(text: str) -> str:
    """If JSON text contains an unescaped multi-line private_key, escape newlines.
    This fixes the common case when TOML triple-quoted strings preserve newlines.
    """
    pattern = r'"private_key"\s*:\s*"(.*?)"'
    def _repl(m: re.Match[str]) -> str:
        val = m.group(1)
        val = val.replace("\r\n", "\\n").replace("\n", "\\n")
        return f'"private_key": "{val}"'
    return re.sub(pattern, _repl, text, flags=re.DOTALL)


def _materialize_creds_if_inline(path_or_json: str) -> str:
    """If GOOGLE_APPLICATION_CREDENTIALS holds JSON content, write it to /tmp and return the path."""
    if os.path.exists(path_or_json):
        return path_or_json
    text = path_or_json.strip()
    if not (text.startswith("{") and text.endswith("}")):
        return path_or_json
    content = text
    try:
        json.loads(content)
    except ValueError:
        repaired = _repair_json_private_key(content)
        try:
            json.loads(repaired)
            content = repaired
        except ValueError:
            # still write it; the credentials loader reports the parse error
            logger.warning("Inline service account JSON could not be parsed")
    tmp_path = "/tmp/google-credentials.json"
    with open(tmp_path, "w", encoding="utf-8") as f:
        f.write(content)
    return tmp_path


def resolve_credentials_path(raw: Optional[str]) -> Optional[str]:
    """Return a usable service account file path, or None for default credentials."""
    if not raw:
        return None
    path = _materialize_creds_if_inline(raw)
    if not os.path.exists(path):
        raise ConfigurationError(f"Service account file not found: {path}")
    return path


def make_client(settings: WarehouseSettings, credentials_path: Optional[str] = None) -> bigquery.Client:
    credentials = None
    if credentials_path:
        credentials = Credentials.from_service_account_file(credentials_path, scopes=SCOPES)
    return bigquery.Client(project=settings.project_id, credentials=credentials)


def fetch_rows(settings: WarehouseSettings, client: Optional[bigquery.Client] = None) -> List[Any]:
    """Run the report query once and return the raw warehouse rows. No retry."""
    query = build_query(settings)
    logger.info("Querying %s (location=%s)", settings.table_ref, settings.location)
    try:
        if client is None:
            client = make_client(settings, settings.credentials_path)
        job = client.query(query, location=settings.location)
        rows = list(job.result())
    except Exception as exc:
        logger.exception("ERROR fetching data from BigQuery")
        raise DataLoadError(f"Failed to fetch data from BigQuery. {exc}") from exc
    logger.info("Fetched %d rows from %s", len(rows), settings.table_ref)
    return rows


def load_data() -> pd.DataFrame:
    """Wrapper that resolves config and calls the cached implementation."""
    # Late import: bootstrap_env bridges secrets on import
    from src.bootstrap_env import ensure_env
    ensure_env()

    settings = WarehouseSettings.from_env()
    credentials_path = resolve_credentials_path(settings.credentials_path)

    # Call cached impl with explicit params for proper cache keying
    return _load_data_impl(
        settings.project_id,
        settings.dataset,
        settings.table,
        settings.location,
        settings.row_limit,
        credentials_path,
    )


@st.cache_data(show_spinner=False, ttl=3600)
def _load_data_impl(
    project_id: str,
    dataset: str,
    table: str,
    location: str,
    row_limit: int,
    credentials_path: Optional[str],
) -> pd.DataFrame:
    """Fetch the report rows and return the normalized record frame.
    Cached by the full connection settings for an hour.
    """
    settings = WarehouseSettings(
        project_id=project_id,
        dataset=dataset,
        table=table,
        location=location,
        credentials_path=credentials_path,
        row_limit=row_limit,
    )
    rows = fetch_rows(settings)
    df = normalize_rows(rows)
    df.attrs["diagnostics"] = {
        "table": settings.table_ref,
        "location": location,
        "row_count": int(len(df)),
        "load_date_non_null": int(df["load_date"].notna().sum()),
    }
    return df
