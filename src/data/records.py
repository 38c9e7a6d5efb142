"""
Record schema for the load report and the warehouse-to-display normalization
boundary.

Rows coming back from BigQuery carry warehouse-native values (``datetime.date``
for DATE columns). ``normalize_rows`` is the only place those values are
unwrapped; everything downstream sees plain strings, ints and bools.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd


@dataclass(frozen=True)
class ColumnSpec:
    key: str
    label: str
    kind: str  # "date" | "text" | "number" | "boolean"


COLUMNS: List[ColumnSpec] = [
    ColumnSpec("load_date", "Load Date", "date"),
    ColumnSpec("source", "Source", "text"),
    ColumnSpec("record_count", "Record Count", "number"),
    ColumnSpec("load_status", "Load Status", "boolean"),
]

COLUMN_KEYS: List[str] = [col.key for col in COLUMNS]
COLUMNS_BY_KEY: Dict[str, ColumnSpec] = {col.key: col for col in COLUMNS}


def column_spec(key: str) -> ColumnSpec:
    try:
        return COLUMNS_BY_KEY[key]
    except KeyError:
        raise KeyError(f"Unknown column {key!r}; expected one of {COLUMN_KEYS}") from None


def normalize_load_date(value: Any) -> Optional[str]:
    """Unwrap a warehouse date value into ``YYYY-MM-DD`` (or None).

    Accepts ``datetime.date``/``datetime.datetime``/``pd.Timestamp``, wrapper
    objects exposing a ``value`` attribute, plain strings and nulls. Never
    raises: anything else is passed through as ``str(value)``.
    """
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    if isinstance(value, pd.Timestamp):
        return value.date().isoformat()
    if isinstance(value, dt.datetime):
        return value.date().isoformat()
    if isinstance(value, dt.date):
        return value.isoformat()
    if isinstance(value, str):
        return value or None
    if hasattr(value, "value"):
        wrapped = value.value
        if wrapped is value:
            return str(value)
        return normalize_load_date(wrapped)
    return str(value)


def normalize_record(row: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "load_date": normalize_load_date(row.get("load_date")),
        "source": row.get("source"),
        "record_count": row.get("record_count"),
        "load_status": row.get("load_status"),
    }


def empty_frame() -> pd.DataFrame:
    return records_to_frame([])


def records_to_frame(records: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """Build the four-column record frame with stable dtypes.

    ``record_count`` and ``load_status`` use pandas' nullable dtypes so a
    missing value stays missing instead of turning the column into floats.
    """
    df = pd.DataFrame(list(records), columns=COLUMN_KEYS)
    df["load_date"] = df["load_date"].astype(object).where(df["load_date"].notna(), None)
    df["source"] = df["source"].astype(object).where(df["source"].notna(), None)
    df["record_count"] = pd.to_numeric(df["record_count"], errors="coerce").astype("Int64")
    df["load_status"] = df["load_status"].astype("boolean")
    return df


def normalize_rows(rows: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """Convert raw warehouse rows into the transport-safe record frame."""
    return records_to_frame(normalize_record(row) for row in rows)
