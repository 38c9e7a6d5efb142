"""
Per-column text filters for the load report table.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import pandas as pd

from src.data.records import column_spec

FilterValues = Dict[str, str]


def _cell_text(value: Any, kind: str) -> str:
    if kind == "boolean":
        return "true" if bool(value) else "false"
    if kind == "number":
        return str(int(value)) if float(value).is_integer() else str(value)
    return str(value)


def matches_filter(value: Any, kind: str, needle: str) -> bool:
    if value is None or pd.isna(value):
        return False
    return needle.lower() in _cell_text(value, kind).lower()


def active_filters(filters: Optional[Mapping[str, str]]) -> FilterValues:
    """Drop empty entries and reject keys that are not record columns."""
    active: FilterValues = {}
    for key, value in (filters or {}).items():
        column_spec(key)
        if value:
            active[key] = value
    return active


def update_filter(filters: Optional[Mapping[str, str]], key: str, value: str) -> FilterValues:
    """Return a new mapping with only ``key`` replaced."""
    column_spec(key)
    updated = dict(filters or {})
    updated[key] = value
    return updated


def apply_column_filters(df: pd.DataFrame, filters: Optional[Mapping[str, str]]) -> pd.DataFrame:
    """
    Keep rows whose text value contains every active filter (case-insensitive).

    A null cell never matches an active filter on its column. The input frame
    is left untouched; the result is always a new frame.
    """
    filtered = df.copy()
    for key, value in active_filters(filters).items():
        if filtered.empty:
            break
        kind = column_spec(key).kind
        mask = [matches_filter(v, kind, value) for v in filtered[key].astype(object)]
        filtered = filtered[pd.Series(mask, index=filtered.index, dtype=bool)]
    return filtered


def serialize_filters(filters: Optional[Mapping[str, str]]) -> Dict[str, Any]:
    """
    JSON-serialisable view of the active filters in key order, used for
    logging and as the cache key of the derived view.
    """
    return dict(sorted(active_filters(filters).items()))
