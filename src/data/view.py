from __future__ import annotations

import logging
from enum import Enum
from typing import Mapping, Optional

import pandas as pd

from src.data.filters import apply_column_filters
from src.data.sorting import SortConfig, sort_records

logger = logging.getLogger(__name__)


class ViewState(str, Enum):
    NO_DATA = "no_data"
    NO_MATCHES = "no_matches"
    ROWS = "rows"


def derive_view(
    df: pd.DataFrame,
    filters: Optional[Mapping[str, str]],
    sort: Optional[SortConfig],
) -> pd.DataFrame:
    """Filter, then sort. Pure: the same inputs always give the same frame."""
    filtered = apply_column_filters(df, filters)
    view = sort_records(filtered, sort)
    logger.debug("Derived view: %d of %d rows (sort=%s)", len(view), len(df), sort)
    return view


def classify_view(data: Optional[pd.DataFrame], view: Optional[pd.DataFrame]) -> ViewState:
    if data is None or data.empty:
        return ViewState.NO_DATA
    if view is None or view.empty:
        return ViewState.NO_MATCHES
    return ViewState.ROWS
