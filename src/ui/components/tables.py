"""
Interactive load report table: click-to-sort headers, per-column filter boxes
and the formatted body.

Sort and filter state live in ``st.session_state`` for the current session
only. Widget callbacks update that state before the rerun, and the derived
view is recomputed from (data, filters, sort) on every run.
"""

from __future__ import annotations

from typing import Optional, Tuple

import pandas as pd
import streamlit as st

from src.data.filters import FilterValues, serialize_filters, update_filter
from src.data.records import COLUMNS, ColumnSpec
from src.data.sorting import ASCENDING, DEFAULT_SORT, SortConfig, toggle_sort
from src.data.view import ViewState, classify_view, derive_view
from src.ui.components.formatting import format_date, format_number, format_status, format_text

SORT_STATE_KEY = "lt_sort"
FILTER_STATE_KEY = "lt_filters"

NO_DATA_MESSAGE = "No initial data found to display or filter."
NO_MATCHES_MESSAGE = "No records match the current filters."

STATUS_STYLES = {
    "Success": "background-color: #dcfce7; color: #166534;",
    "Failed": "background-color: #fee2e2; color: #991b1b;",
}


def _filter_widget_key(key: str) -> str:
    return f"lt_filter_{key}"


def init_table_state() -> None:
    st.session_state.setdefault(SORT_STATE_KEY, DEFAULT_SORT)
    st.session_state.setdefault(FILTER_STATE_KEY, {})


def current_sort() -> SortConfig:
    return st.session_state.get(SORT_STATE_KEY, DEFAULT_SORT)


def current_filters() -> FilterValues:
    return dict(st.session_state.get(FILTER_STATE_KEY, {}))


def _on_sort(key: str) -> None:
    st.session_state[SORT_STATE_KEY] = toggle_sort(current_sort(), key)


def _on_filter_change(key: str) -> None:
    value = st.session_state.get(_filter_widget_key(key), "")
    st.session_state[FILTER_STATE_KEY] = update_filter(current_filters(), key, value)


def sort_arrow(sort: SortConfig, key: str) -> str:
    if sort.key != key:
        return ""
    return " ▲" if sort.direction == ASCENDING else " ▼"


@st.cache_data(show_spinner=False, max_entries=64)
def _cached_view(
    df: pd.DataFrame,
    filter_items: Tuple[Tuple[str, str], ...],
    sort_key: Optional[str],
    direction: str,
) -> pd.DataFrame:
    return derive_view(df, dict(filter_items), SortConfig(sort_key, direction))


def format_view(view: pd.DataFrame) -> pd.DataFrame:
    """Display strings for each column, labelled with the column titles."""
    formatters = {
        "load_date": format_date,
        "source": format_text,
        "record_count": format_number,
        "load_status": format_status,
    }
    return pd.DataFrame(
        {col.label: [formatters[col.key](v) for v in view[col.key].astype(object)] for col in COLUMNS}
    )


def _status_style(val: str) -> str:
    return STATUS_STYLES.get(val, "")


def _render_header(sort: SortConfig) -> None:
    header_cols = st.columns(len(COLUMNS))
    for slot, col in zip(header_cols, COLUMNS):
        with slot:
            _render_column_header(col, sort)


def _render_column_header(col: ColumnSpec, sort: SortConfig) -> None:
    st.button(
        f"{col.label}{sort_arrow(sort, col.key)}",
        key=f"lt_sort_{col.key}",
        on_click=_on_sort,
        args=(col.key,),
        help=f"Sort by {col.label.lower()}",
    )
    # Separate widget from the sort button, so typing never toggles the sort.
    st.text_input(
        f"Filter {col.label.lower()}",
        key=_filter_widget_key(col.key),
        placeholder=f"Filter {col.label.lower()}...",
        label_visibility="collapsed",
        on_change=_on_filter_change,
        args=(col.key,),
    )


def render_load_table(data: Optional[pd.DataFrame]) -> ViewState:
    """Render the table for an already-normalized record frame.

    Returns the view state that was rendered.
    """
    if data is None or data.empty:
        st.info(NO_DATA_MESSAGE)
        return ViewState.NO_DATA

    init_table_state()
    sort = current_sort()
    filters = current_filters()

    _render_header(sort)

    view = _cached_view(
        data,
        tuple(serialize_filters(filters).items()),
        sort.key,
        sort.direction,
    )
    state = classify_view(data, view)
    if state is ViewState.NO_MATCHES:
        st.info(NO_MATCHES_MESSAGE)
        return state

    display = format_view(view)
    # static table: ordering comes only from the header buttons
    st.table(display.style.map(_status_style, subset=["Load Status"]).hide(axis="index"))
    st.caption(f"Showing {len(view):,} of {len(data):,} records.")

    csv_bytes = view.to_csv(index=False).encode("utf-8")
    st.download_button(
        "Download CSV",
        data=csv_bytes,
        file_name="load_report.csv",
        mime="text/csv",
    )
    return state
