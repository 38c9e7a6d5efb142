"""
Layout helpers for the Streamlit application (page config, header, errors).
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import streamlit as st

from src.config import PAGE_TITLE


def setup_page() -> None:
    """Set Streamlit page configuration."""
    st.set_page_config(
        page_title=PAGE_TITLE,
        layout="wide",
        page_icon=":bar_chart:",
    )


def render_header(diagnostics: Optional[Dict[str, Any]] = None) -> None:
    st.title(PAGE_TITLE)
    if diagnostics:
        st.caption(
            f"Source: `{diagnostics.get('table', '?')}` "
            f"({diagnostics.get('location', '?')}), latest {diagnostics.get('row_count', 0)} loads"
        )


def render_load_error(exc: Exception) -> None:
    """Page-level boundary for configuration and query failures."""
    st.error(str(exc))
    st.caption("Check the BigQuery settings in `.env` or `.streamlit/secrets.toml` and reload the page.")
