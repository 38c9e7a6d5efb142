import src.bootstrap_env  # must be first to set env/secrets
import logging
import os

import streamlit as st

from src.config import ConfigurationError
from src.data.loader import DataLoadError, load_data
from src.ui.components.tables import render_load_table
from src.ui.layout import render_header, render_load_error, setup_page

logger = logging.getLogger(__name__)

DATA_STATE_KEY = "lt_records"


def _configure_logging() -> None:
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format="%(asctime)s %(levelname)s %(message)s")


def _session_records():
    # Fetched once per session; the table never receives new rows after mount.
    if DATA_STATE_KEY not in st.session_state:
        st.session_state[DATA_STATE_KEY] = load_data()
    return st.session_state[DATA_STATE_KEY]


def main() -> None:
    _configure_logging()
    setup_page()

    try:
        records = _session_records()
    except (ConfigurationError, DataLoadError) as exc:
        logger.error("Unable to load report data: %s", exc)
        render_header()
        render_load_error(exc)
        return

    render_header(records.attrs.get("diagnostics"))
    render_load_table(records)


if __name__ == "__main__":
    main()
