"""
Unit tests - derived view (filter then sort)
"""

import pandas as pd
import pytest

from src.data.records import empty_frame
from src.data.sorting import ASCENDING, DEFAULT_SORT, SortConfig
from src.data.view import ViewState, classify_view, derive_view


@pytest.mark.unit
def test_filter_then_sort(load_log):
    view = derive_view(load_log, {"source": "billing"}, SortConfig("record_count", ASCENDING))

    assert list(view["record_count"]) == [0, 10]


@pytest.mark.unit
def test_derivation_is_idempotent(load_log):
    filters = {"load_status": "true"}

    first = derive_view(load_log, filters, DEFAULT_SORT)
    second = derive_view(load_log, filters, DEFAULT_SORT)

    pd.testing.assert_frame_equal(first, second)
    pd.testing.assert_frame_equal(derive_view(first, filters, DEFAULT_SORT), first)


@pytest.mark.unit
def test_scenario_two_rows_default_view(two_rows):
    view = derive_view(two_rows, {}, DEFAULT_SORT)

    assert list(view["source"]) == ["A", "B"]


@pytest.mark.unit
def test_classify_view_states(two_rows):
    assert classify_view(empty_frame(), empty_frame()) is ViewState.NO_DATA
    assert classify_view(None, None) is ViewState.NO_DATA

    no_match = derive_view(two_rows, {"source": "zzz"}, DEFAULT_SORT)
    assert classify_view(two_rows, no_match) is ViewState.NO_MATCHES

    assert classify_view(two_rows, derive_view(two_rows, {}, DEFAULT_SORT)) is ViewState.ROWS
