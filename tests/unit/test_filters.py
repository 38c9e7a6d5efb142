"""
Unit tests - per-column text filters
"""

import pandas as pd
import pytest

from src.data.filters import (
    active_filters,
    apply_column_filters,
    matches_filter,
    serialize_filters,
    update_filter,
)
from src.data.records import COLUMNS


@pytest.mark.unit
def test_source_filter_is_case_insensitive(two_rows):
    result = apply_column_filters(two_rows, {"source": "a"})

    assert list(result["source"]) == ["A"]


@pytest.mark.unit
def test_no_filters_keeps_everything(load_log):
    pd.testing.assert_frame_equal(apply_column_filters(load_log, {}), load_log)
    pd.testing.assert_frame_equal(apply_column_filters(load_log, None), load_log)
    pd.testing.assert_frame_equal(apply_column_filters(load_log, {"source": ""}), load_log)


@pytest.mark.unit
def test_boolean_column_matches_true_false_text(load_log):
    failed = apply_column_filters(load_log, {"load_status": "FALSE"})
    succeeded = apply_column_filters(load_log, {"load_status": "tru"})

    assert list(failed["record_count"]) == [980, 10]
    assert list(succeeded["record_count"].astype(object)) == [1200, 0, pd.NA]


@pytest.mark.unit
def test_number_column_matches_digits(load_log):
    result = apply_column_filters(load_log, {"record_count": "0"})

    # 1200, 980, 0, 10; the null count never matches
    assert list(result["record_count"]) == [1200, 980, 0, 10]


@pytest.mark.unit
def test_date_column_matches_substring(load_log):
    result = apply_column_filters(load_log, {"load_date": "2024-03"})

    assert list(result["load_date"]) == ["2024-03-15", "2024-03-14", "2024-03-01"]


@pytest.mark.unit
def test_null_values_never_match(load_log):
    result = apply_column_filters(load_log, {"source": "n"})

    assert result["source"].notna().all()
    assert not matches_filter(None, "text", "n")
    assert not matches_filter(pd.NA, "number", "1")


@pytest.mark.unit
def test_filters_compose_with_and(load_log):
    result = apply_column_filters(load_log, {"source": "crm", "load_status": "true"})

    assert list(result["source"]) == ["crm_export"]


@pytest.mark.unit
def test_filtering_does_not_mutate_input(load_log):
    before = load_log.copy()

    result = apply_column_filters(load_log, {"source": "billing"})
    result.loc[result.index[0], "source"] = "changed"

    pd.testing.assert_frame_equal(load_log, before)


@pytest.mark.unit
@pytest.mark.parametrize(
    "filters",
    [
        {"source": "crm"},
        {"load_date": "2024", "load_status": "t"},
        {"record_count": "1"},
        {"source": "zzz"},
    ],
)
def test_filtered_rows_are_exactly_the_matching_rows(load_log, filters):
    result = apply_column_filters(load_log, filters)
    kinds = {col.key: col.kind for col in COLUMNS}

    def satisfies(row):
        return all(matches_filter(row[key], kinds[key], value) for key, value in filters.items())

    assert set(result.index) <= set(load_log.index)
    for idx, row in load_log.iterrows():
        assert satisfies(row) == (idx in result.index)


@pytest.mark.unit
def test_update_filter_replaces_only_one_entry():
    filters = {"source": "crm", "load_status": "true"}

    updated = update_filter(filters, "source", "bill")

    assert updated == {"source": "bill", "load_status": "true"}
    assert filters == {"source": "crm", "load_status": "true"}


@pytest.mark.unit
def test_unknown_filter_key_is_rejected(load_log):
    with pytest.raises(KeyError):
        apply_column_filters(load_log, {"loaded_by": "x"})
    with pytest.raises(KeyError):
        update_filter({}, "loaded_by", "x")


@pytest.mark.unit
def test_active_and_serialized_filters_skip_empty_values():
    filters = {"source": "", "load_status": "true", "load_date": "2024"}

    assert active_filters(filters) == {"load_status": "true", "load_date": "2024"}
    assert list(serialize_filters(filters)) == ["load_date", "load_status"]
