"""Quick validation script for the table derivation.

Run with `python -m scripts.validate_table_view` from the repo root to check normalization,
filtering and sorting on a small offline sample (no BigQuery access needed).
"""

from __future__ import annotations

import datetime as dt

from src.data.records import normalize_rows
from src.data.sorting import DEFAULT_SORT, SortConfig
from src.data.view import derive_view
from src.ui.components.formatting import format_date


def main() -> None:
    sample = normalize_rows(
        [
            {"load_date": dt.date(2024, 1, 1), "source": "Alpha", "record_count": 10, "load_status": True},
            {"load_date": None, "source": "Beta", "record_count": 5, "load_status": False},
            {"load_date": dt.date(2024, 3, 15), "source": "alpha-2", "record_count": 1200, "load_status": True},
        ]
    )

    by_date = derive_view(sample, {}, DEFAULT_SORT)
    assert list(by_date["source"]) == ["alpha-2", "Alpha", "Beta"], "Default sort should be newest first, nulls last"

    alpha_only = derive_view(sample, {"source": "ALPHA"}, SortConfig("record_count", "ascending"))
    assert list(alpha_only["record_count"]) == [10, 1200], "Source filter should be case-insensitive"

    failed = derive_view(sample, {"load_status": "false"}, None)
    assert list(failed["source"]) == ["Beta"], "Status filter should match 'false'"

    assert format_date(sample.loc[2, "load_date"]) == "2024-03-15"
    assert format_date(None) == "N/A"

    print("Table view validation passed. Rows:", len(sample))


if __name__ == "__main__":
    main()
