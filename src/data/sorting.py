"""
Single-column sorting for the load report table.

The comparator for a column is fixed by its declared kind in ``COLUMNS``
rather than by inspecting cell values, so a column never mixes numeric and
string comparisons. Nulls compare lower than any value; for descending order
the whole comparison is negated, which puts nulls first when ascending and
last when descending.
"""

from __future__ import annotations

import functools
import unicodedata
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

import pandas as pd

from src.data.records import column_spec

ASCENDING = "ascending"
DESCENDING = "descending"

Comparator = Callable[[Any, Any], int]


@dataclass(frozen=True)
class SortConfig:
    key: Optional[str] = "load_date"
    direction: str = DESCENDING

    def __post_init__(self) -> None:
        if self.key is not None:
            column_spec(self.key)
        if self.direction not in (ASCENDING, DESCENDING):
            raise ValueError(f"Unknown sort direction {self.direction!r}")

    @property
    def ascending(self) -> bool:
        return self.direction == ASCENDING


DEFAULT_SORT = SortConfig()


def toggle_sort(current: SortConfig, key: str) -> SortConfig:
    """Header click: same column flips direction, any other column starts ascending."""
    if current.key == key and current.direction == ASCENDING:
        return SortConfig(key, DESCENDING)
    return SortConfig(key, ASCENDING)


def collation_key(text: str) -> Tuple[str, str, str]:
    # primary: letters without accents or case; then accents; then lowercase first
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), decomposed.casefold(), text.swapcase()


def _sign(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def compare_text(a: Any, b: Any) -> int:
    return _sign(collation_key(str(a)), collation_key(str(b)))


def compare_number(a: Any, b: Any) -> int:
    return _sign(a - b, 0)


def compare_boolean(a: Any, b: Any) -> int:
    return _sign(bool(a), bool(b))


COMPARATORS: Dict[str, Comparator] = {
    "date": compare_text,
    "text": compare_text,
    "number": compare_number,
    "boolean": compare_boolean,
}


def _is_null(value: Any) -> bool:
    return value is None or bool(pd.isna(value))


def make_comparator(sort: SortConfig) -> Comparator:
    base = COMPARATORS[column_spec(sort.key).kind]

    def compare(a: Any, b: Any) -> int:
        a_null, b_null = _is_null(a), _is_null(b)
        if a_null or b_null:
            result = b_null - a_null
        else:
            result = base(a, b)
        return result if sort.ascending else -result

    return compare


def sort_records(df: pd.DataFrame, sort: Optional[SortConfig]) -> pd.DataFrame:
    """Return a sorted copy of ``df``; with no sort key the row order is kept."""
    if sort is None or sort.key is None or df.empty:
        return df.copy()
    values = list(df[sort.key].astype(object))
    compare = make_comparator(sort)
    order = sorted(
        range(len(values)),
        key=functools.cmp_to_key(lambda i, j: compare(values[i], values[j])),
    )
    return df.iloc[order].copy()
