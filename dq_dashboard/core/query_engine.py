from __future__ import annotations

import logging
from functools import cmp_to_key
from numbers import Number
from typing import Any, Callable, List, Sequence

from .buckets import BUCKET_BY_VALUE, bucket_for
from .dataset import SCHEMA_FIELD, Dataset, DatasetKind, Row
from .query_state import ALL, QueryState

logger = logging.getLogger(__name__)


def display_text(value: Any) -> str:
    """
    String form of a cell value as it is shown and searched.
    Integral floats drop the trailing ".0" (2.0 -> "2").
    """
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def compare_values(a: Any, b: Any) -> int:
    """
    Natural ordering: numeric when both sides are numbers, lexical on the
    display text otherwise. None compares as 0.
    """
    a = 0 if a is None else a
    b = 0 if b is None else b
    if not (_is_number(a) and _is_number(b)):
        a, b = display_text(a), display_text(b)
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


# -----------------------------------------------------------------------------
# Pipeline stages
# -----------------------------------------------------------------------------
def _matches_search(row: Row, needle: str) -> bool:
    return any(
        needle in display_text(value).lower()
        for value in row.values()
        if value is not None
    )


def search(rows: Sequence[Row], term: str) -> List[Row]:
    if not term:
        return list(rows)
    needle = term.lower()
    return [r for r in rows if _matches_search(r, needle)]


def filter_schema(rows: Sequence[Row], kind: DatasetKind, schema: str) -> List[Row]:
    if schema == ALL:
        return list(rows)
    return [r for r in rows if display_text(kind.value_of(r, SCHEMA_FIELD)) == schema]


def _flag_predicate(kind: DatasetKind, field_name: str, flag: str) -> Callable[[Row], bool]:
    wanted = flag == "true"
    return lambda r: (kind.value_of(r, field_name) > 0) == wanted


def filter_kind_specific(rows: Sequence[Row], kind: DatasetKind, state: QueryState) -> List[Row]:
    """
    Schema-change rows filter on whether columns were added / deleted;
    mismatch rows filter on the bucket of their mismatch percentage.
    """
    result = list(rows)

    if not kind.is_mismatch:
        if state.has_new_columns != ALL:
            result = list(filter(_flag_predicate(kind, "new_columns_count", state.has_new_columns), result))
        if state.has_deleted_columns != ALL:
            result = list(filter(_flag_predicate(kind, "deleted_columns_count", state.has_deleted_columns), result))
        return result

    if state.mismatch_range == ALL:
        return result

    bucket = BUCKET_BY_VALUE.get(state.mismatch_range)
    if bucket is None:
        logger.warning("Ignoring unknown mismatch range", extra={"mismatch_range": state.mismatch_range})
        return result

    percent_field = kind.schema.percent_field
    return [r for r in result if bucket_for(kind.value_of(r, percent_field)) == bucket]


def sort_rows(rows: Sequence[Row], kind: DatasetKind, key: str | None, descending: bool) -> List[Row]:
    """
    Stable sort on one field. Ties keep the order of the incoming rows in
    both directions.
    """
    if not key:
        return list(rows)

    def cmp(a: Row, b: Row) -> int:
        return compare_values(kind.value_of(a, key), kind.value_of(b, key))

    # sorted(reverse=True) keeps equal elements in their original order
    return sorted(rows, key=cmp_to_key(cmp), reverse=descending)


# -----------------------------------------------------------------------------
# Public entry point
# -----------------------------------------------------------------------------
def apply(dataset: Dataset, state: QueryState) -> List[Row]:
    """
    Build the display sequence for a dataset.

    Stages run in a fixed order, each narrowing the previous result:
    search -> schema filter -> kind-specific filter -> sort.
    The dataset itself is never modified.
    """
    kind = dataset.kind
    rows = search(dataset.rows, state.search_term)
    rows = filter_schema(rows, kind, state.schema_filter)
    rows = filter_kind_specific(rows, kind, state)
    return sort_rows(rows, kind, state.sort.key, state.sort.descending)
