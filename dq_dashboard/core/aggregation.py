from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence

import pandas as pd

from .buckets import BUCKETS, bucket_for
from .dataset import SCHEMA_FIELD, Dataset, DatasetKind
from .query_engine import display_text

logger = logging.getLogger(__name__)

UNKNOWN_SCHEMA = "Unknown"


@dataclass(frozen=True)
class AggregateResult:
    """
    Chart-ready rows plus headline statistics for one dataset.

    An empty dataset gives empty chart_data and empty stats; callers read
    stats with .get(..., 0).
    """
    chart_data: List[Dict[str, Any]] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.chart_data and not self.stats


def share_of_tables(count: float, stats: Mapping[str, Any]) -> float:
    """
    Percentage of all tables that `count` represents. A missing or zero
    total_tables is replaced by 1.
    """
    total = stats.get("total_tables") or 1
    return 100 * count / total


def _number(value: Any) -> int | float:
    """numpy scalar -> plain int when integral, float otherwise."""
    value = float(value)
    return int(value) if value.is_integer() else value


def _one_decimal(value: float) -> str:
    return f"{value:.1f}"


def _frame(dataset: Dataset, columns: Sequence[str]) -> pd.DataFrame:
    """
    DataFrame of the requested fields with typed defaults already applied,
    so no NaN reaches the sums and means below.
    """
    records = [{c: dataset.value_of(row, c) for c in columns} for row in dataset.rows]
    frame = pd.DataFrame.from_records(records, columns=list(columns))
    if SCHEMA_FIELD in frame.columns:
        frame[SCHEMA_FIELD] = frame[SCHEMA_FIELD].map(lambda s: display_text(s) if s != "" else UNKNOWN_SCHEMA)
    return frame


def _records(grouped: pd.DataFrame) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for record in grouped.reset_index().to_dict("records"):
        out.append({k: (v if isinstance(v, str) else _number(v)) for k, v in record.items()})
    return out


def _mismatch_stats(frame: pd.DataFrame, count_field: str, percent_field: str) -> Dict[str, Any]:
    return {
        "total_tables": len(frame),
        "tables_with_mismatches": int((frame[count_field] > 0).sum()),
        "total_mismatches": _number(frame[count_field].sum()),
        "avg_mismatch_percent": float(frame[percent_field].mean()),
    }


# -----------------------------------------------------------------------------
# Schema changes
# -----------------------------------------------------------------------------
def aggregate_schema_changes(dataset: Dataset) -> AggregateResult:
    """
    Totals of added / deleted columns, overall and per schema.

    chart_data: one entry per schema in first-seen order
    {schema, new_columns, deleted_columns, tables}.
    """
    if not dataset:
        return AggregateResult()

    frame = _frame(dataset, (SCHEMA_FIELD, "new_columns_count", "deleted_columns_count"))

    stats = {
        "total_tables": len(frame),
        "tables_with_new_columns": int((frame["new_columns_count"] > 0).sum()),
        "tables_with_deleted_columns": int((frame["deleted_columns_count"] > 0).sum()),
        "total_new_columns": _number(frame["new_columns_count"].sum()),
        "total_deleted_columns": _number(frame["deleted_columns_count"].sum()),
    }

    grouped = (
        frame.rename(columns={SCHEMA_FIELD: "schema"})
        .groupby("schema", sort=False)
        .agg(
            new_columns=("new_columns_count", "sum"),
            deleted_columns=("deleted_columns_count", "sum"),
            tables=("new_columns_count", "size"),
        )
    )

    return AggregateResult(chart_data=_records(grouped), stats=stats)


# -----------------------------------------------------------------------------
# Column name mismatches
# -----------------------------------------------------------------------------
def aggregate_name_mismatches(dataset: Dataset) -> AggregateResult:
    """
    Distribution of tables over the five mismatch-percentage buckets.

    chart_data: {range, count, percentage} for each bucket that occurs, in
    bucket order; percentage is the share of all tables as a one-decimal
    string.
    """
    if not dataset:
        return AggregateResult()

    kind = DatasetKind.NAME_MISMATCH
    count_field = kind.schema.count_field
    percent_field = kind.schema.percent_field

    frame = _frame(dataset, (count_field, percent_field))
    stats = _mismatch_stats(frame, count_field, percent_field)

    counts = frame[percent_field].map(lambda p: bucket_for(p).value).value_counts()
    total = len(frame)

    chart_data = [
        {
            "range": bucket.label,
            "count": int(counts[bucket.value]),
            "percentage": _one_decimal(100 * int(counts[bucket.value]) / total),
        }
        for bucket in BUCKETS
        if bucket.value in counts.index
    ]

    return AggregateResult(chart_data=chart_data, stats=stats)


# -----------------------------------------------------------------------------
# Column dtype mismatches
# -----------------------------------------------------------------------------
def aggregate_dtype_mismatches(dataset: Dataset) -> AggregateResult:
    """
    Dtype mismatch totals, overall and per schema.

    chart_data: one entry per schema in first-seen order
    {schema, total_mismatches, tables, avg_mismatch_percent}, where the
    per-schema mean is a one-decimal string.
    """
    if not dataset:
        return AggregateResult()

    kind = DatasetKind.DTYPE_MISMATCH
    count_field = kind.schema.count_field
    percent_field = kind.schema.percent_field

    frame = _frame(dataset, (SCHEMA_FIELD, count_field, percent_field))
    stats = _mismatch_stats(frame, count_field, percent_field)

    grouped = (
        frame.rename(columns={SCHEMA_FIELD: "schema"})
        .groupby("schema", sort=False)
        .agg(
            total_mismatches=(count_field, "sum"),
            tables=(count_field, "size"),
            avg_mismatch_percent=(percent_field, "mean"),
        )
    )

    chart_data = _records(grouped.drop(columns="avg_mismatch_percent"))
    for entry, mean in zip(chart_data, grouped["avg_mismatch_percent"], strict=True):
        entry["avg_mismatch_percent"] = _one_decimal(mean)

    return AggregateResult(chart_data=chart_data, stats=stats)


AGGREGATORS = {
    DatasetKind.SCHEMA_CHANGE: aggregate_schema_changes,
    DatasetKind.NAME_MISMATCH: aggregate_name_mismatches,
    DatasetKind.DTYPE_MISMATCH: aggregate_dtype_mismatches,
}


def aggregate(dataset: Dataset) -> AggregateResult:
    """Dispatch to the aggregate matching the dataset's kind."""
    return AGGREGATORS[dataset.kind](dataset)
