from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Mapping, Sequence

import dash_bootstrap_components as dbc
from dash import html

from dq_dashboard.core.base_view import StatCard
from dq_dashboard.core.dataset import Dataset, DatasetKind, Row
from dq_dashboard.core.query_engine import display_text
from dq_dashboard.core.schema_catalog import unique_schemas

COLUMN_LABELS: Dict[str, str] = {
    "schema_name": "Schema Name",
    "table_name": "Table Name",
    "new_columns_count": "New Columns",
    "new_columns_name": "New Column Names",
    "deleted_columns_count": "Deleted Columns",
    "deleted_columns_name": "Deleted Column Names",
    "column_count": "Total Columns",
    "column_name_mismatch_count": "Mismatch Count",
    "percent_column_name_mismatch": "Mismatch %",
    "mismatch_column_names": "Mismatched Columns",
    "mismatch_columns_current_name": "Current Names",
    "mismatch_columns_expected_name": "Expected Names",
    "column_dtype_mismatch_count": "Type Mismatches",
    "percent_column_mismatch": "Mismatch %",
    "mismatch_columns": "Mismatched Columns",
    "mismatch_column_current_dtypes": "Current Types",
    "expected_column_dtypes": "Expected Types",
}

MISSING_TEXT = "-"
MISSING_DETAIL = "N/A"


def format_cell(kind: DatasetKind, field: str, value: Any) -> Any:
    """
    Table cell value.

    Counts show 0 when missing, percentages show "x.x%" ("0%" when zero or
    missing), text shows "-" when missing.
    """
    if field == kind.schema.percent_field:
        percent = value or 0
        return f"{percent:.1f}%" if percent else "0%"
    if kind.is_numeric(field):
        return value if value is not None else 0
    if value is None or value == "":
        return MISSING_TEXT
    return display_text(value)


def table_columns(kind: DatasetKind) -> List[Dict[str, Any]]:
    columns = []
    for field in kind.schema.fields:
        numeric = kind.is_numeric(field) and field != kind.schema.percent_field
        columns.append(
            {
                "name": COLUMN_LABELS.get(field, field),
                "id": field,
                "type": "numeric" if numeric else "text",
            }
        )
    return columns


def table_records(kind: DatasetKind, rows: Sequence[Row]) -> List[Dict[str, Any]]:
    return [{f: format_cell(kind, f, row.get(f)) for f in kind.schema.fields} for row in rows]


def schema_options(dataset: Dataset) -> List[Dict[str, str]]:
    options = [{"label": "All Schemas", "value": "all"}]
    options.extend({"label": s, "value": s} for s in unique_schemas(dataset))
    return options


def record_count_text(shown: int, total: int) -> str:
    return f"Showing {shown} of {total} records"


def table_toggle_label(is_open: bool) -> str:
    return "Hide table" if is_open else "Show table"


def last_updated_text(ts: datetime) -> str:
    return ts.strftime("%Y-%m-%d %H:%M:%S")


def detail_label(key: str) -> str:
    return key.replace("_", " ").upper()


def row_details(row: Mapping[str, Any]) -> html.Div:
    """Key / value grid for the row-details modal."""
    items = []
    for key, value in row.items():
        shown = MISSING_DETAIL if value is None or value == "" else display_text(value)
        items.append(
            dbc.Row(
                [
                    dbc.Col(html.Strong(detail_label(key)), md=4),
                    dbc.Col(shown, md=8),
                ],
                className="py-2 border-bottom",
            )
        )
    return html.Div(items)


def stat_cards_row(cards: Sequence[StatCard]) -> dbc.Row:
    return dbc.Row(
        [
            dbc.Col(
                dbc.Card(
                    dbc.CardBody(
                        [
                            html.Div(card.title, className=f"fw-medium text-{card.tone}"),
                            html.H3(card.value, className=f"fw-bold text-{card.tone} mb-0"),
                            html.Small(card.caption, className=f"text-{card.tone}") if card.caption else None,
                        ]
                    ),
                    className="dq-stat-card shadow-sm",
                ),
                md=12 // max(len(cards), 1),
                className="mb-3",
            )
            for card in cards
        ]
    )
