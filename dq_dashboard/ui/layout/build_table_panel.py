from __future__ import annotations

from typing import List

import dash_bootstrap_components as dbc
from dash import dash_table, dcc, html

from dq_dashboard.core.buckets import BUCKETS
from dq_dashboard.core.dataset import Dataset, DatasetKind
from dq_dashboard.core.query_state import QueryState
from dq_dashboard.ui.helpers import record_count_text, schema_options, table_columns, table_toggle_label
from dq_dashboard.ui.ids import IDs, kind_id

TABLE_TITLES = {
    DatasetKind.SCHEMA_CHANGE: "Schema Changes Details",
    DatasetKind.NAME_MISMATCH: "Column Name Mismatch Details",
    DatasetKind.DTYPE_MISMATCH: "Data Type Mismatch Details",
}


def _flag_dropdown(component_id: str, yes: str, no: str) -> dcc.Dropdown:
    return dcc.Dropdown(
        id=component_id,
        options=[
            {"label": "All Tables", "value": "all"},
            {"label": yes, "value": "true"},
            {"label": no, "value": "false"},
        ],
        value="all",
        clearable=False,
    )


def _kind_filters(kind: DatasetKind) -> List[dbc.Col]:
    if not kind.is_mismatch:
        return [
            dbc.Col(
                _flag_dropdown(
                    kind_id(kind, IDs.Control.NEW_COLUMNS_FILTER), "Has New Columns", "No New Columns"
                ),
                md=3,
            ),
            dbc.Col(
                _flag_dropdown(
                    kind_id(kind, IDs.Control.DELETED_COLUMNS_FILTER), "Has Deleted Columns", "No Deleted Columns"
                ),
                md=3,
            ),
        ]

    range_options = [{"label": "All Ranges", "value": "all"}]
    range_options.extend({"label": f"{b.label} Mismatch", "value": b.value} for b in BUCKETS)
    return [
        dbc.Col(
            dcc.Dropdown(
                id=kind_id(kind, IDs.Control.RANGE_FILTER),
                options=range_options,
                value="all",
                clearable=False,
            ),
            md=3,
        )
    ]


def _count_styles(kind: DatasetKind) -> List[dict]:
    """Green / red highlight for tables with changes or mismatches."""
    styles = []
    if kind is DatasetKind.SCHEMA_CHANGE:
        for field, colour in (("new_columns_count", "#d1fae5"), ("deleted_columns_count", "#fee2e2")):
            styles.append(
                {
                    "if": {"filter_query": f"{{{field}}} > 0", "column_id": field},
                    "backgroundColor": colour,
                }
            )
    else:
        field = kind.schema.count_field
        styles.append(
            {
                "if": {"filter_query": f"{{{field}}} > 0", "column_id": field},
                "backgroundColor": "#ffedd5" if kind is DatasetKind.NAME_MISMATCH else "#fee2e2",
            }
        )
    return styles


def build_table_panel(dataset: Dataset) -> dbc.Card:
    """
    Search box, schema + kind-specific filters and the sortable detail
    table for one dataset kind. Rows, sort state and filter options are
    filled by the table callbacks.
    """
    kind = dataset.kind
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Span(TABLE_TITLES[kind], className="fw-semibold"),
                        dbc.Button(
                            table_toggle_label(True),
                            id=kind_id(kind, IDs.Control.TABLE_TOGGLE),
                            color="link",
                            size="sm",
                            className="text-muted p-0",
                        ),
                    ],
                    className="d-flex justify-content-between align-items-center",
                )
            ),
            dbc.CardBody(
                [
                    dcc.Store(
                        id=kind_id(kind, IDs.Store.QUERY_STATE),
                        data=QueryState(kind=kind).to_dict(),
                        storage_type="session",
                    ),
                    dbc.Row(
                        [
                            dbc.Col(
                                dbc.Input(
                                    id=kind_id(kind, IDs.Control.SEARCH),
                                    type="search",
                                    placeholder="Search...",
                                    debounce=True,
                                    value="",
                                ),
                                md=3,
                            ),
                            dbc.Col(
                                dcc.Dropdown(
                                    id=kind_id(kind, IDs.Control.SCHEMA_FILTER),
                                    options=schema_options(dataset),
                                    value="all",
                                    clearable=False,
                                ),
                                md=3,
                            ),
                            *_kind_filters(kind),
                        ],
                        className="g-3",
                    ),
                    html.Div(
                        record_count_text(len(dataset), len(dataset)),
                        id=kind_id(kind, IDs.Control.RECORD_COUNT),
                        className="mt-2 mb-2 text-muted small",
                    ),
                    dbc.Collapse(
                        [
                            dash_table.DataTable(
                                id=kind_id(kind, IDs.Control.TABLE),
                                columns=table_columns(kind),
                                data=[],
                                sort_action="custom",
                                sort_mode="single",
                                sort_by=[],
                                page_action="none",
                                style_table={"overflowX": "auto", "maxHeight": "600px", "overflowY": "auto"},
                                style_as_list_view=True,
                                style_cell={
                                    "fontFamily": 'system-ui, -apple-system, "Segoe UI", sans-serif',
                                    "fontSize": "13px",
                                    "padding": "8px 12px",
                                    "textAlign": "left",
                                    "whiteSpace": "nowrap",
                                    "cursor": "pointer",
                                },
                                style_header={
                                    "backgroundColor": "#f9fafb",
                                    "fontWeight": "600",
                                    "textTransform": "uppercase",
                                    "fontSize": "11px",
                                    "color": "#6b7280",
                                },
                                style_data_conditional=_count_styles(kind),
                            ),
                            html.Small(
                                "Click a header to sort, click a row to see its details.",
                                className="text-muted",
                            ),
                        ],
                        id=kind_id(kind, IDs.Control.TABLE_COLLAPSE),
                        is_open=True,
                    ),
                ]
            ),
        ],
        className="mb-4 shadow-sm",
    )
