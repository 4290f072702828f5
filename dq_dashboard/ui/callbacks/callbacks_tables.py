from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

import dash
from dash import Input, Output, State

from dq_dashboard.core import query_engine
from dq_dashboard.core.dataset import DatasetKind
from dq_dashboard.core.query_state import QueryState
from dq_dashboard.core.exceptions import UnknownDatasetKindError
from dq_dashboard.ui.helpers import record_count_text, schema_options, table_records, table_toggle_label
from dq_dashboard.ui.ids import IDs, kind_id

if TYPE_CHECKING:
    from dq_dashboard.ui.config import AppConfig

logger = logging.getLogger(__name__)


def load_query_state(kind: DatasetKind, data: object) -> QueryState:
    """Stored dict -> QueryState, falling back to defaults when missing or invalid."""
    if not isinstance(data, dict) or not data:
        return QueryState(kind=kind)
    try:
        state = QueryState.from_dict(data)
    except UnknownDatasetKindError:
        logger.exception("Invalid query-state: %r", data)
        return QueryState(kind=kind)
    return state if state.kind is kind else QueryState(kind=kind)


def next_query_state(
    current: QueryState,
    search: Optional[str],
    schema_filter: Optional[str],
    kind_filters: Dict[str, Optional[str]],
    sort_by: Optional[List[dict]],
    sort_clicked: bool,
) -> QueryState:
    """
    Fold the current control values into a new QueryState.

    DataTable cycles its own sort_by (asc -> desc -> none); only the clicked
    column is taken from it and the header-click rule decides direction.
    An empty sort_by after a click means the active column was clicked again.
    """
    state = current.with_search(search).with_filters(schema_filter=schema_filter, **kind_filters)
    if sort_clicked:
        key = sort_by[0]["column_id"] if sort_by else state.sort.key
        if key:
            state = state.toggle_sort(key)
    return state


def sort_by_for(state: QueryState) -> List[dict]:
    if not state.sort.key:
        return []
    return [{"column_id": state.sort.key, "direction": state.sort.direction}]


def toggle_table(is_open: Optional[bool]) -> Tuple[bool, str]:
    """Flip a detail table's visibility; returns (is_open, button label)."""
    is_open = False if is_open is None else not is_open
    return is_open, table_toggle_label(is_open)


def _register_toggle(app: dash.Dash, kind: DatasetKind) -> None:
    collapse_id = kind_id(kind, IDs.Control.TABLE_COLLAPSE)
    toggle_id = kind_id(kind, IDs.Control.TABLE_TOGGLE)

    @app.callback(
        Output(collapse_id, "is_open"),
        Output(toggle_id, "children"),
        Input(toggle_id, "n_clicks"),
        State(collapse_id, "is_open"),
        prevent_initial_call=True,
    )
    def update_visibility(_n_clicks: Optional[int], is_open: Optional[bool]):
        return toggle_table(is_open)


def _register_kind(app: dash.Dash, ctx: AppConfig, kind: DatasetKind) -> None:
    if not kind.is_mismatch:
        filter_names = ["has_new_columns", "has_deleted_columns"]
        filter_inputs = [
            Input(kind_id(kind, IDs.Control.NEW_COLUMNS_FILTER), "value"),
            Input(kind_id(kind, IDs.Control.DELETED_COLUMNS_FILTER), "value"),
        ]
    else:
        filter_names = ["mismatch_range"]
        filter_inputs = [Input(kind_id(kind, IDs.Control.RANGE_FILTER), "value")]

    table_id = kind_id(kind, IDs.Control.TABLE)

    @app.callback(
        Output(kind_id(kind, IDs.Store.QUERY_STATE), "data"),
        Output(table_id, "data"),
        Output(table_id, "sort_by"),
        Output(kind_id(kind, IDs.Control.RECORD_COUNT), "children"),
        Output(kind_id(kind, IDs.Control.SCHEMA_FILTER), "options"),
        Input(kind_id(kind, IDs.Control.SEARCH), "value"),
        Input(kind_id(kind, IDs.Control.SCHEMA_FILTER), "value"),
        *filter_inputs,
        Input(table_id, "sort_by"),
        Input(IDs.Store.DATA_VERSION, "data"),
        State(kind_id(kind, IDs.Store.QUERY_STATE), "data"),
    )
    def update_table(search: Optional[str], schema_filter: Optional[str], *rest: Any):
        filter_values = rest[: len(filter_names)]
        sort_by, _version, stored = rest[len(filter_names):]

        state = next_query_state(
            load_query_state(kind, stored),
            search,
            schema_filter,
            dict(zip(filter_names, filter_values)),
            sort_by,
            sort_clicked=dash.ctx.triggered_id == table_id,
        )

        dataset = ctx.store.get(kind)
        rows = query_engine.apply(dataset, state)

        return (
            state.to_dict(),
            table_records(kind, rows),
            sort_by_for(state),
            record_count_text(len(rows), len(dataset)),
            schema_options(dataset),
        )


def register_table_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Search / filter / sort -> QueryState -> table rows, plus the show/hide
    # toggle (one set per dataset kind)
    # ---------------------------------------------------------
    for kind in DatasetKind:
        _register_kind(app, ctx, kind)
        _register_toggle(app, kind)
