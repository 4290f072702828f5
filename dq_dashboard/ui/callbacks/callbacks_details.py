from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import dash
from dash import Input, Output, State

from dq_dashboard.core import query_engine
from dq_dashboard.core.dataset import DatasetKind
from dq_dashboard.ui.callbacks.callbacks_tables import load_query_state
from dq_dashboard.ui.helpers import row_details
from dq_dashboard.ui.ids import IDs, kind_id

if TYPE_CHECKING:
    from dq_dashboard.ui.config import AppConfig

logger = logging.getLogger(__name__)

KINDS = list(DatasetKind)


def selected_row(ctx: AppConfig, kind: DatasetKind, stored_state: object, row_index: int):
    """
    The raw row behind a table row index, taken from the same display
    sequence the table shows. None if the index is out of range.
    """
    state = load_query_state(kind, stored_state)
    rows = query_engine.apply(ctx.store.get(kind), state)
    if 0 <= row_index < len(rows):
        return rows[row_index]
    return None


def register_details_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    table_ids = [kind_id(k, IDs.Control.TABLE) for k in KINDS]

    @app.callback(
        Output(IDs.Control.DETAILS_MODAL, "is_open"),
        Output(IDs.Control.DETAILS_TITLE, "children"),
        Output(IDs.Control.DETAILS_BODY, "children"),
        *[Output(tid, "active_cell") for tid in table_ids],
        *[Input(tid, "active_cell") for tid in table_ids],
        Input(IDs.Control.DETAILS_CLOSE, "n_clicks"),
        *[State(kind_id(k, IDs.Store.QUERY_STATE), "data") for k in KINDS],
        prevent_initial_call=True,
    )
    def toggle_details(*args: Any):
        cells = args[: len(KINDS)]
        states = args[len(KINDS) + 1:]
        cleared = [None] * len(KINDS)

        triggered = dash.ctx.triggered_id
        if triggered not in table_ids:
            return False, dash.no_update, dash.no_update, *cleared

        i = table_ids.index(triggered)
        cell: Optional[dict] = cells[i]
        if not cell:
            raise dash.exceptions.PreventUpdate

        kind = KINDS[i]
        row = selected_row(ctx, kind, states[i], cell.get("row", -1))
        if row is None:
            logger.warning("Row details requested for missing row", extra={"kind": kind.value, "cell": cell})
            return False, dash.no_update, dash.no_update, *cleared

        # Clearing active_cell lets the same cell be clicked again
        return True, f"Row Details: {kind.schema.label}", row_details(row), *cleared
