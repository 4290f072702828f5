from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Type

import dash
import plotly.graph_objs as go
from dash import Input, Output

from dq_dashboard.core.base_view import BaseView
from dq_dashboard.ui.helpers import stat_cards_row
from dq_dashboard.ui.ids import IDs, view_id

if TYPE_CHECKING:
    from dq_dashboard.ui.config import AppConfig

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Helper: Empty/Error Figures
# -----------------------------------------------------------------------------
def _message_figure(title: str, details: Optional[str] = None) -> go.Figure:
    fig = go.Figure()
    text = title if details is None else f"{title}<br><br>{details}"
    fig.add_annotation(
        text=text,
        showarrow=False,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(margin=dict(l=40, r=40, t=40, b=40))
    return fig


def _error_figure(details: str) -> go.Figure:
    return _message_figure("This view could not be rendered from the current data.", details)


def render_view(ctx: AppConfig, view_cls: Type[BaseView]):
    """
    Aggregate + render one view against the current store.
    Returns (figure, cards); never raises.
    """
    try:
        view = ctx.registry.create(view_cls.id, ctx.store)
        data = view.compute_data()
        return view.render_figure(data), stat_cards_row(view.stat_cards(data))
    except Exception:
        logger.exception("Error rendering view", extra={"view_id": view_cls.id})
        return (
            _error_figure(
                "Check the server logs for the failing dataset, "
                "then refresh or upload a corrected CSV."
            ),
            None,
        )


def _register_view(app: dash.Dash, ctx: AppConfig, view_cls: Type[BaseView]) -> None:
    @app.callback(
        Output(view_id(view_cls.id, IDs.Control.GRAPH), "figure"),
        Output(view_id(view_cls.id, IDs.Control.CARDS), "children"),
        Input(IDs.Store.DATA_VERSION, "data"),
    )
    def update_view(_version: int | None):
        logger.info("render_start", extra={"view_id": view_cls.id})
        return render_view(ctx, view_cls)


def register_render_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # One chart + card row per registered view, recomputed on every data change
    # ---------------------------------------------------------
    for view_cls in ctx.registry.all_classes():
        _register_view(app, ctx, view_cls)
