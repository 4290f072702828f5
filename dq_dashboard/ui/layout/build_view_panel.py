from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from dq_dashboard.core.base_view import BaseView
from dq_dashboard.ui.ids import IDs, view_id
from dq_dashboard.ui.layout.build_table_panel import build_table_panel


def build_view_panel(view: BaseView) -> html.Div:
    """
    One tab: headline cards, the view's chart and, for single-dataset views,
    the detail table underneath.
    """
    children = [
        html.Div(id=view_id(view.id, IDs.Control.CARDS), className="mt-3"),
        dbc.Card(
            dbc.CardBody(
                dcc.Loading(
                    type="default",
                    children=dcc.Graph(
                        id=view_id(view.id, IDs.Control.GRAPH),
                        config={"responsive": True, "displaylogo": False},
                    ),
                )
            ),
            className="mb-4 shadow-sm",
        ),
    ]

    if view.kind is not None:
        children.append(build_table_panel(view.dataset()))

    return html.Div(children)
