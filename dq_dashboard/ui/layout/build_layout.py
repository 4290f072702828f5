from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc, html

from dq_dashboard.ui.helpers import last_updated_text
from dq_dashboard.ui.ids import IDs
from dq_dashboard.ui.layout.build_navbar import build_navbar
from dq_dashboard.ui.layout.build_upload_panel import build_upload_panel
from dq_dashboard.ui.layout.build_view_panel import build_view_panel

if TYPE_CHECKING:
    from dq_dashboard.ui.config import AppConfig

UPLOAD_TAB = "upload"


def _details_modal() -> dbc.Modal:
    return dbc.Modal(
        [
            dbc.ModalHeader(dbc.ModalTitle("Row Details", id=IDs.Control.DETAILS_TITLE)),
            dbc.ModalBody(id=IDs.Control.DETAILS_BODY, style={"maxHeight": "24rem", "overflowY": "auto"}),
            dbc.ModalFooter(dbc.Button("Close", id=IDs.Control.DETAILS_CLOSE, color="secondary")),
        ],
        id=IDs.Control.DETAILS_MODAL,
        is_open=False,
        size="lg",
    )


def build_layout(ctx: "AppConfig"):
    views = [cls(ctx.store) for cls in ctx.registry.all_classes()]

    tabs = [dcc.Tab(label=v.label, value=v.id, children=[build_view_panel(v)]) for v in views]
    tabs.append(dcc.Tab(label="Upload Data", value=UPLOAD_TAB, children=[build_upload_panel()]))

    return dbc.Container(
        fluid=True,
        className="dq-root",
        children=[
            build_navbar(ctx.global_config, last_updated_text(ctx.store.last_updated)),

            # Bumped whenever any dataset is replaced; every chart and table listens to it
            dcc.Store(id=IDs.Store.DATA_VERSION, data=0),

            dcc.Tabs(
                id=IDs.Control.PAGE_TABS,
                value=views[0].id if views else UPLOAD_TAB,
                children=tabs,
                className="mt-2",
            ),
            _details_modal(),
        ],
    )
