from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from dq_dashboard.config.model import GlobalConfig
from dq_dashboard.ui.ids import IDs


def build_navbar(global_config: GlobalConfig, last_updated: str) -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                # Left: title
                html.Div(
                    [
                        html.H2(global_config.ui_title, className="mb-0"),
                        html.Small(global_config.subtitle, className="text-muted"),
                    ],
                    className="d-flex flex-column justify-content-center",
                ),

                # Right: refresh + last updated
                html.Div(
                    [
                        dbc.Button(
                            "Refresh",
                            id=IDs.Control.REFRESH_BTN,
                            color="light",
                            className="me-3 border",
                        ),
                        html.Div(
                            [
                                html.Small("Last Updated", className="text-muted d-block"),
                                html.Span(
                                    last_updated,
                                    id=IDs.Control.LAST_UPDATED,
                                    className="fw-medium",
                                ),
                            ],
                            className="text-end",
                        ),
                    ],
                    className="ms-auto d-flex align-items-center",
                ),
            ],
        ),
        dark=False,
        className="shadow-sm dq-navbar",
    )
