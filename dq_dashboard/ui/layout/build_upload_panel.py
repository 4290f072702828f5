from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from dq_dashboard.core.dataset import DatasetKind
from dq_dashboard.ui.ids import IDs, kind_id

UPLOAD_DESCRIPTIONS = {
    DatasetKind.SCHEMA_CHANGE: "to track column additions and deletions",
    DatasetKind.NAME_MISMATCH: "to monitor naming inconsistencies",
    DatasetKind.DTYPE_MISMATCH: "to track data type issues",
}


def _upload_card(kind: DatasetKind) -> dbc.Card:
    schema = kind.schema
    return dbc.Card(
        dbc.CardBody(
            [
                html.H5(schema.label, className="card-title"),
                html.P(
                    f"Upload {schema.default_file} {UPLOAD_DESCRIPTIONS[kind]}",
                    className="text-muted small",
                ),
                dcc.Upload(
                    id=kind_id(kind, IDs.Control.UPLOAD),
                    children=html.Div(["Drag and drop or ", html.A("select a CSV file")]),
                    multiple=False,
                    accept=".csv",
                    className="dq-upload",
                    style={
                        "borderWidth": "2px",
                        "borderStyle": "dashed",
                        "borderRadius": "8px",
                        "padding": "24px",
                        "textAlign": "center",
                    },
                ),
                html.Div(id=kind_id(kind, IDs.Control.UPLOAD_STATUS), className="mt-2 small"),
            ]
        ),
        className="h-100 shadow-sm",
    )


def build_upload_panel() -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.H3("Upload CSV Files", className="fw-bold"),
                    html.P("Upload your CSV files to update the dashboard data", className="text-muted"),
                ],
                className="text-center my-4",
            ),
            dbc.Row([dbc.Col(_upload_card(kind), md=4) for kind in DatasetKind], className="g-4"),
        ]
    )
