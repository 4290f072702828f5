from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List, Optional

import dash
from dash import Input, Output, State, html

from dq_dashboard.core.dataset import DatasetKind
from dq_dashboard.core.exceptions import IngestionError
from dq_dashboard.services.ingestion import load_from_directory, load_from_upload
from dq_dashboard.ui.helpers import last_updated_text
from dq_dashboard.ui.ids import IDs, kind_id

if TYPE_CHECKING:
    from dq_dashboard.ui.config import AppConfig

logger = logging.getLogger(__name__)

KINDS: List[DatasetKind] = list(DatasetKind)


def upload_status(ctx: AppConfig, kind: DatasetKind, error: Optional[str] = None):
    if error:
        return html.Span(error, className="text-danger")
    if ctx.store.was_uploaded(kind):
        return html.Span("File uploaded successfully", className="text-success")
    return None


def refresh_from_disk(ctx: AppConfig) -> List[DatasetKind]:
    return load_from_directory(ctx.store, ctx.data_root, ctx.global_config.dataset_files)


def register_data_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Refresh button + per-kind uploads -> replace datasets, bump data version
    # ---------------------------------------------------------
    upload_ids = [kind_id(k, IDs.Control.UPLOAD) for k in KINDS]

    @app.callback(
        Output(IDs.Store.DATA_VERSION, "data"),
        Output(IDs.Control.LAST_UPDATED, "children"),
        *[Output(kind_id(k, IDs.Control.UPLOAD_STATUS), "children") for k in KINDS],
        Input(IDs.Control.REFRESH_BTN, "n_clicks"),
        *[Input(uid, "contents") for uid in upload_ids],
        *[State(uid, "filename") for uid in upload_ids],
        State(IDs.Store.DATA_VERSION, "data"),
        prevent_initial_call=True,
    )
    def update_data(_n_clicks: Optional[int], *args: Any):
        contents = dict(zip(KINDS, args[: len(KINDS)]))
        filenames = dict(zip(KINDS, args[len(KINDS): 2 * len(KINDS)]))
        version = args[-1] or 0

        triggered = dash.ctx.triggered_id
        errors = {k: None for k in KINDS}

        if triggered == IDs.Control.REFRESH_BTN:
            replaced = refresh_from_disk(ctx)
            logger.info("Refresh requested", extra={"replaced": [k.value for k in replaced]})
        elif triggered in upload_ids:
            kind = KINDS[upload_ids.index(triggered)]
            if not contents[kind]:
                raise dash.exceptions.PreventUpdate
            try:
                load_from_upload(ctx.store, kind, contents[kind], filenames[kind] or "")
            except IngestionError as e:
                logger.warning(
                    "Upload rejected",
                    extra={"kind": kind.value, "upload_filename": filenames[kind], "error": str(e)},
                )
                errors[kind] = str(e)
        else:
            raise dash.exceptions.PreventUpdate

        return (
            version + 1,
            last_updated_text(ctx.store.last_updated),
            *[upload_status(ctx, k, errors[k]) for k in KINDS],
        )
