from __future__ import annotations

import logging
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from .config import AppConfig
from dq_dashboard.config.loader import load_global_config
from dq_dashboard.core.view_registry import ViewRegistry
from dq_dashboard.services.dataset_store import DatasetStore
from dq_dashboard.services.ingestion import load_from_directory
from dq_dashboard.ui.layout.build_layout import build_layout
from dq_dashboard.ui.callbacks.callbacks_data import register_data_callbacks
from dq_dashboard.ui.callbacks.callbacks_details import register_details_callbacks
from dq_dashboard.ui.callbacks.callbacks_render import register_render_callbacks
from dq_dashboard.ui.callbacks.callbacks_tables import register_table_callbacks

logger = logging.getLogger(__name__)


def _build_view_registry() -> ViewRegistry:
    from dq_dashboard.views import (
        OverviewView,
        SchemaChangeView,
        NameMismatchView,
        DtypeMismatchView,
    )

    registry = ViewRegistry()
    registry.register(OverviewView)
    registry.register(SchemaChangeView)
    registry.register(NameMismatchView)
    registry.register(DtypeMismatchView)
    return registry


def create_dash_app(config_root: Path | str = Path("config"), store: DatasetStore | None = None) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config = load_global_config(config_root)

    # 2) Initial data load (missing files leave that kind empty)
    store = store or DatasetStore()
    loaded = load_from_directory(store, global_config.data_root or config_root, global_config.dataset_files)
    logger.info("Initial data load finished", extra={"loaded": [k.value for k in loaded]})

    # 3) App Context
    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        store=store,
        registry=_build_view_registry(),
    )
    ctx.validate()

    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        assets_folder=str(assets_path),
    )
    app.title = global_config.ui_title

    app.layout = build_layout(ctx)

    # Register callbacks
    register_data_callbacks(app, ctx)
    register_render_callbacks(app, ctx)
    register_table_callbacks(app, ctx)
    register_details_callbacks(app, ctx)

    return app
