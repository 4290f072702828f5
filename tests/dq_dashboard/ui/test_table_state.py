from pathlib import Path

import dash_bootstrap_components as dbc

from dq_dashboard.config.model import GlobalConfig
from dq_dashboard.core.dataset import DatasetKind
from dq_dashboard.core.query_state import QueryState, SortSpec
from dq_dashboard.services.dataset_store import DatasetStore
from dq_dashboard.ui.callbacks.callbacks_details import selected_row
from dq_dashboard.ui.callbacks.callbacks_tables import load_query_state, next_query_state, sort_by_for, toggle_table
from dq_dashboard.ui.config import AppConfig
from dq_dashboard.ui.layout.build_table_panel import build_table_panel

KIND = DatasetKind.SCHEMA_CHANGE


def _make_ctx() -> AppConfig:
    store = DatasetStore()
    store.replace(
        KIND,
        [
            {"schema_name": "sales", "table_name": "B", "new_columns_count": 1},
            {"schema_name": "hr", "table_name": "A", "new_columns_count": 0},
            {"schema_name": "sales", "table_name": "C", "new_columns_count": 2},
        ],
    )
    return AppConfig(config_root=Path("."), global_config=GlobalConfig(), store=store)


def _next(current, sort_by=None, sort_clicked=False, search="", schema_filter="all", **kind_filters):
    return next_query_state(current, search, schema_filter, kind_filters, sort_by, sort_clicked)


def test_load_query_state_defaults():
    assert load_query_state(KIND, None) == QueryState(kind=KIND)
    assert load_query_state(KIND, {}) == QueryState(kind=KIND)
    assert load_query_state(KIND, {"kind": "not-a-kind"}) == QueryState(kind=KIND)
    # a state stored for another kind is ignored
    assert load_query_state(KIND, QueryState(kind=DatasetKind.NAME_MISMATCH).to_dict()) == QueryState(kind=KIND)


def test_controls_fold_into_state():
    state = _next(QueryState(kind=KIND), search="sal", schema_filter="sales", has_new_columns="true")

    assert state.search_term == "sal"
    assert state.schema_filter == "sales"
    assert state.has_new_columns == "true"
    assert state.sort.key is None


def test_header_clicks_follow_toggle_rule():
    state = QueryState(kind=KIND)

    # DataTable reports asc, then desc, then [] for repeated clicks on one column
    state = _next(state, [{"column_id": "table_name", "direction": "asc"}], sort_clicked=True)
    assert state.sort == SortSpec("table_name", "asc")

    state = _next(state, [{"column_id": "table_name", "direction": "desc"}], sort_clicked=True)
    assert state.sort == SortSpec("table_name", "desc")

    state = _next(state, [], sort_clicked=True)
    assert state.sort == SortSpec("table_name", "asc")

    state = _next(state, [{"column_id": "schema_name", "direction": "desc"}], sort_clicked=True)
    assert state.sort == SortSpec("schema_name", "asc")


def test_sort_untouched_when_other_control_fires():
    state = QueryState(kind=KIND, sort=SortSpec("table_name", "desc"))

    assert _next(state, [], search="x").sort == SortSpec("table_name", "desc")


def test_sort_by_for():
    assert sort_by_for(QueryState(kind=KIND)) == []
    assert sort_by_for(QueryState(kind=KIND, sort=SortSpec("table_name", "desc"))) == [
        {"column_id": "table_name", "direction": "desc"}
    ]


def test_selected_row_uses_display_sequence():
    ctx = _make_ctx()
    stored = QueryState(kind=KIND, sort=SortSpec("table_name", "asc")).to_dict()

    assert selected_row(ctx, KIND, stored, 0)["table_name"] == "A"
    assert selected_row(ctx, KIND, stored, 2)["table_name"] == "C"
    assert selected_row(ctx, KIND, stored, 3) is None


def test_selected_row_respects_filters():
    ctx = _make_ctx()
    stored = QueryState(kind=KIND, has_new_columns="true").to_dict()

    assert [selected_row(ctx, KIND, stored, i)["table_name"] for i in range(2)] == ["B", "C"]


def test_toggle_table_flips_visibility_and_label():
    assert toggle_table(True) == (False, "Show table")
    assert toggle_table(False) == (True, "Hide table")
    # a collapse that never reported its state starts open
    assert toggle_table(None) == (False, "Show table")


def test_table_panel_starts_open_with_hide_button():
    panel = build_table_panel(_make_ctx().store.get(KIND))

    collapse = panel.children[1].children[-1]
    button = panel.children[0].children.children[1]

    assert isinstance(collapse, dbc.Collapse)
    assert collapse.id == "schema_change-table-collapse"
    assert collapse.is_open is True
    assert button.id == "schema_change-table-toggle"
    assert button.children == "Hide table"
