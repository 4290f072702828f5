from dq_dashboard.core.dataset import DatasetKind
from dq_dashboard.services.dataset_store import DatasetStore
from dq_dashboard.views import DtypeMismatchView


def _make_store() -> DatasetStore:
    store = DatasetStore()
    store.replace(
        DatasetKind.DTYPE_MISMATCH,
        [
            {"schema_name": "sales", "table_name": "A", "column_dtype_mismatch_count": 2, "percent_column_mismatch": 20},
            {"schema_name": "", "table_name": "B", "column_dtype_mismatch_count": 1, "percent_column_mismatch": 10},
        ],
    )
    return store


def test_stat_cards():
    view = DtypeMismatchView(_make_store())

    cards = view.stat_cards(view.compute_data())

    assert [c.value for c in cards] == ["2", "15.0%", "3"]
    assert cards[0].caption == "100.0% of total tables"


def test_render_bar_per_schema():
    view = DtypeMismatchView(_make_store())

    fig = view.render_figure(view.compute_data())
    (bar,) = fig.data

    assert list(bar.x) == ["sales", "Unknown"]
    assert list(bar.y) == [2, 1]
    assert [list(c) for c in bar.customdata] == [[1, "20.0"], [1, "10.0"]]


def test_empty_store_renders_placeholder():
    view = DtypeMismatchView(DatasetStore())

    fig = view.render_figure(view.compute_data())

    assert len(fig.data) == 0
