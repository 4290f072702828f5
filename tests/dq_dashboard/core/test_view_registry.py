import pytest

from dq_dashboard.core.base_view import BaseView
from dq_dashboard.core.view_registry import ViewRegistry
from dq_dashboard.services.dataset_store import DatasetStore
from dq_dashboard.views import NameMismatchView, SchemaChangeView


def test_register_and_create():
    registry = ViewRegistry()
    registry.register(SchemaChangeView)
    registry.register(NameMismatchView)
    store = DatasetStore()

    view = registry.create("name-mismatches", store)

    assert isinstance(view, NameMismatchView)
    assert view.store is store
    assert registry.all_classes() == [SchemaChangeView, NameMismatchView]


def test_duplicate_id_rejected():
    registry = ViewRegistry()
    registry.register(SchemaChangeView)

    with pytest.raises(ValueError):
        registry.register(SchemaChangeView)


def test_non_view_rejected():
    registry = ViewRegistry()

    with pytest.raises(TypeError):
        registry.register(dict)


def test_unknown_view_raises_key_error():
    with pytest.raises(KeyError):
        ViewRegistry().create("nope", DatasetStore())


def test_base_view_is_abstract():
    with pytest.raises(TypeError):
        BaseView(DatasetStore())
