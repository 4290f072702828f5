from datetime import datetime, timedelta

import pytest

from dq_dashboard.core.dataset import DatasetKind
from dq_dashboard.core.exceptions import UnknownDatasetKindError
from dq_dashboard.services.dataset_store import DatasetStore


def _make_clock(start=datetime(2024, 1, 1, 9, 0, 0)):
    """Deterministic clock: every call advances one minute."""
    ticks = iter(start + timedelta(minutes=i) for i in range(1000))
    return lambda: next(ticks)


def test_store_starts_with_empty_dataset_per_kind():
    store = DatasetStore()

    assert set(store) == set(DatasetKind)
    assert len(store) == 3
    assert all(len(store[k]) == 0 for k in DatasetKind)


def test_replace_swaps_rows_and_bumps_last_updated():
    store = DatasetStore(clock=_make_clock())
    before = store.last_updated

    ds = store.replace(DatasetKind.SCHEMA_CHANGE, [{"table_name": "A"}, {"table_name": "B"}])

    assert store.get("schema_change") is ds
    assert [r["table_name"] for r in ds] == ["A", "B"]
    assert store.last_updated > before


def test_replace_is_whole_not_merge():
    store = DatasetStore()
    store.replace(DatasetKind.NAME_MISMATCH, [{"table_name": "A"}, {"table_name": "B"}])

    store.replace(DatasetKind.NAME_MISMATCH, [{"table_name": "C"}])

    assert [r["table_name"] for r in store[DatasetKind.NAME_MISMATCH]] == ["C"]


def test_replace_leaves_other_kinds_alone():
    store = DatasetStore()
    store.replace(DatasetKind.DTYPE_MISMATCH, [{"table_name": "A"}])

    store.replace(DatasetKind.SCHEMA_CHANGE, [])

    assert store.counts() == {
        DatasetKind.SCHEMA_CHANGE: 0,
        DatasetKind.NAME_MISMATCH: 0,
        DatasetKind.DTYPE_MISMATCH: 1,
    }


def test_upload_source_is_tracked():
    store = DatasetStore()
    store.replace(DatasetKind.SCHEMA_CHANGE, [], source="upload")
    store.replace(DatasetKind.NAME_MISMATCH, [])

    assert store.was_uploaded(DatasetKind.SCHEMA_CHANGE)
    assert not store.was_uploaded("name_mismatch")


def test_unknown_kind_raises():
    with pytest.raises(UnknownDatasetKindError):
        DatasetStore().get("bogus")


def test_touch_stamps_time_without_changing_data():
    store = DatasetStore(clock=_make_clock())
    store.replace(DatasetKind.SCHEMA_CHANGE, [{"table_name": "A"}])
    before = store.last_updated

    store.touch()

    assert store.last_updated > before
    assert len(store[DatasetKind.SCHEMA_CHANGE]) == 1
