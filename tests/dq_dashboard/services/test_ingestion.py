import base64
from datetime import datetime, timedelta

import pytest

from dq_dashboard.core.aggregation import aggregate_schema_changes
from dq_dashboard.core.dataset import Dataset, DatasetKind
from dq_dashboard.core.exceptions import IngestionError
from dq_dashboard.services import ingestion
from dq_dashboard.services.dataset_store import DatasetStore
from dq_dashboard.services.ingestion import (
    decode_upload,
    load_from_directory,
    load_from_upload,
    parse_csv,
    read_file,
)

SCHEMA_CSV = (
    "schema_name,table_name,new_columns_count,new_columns_name,deleted_columns_count,deleted_columns_name\n"
    "sales,SALES_FACT,2,\"region,channel\",0,\n"
    "\n"
    "finance,GL_ENTRIES,,,1,legacy_code\n"
)

NAME_CSV = (
    "schema_name,table_name,column_count,column_name_mismatch_count,percent_column_name_mismatch\n"
    "sales,A,10,3,30.0\n"
    "sales,B,8,1,12.5\n"
    "hr,C,4,0,n/a\n"
)


def _make_upload(text: str, mime: str = "text/csv") -> str:
    encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def _make_data_root(tmp_path, files):
    for name, text in files.items():
        (tmp_path / name).write_text(text, encoding="utf-8")
    return tmp_path


# -----------------------------------------------------------------------------
# parse_csv
# -----------------------------------------------------------------------------
def test_parse_csv_types_declared_numeric_fields():
    rows = parse_csv(DatasetKind.SCHEMA_CHANGE, SCHEMA_CSV)

    assert len(rows) == 2
    assert rows[0]["new_columns_count"] == 2
    assert isinstance(rows[0]["new_columns_count"], int)
    assert rows[0]["new_columns_name"] == "region,channel"
    assert rows[0]["deleted_columns_name"] is None
    assert rows[1]["new_columns_count"] is None
    assert rows[1]["deleted_columns_count"] == 1


def test_parse_csv_keeps_fractions_and_coerces_garbage_to_none():
    rows = parse_csv(DatasetKind.NAME_MISMATCH, NAME_CSV)

    assert [r["percent_column_name_mismatch"] for r in rows] == [30, 12.5, None]
    assert rows[2]["schema_name"] == "hr"


def test_parse_csv_keeps_undeclared_columns_as_text():
    rows = parse_csv(DatasetKind.DTYPE_MISMATCH, "table_name,owner\nA,42\n")

    assert rows == [{"table_name": "A", "owner": "42"}]


def test_parse_csv_header_only_gives_no_rows():
    assert parse_csv(DatasetKind.SCHEMA_CHANGE, "schema_name,table_name\n") == []


def test_parse_csv_empty_text_raises():
    with pytest.raises(IngestionError):
        parse_csv(DatasetKind.SCHEMA_CHANGE, "")


def test_parse_csv_keeps_na_like_text_values():
    text = (
        "schema_name,table_name,new_columns_count,new_columns_name,deleted_columns_count,deleted_columns_name\n"
        "NA,null,1,None,NA,\n"
    )

    (row,) = parse_csv(DatasetKind.SCHEMA_CHANGE, text)

    assert row["schema_name"] == "NA"
    assert row["table_name"] == "null"
    assert row["new_columns_name"] == "None"
    # empty text cells are missing, non-numeric counts are coerced
    assert row["deleted_columns_name"] is None
    assert row["deleted_columns_count"] is None
    assert row["new_columns_count"] == 1


def test_na_schema_name_is_grouped_under_its_own_name():
    text = "schema_name,table_name,new_columns_count\nNA,A,2\nN/A,B,1\n"
    ds = Dataset.from_rows(DatasetKind.SCHEMA_CHANGE, parse_csv(DatasetKind.SCHEMA_CHANGE, text))

    result = aggregate_schema_changes(ds)

    assert [e["schema"] for e in result.chart_data] == ["NA", "N/A"]


# -----------------------------------------------------------------------------
# Files and uploads
# -----------------------------------------------------------------------------
def test_read_file_missing_raises(tmp_path):
    with pytest.raises(IngestionError):
        read_file(DatasetKind.SCHEMA_CHANGE, tmp_path / "absent.csv")


def test_decode_upload_round_trip_and_bom():
    assert decode_upload(_make_upload("\ufeffa,b\n1,2\n")) == "a,b\n1,2\n"


def test_decode_upload_rejects_corrupt_payload():
    with pytest.raises(IngestionError):
        decode_upload("data:text/csv;base64,@@not-base64@@")

    with pytest.raises(IngestionError):
        decode_upload("no comma here")


def test_decode_upload_rejects_oversized(monkeypatch):
    monkeypatch.setattr(ingestion, "MAX_UPLOAD_BYTES", 4)

    with pytest.raises(IngestionError):
        decode_upload(_make_upload("a,b\n1,2\n"))


def test_load_from_directory_soft_fails_per_kind(tmp_path):
    root = _make_data_root(tmp_path, {"new_old_delete.csv": SCHEMA_CSV})
    store = DatasetStore()
    store.replace(DatasetKind.NAME_MISMATCH, [{"table_name": "kept"}])

    replaced = load_from_directory(store, root)

    assert replaced == [DatasetKind.SCHEMA_CHANGE]
    assert len(store[DatasetKind.SCHEMA_CHANGE]) == 2
    # missing file keeps the previous rows
    assert [r["table_name"] for r in store[DatasetKind.NAME_MISMATCH]] == ["kept"]
    assert len(store[DatasetKind.DTYPE_MISMATCH]) == 0


def test_load_from_directory_uses_configured_file_names(tmp_path):
    root = _make_data_root(tmp_path, {"names.csv": NAME_CSV})
    store = DatasetStore()

    replaced = load_from_directory(store, root, {DatasetKind.NAME_MISMATCH: "names.csv"})

    assert replaced == [DatasetKind.NAME_MISMATCH]
    assert len(store[DatasetKind.NAME_MISMATCH]) == 3


def test_load_from_upload_replaces_one_kind():
    store = DatasetStore()

    ds = load_from_upload(store, "name_mismatch", _make_upload(NAME_CSV), "names.CSV")

    assert store[DatasetKind.NAME_MISMATCH] is ds
    assert len(ds) == 3
    assert store.was_uploaded(DatasetKind.NAME_MISMATCH)


def test_load_from_upload_rejects_non_csv_and_leaves_store():
    store = DatasetStore()
    store.replace(DatasetKind.SCHEMA_CHANGE, [{"table_name": "A"}])

    with pytest.raises(IngestionError):
        load_from_upload(store, DatasetKind.SCHEMA_CHANGE, _make_upload(SCHEMA_CSV), "changes.xlsx")

    assert [r["table_name"] for r in store[DatasetKind.SCHEMA_CHANGE]] == ["A"]
    assert not store.was_uploaded(DatasetKind.SCHEMA_CHANGE)


def test_refresh_with_no_files_still_stamps_last_updated(tmp_path):
    ticks = iter(datetime(2024, 1, 1) + timedelta(minutes=i) for i in range(10))
    store = DatasetStore(clock=lambda: next(ticks))
    before = store.last_updated

    replaced = load_from_directory(store, tmp_path)

    assert replaced == []
    assert store.last_updated > before
