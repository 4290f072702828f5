import json

import pytest

from dq_dashboard.config import GlobalConfig, load_global_config
from dq_dashboard.config.loader import DATA_ROOT_ENV
from dq_dashboard.core.dataset import DatasetKind
from dq_dashboard.core.exceptions import ConfigError


def _write_global(root, payload):
    root.mkdir(parents=True, exist_ok=True)
    path = root / "global.json"
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload))
    return path


@pytest.fixture(autouse=True)
def _clear_data_root_env(monkeypatch):
    monkeypatch.delenv(DATA_ROOT_ENV, raising=False)


def test_missing_global_json_uses_defaults(tmp_path):
    cfg = load_global_config(tmp_path)

    assert cfg.ui_title == GlobalConfig().ui_title
    assert cfg.data_root == tmp_path.resolve()
    assert cfg.dataset_files[DatasetKind.DTYPE_MISMATCH] == "column_dtype.csv"


def test_relative_data_root_resolves_against_config_dir(tmp_path):
    config_root = tmp_path / "config"
    _write_global(config_root, {"ui_title": "DQ", "data_root": "../data"})

    cfg = load_global_config(config_root)

    assert cfg.ui_title == "DQ"
    assert cfg.data_root == (tmp_path / "data").resolve()


def test_dataset_file_overrides(tmp_path):
    _write_global(tmp_path, {"datasets": {"name_mismatch": "names_2024.csv"}})

    cfg = load_global_config(tmp_path)

    assert cfg.dataset_files[DatasetKind.NAME_MISMATCH] == "names_2024.csv"
    assert cfg.dataset_files[DatasetKind.SCHEMA_CHANGE] == "new_old_delete.csv"


def test_env_overrides_data_root(tmp_path, monkeypatch):
    _write_global(tmp_path, {"data_root": "/somewhere/else"})
    monkeypatch.setenv(DATA_ROOT_ENV, str(tmp_path / "override"))

    cfg = load_global_config(tmp_path)

    assert cfg.data_root == tmp_path / "override"


def test_unknown_dataset_kind_raises(tmp_path):
    _write_global(tmp_path, {"datasets": {"row_counts": "rows.csv"}})

    with pytest.raises(ConfigError):
        load_global_config(tmp_path)


def test_malformed_json_raises(tmp_path):
    _write_global(tmp_path, "{not json")

    with pytest.raises(ConfigError):
        load_global_config(tmp_path)


def test_non_object_json_raises(tmp_path):
    _write_global(tmp_path, "[1, 2]")

    with pytest.raises(ConfigError):
        load_global_config(tmp_path)
