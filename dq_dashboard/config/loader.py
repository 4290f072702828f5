from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict

from dq_dashboard.config.model import GlobalConfig, _default_files
from dq_dashboard.core.dataset import DatasetKind
from dq_dashboard.core.exceptions import ConfigError, UnknownDatasetKindError

logger = logging.getLogger(__name__)

DATA_ROOT_ENV = "DQ_DASHBOARD_DATA_ROOT"


def _resolve_data_root(root: Path, raw_value) -> Path:
    # Environment override wins over global.json
    env_root = os.environ.get(DATA_ROOT_ENV)
    if env_root:
        return Path(env_root)

    if raw_value is None:
        return root.resolve()

    data_root = Path(raw_value)
    if data_root.is_absolute():
        return data_root
    return (root / data_root).resolve()


def _dataset_files(raw: Dict[str, str]) -> Dict[DatasetKind, str]:
    files = _default_files()
    for key, file_name in raw.items():
        try:
            kind = DatasetKind.parse(key)
        except UnknownDatasetKindError as e:
            raise ConfigError(f"global.json: {e.args[0]}") from e
        files[kind] = str(file_name)
    return files


def load_global_config(root: Path | str) -> GlobalConfig:
    """
    Load global.json from the config directory.

    A missing global.json falls back to defaults; malformed JSON or an
    unknown dataset kind raises ConfigError.
    """
    root = Path(root)
    logger.info("Loading global config", extra={"config_root": str(root)})

    global_path = root / "global.json"
    if not global_path.is_file():
        logger.warning(f"global.json not found at {global_path}, using defaults")
        raw_global = {}
    else:
        try:
            with global_path.open() as f:
                raw_global = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {global_path}: {e}") from e

    if not isinstance(raw_global, dict):
        raise ConfigError(f"{global_path} must contain a JSON object")

    defaults = GlobalConfig()
    config = GlobalConfig(
        ui_title=raw_global.get("ui_title", defaults.ui_title),
        subtitle=raw_global.get("subtitle", defaults.subtitle),
        data_root=_resolve_data_root(root, raw_global.get("data_root")),
        dataset_files=_dataset_files(raw_global.get("datasets") or {}),
    )

    logger.info(
        "Global config loaded",
        extra={
            "config_root": str(root),
            "data_root": str(config.data_root),
            "dataset_files": {k.value: v for k, v in config.dataset_files.items()},
        },
    )
    return config
