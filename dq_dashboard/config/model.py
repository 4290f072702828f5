from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from dq_dashboard.core.dataset import DatasetKind


def _default_files() -> Dict[DatasetKind, str]:
    return {k: k.schema.default_file for k in DatasetKind}


@dataclass
class GlobalConfig:
    """
    Parsed global.json.

    - data_root: directory holding the three source CSVs (None = config dir)
    - dataset_files: file name per dataset kind, relative to data_root
    """
    ui_title: str = "Data Quality Control Dashboard"
    subtitle: str = "Monitor schema changes, column mismatches, and data type issues"
    data_root: Optional[Path] = None
    dataset_files: Dict[DatasetKind, str] = field(default_factory=_default_files)
