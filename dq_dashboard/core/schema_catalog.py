from __future__ import annotations

from typing import List

from .dataset import SCHEMA_FIELD, Dataset
from .query_engine import display_text


def unique_schemas(dataset: Dataset) -> List[str]:
    """
    Distinct schema names in first-seen order, used to populate the schema
    filter. Rows with a missing or empty schema_name are skipped.
    """
    seen: dict[str, None] = {}
    for row in dataset.rows:
        value = row.get(SCHEMA_FIELD)
        if value is None or value == "":
            continue
        seen.setdefault(display_text(value), None)
    return list(seen)
