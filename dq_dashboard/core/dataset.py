from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from .exceptions import UnknownDatasetKindError

Row = Mapping[str, Any]

SCHEMA_FIELD = "schema_name"


@dataclass(frozen=True)
class KindSchema:
    """
    Declared field layout for one dataset kind.

    Fields:

    - numeric_fields: counts and percentages, default 0 when missing
    - text_fields: names and free-text lists, default "" when missing
    - default_file: file name read from the data root on refresh
    - count_field: the per-table issue count aggregated into totals
    - percent_field: the per-table percentage used for bucketing (mismatch kinds only)
    """
    label: str
    default_file: str
    fields: Tuple[str, ...]
    numeric_fields: Tuple[str, ...]
    count_field: Optional[str] = None
    percent_field: Optional[str] = None

    @property
    def text_fields(self) -> Tuple[str, ...]:
        return tuple(f for f in self.fields if f not in self.numeric_fields)


class DatasetKind(str, Enum):
    SCHEMA_CHANGE = "schema_change"
    NAME_MISMATCH = "name_mismatch"
    DTYPE_MISMATCH = "dtype_mismatch"

    @classmethod
    def parse(cls, value: Any) -> DatasetKind:
        if isinstance(value, DatasetKind):
            return value
        try:
            return cls(str(value))
        except ValueError:
            raise UnknownDatasetKindError(f"Unknown dataset kind '{value}'")

    @property
    def schema(self) -> KindSchema:
        return _SCHEMAS[self]

    @property
    def is_mismatch(self) -> bool:
        return self.schema.percent_field is not None

    def is_numeric(self, name: str) -> bool:
        return name in self.schema.numeric_fields

    def value_of(self, row: Row, name: str) -> Any:
        """
        Schema-checked field access.

        Declared numeric fields return 0 when missing, declared text fields
        return "". Undeclared fields are returned as-is (None when absent).
        """
        value = row.get(name)
        if value is not None:
            return value
        if name in self.schema.numeric_fields:
            return 0
        if name in self.schema.text_fields:
            return ""
        return None


_SCHEMAS: Dict[DatasetKind, KindSchema] = {
    DatasetKind.SCHEMA_CHANGE: KindSchema(
        label="Schema Changes",
        default_file="new_old_delete.csv",
        fields=(
            "schema_name",
            "table_name",
            "new_columns_count",
            "new_columns_name",
            "deleted_columns_count",
            "deleted_columns_name",
        ),
        numeric_fields=("new_columns_count", "deleted_columns_count"),
    ),
    DatasetKind.NAME_MISMATCH: KindSchema(
        label="Column Name Mismatches",
        default_file="column_name_mismatch.csv",
        fields=(
            "schema_name",
            "table_name",
            "column_count",
            "column_name_mismatch_count",
            "percent_column_name_mismatch",
            "mismatch_column_names",
            "mismatch_columns_current_name",
            "mismatch_columns_expected_name",
        ),
        numeric_fields=("column_count", "column_name_mismatch_count", "percent_column_name_mismatch"),
        count_field="column_name_mismatch_count",
        percent_field="percent_column_name_mismatch",
    ),
    DatasetKind.DTYPE_MISMATCH: KindSchema(
        label="Data Type Mismatches",
        default_file="column_dtype.csv",
        fields=(
            "schema_name",
            "table_name",
            "column_count",
            "column_dtype_mismatch_count",
            "percent_column_mismatch",
            "mismatch_columns",
            "mismatch_column_current_dtypes",
            "expected_column_dtypes",
        ),
        numeric_fields=("column_count", "column_dtype_mismatch_count", "percent_column_mismatch"),
        count_field="column_dtype_mismatch_count",
        percent_field="percent_column_mismatch",
    ),
}


@dataclass(frozen=True)
class Dataset:
    """
    Immutable, ordered collection of rows for one dataset kind.

    Rows keep their source order. The constructor copies each row so later
    changes to the caller's dicts never leak into a loaded dataset.
    """
    kind: DatasetKind
    rows: Tuple[Row, ...] = field(default_factory=tuple)

    @classmethod
    def from_rows(cls, kind: DatasetKind | str, rows: Iterable[Row]) -> Dataset:
        return cls(kind=DatasetKind.parse(kind), rows=tuple(dict(r) for r in rows))

    @classmethod
    def empty(cls, kind: DatasetKind | str) -> Dataset:
        return cls(kind=DatasetKind.parse(kind))

    def value_of(self, row: Row, name: str) -> Any:
        return self.kind.value_of(row, name)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __bool__(self) -> bool:
        return bool(self.rows)
