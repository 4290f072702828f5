from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Optional

from .buckets import BUCKET_BY_VALUE
from .dataset import DatasetKind

logger = logging.getLogger(__name__)

ALL = "all"
ASC = "asc"
DESC = "desc"

_FLAG_VALUES = (ALL, "true", "false")


@dataclass(frozen=True)
class SortSpec:
    key: Optional[str] = None
    direction: str = ASC

    @property
    def descending(self) -> bool:
        return self.direction == DESC


@dataclass(frozen=True)
class QueryState:
    """
    Immutable search / filter / sort selection for one dataset kind.

    Fields:

    - search_term: case-insensitive substring matched against every field
    - schema_filter: exact schema_name, or "all"
    - has_new_columns / has_deleted_columns: "all" | "true" | "false"
      (schema-change datasets only)
    - mismatch_range: "all" or a bucket value "0", "25", "50", "75", "100"
      (mismatch datasets only)
    - sort: key + direction; key None keeps source order

    Every user action produces a new QueryState via the with_* helpers and
    toggle_sort, so two renders with equal states are guaranteed to match.
    """

    kind: DatasetKind
    search_term: str = ""
    schema_filter: str = ALL

    has_new_columns: str = ALL
    has_deleted_columns: str = ALL

    mismatch_range: str = ALL

    sort: SortSpec = field(default_factory=SortSpec)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def with_search(self, term: Optional[str]) -> QueryState:
        return replace(self, search_term=term or "")

    def with_filters(
        self,
        schema_filter: Optional[str] = None,
        has_new_columns: Optional[str] = None,
        has_deleted_columns: Optional[str] = None,
        mismatch_range: Optional[str] = None,
    ) -> QueryState:
        """Return a copy with any given filter replaced; None keeps the current value."""
        return replace(
            self,
            schema_filter=schema_filter if schema_filter is not None else self.schema_filter,
            has_new_columns=_flag(has_new_columns) if has_new_columns is not None else self.has_new_columns,
            has_deleted_columns=(
                _flag(has_deleted_columns) if has_deleted_columns is not None else self.has_deleted_columns
            ),
            mismatch_range=_range(mismatch_range) if mismatch_range is not None else self.mismatch_range,
        )

    def toggle_sort(self, key: str) -> QueryState:
        """
        Header-click rule: clicking the current key flips direction,
        clicking any other key sorts by it ascending.
        """
        if self.sort.key == key:
            direction = DESC if self.sort.direction == ASC else ASC
        else:
            direction = ASC
        return replace(self, sort=SortSpec(key=key, direction=direction))

    # ------------------------------------------------------------------
    # Serialisation (dcc.Store payloads)
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> QueryState:
        kind = DatasetKind.parse(data.get("kind"))
        sort = data.get("sort") or {}
        direction = sort.get("direction", ASC)
        if direction not in (ASC, DESC):
            logger.warning("Unknown sort direction %r, falling back to asc", direction)
            direction = ASC

        return cls(
            kind=kind,
            search_term=str(data.get("search_term") or ""),
            schema_filter=str(data.get("schema_filter") or ALL),
            has_new_columns=_flag(data.get("has_new_columns", ALL)),
            has_deleted_columns=_flag(data.get("has_deleted_columns", ALL)),
            mismatch_range=_range(data.get("mismatch_range", ALL)),
            sort=SortSpec(key=sort.get("key"), direction=direction),
        )


def _flag(value: Any) -> str:
    value = str(value).lower() if value is not None else ALL
    return value if value in _FLAG_VALUES else ALL


def _range(value: Any) -> str:
    value = str(value) if value is not None else ALL
    return value if value == ALL or value in BUCKET_BY_VALUE else ALL
