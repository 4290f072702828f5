from __future__ import annotations

from dq_dashboard.core.dataset import DatasetKind

__all__ = ["IDs", "kind_id", "view_id"]


class IDs:
    class Store:
        DATA_VERSION = "data-version"
        QUERY_STATE = "query-state"

    class Control:
        PAGE_TABS = "page-tabs"

        # Navbar
        REFRESH_BTN = "refresh-btn"
        LAST_UPDATED = "last-updated"

        # Per-kind table controls (combined with kind_id)
        SEARCH = "search"
        SCHEMA_FILTER = "schema-filter"
        NEW_COLUMNS_FILTER = "new-columns-filter"
        DELETED_COLUMNS_FILTER = "deleted-columns-filter"
        RANGE_FILTER = "range-filter"
        TABLE = "table"
        RECORD_COUNT = "record-count"
        TABLE_TOGGLE = "table-toggle"
        TABLE_COLLAPSE = "table-collapse"

        # Per-kind upload (combined with kind_id)
        UPLOAD = "upload"
        UPLOAD_STATUS = "upload-status"

        # Per-view outputs (combined with view_id)
        GRAPH = "graph"
        CARDS = "cards"

        # Row details modal
        DETAILS_MODAL = "details-modal"
        DETAILS_TITLE = "details-title"
        DETAILS_BODY = "details-body"
        DETAILS_CLOSE = "details-close"


def kind_id(kind: DatasetKind, control: str) -> str:
    return f"{kind.value}-{control}"


def view_id(view: str, control: str) -> str:
    return f"{view}-{control}"
