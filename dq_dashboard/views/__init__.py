from .overview_view import OverviewView
from .schema_change_view import SchemaChangeView
from .name_mismatch_view import NameMismatchView
from .dtype_mismatch_view import DtypeMismatchView

__all__ = ["OverviewView", "SchemaChangeView", "NameMismatchView", "DtypeMismatchView"]
