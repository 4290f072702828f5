"""
Core domain layer: dataset model, query state, query and aggregation
engines, view base class and the view registry
"""

from .dataset import Dataset, DatasetKind
from .query_state import QueryState, SortSpec
from .aggregation import AggregateResult
from .base_view import BaseView
from .view_registry import ViewRegistry

__all__ = ["Dataset", "DatasetKind", "QueryState", "SortSpec", "AggregateResult", "BaseView", "ViewRegistry"]
