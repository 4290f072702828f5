from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List

import plotly.graph_objs as go

from .aggregation import AggregateResult, share_of_tables
from .dataset import DatasetKind


@dataclass(frozen=True)
class StatCard:
    """A headline number shown above a chart: title, value and a caption line."""
    title: str
    value: str
    caption: str = ""
    tone: str = "primary"


class BaseView(ABC):
    """
    Abstract base class for all dashboard tabs.

    Defines the contract that every view in the app must follow
    - expose an 'id' - used internally and as the tab value
    - expose a 'label' - used for UI/human-readable applications
    - expose 'kind' - the dataset kind whose table is shown under the chart (None for overview)
    - implement 'compute_data' - aggregate the store's current datasets
    - implement 'render_figure' - used to render the figure using Plotly
    - implement 'stat_cards' - headline numbers for the card row

    Views read the whole dataset; search / filter / sort only affect the table.
    """

    id: str = None
    label: str = None
    kind: DatasetKind | None = None

    def __init__(self, store):
        self.store = store

    @abstractmethod
    def compute_data(self) -> Any:
        """
        Compute the aggregate(s) for this view from the current datasets
        :return: data: an AggregateResult, or a dict of them for multi-dataset views
        """
        raise NotImplementedError()

    @abstractmethod
    def render_figure(self, data: Any) -> go.Figure:
        """
        Render the figure given the computed data
        :param data: the data provided by {@link compute_data()}
        :return: the Plotly figure
        """
        raise NotImplementedError()

    @abstractmethod
    def stat_cards(self, data: Any) -> List[StatCard]:
        raise NotImplementedError()

    # ------------------------------------------------------------------
    # Common helpers for all views
    # ------------------------------------------------------------------
    def dataset(self, kind: DatasetKind | None = None):
        return self.store.get(kind or self.kind)

    @staticmethod
    def empty_figure(message: str) -> go.Figure:
        """
        Standardised 'no data' figure used by all views.
        """
        fig = go.Figure()
        fig.update_layout(
            title=message,
            xaxis={"visible": False},
            yaxis={"visible": False},
        )
        return fig

    @staticmethod
    def is_empty(data: AggregateResult | None) -> bool:
        return data is None or data.is_empty

    @staticmethod
    def share_caption(count: float, stats: dict) -> str:
        """'12.5% of total tables', guarded against an empty dataset."""
        return f"{share_of_tables(count, stats):.1f}% of total tables"
