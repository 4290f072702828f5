from __future__ import annotations

from typing import Dict, List

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from dq_dashboard.core.aggregation import AggregateResult, aggregate
from dq_dashboard.core.base_view import BaseView, StatCard
from dq_dashboard.core.dataset import DatasetKind
from dq_dashboard.views.name_mismatch_view import distribution_pie
from dq_dashboard.views.schema_change_view import schema_change_bars


class OverviewView(BaseView):
    """
    Landing tab: one headline number per dataset plus the two quick charts
    (schema changes by schema, name mismatch distribution).
    """

    id = "overview"
    label = "Overview"
    kind = None

    def compute_data(self) -> Dict[DatasetKind, AggregateResult]:
        return {kind: aggregate(self.dataset(kind)) for kind in DatasetKind}

    def stat_cards(self, data: Dict[DatasetKind, AggregateResult]) -> List[StatCard]:
        changes = data[DatasetKind.SCHEMA_CHANGE].stats
        names = data[DatasetKind.NAME_MISMATCH].stats
        dtypes = data[DatasetKind.DTYPE_MISMATCH].stats
        return [
            StatCard("Total Tables", str(changes.get("total_tables", 0)), tone="primary"),
            StatCard("New Columns", str(changes.get("total_new_columns", 0)), tone="success"),
            StatCard("Name Mismatches", str(names.get("total_mismatches", 0)), tone="warning"),
            StatCard("Type Mismatches", str(dtypes.get("total_mismatches", 0)), tone="danger"),
        ]

    def render_figure(self, data: Dict[DatasetKind, AggregateResult]) -> go.Figure:
        changes = data[DatasetKind.SCHEMA_CHANGE]
        names = data[DatasetKind.NAME_MISMATCH]

        if self.is_empty(changes) and self.is_empty(names):
            return self.empty_figure("No data loaded - upload CSV files or refresh")

        fig = make_subplots(
            rows=1,
            cols=2,
            specs=[[{"type": "xy"}, {"type": "domain"}]],
            subplot_titles=("Schema Changes by Schema", "Mismatch Distribution"),
        )

        if not self.is_empty(changes):
            schema_change_bars(fig, changes, row=1, col=1)

        if not self.is_empty(names):
            fig.add_trace(distribution_pie(names, show_percentage=False), row=1, col=2)

        fig.update_layout(
            height=350,
            barmode="group",
            margin=dict(l=40, r=40, t=60, b=40),
            showlegend=False,
        )
        return fig
