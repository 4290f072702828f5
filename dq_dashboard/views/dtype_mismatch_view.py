from __future__ import annotations

from typing import List

import plotly.graph_objects as go

from dq_dashboard.core.aggregation import AggregateResult, aggregate_dtype_mismatches
from dq_dashboard.core.base_view import BaseView, StatCard
from dq_dashboard.core.dataset import DatasetKind

BAR_COLOUR = "#dc2626"


class DtypeMismatchView(BaseView):
    """
    Column data type inconsistencies by schema.
    """

    id = "type-mismatches"
    label = "Type Mismatches"
    kind = DatasetKind.DTYPE_MISMATCH

    def compute_data(self) -> AggregateResult:
        return aggregate_dtype_mismatches(self.dataset())

    def stat_cards(self, data: AggregateResult) -> List[StatCard]:
        stats = data.stats
        with_issues = stats.get("tables_with_mismatches", 0)
        return [
            StatCard("Tables with Type Issues", str(with_issues), self.share_caption(with_issues, stats), "danger"),
            StatCard(
                "Average Type Mismatch %", f"{stats.get('avg_mismatch_percent', 0):.1f}%", "Across all tables", "info"
            ),
            StatCard("Total Type Mismatches", str(stats.get("total_mismatches", 0)), "Data type issues", "secondary"),
        ]

    def render_figure(self, data: AggregateResult) -> go.Figure:
        if self.is_empty(data):
            return self.empty_figure("No data type mismatch data loaded")

        fig = go.Figure()
        fig.add_bar(
            x=[d["schema"] for d in data.chart_data],
            y=[d["total_mismatches"] for d in data.chart_data],
            customdata=[[d["tables"], d["avg_mismatch_percent"]] for d in data.chart_data],
            hovertemplate=(
                "%{x}<br>Total mismatches: %{y}"
                "<br>Tables: %{customdata[0]}<br>Avg mismatch: %{customdata[1]}%<extra></extra>"
            ),
            name="Total Mismatches",
            marker_color=BAR_COLOUR,
        )
        fig.update_layout(
            height=400,
            margin=dict(l=40, r=40, t=60, b=40),
            title="Type mismatches by schema",
            xaxis_title="Schema",
            yaxis_title="# mismatches",
            showlegend=True,
        )
        return fig
