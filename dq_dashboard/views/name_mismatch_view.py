from __future__ import annotations

from typing import List

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from dq_dashboard.core.aggregation import AggregateResult, aggregate_name_mismatches
from dq_dashboard.core.base_view import BaseView, StatCard
from dq_dashboard.core.dataset import DatasetKind

BUCKET_COLOURS = ["#ef4444", "#f59e0b", "#eab308", "#22c55e", "#10b981"]
BAR_COLOUR = "#f59e0b"


def distribution_pie(data: AggregateResult, show_percentage: bool = True) -> go.Pie:
    """Pie over the mismatch buckets; shared with the overview."""
    labels = [d["range"] for d in data.chart_data]
    if show_percentage:
        text = [f"{d['range']} ({d['percentage']}%)" for d in data.chart_data]
    else:
        text = labels
    return go.Pie(
        labels=labels,
        values=[d["count"] for d in data.chart_data],
        text=text,
        textinfo="text",
        sort=False,
        marker=dict(colors=[BUCKET_COLOURS[i % len(BUCKET_COLOURS)] for i in range(len(labels))]),
        name="Mismatch Distribution",
    )


class NameMismatchView(BaseView):
    """
    Distribution of column name mismatches across tables.
    """

    id = "name-mismatches"
    label = "Name Mismatches"
    kind = DatasetKind.NAME_MISMATCH

    def compute_data(self) -> AggregateResult:
        return aggregate_name_mismatches(self.dataset())

    def stat_cards(self, data: AggregateResult) -> List[StatCard]:
        stats = data.stats
        with_mismatches = stats.get("tables_with_mismatches", 0)
        return [
            StatCard(
                "Tables with Mismatches", str(with_mismatches), self.share_caption(with_mismatches, stats), "warning"
            ),
            StatCard("Average Mismatch %", f"{stats.get('avg_mismatch_percent', 0):.1f}%", "Across all tables", "info"),
            StatCard("Total Mismatches", str(stats.get("total_mismatches", 0)), "Column name issues", "secondary"),
        ]

    def render_figure(self, data: AggregateResult) -> go.Figure:
        if self.is_empty(data):
            return self.empty_figure("No column name mismatch data loaded")

        fig = make_subplots(
            rows=1,
            cols=2,
            specs=[[{"type": "domain"}, {"type": "xy"}]],
            subplot_titles=("Mismatch Distribution", "Tables by Mismatch Range"),
        )
        fig.add_trace(distribution_pie(data), row=1, col=1)
        fig.add_bar(
            x=[d["range"] for d in data.chart_data],
            y=[d["count"] for d in data.chart_data],
            marker_color=BAR_COLOUR,
            name="Number of Tables",
            row=1,
            col=2,
        )

        fig.update_xaxes(title_text="Mismatch range", row=1, col=2)
        fig.update_yaxes(title_text="# tables", row=1, col=2)
        fig.update_layout(
            height=450,
            margin=dict(l=40, r=40, t=60, b=40),
            showlegend=False,
        )
        return fig
