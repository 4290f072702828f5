from __future__ import annotations

from typing import List

import plotly.graph_objects as go

from dq_dashboard.core.aggregation import AggregateResult, aggregate_schema_changes
from dq_dashboard.core.base_view import BaseView, StatCard
from dq_dashboard.core.dataset import DatasetKind

NEW_COLOUR = "#10b981"
DELETED_COLOUR = "#ef4444"


def schema_change_bars(fig: go.Figure, data: AggregateResult, **subplot) -> None:
    """Add the new / deleted column bars per schema; shared with the overview."""
    schemas = [d["schema"] for d in data.chart_data]
    fig.add_bar(
        x=schemas,
        y=[d["new_columns"] for d in data.chart_data],
        name="New Columns",
        marker_color=NEW_COLOUR,
        **subplot,
    )
    fig.add_bar(
        x=schemas,
        y=[d["deleted_columns"] for d in data.chart_data],
        name="Deleted Columns",
        marker_color=DELETED_COLOUR,
        **subplot,
    )


class SchemaChangeView(BaseView):
    """
    New and deleted columns by schema.
    """

    id = "schema-changes"
    label = "Schema Changes"
    kind = DatasetKind.SCHEMA_CHANGE

    def compute_data(self) -> AggregateResult:
        return aggregate_schema_changes(self.dataset())

    def stat_cards(self, data: AggregateResult) -> List[StatCard]:
        stats = data.stats
        with_new = stats.get("tables_with_new_columns", 0)
        with_deleted = stats.get("tables_with_deleted_columns", 0)
        total_new = stats.get("total_new_columns", 0)
        total_deleted = stats.get("total_deleted_columns", 0)

        return [
            StatCard("Tables with New Columns", str(with_new), self.share_caption(with_new, stats), "success"),
            StatCard(
                "Tables with Deleted Columns", str(with_deleted), self.share_caption(with_deleted, stats), "danger"
            ),
            StatCard(
                "Total Column Changes",
                str(total_new + total_deleted),
                f"+{total_new} / -{total_deleted}",
                "primary",
            ),
        ]

    def render_figure(self, data: AggregateResult) -> go.Figure:
        if self.is_empty(data):
            return self.empty_figure("No schema change data loaded")

        fig = go.Figure()
        schema_change_bars(fig, data)
        fig.update_layout(
            height=400,
            barmode="group",
            margin=dict(l=40, r=40, t=60, b=40),
            title="New and deleted columns by schema",
            xaxis_title="Schema",
            yaxis_title="# columns",
        )
        return fig
