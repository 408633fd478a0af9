"""HTML dashboard with Plotly: one bar per category for the month."""

import plotly.graph_objects as go


def spending_figure(summary: dict) -> go.Figure:
    by_category = summary["byCategory"]
    fig = go.Figure(data=[go.Bar(x=list(by_category.keys()), y=list(by_category.values()), marker_color="rgb(59, 130, 246)")])
    fig.update_layout(
        title=f"{summary['month']}: spending by category (remaining {summary['remaining']:,.2f})",
        xaxis_title="Category",
        yaxis_title="Amount",
        template="plotly_white",
        font=dict(size=12),
    )
    return fig


def dashboard_html(summary: dict) -> str:
    return spending_figure(summary).to_html(full_html=True, include_plotlyjs="cdn", config={"displayModeBar": True})
