"""Plotly visualisation helpers for the spending planner.

Each function accepts a :class:`~spending_planner.ledger.Ledger` and returns
a `plotly.graph_objects.Figure` that Streamlit can render via
``st.plotly_chart``.
"""

from __future__ import annotations

import numpy as np
import plotly.express as px
import plotly.graph_objects as go

from .ledger import Ledger, ledger_to_frame

SPENT_COLOR = "#2E86AB"
OVERSPENT_COLOR = "#D64545"
ALLOWANCE_COLOR = "#7A7A7A"


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_allowance_chart(ledger: Ledger, title: str | None = None) -> go.Figure:
    """Bar chart of daily spending against each day's allowance.

    Parameters
    ----------
    ledger : Ledger
        Computed ledger.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Bars for spent (overspent days highlighted) and a line for the
        allowance.
    """
    if not ledger.days:
        return _empty_figure()
    df = ledger_to_frame(ledger)
    colors = np.where(df["Remaining"].to_numpy() < 0, OVERSPENT_COLOR, SPENT_COLOR)
    fig = go.Figure()
    fig.add_trace(go.Bar(x=df.index, y=df["Spent"], name="Spent", marker_color=colors))
    fig.add_trace(
        go.Scatter(
            x=df.index,
            y=df["Allowance"],
            name="Allowance",
            mode="lines+markers",
            line=dict(color=ALLOWANCE_COLOR, shape="hv"),
        )
    )
    fig.update_layout(
        title=title or "Daily allowance vs. spent",
        xaxis_title="Day",
        yaxis_title="Amount",
        hovermode="x unified",
    )
    return fig


def create_cumulative_chart(ledger: Ledger, title: str | None = None) -> go.Figure:
    """Cumulative spending compared with an even straight-line budget.

    Parameters
    ----------
    ledger : Ledger
        Computed ledger.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Line chart with one series per measure.
    """
    if not ledger.days:
        return _empty_figure()
    df = ledger_to_frame(ledger)
    plot_df = df[["Spent"]].cumsum().rename(columns={"Spent": "Cumulative spent"})
    plot_df["Planned"] = np.arange(1, len(df) + 1) * ledger.daily_allowance
    plot_df = plot_df.reset_index().melt(id_vars="Day Date", var_name="Series", value_name="Amount")
    fig = px.line(plot_df, x="Day Date", y="Amount", color="Series")
    fig.update_layout(
        title=title or "Cumulative spending",
        xaxis_title="Day",
        yaxis_title="Amount",
    )
    return fig
