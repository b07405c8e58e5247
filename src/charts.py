"""Monthly cost vs. benefit comparison and payback charts."""

from __future__ import annotations

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from src.engine import RoiResults


SERIES_HUMAN_COST = "Current Human Cost"
SERIES_AI_COST = "AI Cost (Effective Y1)"
SERIES_NET_BENEFIT = "Net Benefit"

BRAND_COLORS = {
    SERIES_HUMAN_COST: "#64748b",
    SERIES_AI_COST: "#d9f99d",
    SERIES_NET_BENEFIT: "#84cc16",
}

LEGEND_NAMES = {
    SERIES_HUMAN_COST: "Current Human Cost",
    SERIES_AI_COST: "AI Cost (Incl. Setup/12)",
    SERIES_NET_BENEFIT: "Net Monthly Benefit",
}


def monthly_comparison_series(results: RoiResults) -> dict:
    return {
        "name": "Monthly",
        SERIES_HUMAN_COST: results.human_monthly_interaction_cost,
        SERIES_AI_COST: results.ai_effective_monthly_cost_y1,
        SERIES_NET_BENEFIT: results.total_monthly_gain if results.total_monthly_gain > 0 else 0.0,
    }


def build_monthly_comparison_figure(results: RoiResults, title: str = "Monthly Cost vs. Benefit Comparison") -> go.Figure:
    """Grouped bar chart; the net benefit bar only appears when there is a positive gain."""
    series = monthly_comparison_series(results)
    shown = [SERIES_HUMAN_COST, SERIES_AI_COST]
    if results.total_monthly_gain > 0:
        shown.append(SERIES_NET_BENEFIT)

    fig = go.Figure()
    for key in shown:
        fig.add_trace(
            go.Bar(
                x=[series["name"]],
                y=[series[key]],
                name=LEGEND_NAMES[key],
                marker_color=BRAND_COLORS[key],
                hovertemplate="%{fullData.name}: $%{y:,.2f}<extra>Monthly Comparison</extra>",
            )
        )
    fig.update_layout(
        title=title,
        barmode="group",
        yaxis=dict(tickprefix="$", tickformat=",.0f"),
        legend=dict(orientation="h", yanchor="top", y=-0.12, x=0.5, xanchor="center"),
        margin=dict(l=20, r=20, t=60, b=40),
    )
    return fig


def cumulative_gain_frame(results: RoiResults, months: int = 24) -> pd.DataFrame:
    """Cumulative monthly gain net of the setup fee; crosses zero at the payback period."""
    month = np.arange(0, int(months) + 1)
    cumulative = month * float(results.total_monthly_gain) - float(results.ai_setup_fee)
    return pd.DataFrame(
        {
            "Month": month,
            "Cumulative Net Gain": cumulative,
            "Recovered": np.where(cumulative >= 0, "Yes", "No"),
        }
    )


def build_payback_figure(results: RoiResults, months: int = 24, title: str = "Setup Fee Recovery") -> go.Figure:
    frame = cumulative_gain_frame(results, months)
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=frame["Month"],
            y=frame["Cumulative Net Gain"],
            mode="lines+markers",
            name="Cumulative Net Gain",
            line=dict(color=BRAND_COLORS[SERIES_NET_BENEFIT]),
            hovertemplate="Month %{x}: $%{y:,.0f}<extra></extra>",
        )
    )
    fig.add_hline(y=0, line_dash="dot", line_color=BRAND_COLORS[SERIES_HUMAN_COST])
    fig.update_layout(
        title=title,
        xaxis=dict(title="Month"),
        yaxis=dict(tickprefix="$", tickformat=",.0f"),
        margin=dict(l=20, r=20, t=60, b=40),
    )
    return fig
