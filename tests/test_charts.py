from __future__ import annotations

import pytest

from src.charts import (
    SERIES_AI_COST,
    SERIES_HUMAN_COST,
    SERIES_NET_BENEFIT,
    build_monthly_comparison_figure,
    build_payback_figure,
    cumulative_gain_frame,
    monthly_comparison_series,
)
from src.engine import RoiInputs, compute


def test_monthly_comparison_series_for_defaults():
    series = monthly_comparison_series(compute(RoiInputs()))
    assert series["name"] == "Monthly"
    assert series[SERIES_HUMAN_COST] == pytest.approx(1750.0)
    assert series[SERIES_AI_COST] == pytest.approx(497 + 2500 / 12)
    assert series[SERIES_NET_BENEFIT] == pytest.approx(2485.546875)


def test_net_benefit_bar_omitted_without_gain():
    results = compute(RoiInputs(ai_autonomy_rate=0.0, ai_booking_rate_improvement=0.0, ai_show_rate_improvement=0.0))
    assert monthly_comparison_series(results)[SERIES_NET_BENEFIT] == 0.0
    fig = build_monthly_comparison_figure(results)
    assert len(fig.data) == 2


def test_comparison_figure_has_three_bars_with_gain():
    fig = build_monthly_comparison_figure(compute(RoiInputs()))
    assert [trace.name for trace in fig.data] == ["Current Human Cost", "AI Cost (Incl. Setup/12)", "Net Monthly Benefit"]


def test_cumulative_gain_crosses_zero_at_payback():
    results = compute(RoiInputs())
    frame = cumulative_gain_frame(results, months=12)
    assert len(frame) == 13
    assert frame["Cumulative Net Gain"].iloc[0] == pytest.approx(-2500.0)
    assert frame["Recovered"].iloc[1] == "No"
    assert frame["Recovered"].iloc[2] == "Yes"
    assert len(build_payback_figure(results).data) == 1
