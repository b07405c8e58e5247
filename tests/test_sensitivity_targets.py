from __future__ import annotations

import math
from copy import deepcopy

import pytest

from src.sensitivity import TARGET_OPTIONS, available_sensitivity_drivers, run_one_way_sensitivity, tornado_frame


def test_sensitivity_target_options_include_roi_and_payback():
    assert "Monthly ROI %" in TARGET_OPTIONS
    assert "Payback Months" in TARGET_OPTIONS
    assert "ai_autonomy_rate" in available_sensitivity_drivers()


def test_run_one_way_sensitivity_emits_target_columns(base_inputs):
    sens_df = run_one_way_sensitivity(deepcopy(base_inputs), delta_pct=0.1, drivers=["ai_autonomy_rate"])

    assert len(sens_df) == 2
    assert list(sens_df["Case"]) == ["Low", "High"]
    assert sens_df["Input Value"].tolist() == pytest.approx([67.5, 82.5])
    for target in TARGET_OPTIONS:
        assert target in sens_df.columns
        assert f"Delta {target}" in sens_df.columns
    low, high = sens_df["Delta Annual Cost Savings"].tolist()
    assert low < 0 < high


def test_sensitivity_clamps_to_field_range_and_skips_unknown_drivers(base_inputs):
    inputs = deepcopy(base_inputs)
    inputs["percent_interactions_human"] = 100.0
    sens_df = run_one_way_sensitivity(inputs, delta_pct=0.5, drivers=["percent_interactions_human", "no_such_input"])
    assert len(sens_df) == 2
    assert sens_df["Input Value"].max() == 100.0


def test_sensitivity_tolerates_never_payback(base_inputs):
    inputs = deepcopy(base_inputs)
    inputs["total_monthly_interactions"] = 0.0
    sens_df = run_one_way_sensitivity(inputs, delta_pct=0.2, drivers=["ai_monthly_cost"])
    assert all(math.isinf(v) for v in sens_df["Payback Months"])


def test_tornado_frame_orders_by_swing(base_inputs):
    sens_df = run_one_way_sensitivity(deepcopy(base_inputs), delta_pct=0.2)
    tornado = tornado_frame(sens_df, "Annual Total Gain")
    assert list(tornado.columns[:4]) == ["Driver", "Low", "High", "Swing"]
    swings = tornado["Swing"].tolist()
    assert swings == sorted(swings, reverse=True)
    assert tornado_frame(sens_df, "Not A Target").empty
