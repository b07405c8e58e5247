from __future__ import annotations

import math

import pytest

from src.engine import RESULT_FIELDS, RoiInputs, compute, compute_from_mapping


def test_default_inputs_end_to_end_values():
    r = compute(RoiInputs())

    assert r.human_interactions_monthly == pytest.approx(350.0)
    assert r.human_monthly_interaction_cost == pytest.approx(1750.0)
    assert r.human_monthly_qualified_leads == pytest.approx(125.0)
    assert r.human_monthly_appointments_booked == pytest.approx(37.5)
    assert r.human_monthly_appointments_attended == pytest.approx(28.125)
    assert r.human_monthly_sales == pytest.approx(8.4375)
    assert r.human_monthly_revenue == pytest.approx(4218.75)

    assert r.ai_handled_interactions_monthly == pytest.approx(375.0)
    assert r.human_interactions_remaining_monthly == pytest.approx(125.0)
    assert r.ai_monthly_human_interaction_cost_reduced == pytest.approx(625.0)
    assert r.ai_monthly_labor_cost_savings == pytest.approx(1125.0)
    assert r.ai_effective_booking_rate == pytest.approx(34.5)
    assert r.ai_monthly_appointments_booked == pytest.approx(43.125)
    assert r.ai_effective_show_up_rate == pytest.approx(86.25)
    assert r.ai_monthly_revenue == pytest.approx(5579.296875)
    assert r.ai_monthly_revenue_increase == pytest.approx(1360.546875)

    assert r.ai_setup_fee_monthly_amortized == pytest.approx(2500 / 12)
    assert r.ai_effective_monthly_cost_y1 == pytest.approx(497 + 2500 / 12)
    assert r.total_monthly_gain == pytest.approx(2485.546875)
    assert r.annual_total_gain == pytest.approx(29826.5625)
    assert r.annual_cost_savings == pytest.approx(13500.0)
    assert r.annual_revenue_increase == pytest.approx(16326.5625)

    cost = 497 + 2500 / 12
    assert r.monthly_roi == pytest.approx((2485.546875 - cost) / cost * 100)
    assert r.annual_roi == r.monthly_roi
    assert r.payback_period == pytest.approx(2500 / 2485.546875)


def test_compute_is_idempotent():
    inputs = RoiInputs(ai_autonomy_rate=60.0, avg_revenue_per_sale=1200.0)
    assert compute(inputs) == compute(inputs)


def test_labor_savings_non_decreasing_in_autonomy():
    savings = [compute(RoiInputs(ai_autonomy_rate=float(a))).ai_monthly_labor_cost_savings for a in range(0, 101, 5)]
    assert all(b >= a for a, b in zip(savings, savings[1:]))


def test_human_workload_and_cost_non_increasing_in_autonomy():
    runs = [compute(RoiInputs(ai_autonomy_rate=float(a))) for a in range(0, 101, 5)]
    remaining = [r.human_interactions_remaining_monthly for r in runs]
    reduced_cost = [r.ai_monthly_human_interaction_cost_reduced for r in runs]
    assert all(b <= a for a, b in zip(remaining, remaining[1:]))
    assert all(b <= a for a, b in zip(reduced_cost, reduced_cost[1:]))
    assert remaining[0] > remaining[-1] == 0.0
    assert reduced_cost[0] > reduced_cost[-1] == 0.0


def test_zero_autonomy_means_increased_labor_cost():
    r = compute(RoiInputs(ai_autonomy_rate=0.0))
    assert r.ai_handled_interactions_monthly == 0.0
    assert r.human_interactions_remaining_monthly == pytest.approx(500.0)
    assert r.ai_monthly_labor_cost_savings == pytest.approx(-750.0)


def test_show_up_rate_is_capped_at_100_percent():
    r = compute(RoiInputs(appointment_show_up_rate=95.0, ai_show_rate_improvement=15.0))
    assert r.ai_effective_show_up_rate == 100.0
    assert r.ai_monthly_appointments_attended == pytest.approx(r.ai_monthly_appointments_booked)


def test_zero_interactions_produce_zero_volumes_and_never_payback():
    r = compute(RoiInputs(total_monthly_interactions=0.0))
    assert r.human_monthly_interaction_cost == 0.0
    for name in [
        "human_interactions_monthly",
        "human_monthly_qualified_leads",
        "human_monthly_appointments_booked",
        "human_monthly_appointments_attended",
        "human_monthly_sales",
        "ai_handled_interactions_monthly",
        "human_interactions_remaining_monthly",
        "ai_monthly_labor_cost_savings",
        "ai_influenced_qualified_leads",
        "ai_monthly_appointments_booked",
        "ai_monthly_appointments_attended",
        "ai_monthly_sales",
        "ai_monthly_revenue",
    ]:
        assert getattr(r, name) == 0.0, name
    assert r.human_monthly_revenue == 0.0
    assert r.ai_monthly_revenue_increase == 0.0
    assert r.total_monthly_gain == 0.0
    assert r.monthly_roi == pytest.approx(-100.0)
    assert math.isinf(r.payback_period)


def test_zero_setup_fee_with_positive_gain_pays_back_immediately():
    r = compute(RoiInputs(ai_setup_fee=0.0))
    assert r.ai_setup_fee_monthly_amortized == 0.0
    assert r.payback_period == 0.0


def test_zero_ai_cost_with_positive_gain_gives_infinite_roi():
    r = compute(RoiInputs(ai_monthly_cost=0.0, ai_setup_fee=0.0))
    assert r.monthly_roi == math.inf
    assert r.annual_roi == math.inf


def test_zero_ai_cost_without_gain_gives_zero_roi():
    r = compute(RoiInputs(ai_monthly_cost=0.0, ai_setup_fee=0.0, total_monthly_interactions=0.0))
    assert r.monthly_roi == 0.0
    assert math.isinf(r.payback_period)


def test_negative_gain_never_pays_back():
    r = compute(RoiInputs(ai_autonomy_rate=0.0, ai_booking_rate_improvement=0.0, ai_show_rate_improvement=0.0))
    assert r.total_monthly_gain < 0
    assert r.payback_period == math.inf


def test_from_mapping_fills_missing_and_ignores_extra_keys():
    inputs = RoiInputs.from_mapping({"ai_monthly_cost": "250", "unrelated": 1})
    assert inputs.ai_monthly_cost == 250.0
    assert inputs.ai_setup_fee == 2500.0
    assert compute_from_mapping({"ai_monthly_cost": 250}) == compute(inputs)


def test_replace_rejects_unknown_fields():
    with pytest.raises(ValueError, match="Unknown input field"):
        RoiInputs().replace(not_a_field=1.0)


def test_result_fields_cover_every_result_attribute():
    r = compute(RoiInputs())
    assert set(r.as_dict()) == set(RESULT_FIELDS)
    assert "payback_period" in RESULT_FIELDS
