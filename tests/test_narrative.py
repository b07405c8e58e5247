from __future__ import annotations

from src.engine import RoiInputs, compute
from src.narrative import (
    QUALITATIVE_BENEFITS,
    STATIC_INSIGHTS,
    annual_highlights,
    gain_drivers_sentence,
    human_cost_basis_note,
    key_insights,
)


def test_gain_drivers_sentence_for_defaults():
    r = compute(RoiInputs())
    assert gain_drivers_sentence(r) == "Driven by $13,500 in annual cost savings and $16,327 in potential added revenue."


def test_human_cost_basis_note():
    inputs = RoiInputs()
    note = human_cost_basis_note(inputs, compute(inputs))
    assert note == "Based on 350 interactions handled by humans @ $30.00/hr & 10 min/interaction"


def test_key_insights_for_defaults():
    inputs = RoiInputs()
    insights = key_insights(inputs, compute(inputs))
    assert insights[0].startswith("The AI Agent projects a total monthly gain of $2,485.55")
    assert any("paid back within 1 month" in line for line in insights)
    assert any("add $1,360.55 in potential revenue" in line for line in insights)
    assert any("generates $1,125.00 in monthly labor savings" in line for line in insights)
    assert any("potential ROI of 252%" in line for line in insights)
    for static in STATIC_INSIGHTS:
        assert static in insights


def test_key_insights_for_losing_scenario():
    inputs = RoiInputs(ai_autonomy_rate=0.0, ai_booking_rate_improvement=0.0, ai_show_rate_improvement=0.0)
    insights = key_insights(inputs, compute(inputs))
    assert insights[0].startswith("The AI Agent projects a total monthly loss of $750.00")
    assert any("not projected to be paid back" in line for line in insights)
    assert any("increased cost of $750.00" in line for line in insights)
    assert not any("potential revenue each month" in line for line in insights)


def test_key_insights_for_infinite_roi_and_immediate_payback():
    inputs = RoiInputs(ai_monthly_cost=0.0, ai_setup_fee=0.0)
    insights = key_insights(inputs, compute(inputs))
    assert any("effectively immediate" in line for line in insights)
    assert any("effectively infinite" in line for line in insights)
    assert not any("potential ROI of" in line for line in insights)


def test_annual_highlights_skip_zero_components():
    full = annual_highlights(compute(RoiInputs()))
    assert [row["label"] for row in full] == [
        "Potential Annual Added Revenue",
        "Potential Annual Labor Cost Savings",
        "Potential Annual Total Gain",
    ]
    assert all(row["positive"] for row in full)

    empty = annual_highlights(compute(RoiInputs(total_monthly_interactions=0.0)))
    assert [row["label"] for row in empty] == ["Potential Annual Total Gain"]


def test_qualitative_benefits_catalogue():
    assert len(QUALITATIVE_BENEFITS) == 10
    assert all(title and body for title, body in QUALITATIVE_BENEFITS)
