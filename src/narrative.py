"""Narrative text for the results panel, insights list, and printable report."""

from __future__ import annotations

import math

from src.engine import RoiInputs, RoiResults
from src.formatting import format_currency, format_payback, format_plain


QUALITATIVE_BENEFITS: list[tuple[str, str]] = [
    (
        "Drastically Improved Response Time",
        "Engage leads in minutes, not hours. 78% of customers choose the first responder; AI gives you the speed to win.",
    ),
    (
        "24/7 Omnichannel Availability",
        "Capture and engage every lead instantly via SMS, WhatsApp, Email, Social Media, and Web Chat, "
        "maximizing opportunities from your marketing efforts.",
    ),
    (
        "Instant FAQ Resolution & Efficient Service",
        "Provide immediate, consistent answers and handle routine service inquiries, freeing up valuable human agent time.",
    ),
    (
        "Boost Labor Efficiency & Reduce Costs",
        "Stop spending expensive human hours (especially skilled technicians) on routine interactions. AI handles "
        "these for a fraction of the cost, allowing your team to focus on high-value, billable work.",
    ),
    (
        "Efficient Appointment Scheduling & Reduced No-Shows",
        "Automate booking, rescheduling, and reminders (which can reduce no-shows by 60-70%), including lead "
        "qualification, reducing administrative burden and maximizing attended appointments.",
    ),
    (
        "Consistent Lead Engagement & Follow-up",
        "Nurture leads systematically with automated messages and follow-ups, crucial since 80% of sales require 5+ follow-ups.",
    ),
    (
        "Automated Review Generation",
        "Proactively encourage satisfied customers to leave reviews on Google or Facebook, boosting online reputation.",
    ),
    (
        "Seamless Human Handoff",
        "Route complex conversations or high-intent leads to the right human agent with context.",
    ),
    (
        "Scalability & Competitive Advantage",
        "Handle significantly more interactions without proportionally increasing staff costs, lowering cost-per-acquisition.",
    ),
    (
        "Actionable Data & Insights",
        "Gather information during interactions to better understand customer needs and qualify prospects for sales.",
    ),
]

STATIC_INSIGHTS = [
    "Don't Forget Speed: Responding within 5 minutes can increase lead conversion by 9x or more. "
    "AI enables this instant engagement, maximizing the value of your marketing spend.",
    "Capture After-Hours Leads: If a significant portion of inquiries arrive outside business hours, "
    "AI ensures they are engaged immediately, converting potential lost opportunities into revenue.",
]


def gain_drivers_sentence(results: RoiResults) -> str:
    return (
        f"Driven by {format_currency(results.annual_cost_savings, 0)} in annual cost savings and "
        f"{format_currency(results.annual_revenue_increase, 0)} in potential added revenue."
    )


def human_cost_basis_note(inputs: RoiInputs, results: RoiResults) -> str:
    return (
        f"Based on {format_plain(results.human_interactions_monthly)} interactions handled by humans "
        f"@ {format_currency(inputs.avg_human_agent_hourly_cost)}/hr & "
        f"{format_plain(inputs.avg_time_per_interaction_by_human, 1)} min/interaction"
    )


def annual_highlights(results: RoiResults) -> list[dict]:
    """Annual figures for the insights panel; zero-valued components are omitted."""
    rows: list[dict] = []
    if results.annual_revenue_increase != 0:
        rows.append(
            {
                "label": "Potential Annual Added Revenue",
                "value": results.annual_revenue_increase,
                "note": "(Est. Revenue from Improved Funnel x 12)",
            }
        )
    if results.annual_cost_savings != 0:
        rows.append(
            {
                "label": "Potential Annual Labor Cost Savings",
                "value": results.annual_cost_savings,
                "note": "(Savings from reduced human handling x 12)",
            }
        )
    rows.append(
        {
            "label": "Potential Annual Total Gain",
            "value": results.annual_total_gain,
            "note": "(Annual Labor Cost Savings + Annual Added Revenue)",
        }
    )
    for row in rows:
        row["positive"] = row["value"] >= 0
    return rows


def key_insights(inputs: RoiInputs, results: RoiResults) -> list[str]:
    gain = results.total_monthly_gain
    payback = results.payback_period
    savings = results.ai_monthly_labor_cost_savings
    insights: list[str] = []

    direction = "gain" if gain >= 0 else "loss"
    insights.append(
        f"The AI Agent projects a total monthly {direction} of {format_currency(abs(gain))}, "
        "combining labor savings and potential revenue increases."
    )

    if payback > 0 and math.isfinite(payback):
        insights.append(
            f"The initial investment (setup fee of {format_currency(results.ai_setup_fee, 0)}) is estimated "
            f"to be paid back within {format_payback(payback)} through the net monthly benefits."
        )
    if not math.isfinite(payback) and gain <= 0:
        insights.append("Based on the current inputs, the initial investment is not projected to be paid back via net benefits.")
    if payback == 0:
        insights.append("With a positive net benefit and zero setup fee, the return is effectively immediate.")

    if results.ai_monthly_revenue_increase != 0:
        insights.append(
            f"Improving the sales funnel (e.g., {format_plain(inputs.ai_booking_rate_improvement)}% higher booking rate, "
            f"{format_plain(inputs.ai_show_rate_improvement)}% higher show-up rate) is estimated to add "
            f"{format_currency(results.ai_monthly_revenue_increase)} in potential revenue each month. "
            "This does not include the impact of faster response times, which can boost conversions significantly."
        )

    if savings > 0:
        insights.append(
            f"Automating {format_plain(inputs.ai_autonomy_rate)}% of interactions generates {format_currency(savings)} "
            "in monthly labor savings. Consider the extra value if this frees up high-cost staff "
            "(like technicians) from handling routine messages."
        )
    elif savings < 0:
        insights.append(
            f"Automating {format_plain(inputs.ai_autonomy_rate)}% of interactions shows a potential monthly labor "
            f"increased cost of {format_currency(abs(savings))} (ensure AI cost inputs are accurate)."
        )

    insights.extend(STATIC_INSIGHTS)

    roi = results.monthly_roi
    if math.isfinite(roi) and roi != 0:
        insights.append(
            f"This translates to a potential ROI of {format_plain(roi, 0, 'N/A')}% (monthly/annual rate), comparing "
            "the total monthly benefit to the effective AI cost (incl. amortized setup)."
        )
    if roi == math.inf:
        insights.append(
            "With positive gains and zero effective cost (or negligible cost compared to gains), the ROI is effectively infinite."
        )
    return insights
