"""Input guidance metadata and advisory range checks."""

from __future__ import annotations

from typing import Any


INPUT_GUIDANCE: dict[str, dict[str, Any]] = {
    "total_monthly_interactions": {"min": 50.0, "max": 3000.0, "note": "Typical inbound text conversation volume for a small to mid-size service business."},
    "avg_revenue_per_sale": {"min": 100.0, "max": 5000.0, "note": "Average closed-deal value from inbound conversations."},
    "avg_human_agent_hourly_cost": {"min": 15.0, "max": 60.0, "note": "Fully loaded cost usually runs 1.25x to 1.4x of base wage."},
    "avg_time_per_interaction_by_human": {"min": 3.0, "max": 20.0, "note": "Includes response, research, and logging time."},
    "percent_interactions_human": {"min": 40.0, "max": 100.0, "note": "Share of all interactions currently touched by a person."},
    "current_lead_qualification_rate": {"min": 10.0, "max": 50.0, "note": "Share of inbound conversations meeting basic lead criteria."},
    "current_appointment_booking_rate": {"min": 10.0, "max": 60.0, "note": "Qualified lead to booked appointment conversion."},
    "appointment_show_up_rate": {"min": 50.0, "max": 95.0, "note": "Attendance without automated reminders often sits below 80%."},
    "appointment_to_sale_rate": {"min": 10.0, "max": 60.0, "note": "Close rate on attended appointments."},
    "ai_monthly_cost": {"min": 100.0, "max": 2000.0, "note": "Typical subscription range for a managed AI agent service."},
    "ai_setup_fee": {"min": 0.0, "max": 5000.0, "note": "One-time onboarding and configuration cost."},
    "ai_autonomy_rate": {"min": 40.0, "max": 90.0, "note": "Resolution without human help depends heavily on process complexity."},
    "ai_booking_rate_improvement": {"min": 0.0, "max": 40.0, "note": "Relative lift from instant, 24/7 follow-up."},
    "ai_show_rate_improvement": {"min": 0.0, "max": 30.0, "note": "Relative lift from automated reminders and rescheduling."},
}


def _fmt(v: float) -> str:
    if abs(v - round(v)) < 1e-9:
        return f"{int(round(v))}"
    return f"{v:.3f}".rstrip("0").rstrip(".")


def help_with_guidance(key: str, base_help: str) -> str:
    g = INPUT_GUIDANCE.get(key)
    if not g:
        return base_help
    return f"{base_help} Reasonable range: {_fmt(g['min'])} to {_fmt(g['max'])}. {g['note']}"


def advisory_warnings(inputs: dict) -> list[str]:
    warnings: list[str] = []
    for key, g in INPUT_GUIDANCE.items():
        if key not in inputs:
            continue
        try:
            v = float(inputs[key])
        except (TypeError, ValueError):
            continue
        if v < g["min"] or v > g["max"]:
            warnings.append(
                f"{key}={_fmt(v)} is outside the recommended range [{_fmt(g['min'])}, {_fmt(g['max'])}]."
            )
    return warnings
