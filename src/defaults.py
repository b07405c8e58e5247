"""Default input snapshot for the AI agent ROI calculator."""

from __future__ import annotations


DEFAULTS: dict[str, float] = {
    # Business and interaction volume
    "total_monthly_interactions": 500.0,
    "avg_revenue_per_sale": 500.0,
    # Current human performance and costs
    "avg_human_agent_hourly_cost": 30.0,
    "avg_time_per_interaction_by_human": 10.0,
    "percent_interactions_human": 70.0,
    # Current sales funnel rates
    "current_lead_qualification_rate": 25.0,
    "current_appointment_booking_rate": 30.0,
    "appointment_show_up_rate": 75.0,
    "appointment_to_sale_rate": 30.0,
    # AI agent parameters and costs
    "ai_monthly_cost": 497.0,
    "ai_setup_fee": 2500.0,
    "ai_autonomy_rate": 75.0,
    "ai_booking_rate_improvement": 15.0,
    "ai_show_rate_improvement": 15.0,
}
