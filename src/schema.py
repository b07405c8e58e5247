"""Input field catalogue, section layout, and input sanitization."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass
import math
from typing import Any

from src.defaults import DEFAULTS


@dataclass(frozen=True)
class InputField:
    key: str
    label: str
    unit: str
    min_value: float
    max_value: float
    step: float
    help: str
    section: str


SECTION_VOLUME = "Business & Interaction Volume"
SECTION_HUMAN = "Current Human Performance & Costs"
SECTION_FUNNEL = "Current Sales Funnel Rates"
SECTION_AI = "AI Agent Parameters & Costs"

INPUT_SECTIONS = [SECTION_VOLUME, SECTION_HUMAN, SECTION_FUNNEL, SECTION_AI]


INPUT_FIELDS: list[InputField] = [
    InputField(
        "total_monthly_interactions",
        "Total Monthly Incoming Interactions",
        "#",
        0,
        5000,
        10,
        "Total relevant conversations across SMS, WhatsApp, Email, Social DMs, Web Chat etc.",
        SECTION_VOLUME,
    ),
    InputField(
        "avg_revenue_per_sale",
        "Average Revenue per Sale",
        "$",
        0,
        10000,
        10,
        "Typical value of a closed deal from these interactions.",
        SECTION_VOLUME,
    ),
    InputField(
        "avg_human_agent_hourly_cost",
        "Average Human Agent Hourly Cost",
        "$",
        0,
        100,
        1,
        "Fully loaded hourly cost (salary, benefits, overhead, etc.). Default: $30",
        SECTION_HUMAN,
    ),
    InputField(
        "avg_time_per_interaction_by_human",
        "Average Time Spent per Interaction by Human",
        " min",
        1,
        60,
        1,
        "Include response, research, logging time etc. Default: 10 min",
        SECTION_HUMAN,
    ),
    InputField(
        "percent_interactions_human",
        "% Interactions Requiring Human Intervention Currently",
        "%",
        0,
        100,
        1,
        "Percentage of all incoming interactions that currently require handling by a human agent. Default: 70%",
        SECTION_HUMAN,
    ),
    InputField(
        "current_lead_qualification_rate",
        "Current Lead Qualification Rate",
        "%",
        0,
        100,
        1,
        "Of all incoming interactions, % typically identified as leads meeting basic criteria. Default: 25%",
        SECTION_FUNNEL,
    ),
    InputField(
        "current_appointment_booking_rate",
        "Current Appointment Booking Rate (Qualified Leads)",
        "%",
        0,
        100,
        1,
        "Of the qualified leads, % that typically result in a booked appointment. Default: 30%",
        SECTION_FUNNEL,
    ),
    InputField(
        "appointment_show_up_rate",
        "Appointment Show-Up Rate",
        "%",
        0,
        100,
        1,
        "% of booked appointments that attend (base rate). Default: 75%",
        SECTION_FUNNEL,
    ),
    InputField(
        "appointment_to_sale_rate",
        "Appointment-to-Sale Rate",
        "%",
        0,
        100,
        1,
        "Of the appointments that show up, % that convert into a paying customer. Default: 30%",
        SECTION_FUNNEL,
    ),
    InputField(
        "ai_monthly_cost",
        "Monthly Cost of AI Agent",
        "$",
        0,
        5000,
        10,
        "Estimated monthly subscription/service fee. Default: $497",
        SECTION_AI,
    ),
    InputField(
        "ai_setup_fee",
        "One-time Setup Fee",
        "$",
        0,
        10000,
        100,
        "Any initial setup or implementation cost. Default: $2500",
        SECTION_AI,
    ),
    InputField(
        "ai_autonomy_rate",
        "Estimated % Interactions Handled Autonomously by AI",
        "%",
        0,
        100,
        1,
        "Percentage of total interactions the AI can fully resolve without any human help "
        "(FAQs, lead qualification, scheduling). Default: 75%",
        SECTION_AI,
    ),
    InputField(
        "ai_booking_rate_improvement",
        "Estimated Improvement in Appointment Booking Rate (AI vs Human)",
        "%",
        0,
        100,
        1,
        "Relative % increase in booking rate for qualified leads expected from the AI "
        "(speed, 24/7 availability, persistence). Default: 15%",
        SECTION_AI,
    ),
    InputField(
        "ai_show_rate_improvement",
        "Estimated Improvement in Appointment Show-Up Rate (AI vs Human)",
        "%",
        0,
        100,
        1,
        "Expected relative lift in show-up rate due to AI reminders and engagement. Default: 15%",
        SECTION_AI,
    ),
]

FIELDS_BY_KEY: dict[str, InputField] = {f.key: f for f in INPUT_FIELDS}

# camelCase names accepted from browser-side payloads.
CAMEL_CASE_ALIASES = {
    "avgRevenuePerSale": "avg_revenue_per_sale",
    "totalMonthlyInteractions": "total_monthly_interactions",
    "avgHumanAgentHourlyCost": "avg_human_agent_hourly_cost",
    "avgTimePerInteractionByHuman": "avg_time_per_interaction_by_human",
    "percentInteractionsHuman": "percent_interactions_human",
    "currentLeadQualificationRate": "current_lead_qualification_rate",
    "currentAppointmentBookingRate": "current_appointment_booking_rate",
    "appointmentShowUpRate": "appointment_show_up_rate",
    "appointmentToSaleRate": "appointment_to_sale_rate",
    "aiMonthlyCost": "ai_monthly_cost",
    "aiSetupFee": "ai_setup_fee",
    "aiAutonomyRate": "ai_autonomy_rate",
    "aiBookingRateImprovement": "ai_booking_rate_improvement",
    "aiShowRateImprovement": "ai_show_rate_improvement",
}


def fields_in_section(section: str) -> list[InputField]:
    return [f for f in INPUT_FIELDS if f.section == section]


def clamp_to_field(key: str, value: float) -> float:
    field = FIELDS_BY_KEY[key]
    return float(min(field.max_value, max(field.min_value, float(value))))


def migrate_assumptions(raw_inputs: Any) -> tuple[dict, list[str], list[str]]:
    """Coerce an incoming input mapping into a complete, in-range snapshot.

    Returns the sanitized inputs, human-readable warnings for every value that
    was reset or clamped, and the sorted list of keys that were not recognized.
    """
    warnings: list[str] = []
    unknown_keys: list[str] = []
    inputs = deepcopy(DEFAULTS)
    payload = raw_inputs if isinstance(raw_inputs, dict) else {}
    if raw_inputs is not None and not isinstance(raw_inputs, dict):
        warnings.append("Input payload is not a mapping; defaults used.")

    for k, v in payload.items():
        key = CAMEL_CASE_ALIASES.get(k, k)
        if key in inputs:
            inputs[key] = v
        else:
            unknown_keys.append(str(k))

    for key, field in FIELDS_BY_KEY.items():
        try:
            value = float(inputs[key])
        except (TypeError, ValueError):
            inputs[key] = float(DEFAULTS[key])
            warnings.append(f"{key} invalid and reset to default.")
            continue
        if not math.isfinite(value):
            inputs[key] = float(DEFAULTS[key])
            warnings.append(f"{key} is not finite and was reset to default.")
            continue
        clamped = clamp_to_field(key, value)
        if clamped != value:
            warnings.append(
                f"{key}={value:g} is outside [{field.min_value:g}, {field.max_value:g}] and was clamped to {clamped:g}."
            )
        inputs[key] = clamped

    return inputs, warnings, sorted(unknown_keys)
