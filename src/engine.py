"""Core ROI derivation engine: human-staffed baseline vs. AI-assisted projection."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace as _replace
import math
from typing import Mapping

from src.defaults import DEFAULTS


INF = float("inf")


@dataclass(frozen=True)
class RoiInputs:
    avg_revenue_per_sale: float = DEFAULTS["avg_revenue_per_sale"]
    total_monthly_interactions: float = DEFAULTS["total_monthly_interactions"]
    avg_human_agent_hourly_cost: float = DEFAULTS["avg_human_agent_hourly_cost"]
    avg_time_per_interaction_by_human: float = DEFAULTS["avg_time_per_interaction_by_human"]
    percent_interactions_human: float = DEFAULTS["percent_interactions_human"]
    current_lead_qualification_rate: float = DEFAULTS["current_lead_qualification_rate"]
    current_appointment_booking_rate: float = DEFAULTS["current_appointment_booking_rate"]
    appointment_show_up_rate: float = DEFAULTS["appointment_show_up_rate"]
    appointment_to_sale_rate: float = DEFAULTS["appointment_to_sale_rate"]
    ai_monthly_cost: float = DEFAULTS["ai_monthly_cost"]
    ai_setup_fee: float = DEFAULTS["ai_setup_fee"]
    ai_autonomy_rate: float = DEFAULTS["ai_autonomy_rate"]
    ai_booking_rate_improvement: float = DEFAULTS["ai_booking_rate_improvement"]
    ai_show_rate_improvement: float = DEFAULTS["ai_show_rate_improvement"]

    @classmethod
    def from_mapping(cls, data: Mapping) -> "RoiInputs":
        """Build inputs from a mapping; missing keys take defaults, extra keys are ignored."""
        values = {}
        for f in fields(cls):
            values[f.name] = float(data.get(f.name, DEFAULTS[f.name]))
        return cls(**values)

    def replace(self, **changes) -> "RoiInputs":
        names = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - names)
        if unknown:
            raise ValueError(f"Unknown input field(s): {', '.join(unknown)}")
        return _replace(self, **{k: float(v) for k, v in changes.items()})

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class RoiResults:
    # Baseline (before AI)
    human_interactions_monthly: float
    human_monthly_interaction_cost: float
    human_monthly_qualified_leads: float
    human_monthly_appointments_booked: float
    human_monthly_appointments_attended: float
    human_monthly_sales: float
    human_monthly_revenue: float
    # Projected (with AI)
    ai_handled_interactions_monthly: float
    human_interactions_remaining_monthly: float
    ai_monthly_human_interaction_cost_reduced: float
    ai_monthly_labor_cost_savings: float
    ai_influenced_qualified_leads: float
    ai_effective_booking_rate: float
    ai_effective_show_up_rate: float
    ai_monthly_appointments_booked: float
    ai_monthly_appointments_attended: float
    ai_monthly_sales: float
    ai_monthly_revenue: float
    ai_monthly_revenue_increase: float
    # AI cost
    ai_total_monthly_cost: float
    ai_setup_fee: float
    ai_setup_fee_monthly_amortized: float
    ai_effective_monthly_cost_y1: float
    # ROI
    total_monthly_gain: float
    monthly_roi: float
    annual_roi: float
    annual_total_gain: float
    annual_cost_savings: float
    annual_revenue_increase: float
    payback_period: float
    # Volume
    total_monthly_interactions: float

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


RESULT_FIELDS = [f.name for f in fields(RoiResults)]


def _labor_cost(interactions: float, minutes_per_interaction: float, hourly_cost: float) -> float:
    return interactions * (minutes_per_interaction / 60) * hourly_cost


def _payback_months(setup_fee: float, total_monthly_gain: float) -> float:
    if total_monthly_gain > 0 and setup_fee > 0:
        months = setup_fee / total_monthly_gain
        return months if math.isfinite(months) else INF
    if total_monthly_gain > 0:
        return 0.0
    return INF


def compute(inputs: RoiInputs) -> RoiResults:
    """Derive the before/after funnel, cost deltas, ROI and payback for one input snapshot.

    Pure and total: never raises for in-range inputs. Only ``monthly_roi``,
    ``annual_roi`` (AI cost of zero with a positive gain) and ``payback_period``
    ("never") may be ``inf``.
    """
    i = inputs
    total = i.total_monthly_interactions

    # Current state (before AI)
    human_interactions = total * (i.percent_interactions_human / 100)
    human_cost = _labor_cost(human_interactions, i.avg_time_per_interaction_by_human, i.avg_human_agent_hourly_cost)
    human_leads = total * (i.current_lead_qualification_rate / 100)
    human_booked = human_leads * (i.current_appointment_booking_rate / 100)
    human_attended = human_booked * (i.appointment_show_up_rate / 100)
    human_sales = human_attended * (i.appointment_to_sale_rate / 100)
    human_revenue = human_sales * i.avg_revenue_per_sale

    # Projected state (with AI); humans only handle what the AI escalates.
    ai_handled = total * (i.ai_autonomy_rate / 100)
    human_remaining = total * (1 - (i.ai_autonomy_rate / 100))
    reduced_cost = _labor_cost(human_remaining, i.avg_time_per_interaction_by_human, i.avg_human_agent_hourly_cost)
    labor_savings = human_cost - reduced_cost

    # Qualification and close rates are assumed unchanged under AI.
    ai_leads = human_leads
    ai_booking_rate = i.current_appointment_booking_rate * (1 + (i.ai_booking_rate_improvement / 100))
    ai_booked = ai_leads * (ai_booking_rate / 100)
    ai_show_rate = min(100.0, i.appointment_show_up_rate * (1 + (i.ai_show_rate_improvement / 100)))
    ai_attended = ai_booked * (ai_show_rate / 100)
    ai_sales = ai_attended * (i.appointment_to_sale_rate / 100)
    ai_revenue = ai_sales * i.avg_revenue_per_sale
    revenue_increase = ai_revenue - human_revenue

    # AI cost, setup fee amortized over the first year.
    setup_amortized = i.ai_setup_fee / 12 if i.ai_setup_fee > 0 else 0.0
    effective_cost_y1 = i.ai_monthly_cost + setup_amortized

    total_gain = labor_savings + revenue_increase
    if effective_cost_y1 > 0:
        monthly_roi = (total_gain - effective_cost_y1) / effective_cost_y1 * 100
    else:
        monthly_roi = INF if total_gain > 0 else 0.0
    # Kept equal to the monthly rate; the figure is a rate, not a 12-month sum.
    annual_roi = monthly_roi

    return RoiResults(
        human_interactions_monthly=human_interactions,
        human_monthly_interaction_cost=human_cost,
        human_monthly_qualified_leads=human_leads,
        human_monthly_appointments_booked=human_booked,
        human_monthly_appointments_attended=human_attended,
        human_monthly_sales=human_sales,
        human_monthly_revenue=human_revenue,
        ai_handled_interactions_monthly=ai_handled,
        human_interactions_remaining_monthly=human_remaining,
        ai_monthly_human_interaction_cost_reduced=reduced_cost,
        ai_monthly_labor_cost_savings=labor_savings,
        ai_influenced_qualified_leads=ai_leads,
        ai_effective_booking_rate=ai_booking_rate,
        ai_effective_show_up_rate=ai_show_rate,
        ai_monthly_appointments_booked=ai_booked,
        ai_monthly_appointments_attended=ai_attended,
        ai_monthly_sales=ai_sales,
        ai_monthly_revenue=ai_revenue,
        ai_monthly_revenue_increase=revenue_increase,
        ai_total_monthly_cost=i.ai_monthly_cost,
        ai_setup_fee=i.ai_setup_fee,
        ai_setup_fee_monthly_amortized=setup_amortized,
        ai_effective_monthly_cost_y1=effective_cost_y1,
        total_monthly_gain=total_gain,
        monthly_roi=monthly_roi,
        annual_roi=annual_roi,
        annual_total_gain=total_gain * 12,
        annual_cost_savings=labor_savings * 12,
        annual_revenue_increase=revenue_increase * 12,
        payback_period=_payback_months(i.ai_setup_fee, total_gain),
        total_monthly_interactions=total,
    )


def compute_from_mapping(data: Mapping) -> RoiResults:
    return compute(RoiInputs.from_mapping(data))
