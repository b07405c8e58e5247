"""One-way sensitivity analysis helpers."""

from __future__ import annotations

import pandas as pd

from src.engine import RoiInputs, RoiResults, compute
from src.schema import FIELDS_BY_KEY, clamp_to_field


DEFAULT_SENSITIVITY_DRIVERS = [
    "total_monthly_interactions",
    "avg_revenue_per_sale",
    "avg_human_agent_hourly_cost",
    "avg_time_per_interaction_by_human",
    "percent_interactions_human",
    "current_appointment_booking_rate",
    "appointment_to_sale_rate",
    "ai_monthly_cost",
    "ai_setup_fee",
    "ai_autonomy_rate",
    "ai_booking_rate_improvement",
    "ai_show_rate_improvement",
]


TARGET_OPTIONS = [
    "Total Monthly Gain",
    "Annual Total Gain",
    "Annual Cost Savings",
    "Annual Revenue Increase",
    "Monthly ROI %",
    "Payback Months",
]

TARGET_FIELDS = {
    "Total Monthly Gain": "total_monthly_gain",
    "Annual Total Gain": "annual_total_gain",
    "Annual Cost Savings": "annual_cost_savings",
    "Annual Revenue Increase": "annual_revenue_increase",
    "Monthly ROI %": "monthly_roi",
    "Payback Months": "payback_period",
}


def available_sensitivity_drivers() -> list[str]:
    return sorted(FIELDS_BY_KEY)


def evaluate_outputs(results: RoiResults) -> dict:
    return {label: float(getattr(results, field)) for label, field in TARGET_FIELDS.items()}


def run_one_way_sensitivity(base_inputs: dict, delta_pct: float, drivers: list[str] | None = None) -> pd.DataFrame:
    """Flex each driver down and up by ``delta_pct`` (clamped to its slider range).

    ``inf`` targets (unbounded ROI, never-payback) flow through as ``inf``/``NaN``
    cells rather than raising.
    """
    base_snapshot = RoiInputs.from_mapping(base_inputs)
    base = evaluate_outputs(compute(base_snapshot))

    if drivers is None or len(drivers) == 0:
        drivers = [d for d in DEFAULT_SENSITIVITY_DRIVERS if d in FIELDS_BY_KEY]

    rows = []
    for driver in drivers:
        if driver not in FIELDS_BY_KEY:
            continue
        base_value = float(getattr(base_snapshot, driver))
        for case, mult in [("Low", 1 - delta_pct), ("High", 1 + delta_pct)]:
            flexed = clamp_to_field(driver, base_value * mult)
            out = evaluate_outputs(compute(base_snapshot.replace(**{driver: flexed})))
            rows.append(
                {
                    "Driver": driver,
                    "Case": case,
                    "Input Value": flexed,
                    **{k: out[k] for k in base.keys()},
                    **{f"Delta {k}": out[k] - base[k] for k in base.keys()},
                }
            )

    return pd.DataFrame(rows)


def tornado_frame(sens_df: pd.DataFrame, target: str) -> pd.DataFrame:
    """Low/High deltas per driver for ``target``, widest swing first."""
    delta_col = f"Delta {target}"
    if sens_df.empty or delta_col not in sens_df.columns:
        return pd.DataFrame(columns=["Driver", "Low", "High", "Swing"])
    pivot = sens_df.pivot_table(index="Driver", columns="Case", values=delta_col, aggfunc="first")
    pivot = pivot.reindex(columns=["Low", "High"])
    pivot["Swing"] = (pivot["High"] - pivot["Low"]).abs()
    return pivot.sort_values("Swing", ascending=False).reset_index()
