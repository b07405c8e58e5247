"""Arithmetic identity checks over a computed result set."""

from __future__ import annotations

import math
from typing import Any

from src.engine import RoiResults


def _finding(check: str, abs_delta: float, lhs_name: str, rhs_name: str) -> dict[str, Any]:
    return {
        "Check": check,
        "Abs Delta": float(abs_delta),
        "LHS": lhs_name,
        "RHS": rhs_name,
    }


def _check_identity(
    findings: list[dict[str, Any]],
    check_name: str,
    lhs_name: str,
    rhs_name: str,
    lhs: float,
    rhs: float,
    tol: float,
) -> None:
    if not (math.isfinite(lhs) and math.isfinite(rhs)):
        if lhs != rhs:
            findings.append(_finding(check_name, math.inf, lhs_name, rhs_name))
        return
    delta = abs(float(lhs) - float(rhs))
    if delta > float(tol) * max(1.0, abs(rhs)):
        findings.append(_finding(check_name, delta, lhs_name, rhs_name))


def run_integrity_checks(results: RoiResults, tol: float = 1e-6) -> list[dict[str, Any]]:
    """Return integrity findings (empty list means all checks passed)."""
    r = results
    findings: list[dict[str, Any]] = []

    _check_identity(
        findings,
        "Interaction split",
        "AI Handled + Human Remaining",
        "Total Interactions",
        r.ai_handled_interactions_monthly + r.human_interactions_remaining_monthly,
        r.total_monthly_interactions,
        tol,
    )
    _check_identity(
        findings,
        "Labor savings identity",
        "Labor Cost Savings",
        "Current Human Cost - Reduced Human Cost",
        r.ai_monthly_labor_cost_savings,
        r.human_monthly_interaction_cost - r.ai_monthly_human_interaction_cost_reduced,
        tol,
    )
    _check_identity(
        findings,
        "Revenue increase identity",
        "Revenue Increase",
        "AI Revenue - Current Revenue",
        r.ai_monthly_revenue_increase,
        r.ai_monthly_revenue - r.human_monthly_revenue,
        tol,
    )
    _check_identity(
        findings,
        "Total gain identity",
        "Total Monthly Gain",
        "Labor Savings + Revenue Increase",
        r.total_monthly_gain,
        r.ai_monthly_labor_cost_savings + r.ai_monthly_revenue_increase,
        tol,
    )
    _check_identity(
        findings,
        "Effective AI cost identity",
        "Effective Monthly Cost (Y1)",
        "Monthly Cost + Setup Fee / 12",
        r.ai_effective_monthly_cost_y1,
        r.ai_total_monthly_cost + r.ai_setup_fee_monthly_amortized,
        tol,
    )
    _check_identity(
        findings,
        "Annual gain identity",
        "Annual Total Gain",
        "Total Monthly Gain x 12",
        r.annual_total_gain,
        r.total_monthly_gain * 12,
        tol,
    )
    _check_identity(
        findings,
        "Annual components identity",
        "Annual Total Gain",
        "Annual Cost Savings + Annual Revenue Increase",
        r.annual_total_gain,
        r.annual_cost_savings + r.annual_revenue_increase,
        tol,
    )
    _check_identity(
        findings,
        "Funnel lead parity",
        "AI Qualified Leads",
        "Current Qualified Leads",
        r.ai_influenced_qualified_leads,
        r.human_monthly_qualified_leads,
        tol,
    )
    if r.ai_effective_show_up_rate > 100.0:
        findings.append(_finding("Show-up rate cap", r.ai_effective_show_up_rate - 100.0, "AI Show-Up Rate", "100%"))

    if math.isfinite(r.payback_period) and r.payback_period > 0:
        _check_identity(
            findings,
            "Payback identity",
            "Payback Months x Total Monthly Gain",
            "Setup Fee",
            r.payback_period * r.total_monthly_gain,
            r.ai_setup_fee,
            tol,
        )
    elif r.payback_period == 0 and not (r.total_monthly_gain > 0 and r.ai_setup_fee <= 0):
        findings.append(_finding("Immediate payback condition", 0.0, "Payback Months", "Positive gain with no setup fee"))
    elif not math.isfinite(r.payback_period) and r.total_monthly_gain > 0 and r.ai_setup_fee / r.total_monthly_gain != math.inf:
        findings.append(_finding("Never payback condition", math.inf, "Payback Months", "Non-positive gain"))

    return findings
