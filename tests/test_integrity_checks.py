from __future__ import annotations

from dataclasses import replace

from src.engine import RoiInputs, compute
from src.integrity_checks import run_integrity_checks


def test_integrity_checks_pass_for_base_scenario(base_inputs):
    findings = run_integrity_checks(compute(RoiInputs.from_mapping(base_inputs)))
    assert findings == []


def test_integrity_checks_pass_for_representative_scenarios(base_inputs):
    scenarios = [
        {"ai_setup_fee": 0.0},
        {"ai_monthly_cost": 0.0, "ai_setup_fee": 0.0},
        {"total_monthly_interactions": 0.0},
        {"ai_autonomy_rate": 0.0, "ai_booking_rate_improvement": 0.0, "ai_show_rate_improvement": 0.0},
        {"appointment_show_up_rate": 100.0, "ai_show_rate_improvement": 100.0},
        {"total_monthly_interactions": 5000.0, "avg_revenue_per_sale": 10000.0},
    ]
    for updates in scenarios:
        inputs = RoiInputs.from_mapping({**base_inputs, **updates})
        findings = run_integrity_checks(compute(inputs))
        assert findings == [], f"Unexpected integrity findings for updates={updates}: {findings}"


def test_integrity_checks_detects_identity_break():
    results = compute(RoiInputs())
    broken = replace(results, total_monthly_gain=results.total_monthly_gain + 1.0)
    check_names = {f["Check"] for f in run_integrity_checks(broken)}
    assert "Total gain identity" in check_names
    assert "Annual gain identity" in check_names


def test_integrity_checks_detects_uncapped_show_up_rate():
    results = compute(RoiInputs())
    broken = replace(results, ai_effective_show_up_rate=104.0)
    findings = run_integrity_checks(broken)
    assert [f["Check"] for f in findings] == ["Show-up rate cap"]
    assert findings[0]["Abs Delta"] == 4.0
