import json
from copy import deepcopy
from dataclasses import asdict

import pandas as pd
import plotly.graph_objects as go
import streamlit as st
from streamlit.errors import StreamlitAPIException

from src.charts import build_monthly_comparison_figure, build_payback_figure
from src.defaults import DEFAULTS
from src.engine import RoiInputs, RoiResults, compute
from src.formatting import (
    format_currency,
    format_number,
    format_payback,
    format_plain,
    format_roi,
    signed_currency,
)
from src.goal_seek import GOAL_TARGET_METRICS, goal_seek_input
from src.input_metadata import advisory_warnings, help_with_guidance
from src.integrity_checks import run_integrity_checks
from src.narrative import (
    QUALITATIVE_BENEFITS,
    annual_highlights,
    gain_drivers_sentence,
    human_cost_basis_note,
    key_insights,
)
from src.pdf_export import build_pdf_report_bytes
from src.runtime_logging import (
    append_runtime_event,
    install_global_exception_logging,
    read_runtime_events,
    runtime_log_path,
)
from src.schema import FIELDS_BY_KEY, INPUT_SECTIONS, fields_in_section, migrate_assumptions
from src.sensitivity import TARGET_OPTIONS, run_one_way_sensitivity, tornado_frame


install_global_exception_logging()


UI_DEFAULTS = {
    "preset_choice": "Base",
    "auto_run_model": True,
    "applied_assumptions_json": "",
    "sensitivity_delta": 0.2,
    "sensitivity_target": "Annual Total Gain",
    "goal_target_metric": "Monthly ROI %",
    "goal_adjustable_input": "ai_autonomy_rate",
    "goal_target_value": 100.0,
    "goal_seek_result": None,
    "pdf_report_bytes": None,
    "runtime_log_limit": 50,
}


def _build_presets() -> dict:
    base = deepcopy(DEFAULTS)
    conservative = deepcopy(DEFAULTS)
    optimistic = deepcopy(DEFAULTS)

    conservative.update(
        {
            "ai_autonomy_rate": 50.0,
            "ai_booking_rate_improvement": 5.0,
            "ai_show_rate_improvement": 5.0,
            "ai_monthly_cost": 997.0,
        }
    )
    optimistic.update(
        {
            "ai_autonomy_rate": 85.0,
            "ai_booking_rate_improvement": 30.0,
            "ai_show_rate_improvement": 25.0,
            "percent_interactions_human": 90.0,
        }
    )
    return {"Base": base, "Conservative": conservative, "Optimistic": optimistic}


PRESET_SCENARIOS = _build_presets()


def _assumptions_from_state() -> dict:
    return {k: deepcopy(st.session_state.get(k, v)) for k, v in DEFAULTS.items()}


def _serialize_assumptions(assumptions: dict) -> str:
    return json.dumps(assumptions, sort_keys=True, separators=(",", ":"))


def _changed_assumption_keys(current: dict, applied: dict) -> list[str]:
    return sorted(k for k in DEFAULTS if current.get(k) != applied.get(k))


@st.cache_data(show_spinner=False)
def _compute_cached(assumptions_json: str) -> RoiResults:
    return compute(RoiInputs.from_mapping(json.loads(assumptions_json)))


def _queue_deferred_state_update(key: str, value) -> None:
    pending = st.session_state.get("_deferred_session_state_updates")
    if not isinstance(pending, dict):
        pending = {}
    pending[key] = deepcopy(value)
    st.session_state["_deferred_session_state_updates"] = pending


def _set_session_state_or_defer(key: str, value) -> bool:
    try:
        st.session_state[key] = deepcopy(value)
        return False
    except StreamlitAPIException:
        _queue_deferred_state_update(key, value)
        return True


def _apply_deferred_state_updates() -> None:
    pending = st.session_state.get("_deferred_session_state_updates")
    if not isinstance(pending, dict) or not pending:
        return
    st.session_state["_deferred_session_state_updates"] = {}
    for key, value in pending.items():
        try:
            st.session_state[key] = deepcopy(value)
        except StreamlitAPIException:
            _queue_deferred_state_update(key, value)


def _apply_assumptions_to_state(assumptions: dict) -> bool:
    """Push a full input snapshot into widget state; returns True when a rerun is needed."""
    clean, warnings, _ = migrate_assumptions(assumptions)
    for warning in warnings:
        append_runtime_event(level="WARNING", event="assumption_sanitized", message=warning)
    deferred = False
    for key, value in clean.items():
        deferred = _set_session_state_or_defer(key, value) or deferred
    return deferred


def _slider_format(unit: str) -> str:
    if unit == "$":
        return "$%.2f"
    return "%.0f"


def _slider_label(field) -> str:
    if field.unit in ("$", ""):
        return field.label
    return f"{field.label} ({field.unit.strip()})"


# Paired "$" would otherwise render as LaTeX in Streamlit markdown.
def _md(text: str) -> str:
    return str(text).replace("$", "\\$")


def _metric_card(column, label: str, value: str, caption: str = "") -> None:
    column.metric(label, value)
    if caption:
        column.caption(caption)


def _tornado_figure(tornado: pd.DataFrame, target: str) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(go.Bar(y=tornado["Driver"], x=tornado["Low"], name="Low", orientation="h", marker_color="#64748b"))
    fig.add_trace(go.Bar(y=tornado["Driver"], x=tornado["High"], name="High", orientation="h", marker_color="#84cc16"))
    fig.update_layout(
        title=f"One-way Sensitivity: Delta {target}",
        barmode="overlay",
        yaxis=dict(autorange="reversed"),
        height=max(320, 40 * len(tornado) + 120),
    )
    return fig


st.set_page_config(page_title="AI Agent ROI Calculator", layout="wide")
st.title("Omnichannel AI Agent ROI Calculator")
st.caption("Estimate the value of automating text-based customer interactions.")

for key, value in DEFAULTS.items():
    st.session_state.setdefault(key, float(value))
for key, value in UI_DEFAULTS.items():
    st.session_state.setdefault(key, deepcopy(value))
_apply_deferred_state_updates()
if not st.session_state.get("applied_assumptions_json"):
    st.session_state["applied_assumptions_json"] = _serialize_assumptions(_assumptions_from_state())

manual_apply_inputs = False

with st.sidebar:
    st.header("Scenario")
    st.selectbox(
        "Preset",
        options=list(PRESET_SCENARIOS.keys()),
        key="preset_choice",
        help="Choose a preset profile to apply to all inputs.",
    )
    p1, p2 = st.columns(2)
    apply_preset = p1.button("Apply Preset", help="Apply the selected preset values to all inputs.")
    reset_base = p2.button("Reset Defaults", help="Reset all inputs to the default values.")
    if apply_preset or reset_base:
        source = PRESET_SCENARIOS[st.session_state["preset_choice"]] if apply_preset else DEFAULTS
        if _apply_assumptions_to_state(source):
            st.rerun()

    st.subheader("Run Controls")
    st.toggle(
        "Live Recalculate",
        key="auto_run_model",
        help="When off, slider edits are queued until you click Apply Input Changes.",
    )

    for section in INPUT_SECTIONS:
        with st.expander(section, expanded=True):
            for field in fields_in_section(section):
                st.slider(
                    _slider_label(field),
                    min_value=float(field.min_value),
                    max_value=float(field.max_value),
                    step=float(field.step),
                    format=_slider_format(field.unit),
                    key=field.key,
                    help=help_with_guidance(field.key, field.help),
                )

    current_assumptions = _assumptions_from_state()
    applied_assumptions = json.loads(st.session_state["applied_assumptions_json"])
    pending_keys = _changed_assumption_keys(current_assumptions, applied_assumptions)
    if pending_keys and not st.session_state.get("auto_run_model", True):
        st.caption(f"Pending input changes: {len(pending_keys)}")
    manual_apply_inputs = st.button(
        "Apply Input Changes",
        type="primary",
        disabled=len(pending_keys) == 0 or st.session_state.get("auto_run_model", True),
        help="Recalculate using your queued edits when Live Recalculate is turned off.",
    )

if st.session_state.get("auto_run_model", True) or manual_apply_inputs:
    snapshot, input_warnings, _ = migrate_assumptions(_assumptions_from_state())
    st.session_state["applied_assumptions_json"] = _serialize_assumptions(snapshot)
else:
    snapshot, input_warnings, _ = migrate_assumptions(json.loads(st.session_state["applied_assumptions_json"]))
assumptions_json = _serialize_assumptions(snapshot)
pending_keys = _changed_assumption_keys(_assumptions_from_state(), snapshot)

try:
    results = _compute_cached(assumptions_json)
except Exception as exc:
    append_runtime_event(
        level="ERROR",
        event="compute_failed",
        message="ROI computation failed.",
        context={"assumptions": snapshot},
        exc=exc,
    )
    st.error(f"Calculation failed: {exc}")
    st.stop()

inputs = RoiInputs.from_mapping(snapshot)
integrity_findings = run_integrity_checks(results)
if integrity_findings:
    append_runtime_event(
        level="WARNING",
        event="integrity_findings",
        message=f"{len(integrity_findings)} integrity finding(s).",
        context={"findings": integrity_findings},
    )
advice = advisory_warnings(snapshot)

status_1, status_2, status_3 = st.columns(3)
status_1.metric("Run Mode", "Live" if st.session_state.get("auto_run_model", True) else "Manual Apply")
status_2.metric("Pending Changes", len(pending_keys))
status_3.metric("Integrity Findings", len(integrity_findings))

results_tab, sens_tab, goal_tab, diag_tab = st.tabs(["Results", "Sensitivity", "Goal Seek", "Runtime Diagnostics"])

with results_tab:
    st.subheader("Key Results Summary")
    h1, h2, h3 = st.columns(3)
    _metric_card(
        h1,
        "Potential Annual Total Gain",
        format_currency(results.annual_total_gain, 0),
        "(Annual Labor Savings + Annual Added Revenue)",
    )
    _metric_card(h2, "Potential ROI", format_roi(results.annual_roi, results.total_monthly_gain), "(monthly/annual rate)")
    _metric_card(h3, "Payback Period", format_payback(results.payback_period))
    st.caption(_md(gain_drivers_sentence(results)))

    c1, c2 = st.columns(2)
    c1.plotly_chart(build_monthly_comparison_figure(results), width="stretch")
    c2.plotly_chart(build_payback_figure(results), width="stretch")

    m1, m2, m3 = st.columns(3)
    with m1:
        st.markdown("**Monthly Financial Impact**")
        st.metric("Direct Labor Cost Savings", format_currency(results.ai_monthly_labor_cost_savings))
        st.caption("(Current Human Cost - Cost of Humans Handling AI Escalations)")
        st.metric("Potential Added Revenue", signed_currency(results.ai_monthly_revenue_increase))
        st.caption("(Est. Revenue from Improved Booking & Show-Up Rates)")
        st.metric("Total Monthly Benefit", format_currency(results.total_monthly_gain))
    with m2:
        st.markdown("**AI Agent Cost**")
        st.metric("One-time Setup Fee", format_currency(results.ai_setup_fee))
        st.metric("Monthly Subscription/Service Cost", format_currency(results.ai_total_monthly_cost))
        st.metric("Effective Monthly Cost (Year 1)", format_currency(results.ai_effective_monthly_cost_y1))
        st.caption("(Monthly Recurring + Setup Fee/12)")
    with m3:
        st.markdown("**Current Human Cost**")
        st.metric("Est. Monthly Cost (Labor + Overhead)", format_currency(results.human_monthly_interaction_cost))
        st.caption(_md(human_cost_basis_note(inputs, results)))
        st.metric("Est. Annual Cost", format_currency(results.human_monthly_interaction_cost * 12))

    st.markdown("**Interaction Analysis**")
    i1, i2, i3, i4 = st.columns(4)
    i1.metric("Total Interactions Entered", format_plain(results.total_monthly_interactions))
    i2.metric("Currently Handled by Humans", format_plain(results.human_interactions_monthly))
    i3.metric("Est. Handled Autonomously by AI", format_plain(results.ai_handled_interactions_monthly))
    i4.metric("Est. Remaining for Humans (w/ AI)", format_plain(results.human_interactions_remaining_monthly))

    with st.expander("Key Insights", expanded=False):
        for row in annual_highlights(results):
            color = "green" if row["positive"] else "red"
            st.markdown(f"**{row['label']}:** :{color}[{_md(format_currency(row['value']))}]  \n{row['note']}")
        for insight in key_insights(inputs, results):
            st.markdown(f"- {_md(insight)}")

    with st.expander("Qualitative Benefits", expanded=False):
        st.write("Beyond the calculated ROI, consider these critical operational advantages:")
        for title, body in QUALITATIVE_BENEFITS:
            st.markdown(f"- **{title}:** {body}")

    with st.expander("Funnel Detail", expanded=False):
        funnel = pd.DataFrame(
            {
                "Stage": ["Qualified Leads", "Appointments Booked", "Appointments Attended", "Sales", "Revenue"],
                "Current": [
                    results.human_monthly_qualified_leads,
                    results.human_monthly_appointments_booked,
                    results.human_monthly_appointments_attended,
                    results.human_monthly_sales,
                    results.human_monthly_revenue,
                ],
                "With AI": [
                    results.ai_influenced_qualified_leads,
                    results.ai_monthly_appointments_booked,
                    results.ai_monthly_appointments_attended,
                    results.ai_monthly_sales,
                    results.ai_monthly_revenue,
                ],
            }
        )
        st.dataframe(funnel, width="stretch", hide_index=True)
        st.caption(
            f"Effective booking rate with AI: {format_number(results.ai_effective_booking_rate, 'percent', 0, 2)}; "
            f"effective show-up rate with AI: {format_number(results.ai_effective_show_up_rate, 'percent', 0, 2)} (capped at 100%)."
        )

    if input_warnings or advice:
        with st.expander(f"[!] Input Warnings ({len(input_warnings) + len(advice)})", expanded=False):
            for warning in input_warnings + advice:
                st.write(f"- {warning}")
    if integrity_findings:
        with st.expander(f"[!] Integrity Findings ({len(integrity_findings)})", expanded=False):
            st.dataframe(pd.DataFrame(integrity_findings), width="stretch")

    st.subheader("Print / Export")
    if st.button("Build PDF Report", help="Render the current results into a printable PDF."):
        with st.spinner("Building PDF report..."):
            try:
                st.session_state["pdf_report_bytes"] = build_pdf_report_bytes(
                    inputs,
                    results,
                    {"log_event": append_runtime_event},
                )
            except Exception as exc:
                append_runtime_event(
                    level="ERROR",
                    event="pdf_export_failed",
                    message="Failed to build PDF report.",
                    context={"assumptions": snapshot},
                    exc=exc,
                )
                st.error(f"PDF export failed: {exc}")
    if st.session_state.get("pdf_report_bytes"):
        st.download_button(
            "Download PDF Report",
            st.session_state["pdf_report_bytes"],
            file_name="ai_agent_roi_report.pdf",
            mime="application/pdf",
            help="Save the most recently built PDF report.",
        )

with sens_tab:
    s1, s2 = st.columns(2)
    s1.slider(
        "Flex (+/-)",
        0.05,
        0.5,
        step=0.05,
        key="sensitivity_delta",
        help="Fractional change applied to each driver for the low and high cases.",
    )
    s2.selectbox("Target", TARGET_OPTIONS, key="sensitivity_target", help="Output metric ranked in the tornado chart.")
    try:
        sens_df = run_one_way_sensitivity(snapshot, float(st.session_state["sensitivity_delta"]))
    except Exception as exc:
        append_runtime_event(
            level="ERROR",
            event="sensitivity_failed",
            message="Sensitivity analysis failed.",
            context={"delta": st.session_state["sensitivity_delta"]},
            exc=exc,
        )
        st.warning(f"Sensitivity analysis failed: {exc}")
        sens_df = pd.DataFrame()
    tornado = tornado_frame(sens_df, st.session_state["sensitivity_target"])
    if tornado.empty:
        st.info("No sensitivity results for the selected target.")
    else:
        st.plotly_chart(_tornado_figure(tornado, st.session_state["sensitivity_target"]), width="stretch")
    with st.expander("Sensitivity Table", expanded=False):
        st.dataframe(sens_df, width="stretch")

with goal_tab:
    g1, g2, g3 = st.columns(3)
    g1.selectbox(
        "Target Metric",
        GOAL_TARGET_METRICS,
        key="goal_target_metric",
        help="Result metric the solver should hit.",
    )
    g2.selectbox(
        "Adjustable Input",
        list(FIELDS_BY_KEY.keys()),
        format_func=lambda k: FIELDS_BY_KEY[k].label,
        key="goal_adjustable_input",
        help="Input the solver varies within its slider range.",
    )
    g3.number_input("Target Value", step=10.0, key="goal_target_value", help="Desired value of the target metric.")
    if st.button("Run Goal Seek", help="Solve for the adjustable input using the current inputs."):
        goal_request = {
            "input": st.session_state["goal_adjustable_input"],
            "metric": st.session_state["goal_target_metric"],
            "target": float(st.session_state["goal_target_value"]),
        }
        try:
            solved = goal_seek_input(snapshot, goal_request["input"], goal_request["metric"], goal_request["target"])
            st.session_state["goal_seek_result"] = {**asdict(solved), **goal_request}
        except ValueError as exc:
            st.session_state["goal_seek_result"] = {"status": "failed", "message": str(exc), **goal_request}
        append_runtime_event(
            level="INFO",
            event="goal_seek_run",
            message=st.session_state["goal_seek_result"]["message"],
            context=goal_request,
        )
    goal_result = st.session_state.get("goal_seek_result")
    if goal_result:
        if goal_result["status"] == "solved":
            st.success(
                f"{goal_result['message']} {FIELDS_BY_KEY[goal_result['input']].label} = "
                f"{format_plain(goal_result['value'], 2)} (achieved {format_plain(goal_result['achieved'], 2)})."
            )
            if st.button("Apply Solved Value", help="Copy the solved value into the sidebar input."):
                _apply_assumptions_to_state({**snapshot, goal_result["input"]: goal_result["value"]})
                st.rerun()
        else:
            st.warning(goal_result["message"])

with diag_tab:
    st.caption(f"Runtime log: `{runtime_log_path()}`")
    st.number_input(
        "Events to show",
        min_value=10,
        max_value=1000,
        step=10,
        key="runtime_log_limit",
        help="Number of most recent runtime events to display.",
    )
    events = read_runtime_events(limit=int(st.session_state["runtime_log_limit"]))
    if events:
        st.dataframe(pd.DataFrame(events), width="stretch")
    else:
        st.info("No runtime events recorded.")
