"""Printable PDF report of the current ROI results."""

from __future__ import annotations

from copy import deepcopy
from datetime import datetime, timezone
import html
from io import BytesIO
from typing import Any, Callable

import pandas as pd

from src.charts import build_monthly_comparison_figure
from src.engine import RoiInputs, RoiResults
from src.formatting import format_currency, format_payback, format_plain, format_roi, signed_currency
from src.narrative import QUALITATIVE_BENEFITS, annual_highlights, gain_drivers_sentence, human_cost_basis_note, key_insights
from src.schema import INPUT_FIELDS


REPORT_TITLE = "Omnichannel AI Agent ROI Calculator"

DEFAULT_OPTIONS = {
    "include_chart": True,
    "include_qualitative_benefits": True,
    "chart_width_px": 1200,
    "chart_height_px": 700,
}


def _merge_options(options: dict | None) -> dict:
    out = deepcopy(DEFAULT_OPTIONS)
    if isinstance(options, dict):
        out.update(options)
    return out


def _log_event(
    options: dict,
    *,
    level: str,
    event: str,
    message: str,
    context: dict[str, Any] | None = None,
    exc: BaseException | None = None,
) -> None:
    logger: Callable[..., Any] | None = options.get("log_event")
    if not callable(logger):
        return
    try:
        logger(level=level, event=event, message=message, context=context or {}, exc=exc)
    except Exception:
        # Export logging should never break report generation.
        return


def _utc_iso_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def render_plotly_figure_png(fig, width_px: int, height_px: int) -> bytes:
    """Render a Plotly figure into PNG bytes using Kaleido."""

    if fig is None:
        raise ValueError("Figure is required.")
    width_px = max(640, int(width_px))
    height_px = max(360, int(height_px))
    fig.update_layout(template="plotly_white", width=width_px, height=height_px)
    try:
        image = fig.to_image(format="png", width=width_px, height=height_px, scale=1)
    except Exception as exc:
        raise RuntimeError("Chart image render failed.") from exc
    return bytes(image)


def build_chart_images(results: RoiResults, options: dict | None = None) -> list[dict]:
    merged = _merge_options(options)
    if not merged.get("include_chart", True):
        return []
    title = "Monthly Cost vs. Benefit Comparison"
    try:
        image_bytes = render_plotly_figure_png(
            build_monthly_comparison_figure(results, title=title),
            merged["chart_width_px"],
            merged["chart_height_px"],
        )
        return [{"title": title, "image_bytes": image_bytes}]
    except (RuntimeError, ValueError) as exc:
        _log_event(
            merged,
            level="WARNING",
            event="pdf_chart_render_failed",
            message="Chart image could not be rendered; placeholder used.",
            exc=exc,
        )
        return [
            {
                "title": title,
                "image_bytes": None,
                "placeholder_text": "Chart image unavailable. Install kaleido to embed charts in the PDF.",
            }
        ]


def _kv_table(title: str, rows: list[tuple[str, str]]) -> dict:
    return {"title": title, "dataframe": pd.DataFrame(rows, columns=["Metric", "Value"])}


def _inputs_table(inputs: RoiInputs) -> pd.DataFrame:
    values = inputs.as_dict()
    rows = []
    for f in INPUT_FIELDS:
        value = values[f.key]
        if f.unit == "$":
            shown = format_currency(value)
        else:
            shown = f"{format_plain(value, 1)}{f.unit}"
        rows.append({"Section": f.section, "Input": f.label, "Value": shown})
    return pd.DataFrame(rows)


def build_report_sections(inputs: RoiInputs, results: RoiResults, chart_images: list[dict], options: dict | None = None) -> list[dict]:
    merged = _merge_options(options)
    r = results
    sections: list[dict] = [
        {
            "id": "headline",
            "title": "Key Results Summary",
            "paragraphs": [
                f"Potential Annual Total Gain: {format_currency(r.annual_total_gain, 0)}",
                f"Potential ROI (monthly/annual rate): {format_roi(r.annual_roi, r.total_monthly_gain)}",
                f"Payback Period: {format_payback(r.payback_period)}",
                gain_drivers_sentence(r),
            ],
            "tables": [],
            "charts": chart_images,
        },
        {
            "id": "monthly_impact",
            "title": "Monthly Financial Impact",
            "paragraphs": [],
            "tables": [
                _kv_table(
                    "Monthly Impact",
                    [
                        ("Direct Labor Cost Savings", format_currency(r.ai_monthly_labor_cost_savings)),
                        ("Potential Added Revenue", signed_currency(r.ai_monthly_revenue_increase)),
                        ("Total Monthly Benefit", format_currency(r.total_monthly_gain)),
                    ],
                ),
                _kv_table(
                    "AI Agent Cost",
                    [
                        ("One-time Setup Fee", format_currency(r.ai_setup_fee)),
                        ("Monthly Subscription/Service Cost", format_currency(r.ai_total_monthly_cost)),
                        ("Effective Monthly Cost (Year 1)", format_currency(r.ai_effective_monthly_cost_y1)),
                    ],
                ),
                _kv_table(
                    "Current Human Cost",
                    [
                        ("Est. Monthly Cost (Labor + Overhead)", format_currency(r.human_monthly_interaction_cost)),
                        ("Est. Annual Cost", format_currency(r.human_monthly_interaction_cost * 12)),
                        ("Basis", human_cost_basis_note(inputs, r)),
                    ],
                ),
                _kv_table(
                    "Interaction Analysis",
                    [
                        ("Total Interactions Entered", format_plain(r.total_monthly_interactions)),
                        ("Currently Handled by Humans", format_plain(r.human_interactions_monthly)),
                        ("Est. Handled Autonomously by AI", format_plain(r.ai_handled_interactions_monthly)),
                        ("Est. Remaining for Humans (w/ AI)", format_plain(r.human_interactions_remaining_monthly)),
                    ],
                ),
            ],
            "charts": [],
        },
        {
            "id": "key_insights",
            "title": "Key Insights",
            "paragraphs": [f"{h['label']}: {format_currency(h['value'])} {h['note']}" for h in annual_highlights(r)]
            + key_insights(inputs, r),
            "tables": [],
            "charts": [],
        },
    ]
    if merged.get("include_qualitative_benefits", True):
        sections.append(
            {
                "id": "qualitative_benefits",
                "title": "Qualitative Benefits",
                "paragraphs": ["Beyond the calculated ROI, consider these operational advantages:"]
                + [f"<b>{html.escape(title)}:</b> {html.escape(body)}" for title, body in QUALITATIVE_BENEFITS],
                "tables": [],
                "charts": [],
            }
        )
    sections.append(
        {
            "id": "inputs",
            "title": "Input Assumptions",
            "paragraphs": [],
            "tables": [{"title": "Inputs Used", "dataframe": _inputs_table(inputs)}],
            "charts": [],
        }
    )
    return sections


def _reportlab_imports():
    from reportlab.lib import colors
    from reportlab.lib.pagesizes import letter
    from reportlab.lib.styles import getSampleStyleSheet
    from reportlab.lib.units import inch
    from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

    return {
        "colors": colors,
        "letter": letter,
        "getSampleStyleSheet": getSampleStyleSheet,
        "inch": inch,
        "Image": Image,
        "Paragraph": Paragraph,
        "SimpleDocTemplate": SimpleDocTemplate,
        "Spacer": Spacer,
        "Table": Table,
        "TableStyle": TableStyle,
    }


def _append_table(story: list[Any], table_spec: dict, rl: dict, styles) -> None:
    Paragraph = rl["Paragraph"]
    Spacer = rl["Spacer"]
    Table = rl["Table"]
    TableStyle = rl["TableStyle"]
    colors = rl["colors"]

    df = table_spec.get("dataframe")
    story.append(Paragraph(html.escape(str(table_spec.get("title", "Table"))), styles["Heading3"]))
    if not isinstance(df, pd.DataFrame) or df.empty:
        story.append(Paragraph("No data available.", styles["BodyText"]))
        story.append(Spacer(1, 8))
        return

    header = [Paragraph(f"<b>{html.escape(str(c))}</b>", styles["BodyText"]) for c in df.columns]
    body = [[Paragraph(html.escape(str(v)), styles["BodyText"]) for v in row] for row in df.itertuples(index=False)]
    t = Table([header] + body, repeatRows=1)
    t.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#1f2937")),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("GRID", (0, 0), (-1, -1), 0.3, colors.HexColor("#d1d5db")),
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#f4fce8")]),
            ]
        )
    )
    story.append(t)
    story.append(Spacer(1, 8))


def build_pdf_report_bytes(inputs: RoiInputs, results: RoiResults, options: dict | None = None) -> bytes:
    """Build the printable results report as PDF bytes."""

    merged = _merge_options(options)
    chart_images = merged.get("chart_images_override")
    if not isinstance(chart_images, list):
        chart_images = build_chart_images(results, merged)
    sections = build_report_sections(inputs, results, chart_images, merged)

    rl = _reportlab_imports()
    Paragraph = rl["Paragraph"]
    Spacer = rl["Spacer"]
    Image = rl["Image"]
    inch = rl["inch"]
    styles = rl["getSampleStyleSheet"]()

    buf = BytesIO()
    doc = rl["SimpleDocTemplate"](
        buf,
        pagesize=rl["letter"],
        leftMargin=0.6 * inch,
        rightMargin=0.6 * inch,
        topMargin=0.6 * inch,
        bottomMargin=0.6 * inch,
        title=REPORT_TITLE,
    )

    story: list[Any] = [
        Paragraph(REPORT_TITLE, styles["Title"]),
        Paragraph("Estimate the Value of Automating Text-Based Customer Interactions", styles["Italic"]),
        Paragraph(f"Generated (UTC): {merged.get('generated_at_utc') or _utc_iso_now()}", styles["BodyText"]),
        Spacer(1, 12),
    ]
    for section in sections:
        story.append(Paragraph(html.escape(str(section.get("title", "Section"))), styles["Heading2"]))
        for para in section.get("paragraphs", []):
            # Qualitative benefit lines carry their own <b> markup.
            text = para if section.get("id") == "qualitative_benefits" else html.escape(str(para))
            story.append(Paragraph(text, styles["BodyText"]))
        if section.get("paragraphs"):
            story.append(Spacer(1, 8))
        for chart in section.get("charts", []):
            story.append(Paragraph(html.escape(str(chart.get("title", "Chart"))), styles["Heading3"]))
            image_bytes = chart.get("image_bytes")
            if image_bytes:
                img = Image(BytesIO(image_bytes))
                img.drawWidth = 6.8 * inch
                img.drawHeight = 4.0 * inch
                story.append(img)
            else:
                story.append(Paragraph(str(chart.get("placeholder_text", "Chart unavailable.")), styles["BodyText"]))
            story.append(Spacer(1, 10))
        for table_spec in section.get("tables", []):
            _append_table(story, table_spec, rl, styles)

    doc.build(story)
    return buf.getvalue()
