from __future__ import annotations

from src.engine import RoiInputs, compute
from src.pdf_export import build_chart_images, build_pdf_report_bytes, build_report_sections


def _sample_report_input(**overrides):
    inputs = RoiInputs().replace(**overrides) if overrides else RoiInputs()
    return inputs, compute(inputs)


def test_build_pdf_report_bytes_returns_nonempty_pdf():
    inputs, results = _sample_report_input()
    pdf_bytes = build_pdf_report_bytes(inputs, results, {"chart_images_override": []})
    assert isinstance(pdf_bytes, (bytes, bytearray))
    assert len(pdf_bytes) > 500
    assert bytes(pdf_bytes).startswith(b"%PDF")


def test_report_sections_cover_results_and_inputs():
    inputs, results = _sample_report_input()
    sections = build_report_sections(inputs, results, chart_images=[], options={})
    assert [s["id"] for s in sections] == ["headline", "monthly_impact", "key_insights", "qualitative_benefits", "inputs"]

    headline = sections[0]["paragraphs"]
    assert "Potential Annual Total Gain: $29,827" in headline
    assert "Payback Period: 1 month" in headline

    impact_titles = [t["title"] for t in sections[1]["tables"]]
    assert impact_titles == ["Monthly Impact", "AI Agent Cost", "Current Human Cost", "Interaction Analysis"]
    assert len(sections[-1]["tables"][0]["dataframe"]) == 14


def test_qualitative_benefits_section_is_optional():
    inputs, results = _sample_report_input()
    sections = build_report_sections(inputs, results, chart_images=[], options={"include_qualitative_benefits": False})
    assert "qualitative_benefits" not in [s["id"] for s in sections]


def test_never_payback_and_infinite_roi_render_without_error():
    inputs, results = _sample_report_input(ai_monthly_cost=0.0, ai_setup_fee=0.0)
    headline = build_report_sections(inputs, results, chart_images=[])[0]["paragraphs"]
    assert "Potential ROI (monthly/annual rate): ∞%" in headline
    assert "Payback Period: Immediate" in headline

    inputs, results = _sample_report_input(total_monthly_interactions=0.0)
    pdf_bytes = build_pdf_report_bytes(inputs, results, {"chart_images_override": []})
    assert pdf_bytes.startswith(b"%PDF")


def test_chart_render_failure_still_returns_valid_pdf(monkeypatch):
    import src.pdf_export as pdf_export

    inputs, results = _sample_report_input()
    captured_events: list[dict] = []

    def _log_event(**kwargs):
        captured_events.append(kwargs)

    def _raise_render(*args, **kwargs):
        raise RuntimeError("forced image failure")

    monkeypatch.setattr(pdf_export, "render_plotly_figure_png", _raise_render)
    charts = build_chart_images(results, {"log_event": _log_event})
    assert any(evt.get("event") == "pdf_chart_render_failed" for evt in captured_events)
    assert all(c.get("image_bytes") is None for c in charts)

    pdf_bytes = build_pdf_report_bytes(inputs, results, {"chart_images_override": charts, "log_event": _log_event})
    assert pdf_bytes.startswith(b"%PDF")


def test_chart_can_be_excluded():
    _, results = _sample_report_input()
    assert build_chart_images(results, {"include_chart": False}) == []
