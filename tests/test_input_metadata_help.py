from __future__ import annotations

from src.input_metadata import INPUT_GUIDANCE, advisory_warnings, help_with_guidance
from src.schema import FIELDS_BY_KEY


def test_help_with_guidance_appends_reasonable_range():
    help_text = help_with_guidance("ai_autonomy_rate", "Share handled by AI.")
    assert help_text.startswith("Share handled by AI.")
    assert "Reasonable range: 40 to 90." in help_text


def test_help_without_guidance_is_unchanged():
    assert help_with_guidance("custom_rate", "Base help.") == "Base help."


def test_guidance_ranges_sit_inside_slider_limits():
    assert set(INPUT_GUIDANCE) == set(FIELDS_BY_KEY)
    for key, g in INPUT_GUIDANCE.items():
        field = FIELDS_BY_KEY[key]
        assert field.min_value <= g["min"] <= g["max"] <= field.max_value


def test_advisory_warnings_flag_values_outside_guidance(base_inputs):
    assert advisory_warnings(base_inputs) == []
    warnings = advisory_warnings({**base_inputs, "ai_autonomy_rate": 99.0, "ai_monthly_cost": "bad"})
    assert warnings == ["ai_autonomy_rate=99 is outside the recommended range [40, 90]."]
