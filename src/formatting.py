"""Display formatting with an explicit fallback policy for non-finite values."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Context, Decimal
import math
from typing import Any


NOT_AVAILABLE = "N/A"
ZERO_FALLBACK = "0.00"
INFINITE_PERCENT = "∞%"

# (min, max) fraction digits applied when the caller leaves them unset.
_DEFAULT_DIGITS = {
    "decimal": (0, 3),
    "currency": (2, 2),
    "percent": (0, 0),
}


def _coerce_finite(value: Any) -> float | None:
    if isinstance(value, bool):
        return float(value)
    try:
        num = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(num):
        return None
    return num


def _resolve_digits(style: str, min_digits: int | None, max_digits: int | None) -> tuple[int, int]:
    default_min, default_max = _DEFAULT_DIGITS[style]
    if min_digits is None and max_digits is None:
        return default_min, default_max
    if min_digits is None:
        return min(default_min, int(max_digits)), int(max_digits)
    if max_digits is None:
        return int(min_digits), max(default_max, int(min_digits))
    if int(min_digits) > int(max_digits):
        raise ValueError("min_fraction_digits cannot exceed max_fraction_digits.")
    return int(min_digits), int(max_digits)


def _round_half_up_decimal(num: float, digits: int) -> Decimal:
    # Ties round away from zero on the shortest repr, as browser locale formatting does.
    value = Decimal(repr(abs(num)))
    context = Context(prec=max(28, value.adjusted() + digits + 2))
    return value.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP, context=context)


def _grouped(num: float, min_digits: int, max_digits: int) -> str:
    text = f"{_round_half_up_decimal(num, max_digits):,.{max_digits}f}"
    if max_digits > min_digits and "." in text:
        whole, frac = text.split(".")
        frac = frac.rstrip("0").ljust(min_digits, "0")
        text = f"{whole}.{frac}" if frac else whole
    return text


def _render(num: float, style: str, min_digits: int, max_digits: int) -> str:
    body = _grouped(num, min_digits, max_digits)
    # Suppress "-0" when the value rounds away.
    negative = num < 0 and any(ch not in "0.," for ch in body)
    sign = "-" if negative else ""
    if style == "currency":
        return f"{sign}${body}"
    if style == "percent":
        return f"{sign}{body}%"
    return f"{sign}{body}"


def format_number(
    value: Any,
    style: str = "decimal",
    min_fraction_digits: int | None = None,
    max_fraction_digits: int | None = None,
    fallback: Any = ZERO_FALLBACK,
) -> str:
    """Format ``value`` for display, substituting ``fallback`` when it is not a finite number.

    ``style`` is one of ``decimal``, ``currency`` (USD) or ``percent``. Percent
    values are taken in percentage points (``25`` renders as ``25%``).

    Fallback policy: ``NOT_AVAILABLE`` is returned verbatim; a numeric fallback
    is formatted with the same options; any other value is returned as ``str``.
    """
    if style not in _DEFAULT_DIGITS:
        raise ValueError(f"Unsupported number style: {style}")
    min_digits, max_digits = _resolve_digits(style, min_fraction_digits, max_fraction_digits)

    num = _coerce_finite(value)
    if num is not None:
        return _render(num, style, min_digits, max_digits)
    if fallback == NOT_AVAILABLE:
        return NOT_AVAILABLE
    fallback_num = _coerce_finite(fallback)
    if fallback_num is not None:
        return _render(fallback_num, style, min_digits, max_digits)
    return str(fallback)


def format_currency(value: Any, digits: int = 2, fallback: Any = ZERO_FALLBACK) -> str:
    return format_number(value, "currency", digits, digits, fallback)


def format_percent(value: Any, digits: int = 0, fallback: Any = NOT_AVAILABLE) -> str:
    return format_number(value, "percent", digits, digits, fallback)


def format_plain(value: Any, max_digits: int = 0, fallback: Any = "0") -> str:
    return format_number(value, "decimal", 0, max_digits, fallback)


def signed_currency(value: Any, digits: int = 2) -> str:
    num = _coerce_finite(value)
    prefix = "+" if num is not None and num >= 0 else ""
    return f"{prefix}{format_currency(value, digits)}"


def format_roi(roi: Any, total_monthly_gain: Any, digits: int = 0) -> str:
    """ROI percent, ``∞%`` for an unbounded ROI backed by a positive gain, else ``N/A``."""
    num = _coerce_finite(roi)
    if num is not None:
        return format_percent(num, digits)
    gain = _coerce_finite(total_monthly_gain)
    try:
        is_pos_inf = float(roi) == math.inf
    except (TypeError, ValueError):
        is_pos_inf = False
    if is_pos_inf and gain is not None and gain > 0:
        return INFINITE_PERCENT
    return NOT_AVAILABLE


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count > 1 else ''}"


def format_payback(months: Any) -> str:
    """Render a payback period in months as years/months/days text.

    ``0`` is "Immediate"; non-finite, negative or non-numeric is "Never". Days
    are shown only for periods under one month; a positive period that rounds
    to nothing is "Less than 1 day".
    """
    try:
        period = float(months)
    except (TypeError, ValueError):
        return "Never"
    if period == 0:
        return "Immediate"
    if not math.isfinite(period) or period < 0:
        return "Never"

    years = int(math.floor(period / 12))
    whole_months = int(math.floor(period % 12))
    days = _round_half_up((period % 1) * 30)

    parts: list[str] = []
    if years > 0:
        parts.append(_plural(years, "year"))
    if whole_months > 0:
        parts.append(_plural(whole_months, "month"))
    if years == 0 and whole_months == 0 and days > 0:
        parts = [_plural(days, "day")]

    return " ".join(parts) or "Less than 1 day"
