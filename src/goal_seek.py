"""Bounded scalar goal-seek helpers."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Callable

from src.engine import RoiInputs, compute
from src.schema import FIELDS_BY_KEY
from src.sensitivity import TARGET_FIELDS


GOAL_TARGET_METRICS = [
    "Total Monthly Gain",
    "Annual Total Gain",
    "Annual Cost Savings",
    "Annual Revenue Increase",
    "Monthly ROI %",
]


@dataclass
class GoalSeekResult:
    status: str
    value: float | None
    achieved: float | None
    iterations: int
    message: str


def solve_bounded_scalar(
    evaluator: Callable[[float], float],
    target: float,
    lower_bound: float,
    upper_bound: float,
    tol: float = 1e-3,
    max_iter: int = 60,
) -> GoalSeekResult:
    """Solve evaluator(x)=target for x within [lower_bound, upper_bound] via bisection."""
    lo = float(lower_bound)
    hi = float(upper_bound)
    if hi <= lo:
        return GoalSeekResult("failed", None, None, 0, "Upper bound must be greater than lower bound.")

    y_lo = float(evaluator(lo))
    y_hi = float(evaluator(hi))
    if not (math.isfinite(y_lo) and math.isfinite(y_hi)):
        return GoalSeekResult("failed", None, None, 0, "Target metric is not finite at the search bounds.")

    f_lo = y_lo - target
    f_hi = y_hi - target
    if f_lo == 0:
        return GoalSeekResult("solved", lo, y_lo, 0, "Solved at lower bound.")
    if f_hi == 0:
        return GoalSeekResult("solved", hi, y_hi, 0, "Solved at upper bound.")
    if f_lo * f_hi > 0:
        return GoalSeekResult(
            "failed",
            None,
            None,
            0,
            "Target is not bracketed in the selected bounds. Adjust min/max bounds.",
        )

    for i in range(1, max_iter + 1):
        mid = 0.5 * (lo + hi)
        y_mid = float(evaluator(mid))
        f_mid = y_mid - target
        if abs(f_mid) <= tol:
            return GoalSeekResult("solved", mid, y_mid, i, "Converged.")
        if f_lo * f_mid < 0:
            hi = mid
            f_hi = f_mid
        else:
            lo = mid
            f_lo = f_mid

    mid = 0.5 * (lo + hi)
    y_mid = float(evaluator(mid))
    return GoalSeekResult(
        "failed",
        mid,
        y_mid,
        max_iter,
        "Reached max iterations before tolerance was met.",
    )


def goal_seek_input(
    base_inputs: dict,
    input_key: str,
    target_metric: str,
    target_value: float,
    tol: float = 1e-3,
) -> GoalSeekResult:
    """Find the value of one input, within its slider range, that makes ``target_metric`` hit ``target_value``."""
    if input_key not in FIELDS_BY_KEY:
        raise ValueError(f"Unknown input field: {input_key}")
    if target_metric not in GOAL_TARGET_METRICS:
        raise ValueError(f"Unsupported goal-seek target: {target_metric}")

    base = RoiInputs.from_mapping(base_inputs)
    field = FIELDS_BY_KEY[input_key]
    result_field = TARGET_FIELDS[target_metric]

    def _evaluate(x: float) -> float:
        return float(getattr(compute(base.replace(**{input_key: x})), result_field))

    return solve_bounded_scalar(_evaluate, float(target_value), field.min_value, field.max_value, tol=tol)
