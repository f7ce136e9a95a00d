"""Least-squares trend estimation over short stat sequences."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

IMPROVING = "Improving performance"
DECLINING = "Declining performance"
STABLE = "Stable performance"


@dataclass(frozen=True)
class TrendSummary:
    slope: float
    direction: str


def linear_regression_slope(values: Sequence[float]) -> float:
    """Return the OLS slope of ``values`` against their 0-based positions.

    An empty sequence, or any sequence whose denominator is zero (a single
    value), yields ``0.0``.
    """

    n = len(values)
    if n == 0:
        return 0.0

    sum_x = sum(range(n))
    sum_y = sum(values)
    sum_xy = sum(x * y for x, y in enumerate(values))
    sum_x2 = sum(x * x for x in range(n))

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        return 0.0
    return (n * sum_xy - sum_x * sum_y) / denominator


def classify_direction(slope: float) -> str:
    """Label a slope by its sign alone (no dead band)."""

    if slope > 0:
        return IMPROVING
    if slope < 0:
        return DECLINING
    return STABLE


def summarize_trend(values: Sequence[float]) -> TrendSummary:
    slope = linear_regression_slope(values)
    return TrendSummary(slope=slope, direction=classify_direction(slope))
