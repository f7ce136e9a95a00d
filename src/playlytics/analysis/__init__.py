"""Comparison metrics, trends and insights."""

from .insights import generate_insights
from .metrics import consistency_ratio, format_one_decimal, stat_deltas, win_rate
from .service import (
    CompareRequestHandler,
    ComparedPlayer,
    ComparisonResult,
    RequestPhase,
    build_comparison,
    compare_players,
    decode_compare_body,
    lookup_pair,
    parse_compare_request,
)
from .trend import TrendSummary, classify_direction, linear_regression_slope, summarize_trend

__all__ = [
    "CompareRequestHandler",
    "ComparedPlayer",
    "ComparisonResult",
    "RequestPhase",
    "TrendSummary",
    "build_comparison",
    "classify_direction",
    "compare_players",
    "consistency_ratio",
    "decode_compare_body",
    "format_one_decimal",
    "generate_insights",
    "linear_regression_slope",
    "lookup_pair",
    "parse_compare_request",
    "stat_deltas",
    "summarize_trend",
    "win_rate",
]
