"""Configuration helpers for sport categories and insight thresholds."""

from .sports import SportCategory, get_sport, iter_sports
from .thresholds import DEFAULT_THRESHOLDS, InsightThresholds

__all__ = [
    "DEFAULT_THRESHOLDS",
    "InsightThresholds",
    "SportCategory",
    "get_sport",
    "iter_sports",
]
